"""
Claim operations: scanning past epochs for rewards and claiming them.
"""

import time
from functools import partial
from typing import List, Optional

from ..core.events import ClaimEvent, ClaimsUpdatedEvent, EventType
from ..ledger.records import RawMerkleProof
from ..logging_config import get_logger
from ..schemas import ClaimableReward, ClaimsData, OperationResult, OperationType, ValidationResult
from .base import BaseOperations
from .lifecycle import OperationPlan

logger = get_logger(__name__)


def find_reward(claims: Optional[ClaimsData], epoch: int, index: int) -> Optional[ClaimableReward]:
    if claims is None:
        return None
    for reward in claims.available:
        if reward.epoch == epoch and reward.index == index:
            return reward
    return None


def without_reward(claims: ClaimsData, epoch: int, index: int) -> ClaimsData:
    remaining = [
        reward for reward in claims.available
        if not (reward.epoch == epoch and reward.index == index)
    ]
    return ClaimsData.from_rewards(remaining, claims.last_checked)


class ClaimsOperations(BaseOperations):

    async def _reward_for_epoch(self, player: str, epoch: int) -> Optional[ClaimableReward]:
        try:
            raw = await self.ledger.get_merkle_proof_for_player(player, epoch)
        except Exception as e:
            logger.debug(f"No proof for epoch {epoch}: {e}")
            return None
        if raw is None:
            return None

        proof = RawMerkleProof.model_validate(dict(raw))
        if proof.amount == 0:
            return None
        if await self.ledger.is_claimed(epoch, proof.index):
            return None

        return ClaimableReward(
            reward_type="epoch",
            amount=proof.amount,
            description=f"Epoch {epoch} leaderboard reward",
            epoch=epoch,
            index=proof.index,
            proof=proof.proof,
        )

    async def _scan_rewards(self, player: str) -> ClaimsData:
        current_epoch = await self.ledger.get_current_epoch()
        rewards: List[ClaimableReward] = []
        for offset in range(self.config.session.claims_lookback_epochs):
            epoch = current_epoch - offset
            if epoch < 0:
                break
            reward = await self._reward_for_epoch(player, epoch)
            if reward is not None:
                rewards.append(reward)
        return ClaimsData.from_rewards(rewards, time.time())

    async def load_claims(self, address: Optional[str] = None) -> OperationResult[ClaimsData]:
        player = self._player(address)

        async def execute() -> ClaimsData:
            return await self._scan_rewards(player)

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.LOAD_CLAIMS,
            execute=execute,
            progress="Checking claimable rewards...",
            success_event=EventType.CLAIMS_UPDATED,
            success_message="Claims loaded",
            success_payload=lambda claims: ClaimsUpdatedEvent(claims=claims),
            on_success=self.store.update_claims,
        ))

    async def claim_prize(self, epoch: int, index: int, amount: int, proof: List[str]) -> OperationResult[str]:
        """
        Claim a reward with its Merkle proof.

        A reward already cached in the store must match the requested amount.
        The ledger is asked whether the reward was claimed before sending.
        """
        async def precondition() -> ValidationResult:
            state = self.store.get_state()
            cached = find_reward(state.claims, epoch, index)
            if cached is not None and cached.amount != amount:
                return ValidationResult.reject("Claim amount does not match reward")

            reward = cached or ClaimableReward(amount=amount, epoch=epoch, index=index, proof=list(proof))
            check = self.validator.can_claim(state, reward)
            if not check:
                return check

            if await self.ledger.is_claimed(epoch, index):
                return ValidationResult.reject("Reward already claimed")
            return ValidationResult.ok()

        async def execute() -> str:
            return await self.ledger.claim_prize(epoch, index, amount, list(proof))

        def on_success(handle: str) -> None:
            claims = self.store.get_claims()
            if claims is not None:
                self.store.update_claims(without_reward(claims, epoch, index))

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.CLAIM_PRIZE,
            execute=execute,
            progress=f"Claiming epoch {epoch} reward...",
            start_event=EventType.CLAIM_STARTED,
            success_event=EventType.CLAIM_COMPLETED,
            failure_event=EventType.CLAIM_FAILED,
            success_message="Reward claimed",
            inputs=self.validator.check_claim_request(epoch, index, amount, proof),
            precondition=precondition,
            payload=partial(ClaimEvent, epoch=epoch, index=index, amount=amount),
            on_success=on_success,
        ))
