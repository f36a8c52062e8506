"""
Leaderboard operations.

The contract exposes players by index and scores per (player, epoch), so the
standings are assembled client-side by scanning players in concurrent batches.
"""

import asyncio
import time
from typing import List, Optional, Tuple

from ..core.events import EventType, LeaderboardUpdatedEvent
from ..ledger.records import RawCharacter
from ..logging_config import get_logger
from ..schemas import LeaderboardData, LeaderboardPlayer, OperationResult, OperationType
from .base import BaseOperations
from .lifecycle import OperationPlan

logger = get_logger(__name__)

PlayerScore = Tuple[str, int]


def rank_for_score(score: int, scores: List[PlayerScore]) -> int:
    """1 + the number of scanned players with a strictly higher score."""
    return 1 + sum(1 for _, other in scores if other > score)


def build_top_players(scores: List[PlayerScore], size: int, current_player: str) -> List[LeaderboardPlayer]:
    ordered = sorted(scores, key=lambda entry: entry[1], reverse=True)[:size]
    current = current_player.lower()
    return [
        LeaderboardPlayer(
            address=address,
            score=score,
            rank=position,
            is_current_player=address.lower() == current,
        )
        for position, (address, score) in enumerate(ordered, start=1)
    ]


class LeaderboardOperations(BaseOperations):

    async def _gather_batched(self, calls, batch_size: int) -> list:
        results = []
        for start in range(0, len(calls), batch_size):
            batch = calls[start:start + batch_size]
            results.extend(await asyncio.gather(*(call() for call in batch), return_exceptions=True))
        return results

    async def _scan_scores(self, epoch: int, player_count: int) -> List[PlayerScore]:
        batch_size = max(1, self.config.session.leaderboard_batch_size)

        def address_call(index):
            return lambda: self.ledger.get_player_by_index(index)

        addresses = await self._gather_batched(
            [address_call(index) for index in range(player_count)], batch_size
        )
        known = []
        for index, address in enumerate(addresses):
            if isinstance(address, Exception):
                logger.debug(f"Skipping player #{index}: {address}")
            elif address:
                known.append(address)

        def score_call(address):
            return lambda: self.ledger.get_epoch_score(address, epoch)

        scores = await self._gather_batched([score_call(address) for address in known], batch_size)
        return [
            (address, int(score))
            for address, score in zip(known, scores)
            if not isinstance(score, Exception)
        ]

    async def _with_character_stats(self, players: List[LeaderboardPlayer]) -> List[LeaderboardPlayer]:
        raws = await asyncio.gather(
            *(self.ledger.get_character(player.address) for player in players),
            return_exceptions=True,
        )
        enriched = []
        for player, raw in zip(players, raws):
            if raw is None or isinstance(raw, Exception):
                enriched.append(player)
                continue
            record = RawCharacter.model_validate(dict(raw))
            enriched.append(player.model_copy(update={"level": record.level, "kills": record.total_kills}))
        return enriched

    async def _build_leaderboard(self, player: str) -> LeaderboardData:
        session = self.config.session
        epoch = await self.ledger.get_current_epoch()

        try:
            player_score = int(await self.ledger.get_epoch_score(player, epoch))
        except Exception as e:
            logger.warning(f"Could not read epoch score for {player}: {e}")
            player_score = 0

        total_players = await self.ledger.get_total_player_count()
        scores = await self._scan_scores(epoch, min(total_players, session.leaderboard_scan_limit))
        top_players = await self._with_character_stats(
            build_top_players(scores, session.leaderboard_size, player)
        )

        try:
            time_remaining = await self.ledger.get_epoch_time_remaining()
        except Exception as e:
            logger.warning(f"Could not read epoch time remaining: {e}")
            time_remaining = 0

        return LeaderboardData(
            current_epoch=epoch,
            player_score=player_score,
            player_rank=rank_for_score(player_score, scores),
            total_players=total_players,
            top_players=top_players,
            epoch_time_remaining=time_remaining,
            last_updated=time.time(),
        )

    async def load_leaderboard(self, address: Optional[str] = None) -> OperationResult[LeaderboardData]:
        player = self._player(address)

        async def execute() -> LeaderboardData:
            return await self._build_leaderboard(player)

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.LOAD_LEADERBOARD,
            execute=execute,
            progress="Loading leaderboard...",
            success_event=EventType.LEADERBOARD_UPDATED,
            success_message="Leaderboard loaded",
            success_payload=lambda leaderboard: LeaderboardUpdatedEvent(leaderboard=leaderboard),
            on_success=self.store.update_leaderboard,
        ))
