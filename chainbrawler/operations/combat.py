"""
Combat operations: starting, continuing and fleeing fights.
"""

from functools import partial

from ..core.enemies import get_enemy_name
from ..core.errors import describe_ledger_error
from ..core.events import EventType, FightStartedEvent
from ..ledger.records import RawEnemyStats
from ..logging_config import get_logger
from ..schemas import OperationErrorCodes, OperationResult, OperationType, ValidationResult
from ..validation.rules import CHARACTER_ALREADY_IN_COMBAT, CHARACTER_NOT_IN_COMBAT
from .base import BaseOperations
from .lifecycle import OperationPlan

logger = get_logger(__name__)


class CombatOperations(BaseOperations):

    async def _require_combat(self, expected: bool) -> ValidationResult:
        in_combat = await self.ledger.is_character_in_combat(self._player())
        if in_combat == expected:
            return ValidationResult.ok()
        return ValidationResult.reject(CHARACTER_NOT_IN_COMBAT if expected else CHARACTER_ALREADY_IN_COMBAT)

    async def fight_enemy(self, enemy_id: int, enemy_level: int) -> OperationResult[str]:
        """
        Start a fight. The ledger is asked whether the character is already
        fighting before the transaction is sent.
        """
        async def precondition() -> ValidationResult:
            return await self._require_combat(False)

        async def execute() -> str:
            return await self.ledger.fight_enemy(enemy_id, enemy_level)

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.FIGHT_ENEMY,
            execute=execute,
            progress=f"Fighting {get_enemy_name(enemy_id)} (level {enemy_level})...",
            success_event=EventType.FIGHT_STARTED,
            success_message="Fight submitted",
            inputs=self.validator.check_enemy(enemy_id, enemy_level),
            precondition=precondition,
            payload=partial(FightStartedEvent, enemy_id=enemy_id, enemy_level=enemy_level),
        ))

    async def continue_fight(self) -> OperationResult[str]:
        async def precondition() -> ValidationResult:
            return await self._require_combat(True)

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.CONTINUE_FIGHT,
            execute=self.ledger.continue_fight,
            progress="Continuing fight...",
            precondition=precondition,
        ))

    async def flee_round(self) -> OperationResult[str]:
        async def precondition() -> ValidationResult:
            return await self._require_combat(True)

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.FLEE_ROUND,
            execute=self.ledger.flee_round,
            progress="Attempting to flee...",
            precondition=precondition,
        ))

    async def get_enemy_stats(self, enemy_id: int, enemy_level: int) -> OperationResult[RawEnemyStats]:
        """Scaled stats for an enemy at a level. A read; not tracked."""
        check = self.validator.check_enemy(enemy_id, enemy_level)
        if not check:
            return OperationResult.failure(check.reason, code=OperationErrorCodes.INVALID_INPUT)

        try:
            raw = await self.ledger.get_scaled_enemy_stats(enemy_id, enemy_level)
        except Exception as e:
            info = describe_ledger_error(e)
            logger.warning(f"Could not read stats for enemy {enemy_id}: {info.message}")
            return OperationResult.failure(info.message, code=OperationErrorCodes.LEDGER_ERROR, ledger_code=info.code)

        return OperationResult.ok(RawEnemyStats.model_validate(dict(raw)))
