"""
Character operations: loading, creation, healing and resurrection.
"""

from typing import Optional

from ..core.events import CharacterEvent, EventType
from ..game.character_view import build_character_data, character_status_message
from ..logging_config import get_logger
from ..schemas import CharacterData, OperationResult, OperationType
from .base import BaseOperations
from .lifecycle import OperationPlan

logger = get_logger(__name__)


class CharacterOperations(BaseOperations):

    async def load_character(self, address: Optional[str] = None) -> Optional[CharacterData]:
        """
        Read the character (and its combat state when alive) into the store.

        This read is not a tracked operation. Failures reading the character
        propagate; a failed combat state read is treated as not in combat.
        When the session is reset or bound to another player while the read
        is in flight, the result is discarded and None is returned.
        """
        player = self._player(address)
        if not player:
            return None

        raw_character = await self.ledger.get_character(player)
        if not self._still_bound(player):
            return None

        raw_combat_state = None
        if raw_character is not None:
            character = build_character_data(raw_character)
            if character.exists and character.is_alive:
                try:
                    raw_combat_state = await self.ledger.get_combat_state(player)
                except Exception as e:
                    logger.warning(f"Could not read combat state for {player}: {e}")
                if not self._still_bound(player):
                    return None

        character = build_character_data(raw_character, raw_combat_state)
        self.store.update_character(character)
        self.store.set_status_message(character_status_message(character))
        logger.debug(f"Loaded character for {player}: exists={character.exists if character else False}")
        return character

    def _still_bound(self, player: str) -> bool:
        current = self.store.get_player_address()
        if current is not None and current.lower() == player.lower():
            return True
        logger.info(f"Session no longer bound to {player}; character read discarded")
        return False

    async def refresh_character(self) -> Optional[CharacterData]:
        """Re-read the character and announce it with CHARACTER_UPDATED."""
        character = await self.load_character()
        if character is not None:
            self.bus.emit(EventType.CHARACTER_UPDATED, CharacterEvent(character=character))
        return character

    async def refresh_quietly(self) -> None:
        try:
            await self.refresh_character()
        except Exception as e:
            logger.warning(f"Character refresh failed: {e}")

    # =========================================================================
    # Tracked actions
    # =========================================================================

    async def create_character(self, class_id: int) -> OperationResult[str]:
        async def execute() -> str:
            fee = await self.ledger.get_creation_fee()
            return await self.ledger.create_character(class_id, fee)

        result = await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.CREATE_CHARACTER,
            execute=execute,
            progress="Creating character...",
            success_event=EventType.CHARACTER_CREATED,
            success_message="Character created",
            inputs=self.validator.check_character_class(class_id),
        ))
        if result.success:
            await self.refresh_quietly()
        return result

    async def heal_character(self) -> OperationResult[str]:
        async def execute() -> str:
            fee = await self.ledger.get_healing_fee()
            return await self.ledger.heal_character(fee)

        result = await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.HEAL_CHARACTER,
            execute=execute,
            progress="Healing character...",
            success_event=EventType.HEALING_STARTED,
            success_message="Healing submitted",
        ))
        if result.success:
            await self.refresh_quietly()
        return result

    async def resurrect_character(self) -> OperationResult[str]:
        async def execute() -> str:
            fee = await self.ledger.get_resurrection_fee()
            return await self.ledger.resurrect_character(fee)

        result = await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.RESURRECT_CHARACTER,
            execute=execute,
            progress="Resurrecting character...",
            success_event=EventType.RESURRECTION_STARTED,
            success_message="Resurrection submitted",
        ))
        if result.success:
            await self.refresh_quietly()
        return result
