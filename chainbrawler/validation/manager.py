"""
Validation manager.

Binds the pure rules to the configured input bounds and adds whole-state
consistency checks used by tests and by hosts that want to audit a snapshot.
"""

from typing import List, Optional

from ..config import ValidationConfig
from ..game.menu_state import calculate_menu_state
from ..logging_config import get_logger
from ..schemas import (
    CharacterData,
    ClaimableReward,
    OperationState,
    OperationStatus,
    OperationType,
    UXState,
    ValidationResult,
)
from . import rules

logger = get_logger(__name__)


def validate_character_state(character: CharacterData, max_class: int = rules.MAX_CHARACTER_CLASS) -> ValidationResult:
    """Check that an existing character's fields are in range."""
    if not character.exists:
        return ValidationResult.ok()
    if not 0 <= character.character_class <= max_class:
        return ValidationResult.reject("Invalid character class")
    if character.level < 1:
        return ValidationResult.reject("Invalid character level")
    if not 0 <= character.endurance.percentage <= 100:
        return ValidationResult.reject("Invalid endurance percentage")
    if character.stats.combat < 0:
        return ValidationResult.reject("Invalid combat stat")
    if character.stats.defense < 0:
        return ValidationResult.reject("Invalid defense stat")
    if character.stats.luck < 0:
        return ValidationResult.reject("Invalid luck stat")
    return ValidationResult.ok()


def validate_operation_state(operation: OperationState) -> ValidationResult:
    """Check that an operation record is internally consistent."""
    active_statuses = (OperationStatus.PENDING, OperationStatus.PROCESSING)
    if operation.is_active and operation.status not in active_statuses:
        return ValidationResult.reject("Active operation has terminal status")
    if not operation.is_active and operation.status in active_statuses:
        return ValidationResult.reject("Inactive operation has non-terminal status")
    if operation.is_active and not operation.operation_type:
        return ValidationResult.reject("Active operation missing type")
    if operation.is_active and not operation.start_time:
        return ValidationResult.reject("Active operation missing start time")
    if operation.status == OperationStatus.ERROR and not operation.error:
        return ValidationResult.reject("Error operation missing error message")
    return ValidationResult.ok()


class ValidationManager:
    """
    Front door for every validation the operation lifecycle performs.

    Input checks use the configured bounds; action gating delegates to the
    pure predicates in ``rules``.
    """

    def __init__(self, config: Optional[ValidationConfig] = None):
        self.config = config or ValidationConfig()

    # =========================================================================
    # Action gating
    # =========================================================================

    def can_start(self, operation_type: OperationType, state: UXState) -> ValidationResult:
        return rules.can_start_operation(operation_type, state)

    def can_claim(self, state: UXState, reward: Optional[ClaimableReward]) -> ValidationResult:
        return rules.can_claim_prize(state, reward)

    # =========================================================================
    # Input checks
    # =========================================================================

    def check_player_address(self, address) -> ValidationResult:
        return rules.validate_player_address(address)

    def check_character_class(self, class_id) -> ValidationResult:
        return rules.validate_character_class(class_id, self.config.max_character_class)

    def check_enemy(self, enemy_id, enemy_level) -> ValidationResult:
        result = rules.validate_enemy_id(enemy_id, self.config.min_enemy_id, self.config.max_enemy_id)
        if not result:
            return result
        return rules.validate_enemy_level(
            enemy_level, self.config.min_enemy_level, self.config.max_enemy_level
        )

    def check_claim_request(self, epoch, index, amount, proof) -> ValidationResult:
        return rules.validate_claim_request(epoch, index, amount, proof)

    # =========================================================================
    # Whole-state consistency
    # =========================================================================

    def audit_state(self, state: UXState, healing_cooldown_remaining: int = 0) -> List[str]:
        """
        List every inconsistency found in a snapshot.

        The menu is compared against a freshly calculated one; a loading
        session must have no menu at all.
        """
        problems: List[str] = []

        if state.character is not None:
            result = validate_character_state(state.character, self.config.max_character_class)
            if not result:
                problems.append(result.reason)

        if state.operation is not None:
            result = validate_operation_state(state.operation)
            if not result:
                problems.append(result.reason)

        if state.is_loading:
            if state.menu is not None:
                problems.append("Menu present while loading")
        else:
            expected = calculate_menu_state(state.character, state.operation, healing_cooldown_remaining)
            if state.menu != expected:
                problems.append("Menu does not match character state")

        if problems:
            logger.debug(f"State audit found {len(problems)} problem(s): {problems}")
        return problems
