"""
Validation rules.

Pure predicates over a UXState snapshot. Each action predicate checks, in
order: character existence, alive/dead, combat status, another operation in
progress, system loading, unresolved error. The first failing check decides
the reason and nothing after it is evaluated.
"""

import re
from typing import Callable, Dict, List, Optional

from ..core.enemies import MAX_ENEMY_ID, MIN_ENEMY_ID
from ..schemas import ClaimableReward, OperationType, UXState, ValidationResult

CHARACTER_DOES_NOT_EXIST = "Character does not exist"
CHARACTER_ALREADY_EXISTS = "Character already exists"
CHARACTER_IS_DEAD = "Character is dead"
CHARACTER_ALREADY_ALIVE = "Character is already alive"
CHARACTER_ALREADY_IN_COMBAT = "Character is already in combat"
CHARACTER_IN_COMBAT = "Character is in combat"
CHARACTER_NOT_IN_COMBAT = "Character is not in combat"
CHARACTER_AT_FULL_HEALTH = "Character is already at full health"
OPERATION_IN_PROGRESS = "Another operation is in progress"
SYSTEM_INITIALIZING = "System is initializing"
SYSTEM_ERROR = "System error occurred"
REWARD_NOT_CLAIMABLE = "Reward is not claimable"

MAX_CHARACTER_CLASS = 3
MIN_ENEMY_LEVEL = 1
MAX_ENEMY_LEVEL = 100

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
_PROOF_NODE_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


# =============================================================================
# Shared checks
# =============================================================================


def _system_checks(state: UXState, check_error: bool = True) -> ValidationResult:
    if state.has_active_operation:
        return ValidationResult.reject(OPERATION_IN_PROGRESS)
    if state.is_loading:
        return ValidationResult.reject(SYSTEM_INITIALIZING)
    if check_error and state.error:
        return ValidationResult.reject(SYSTEM_ERROR)
    return ValidationResult.ok()


def _character_exists(state: UXState) -> bool:
    return state.character is not None and state.character.exists


# =============================================================================
# Action predicates
# =============================================================================


def can_create_character(state: UXState) -> ValidationResult:
    if _character_exists(state):
        return ValidationResult.reject(CHARACTER_ALREADY_EXISTS)
    return _system_checks(state)


def can_fight(state: UXState) -> ValidationResult:
    if not _character_exists(state):
        return ValidationResult.reject(CHARACTER_DOES_NOT_EXIST)
    if not state.character.is_alive:
        return ValidationResult.reject(CHARACTER_IS_DEAD)
    if state.character.in_combat:
        return ValidationResult.reject(CHARACTER_ALREADY_IN_COMBAT)
    return _system_checks(state)


def can_heal(state: UXState) -> ValidationResult:
    if not _character_exists(state):
        return ValidationResult.reject(CHARACTER_DOES_NOT_EXIST)
    if not state.character.is_alive:
        return ValidationResult.reject(CHARACTER_IS_DEAD)
    if state.character.in_combat:
        return ValidationResult.reject(CHARACTER_IN_COMBAT)
    if state.character.endurance.percentage >= 100:
        return ValidationResult.reject(CHARACTER_AT_FULL_HEALTH)
    return _system_checks(state)


def can_resurrect(state: UXState) -> ValidationResult:
    if not _character_exists(state):
        return ValidationResult.reject(CHARACTER_DOES_NOT_EXIST)
    if state.character.is_alive:
        return ValidationResult.reject(CHARACTER_ALREADY_ALIVE)
    if state.character.in_combat:
        return ValidationResult.reject(CHARACTER_IN_COMBAT)
    return _system_checks(state)


def can_continue_fight(state: UXState) -> ValidationResult:
    if not _character_exists(state):
        return ValidationResult.reject(CHARACTER_DOES_NOT_EXIST)
    if not state.character.in_combat:
        return ValidationResult.reject(CHARACTER_NOT_IN_COMBAT)
    return _system_checks(state)


def can_flee(state: UXState) -> ValidationResult:
    # Fleeing has the same preconditions as continuing a fight
    return can_continue_fight(state)


def can_view_pools(state: UXState) -> ValidationResult:
    return _system_checks(state, check_error=False)


def can_view_leaderboard(state: UXState) -> ValidationResult:
    return _system_checks(state, check_error=False)


def can_view_claims(state: UXState) -> ValidationResult:
    if not _character_exists(state):
        return ValidationResult.reject(CHARACTER_DOES_NOT_EXIST)
    return _system_checks(state, check_error=False)


def can_claim_prize(state: UXState, reward: Optional[ClaimableReward]) -> ValidationResult:
    if not _character_exists(state):
        return ValidationResult.reject(CHARACTER_DOES_NOT_EXIST)
    if reward is None or not reward.can_claim:
        return ValidationResult.reject(REWARD_NOT_CLAIMABLE)
    return _system_checks(state)


_OPERATION_PREDICATES: Dict[OperationType, Callable[[UXState], ValidationResult]] = {
    OperationType.CREATE_CHARACTER: can_create_character,
    OperationType.FIGHT_ENEMY: can_fight,
    OperationType.HEAL_CHARACTER: can_heal,
    OperationType.RESURRECT_CHARACTER: can_resurrect,
    OperationType.CONTINUE_FIGHT: can_continue_fight,
    OperationType.FLEE_ROUND: can_flee,
    OperationType.LOAD_POOLS: can_view_pools,
    OperationType.LOAD_LEADERBOARD: can_view_leaderboard,
    OperationType.LOAD_CLAIMS: can_view_claims,
}


def can_start_operation(operation_type: OperationType, state: UXState) -> ValidationResult:
    """
    Decide whether an operation of this kind may start.

    Kinds without a dedicated predicate (claiming a prize, whose reward is
    checked separately) get the shared operation/loading/error checks.
    """
    predicate = _OPERATION_PREDICATES.get(operation_type)
    if predicate is None:
        return _system_checks(state)
    return predicate(state)


# =============================================================================
# Input validators
# =============================================================================


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_character_class(class_id, max_class: int = MAX_CHARACTER_CLASS) -> ValidationResult:
    if not _is_int(class_id):
        return ValidationResult.reject("Character class must be an integer")
    if not 0 <= class_id <= max_class:
        return ValidationResult.reject(f"Character class must be between 0 and {max_class}")
    return ValidationResult.ok()


def validate_enemy_id(
    enemy_id,
    min_id: int = MIN_ENEMY_ID,
    max_id: int = MAX_ENEMY_ID,
) -> ValidationResult:
    if not _is_int(enemy_id):
        return ValidationResult.reject("Enemy ID must be an integer")
    if not min_id <= enemy_id <= max_id:
        return ValidationResult.reject(f"Enemy ID must be between {min_id} and {max_id}")
    return ValidationResult.ok()


def validate_enemy_level(
    level,
    min_level: int = MIN_ENEMY_LEVEL,
    max_level: int = MAX_ENEMY_LEVEL,
) -> ValidationResult:
    if not _is_int(level):
        return ValidationResult.reject("Enemy level must be an integer")
    if not min_level <= level <= max_level:
        return ValidationResult.reject(f"Enemy level must be between {min_level} and {max_level}")
    return ValidationResult.ok()


def validate_player_address(address) -> ValidationResult:
    if not address:
        return ValidationResult.reject("Player address is required")
    if not isinstance(address, str):
        return ValidationResult.reject("Player address must be a string")
    if not address.startswith("0x"):
        return ValidationResult.reject("Player address must start with 0x")
    if len(address) != 42:
        return ValidationResult.reject("Player address must be 42 characters long")
    if not _ADDRESS_PATTERN.match(address):
        return ValidationResult.reject("Player address must be a valid hexadecimal string")
    return ValidationResult.ok()


def validate_claim_request(epoch, index, amount, proof: List[str]) -> ValidationResult:
    if not _is_int(epoch) or epoch < 0:
        return ValidationResult.reject("Epoch must be a non-negative integer")
    if not _is_int(index) or index < 0:
        return ValidationResult.reject("Reward index must be a non-negative integer")
    if not _is_int(amount) or amount <= 0:
        return ValidationResult.reject("Claim amount must be a positive integer")
    if not isinstance(proof, (list, tuple)):
        return ValidationResult.reject("Proof must be a list of hashes")
    for node in proof:
        if not isinstance(node, str) or not _PROOF_NODE_PATTERN.match(node):
            return ValidationResult.reject("Proof entries must be 32-byte hex strings")
    return ValidationResult.ok()
