"""Action gating and input validation."""

from .manager import ValidationManager, validate_character_state, validate_operation_state
from .rules import (
    can_claim_prize,
    can_continue_fight,
    can_create_character,
    can_fight,
    can_flee,
    can_heal,
    can_resurrect,
    can_start_operation,
    can_view_claims,
    can_view_leaderboard,
    can_view_pools,
    validate_character_class,
    validate_claim_request,
    validate_enemy_id,
    validate_enemy_level,
    validate_player_address,
)

__all__ = [
    "ValidationManager",
    "validate_character_state",
    "validate_operation_state",
    "can_claim_prize",
    "can_continue_fight",
    "can_create_character",
    "can_fight",
    "can_flee",
    "can_heal",
    "can_resurrect",
    "can_start_operation",
    "can_view_claims",
    "can_view_leaderboard",
    "can_view_pools",
    "validate_character_class",
    "validate_claim_request",
    "validate_enemy_id",
    "validate_enemy_level",
    "validate_player_address",
]
