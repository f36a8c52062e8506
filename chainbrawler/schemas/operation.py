"""
Pydantic models (schemas) for tracked operations.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class OperationStatus(str, Enum):
    """
    Lifecycle status of a tracked operation.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class OperationType(str, Enum):
    """
    Every user-initiated action the core can track.
    """

    CREATE_CHARACTER = "create_character"
    FIGHT_ENEMY = "fight_enemy"
    CONTINUE_FIGHT = "continue_fight"
    FLEE_ROUND = "flee_round"
    HEAL_CHARACTER = "heal_character"
    RESURRECT_CHARACTER = "resurrect_character"
    CLAIM_PRIZE = "claim_prize"
    LOAD_POOLS = "load_pools"
    LOAD_LEADERBOARD = "load_leaderboard"
    LOAD_CLAIMS = "load_claims"


WRITE_OPERATIONS = frozenset({
    OperationType.CREATE_CHARACTER,
    OperationType.FIGHT_ENEMY,
    OperationType.CONTINUE_FIGHT,
    OperationType.FLEE_ROUND,
    OperationType.HEAL_CHARACTER,
    OperationType.RESURRECT_CHARACTER,
    OperationType.CLAIM_PRIZE,
})


def is_write_operation(operation_type: OperationType) -> bool:
    return operation_type in WRITE_OPERATIONS


class OperationState(BaseModel):
    """
    Schema for the single tracked operation.

    ``is_active`` is True only while the operation is pending or processing.
    """

    is_active: bool
    operation_type: OperationType
    status: OperationStatus
    handle: Optional[str] = None
    start_time: float
    progress: Optional[str] = None
    error: Optional[str] = None
    is_write_operation: bool = False
