"""Domain schemas shared by the store, calculators and operations."""

from .character import (
    CLASS_NAMES,
    CharacterData,
    CharacterStats,
    CombatState,
    EnduranceData,
    EquipmentData,
    HealingData,
    ResurrectionData,
    get_class_name,
)
from .fight import FightRounds, FightSummaryData
from .ledger import (
    ClaimableReward,
    ClaimsData,
    LeaderboardData,
    LeaderboardPlayer,
    PoolInfo,
    PoolsData,
)
from .menu import MenuAction, MenuState
from .operation import (
    WRITE_OPERATIONS,
    OperationState,
    OperationStatus,
    OperationType,
    is_write_operation,
)
from .results import (
    FightSummaryValidation,
    OperationErrorCodes,
    OperationResult,
    ValidationResult,
)
from .state import INITIAL_STATUS_MESSAGE, UXState

__all__ = [
    "CLASS_NAMES",
    "CharacterData",
    "CharacterStats",
    "CombatState",
    "EnduranceData",
    "EquipmentData",
    "HealingData",
    "ResurrectionData",
    "get_class_name",
    "FightRounds",
    "FightSummaryData",
    "ClaimableReward",
    "ClaimsData",
    "LeaderboardData",
    "LeaderboardPlayer",
    "PoolInfo",
    "PoolsData",
    "MenuAction",
    "MenuState",
    "WRITE_OPERATIONS",
    "OperationState",
    "OperationStatus",
    "OperationType",
    "is_write_operation",
    "FightSummaryValidation",
    "OperationErrorCodes",
    "OperationResult",
    "ValidationResult",
    "INITIAL_STATUS_MESSAGE",
    "UXState",
]
