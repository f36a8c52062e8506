"""
Domain event kinds and their payloads.

Every EventType has exactly one payload type registered in EVENT_PAYLOADS;
the EventBus refuses to emit a payload of the wrong type.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Type

from pydantic import BaseModel

from ..schemas import (
    CharacterData,
    ClaimsData,
    EquipmentData,
    FightSummaryData,
    HealingData,
    LeaderboardData,
    OperationType,
    PoolsData,
    ResurrectionData,
)


class EventType(Enum):
    """Domain event kinds."""
    # Character events
    CHARACTER_CREATED = auto()
    CHARACTER_UPDATED = auto()

    # Combat events
    FIGHT_STARTED = auto()
    FIGHT_COMPLETED = auto()
    EQUIPMENT_DROPPED = auto()

    # Healing / resurrection events
    HEALING_STARTED = auto()
    HEALING_COMPLETED = auto()
    RESURRECTION_STARTED = auto()
    RESURRECTION_COMPLETED = auto()

    # Operation lifecycle events
    OPERATION_STARTED = auto()
    OPERATION_COMPLETED = auto()
    OPERATION_FAILED = auto()

    # Ledger cache events
    POOLS_UPDATED = auto()
    LEADERBOARD_UPDATED = auto()
    CLAIMS_UPDATED = auto()

    # Claim events
    CLAIM_STARTED = auto()
    CLAIM_COMPLETED = auto()
    CLAIM_FAILED = auto()

    # Error events
    ERROR_OCCURRED = auto()


class CharacterEvent(BaseModel):
    character: Optional[CharacterData] = None
    handle: Optional[str] = None


class OperationEvent(BaseModel):
    """Lifecycle notification for a tracked operation."""
    operation_type: OperationType
    handle: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None


class FightStartedEvent(OperationEvent):
    enemy_id: int
    enemy_level: int


class ClaimEvent(OperationEvent):
    epoch: int
    index: int
    amount: int


class FightCompletedEvent(BaseModel):
    summary: FightSummaryData


class EquipmentDroppedEvent(BaseModel):
    equipment: EquipmentData
    transaction_hash: Optional[str] = None


class HealingCompletedEvent(BaseModel):
    healing: HealingData


class ResurrectionCompletedEvent(BaseModel):
    resurrection: ResurrectionData


class PoolsUpdatedEvent(BaseModel):
    pools: PoolsData


class LeaderboardUpdatedEvent(BaseModel):
    leaderboard: LeaderboardData


class ClaimsUpdatedEvent(BaseModel):
    claims: ClaimsData


class ErrorEvent(BaseModel):
    """Session-level failure; sets the store's global error slot."""
    message: str
    code: Optional[int] = None
    category: Optional[str] = None
    retryable: bool = False


EVENT_PAYLOADS: Dict[EventType, Type[BaseModel]] = {
    EventType.CHARACTER_CREATED: OperationEvent,
    EventType.CHARACTER_UPDATED: CharacterEvent,
    EventType.FIGHT_STARTED: FightStartedEvent,
    EventType.FIGHT_COMPLETED: FightCompletedEvent,
    EventType.EQUIPMENT_DROPPED: EquipmentDroppedEvent,
    EventType.HEALING_STARTED: OperationEvent,
    EventType.HEALING_COMPLETED: HealingCompletedEvent,
    EventType.RESURRECTION_STARTED: OperationEvent,
    EventType.RESURRECTION_COMPLETED: ResurrectionCompletedEvent,
    EventType.OPERATION_STARTED: OperationEvent,
    EventType.OPERATION_COMPLETED: OperationEvent,
    EventType.OPERATION_FAILED: OperationEvent,
    EventType.POOLS_UPDATED: PoolsUpdatedEvent,
    EventType.LEADERBOARD_UPDATED: LeaderboardUpdatedEvent,
    EventType.CLAIMS_UPDATED: ClaimsUpdatedEvent,
    EventType.CLAIM_STARTED: ClaimEvent,
    EventType.CLAIM_COMPLETED: ClaimEvent,
    EventType.CLAIM_FAILED: ClaimEvent,
    EventType.ERROR_OCCURRED: ErrorEvent,
}


@dataclass
class Event:
    """Event data structure delivered to listeners."""
    type: EventType
    payload: BaseModel
    timestamp: float = field(default_factory=time.time)
