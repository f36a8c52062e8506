"""Event bus, events, state store, error decoding and the enemy roster."""

from .enemies import ENEMY_TYPES, MAX_ENEMY_ID, MIN_ENEMY_ID, EnemyType, get_enemy_name, get_enemy_type
from .errors import (
    ChainBrawlerError,
    ErrorCategory,
    LedgerErrorInfo,
    MissingEventHandlerError,
    describe_ledger_error,
    extract_error_code,
)
from .event_bus import EventBus
from .events import EVENT_PAYLOADS, Event, EventType
from .state_store import StateStore

__all__ = [
    "ENEMY_TYPES",
    "MAX_ENEMY_ID",
    "MIN_ENEMY_ID",
    "EnemyType",
    "get_enemy_name",
    "get_enemy_type",
    "ChainBrawlerError",
    "ErrorCategory",
    "LedgerErrorInfo",
    "MissingEventHandlerError",
    "describe_ledger_error",
    "extract_error_code",
    "EventBus",
    "EVENT_PAYLOADS",
    "Event",
    "EventType",
    "StateStore",
]
