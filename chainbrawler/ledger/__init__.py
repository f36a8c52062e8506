"""Ledger collaborator interface and raw transport records."""

from .client import LedgerClient, LogCallback, RawLogBatch, Unwatch
from .records import (
    RawCharacter,
    RawCombatState,
    RawEnemyStats,
    RawEquipmentDrop,
    RawFightSummaryEvent,
    RawHealingEvent,
    RawLog,
    RawMerkleProof,
    RawResurrectionEvent,
)

__all__ = [
    "LedgerClient",
    "LogCallback",
    "RawLogBatch",
    "Unwatch",
    "RawCharacter",
    "RawCombatState",
    "RawEnemyStats",
    "RawEquipmentDrop",
    "RawFightSummaryEvent",
    "RawHealingEvent",
    "RawLog",
    "RawMerkleProof",
    "RawResurrectionEvent",
]
