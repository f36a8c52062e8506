"""
Event handler.

Folds domain events into the state store: status lines and the cached
"last event" snapshots. Every EventType must have a handler; the table is
checked when the handler is constructed.
"""

from typing import Callable, Dict, List

from ..game.character_view import character_status_message
from ..logging_config import get_logger
from ..normalizer.presentation import get_fight_outcome
from .errors import MissingEventHandlerError
from .event_bus import EventBus
from .events import Event, EventType
from .state_store import StateStore

logger = get_logger(__name__)

Handler = Callable[[Event], None]


class EventHandler:
    """Subscribes to every event type and applies it to the store."""

    def __init__(self, store: StateStore, bus: EventBus):
        self._store = store
        self._bus = bus
        self._handlers: Dict[EventType, Handler] = {
            EventType.CHARACTER_CREATED: self._on_character_created,
            EventType.CHARACTER_UPDATED: self._on_character_updated,
            EventType.FIGHT_STARTED: self._status("Fight started"),
            EventType.FIGHT_COMPLETED: self._on_fight_completed,
            EventType.EQUIPMENT_DROPPED: self._on_equipment_dropped,
            EventType.HEALING_STARTED: self._status("Healing in progress..."),
            EventType.HEALING_COMPLETED: self._on_healing_completed,
            EventType.RESURRECTION_STARTED: self._status("Resurrection in progress..."),
            EventType.RESURRECTION_COMPLETED: self._on_resurrection_completed,
            EventType.OPERATION_STARTED: self._on_operation_started,
            EventType.OPERATION_COMPLETED: self._status("Operation completed"),
            EventType.OPERATION_FAILED: self._on_operation_failed,
            EventType.POOLS_UPDATED: self._status("Pools updated"),
            EventType.LEADERBOARD_UPDATED: self._status("Leaderboard updated"),
            EventType.CLAIMS_UPDATED: self._status("Claims updated"),
            EventType.CLAIM_STARTED: self._status("Claiming reward..."),
            EventType.CLAIM_COMPLETED: self._status("Reward claimed successfully"),
            EventType.CLAIM_FAILED: self._on_claim_failed,
            EventType.ERROR_OCCURRED: self._on_error,
        }

        missing = [event_type.name for event_type in EventType if event_type not in self._handlers]
        if missing:
            raise MissingEventHandlerError(f"No handler for event types: {', '.join(missing)}")

        self._unsubscribers: List[Callable[[], None]] = [
            bus.on(event_type, handler) for event_type, handler in self._handlers.items()
        ]

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _status(self, message: str) -> Handler:
        def handler(event: Event) -> None:
            self._store.set_status_message(message)
        return handler

    # =========================================================================
    # Character
    # =========================================================================

    def _on_character_created(self, event: Event) -> None:
        self._store.batch_update(
            last_fight_summary=None,
            status_message="Character created successfully",
        )

    def _on_character_updated(self, event: Event) -> None:
        self._store.set_status_message(character_status_message(event.payload.character))

    # =========================================================================
    # Combat
    # =========================================================================

    def _on_fight_completed(self, event: Event) -> None:
        summary = event.payload.summary
        outcome = get_fight_outcome(summary)
        logger.info(f"Fight against {summary.enemy_name} finished: {outcome.type}")
        self._store.batch_update(
            last_fight_summary=summary,
            status_message=f"Fight completed: {outcome.text}",
        )

    def _on_equipment_dropped(self, event: Event) -> None:
        equipment = event.payload.equipment
        changes = {
            "last_equipment_dropped": equipment,
            "status_message": "Equipment dropped!",
        }

        # A drop that arrives after its fight summary is attached to it
        summary = self._store.get_last_fight_summary()
        if (
            summary is not None
            and event.payload.transaction_hash
            and summary.transaction_hash == event.payload.transaction_hash
            and summary.equipment_dropped is None
        ):
            changes["last_fight_summary"] = summary.with_equipment_drop(equipment)

        self._store.batch_update(**changes)

    # =========================================================================
    # Healing / resurrection
    # =========================================================================

    def _on_healing_completed(self, event: Event) -> None:
        self._store.batch_update(
            last_healing=event.payload.healing,
            status_message="Character healed successfully",
        )

    def _on_resurrection_completed(self, event: Event) -> None:
        self._store.batch_update(
            last_resurrection=event.payload.resurrection,
            status_message="Character resurrected successfully",
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def _on_operation_started(self, event: Event) -> None:
        self._store.set_status_message(event.payload.message or "Operation started...")

    def _on_operation_failed(self, event: Event) -> None:
        error = event.payload.error
        self._store.set_status_message(f"Operation failed: {error}" if error else "Operation failed")

    def _on_claim_failed(self, event: Event) -> None:
        error = event.payload.error
        self._store.set_status_message(f"Claim failed: {error}" if error else "Claim failed")

    def _on_error(self, event: Event) -> None:
        message = event.payload.message
        logger.error(f"Session error: {message}")
        self._store.batch_update(error=message, status_message=f"Error: {message}")
