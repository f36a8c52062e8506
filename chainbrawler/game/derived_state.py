"""
Keeps derived views in step with the store.
"""

from typing import Callable, Optional

from ..core.state_store import StateStore
from ..logging_config import get_logger
from ..schemas import MenuState, OperationStatus, UXState
from .character_view import character_status_message
from .menu_state import calculate_menu_state

logger = get_logger(__name__)

READY_MESSAGE = "Ready for action"


def status_message_for(state: UXState) -> str:
    """Status line for a snapshot, most urgent condition first."""
    if state.is_loading:
        return "Initializing..."
    if state.error:
        return f"Error: {state.error}"

    operation = state.operation
    if operation is not None:
        if operation.status == OperationStatus.PENDING:
            return operation.progress or "Operation pending..."
        if operation.status == OperationStatus.PROCESSING:
            return operation.progress or "Processing transaction..."
        if operation.status == OperationStatus.ERROR:
            return f"Operation failed: {operation.error}"

    if state.character is not None and state.character.exists:
        return character_status_message(state.character)
    return READY_MESSAGE


class DerivedStateSync:
    """
    Store subscriber that recomputes the menu after every mutation.

    The menu is None while the session is loading. A new menu is written only
    when it differs from the stored one, so the write it triggers settles on
    the next notification.
    """

    def __init__(self, store: StateStore):
        self._store = store
        self._healing_cooldown_remaining = 0
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_state_change)
        self.sync()

    @property
    def healing_cooldown_remaining(self) -> int:
        return self._healing_cooldown_remaining

    def set_healing_cooldown(self, seconds: int) -> None:
        self._healing_cooldown_remaining = max(0, int(seconds))
        self.sync()

    def desired_menu(self, state: UXState) -> Optional[MenuState]:
        if state.is_loading:
            return None
        return calculate_menu_state(state.character, state.operation, self._healing_cooldown_remaining)

    def sync(self) -> None:
        # Work from the live state; queued snapshots may already be stale
        state = self._store.get_state()
        menu = self.desired_menu(state)
        if state.menu != menu:
            logger.debug("Menu recomputed")
            self._store.update_menu(menu)

    def _on_state_change(self, _state: UXState) -> None:
        self.sync()

    def close(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
