"""
Authoritative UX state store.

Holds the single UXState of a session. Every setter replaces the state in one
assignment and then notifies subscribers synchronously with a deep copy, so
no caller ever holds a live reference into the store.
"""

from collections import deque
from typing import Any, Callable, Deque, List, Optional

from pydantic import BaseModel

from ..logging_config import get_logger
from ..schemas import (
    CharacterData,
    ClaimsData,
    EquipmentData,
    FightSummaryData,
    HealingData,
    LeaderboardData,
    MenuState,
    OperationState,
    PoolsData,
    ResurrectionData,
    UXState,
)

logger = get_logger(__name__)

StateListener = Callable[[UXState], None]


def _detached(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    return value


class StateStore:
    """
    Owns the UXState for one session.

    Notifications are delivered in mutation order. A listener that mutates
    the store while being notified does not re-enter the notification loop;
    the new snapshot is queued and delivered once the current pass finishes.
    """

    def __init__(self):
        self._state = UXState()
        self._listeners: List[StateListener] = []
        self._pending: Deque[UXState] = deque()
        self._notifying = False

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        self._pending.append(self._state.model_copy(deep=True))
        if self._notifying:
            return

        self._notifying = True
        try:
            while self._pending:
                snapshot = self._pending.popleft()
                for listener in list(self._listeners):
                    try:
                        listener(snapshot.model_copy(deep=True))
                    except Exception:
                        logger.exception("Error in state listener")
        finally:
            self._notifying = False

    def _assign(self, **changes: Any) -> None:
        # Re-validate so plain dicts become models and bad values raise ValidationError
        fields = dict(self._state)
        fields.update({key: _detached(value) for key, value in changes.items()})
        self._state = UXState.model_validate(fields)
        self._notify()

    # =========================================================================
    # Getters
    # =========================================================================

    def get_state(self) -> UXState:
        return self._state.model_copy(deep=True)

    def get_player_address(self) -> Optional[str]:
        return self._state.player_address

    def get_character(self) -> Optional[CharacterData]:
        return _detached(self._state.character)

    def get_menu(self) -> Optional[MenuState]:
        return _detached(self._state.menu)

    def get_operation(self) -> Optional[OperationState]:
        return _detached(self._state.operation)

    def get_pools(self) -> Optional[PoolsData]:
        return _detached(self._state.pools)

    def get_leaderboard(self) -> Optional[LeaderboardData]:
        return _detached(self._state.leaderboard)

    def get_claims(self) -> Optional[ClaimsData]:
        return _detached(self._state.claims)

    def get_status_message(self) -> str:
        return self._state.status_message

    def is_loading(self) -> bool:
        return self._state.is_loading

    def get_error(self) -> Optional[str]:
        return self._state.error

    def get_last_fight_summary(self) -> Optional[FightSummaryData]:
        return _detached(self._state.last_fight_summary)

    def get_last_equipment_dropped(self) -> Optional[EquipmentData]:
        return _detached(self._state.last_equipment_dropped)

    def get_last_healing(self) -> Optional[HealingData]:
        return _detached(self._state.last_healing)

    def get_last_resurrection(self) -> Optional[ResurrectionData]:
        return _detached(self._state.last_resurrection)

    # =========================================================================
    # Setters
    # =========================================================================

    def set_player_address(self, address: Optional[str]) -> None:
        self._assign(player_address=address)

    def update_character(self, character: Optional[CharacterData]) -> None:
        self._assign(character=character)

    def update_menu(self, menu: Optional[MenuState]) -> None:
        self._assign(menu=menu)

    def set_operation(self, operation: Optional[OperationState]) -> None:
        self._assign(operation=operation)

    def clear_operation(self) -> None:
        self._assign(operation=None)

    def update_pools(self, pools: Optional[PoolsData]) -> None:
        self._assign(pools=pools)

    def update_leaderboard(self, leaderboard: Optional[LeaderboardData]) -> None:
        self._assign(leaderboard=leaderboard)

    def update_claims(self, claims: Optional[ClaimsData]) -> None:
        self._assign(claims=claims)

    def set_last_fight_summary(self, summary: Optional[FightSummaryData]) -> None:
        self._assign(last_fight_summary=summary)

    def set_last_equipment_dropped(self, equipment: Optional[EquipmentData]) -> None:
        self._assign(last_equipment_dropped=equipment)

    def set_last_healing(self, healing: Optional[HealingData]) -> None:
        self._assign(last_healing=healing)

    def set_last_resurrection(self, resurrection: Optional[ResurrectionData]) -> None:
        self._assign(last_resurrection=resurrection)

    def set_error(self, error: Optional[str]) -> None:
        self._assign(error=error)

    def clear_error(self) -> None:
        self._assign(error=None)

    def set_loading(self, loading: bool) -> None:
        self._assign(is_loading=loading)

    def set_status_message(self, message: str) -> None:
        self._assign(status_message=message)

    def batch_update(self, **changes: Any) -> None:
        """
        Apply several field changes with a single notification.

        Raises:
            ValueError: if a change names a field UXState does not have
        """
        unknown = sorted(set(changes) - set(UXState.model_fields))
        if unknown:
            raise ValueError(f"Unknown state fields: {', '.join(unknown)}")
        if changes:
            self._assign(**changes)

    def reset(self) -> None:
        """Restore the initial state (loading, nothing cached)."""
        self._state = UXState()
        self._notify()
