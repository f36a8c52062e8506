"""Derived-state calculators: character view, menu view and status lines."""

from .character_view import build_character_data, build_combat_state, character_status_message
from .derived_state import READY_MESSAGE, DerivedStateSync, status_message_for
from .menu_state import calculate_menu_state

__all__ = [
    "build_character_data",
    "build_combat_state",
    "character_status_message",
    "READY_MESSAGE",
    "DerivedStateSync",
    "status_message_for",
    "calculate_menu_state",
]
