"""
Fixtures for operation family tests.

Each family runs against a FakeLedger with a real store, bus, handler and
lifecycle; the session is already past loading and bound to PLAYER.
"""

import pytest

from chainbrawler.core.event_handler import EventHandler
from chainbrawler.game.character_view import build_character_data
from chainbrawler.game.derived_state import DerivedStateSync
from chainbrawler.operations import (
    CharacterOperations,
    ClaimsOperations,
    CombatOperations,
    LeaderboardOperations,
    OperationLifecycle,
    PoolsOperations,
)
from chainbrawler.validation import ValidationManager
from chainbrawler.tests.ledger_fakes import PLAYER, raw_character


class Harness:
    """Wires one family set to a fake ledger and records every event."""

    def __init__(self, ledger, store, bus, config):
        self.ledger = ledger
        self.store = store
        self.bus = bus
        self.events = []
        bus.on_any(self.events.append)

        self.handler = EventHandler(store, bus)
        self.sync = DerivedStateSync(store)
        self.validator = ValidationManager(config.validation)
        self.lifecycle = OperationLifecycle(store, bus, self.validator)

        args = (ledger, store, bus, self.lifecycle, self.validator, config)
        self.character = CharacterOperations(*args)
        self.combat = CombatOperations(*args)
        self.pools = PoolsOperations(*args)
        self.leaderboard = LeaderboardOperations(*args)
        self.claims = ClaimsOperations(*args)

    def event_types(self):
        return [event.type for event in self.events]

    def with_character(self, **fields):
        """Put a character both on the ledger and in the store."""
        self.ledger.set_character(PLAYER, **fields)
        self.store.update_character(build_character_data(raw_character(**fields)))


@pytest.fixture
def harness(ledger, store, bus, config):
    store.set_loading(False)
    store.set_player_address(PLAYER)
    return Harness(ledger, store, bus, config)
