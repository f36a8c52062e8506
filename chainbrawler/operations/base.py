"""
Shared wiring for the operation families.
"""

from typing import Optional

from ..config import BrawlerConfig
from ..core.event_bus import EventBus
from ..core.state_store import StateStore
from ..ledger.client import LedgerClient
from ..validation import ValidationManager
from .lifecycle import OperationLifecycle


class BaseOperations:
    """
    Base class for one family of tracked actions.

    Families read and write the shared store, emit on the shared bus and run
    every tracked action through the shared lifecycle.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        store: StateStore,
        bus: EventBus,
        lifecycle: OperationLifecycle,
        validator: ValidationManager,
        config: BrawlerConfig,
    ):
        self.ledger = ledger
        self.store = store
        self.bus = bus
        self.lifecycle = lifecycle
        self.validator = validator
        self.config = config

    def _player(self, address: Optional[str] = None) -> Optional[str]:
        return address or self.store.get_player_address()
