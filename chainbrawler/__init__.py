"""
ChainBrawler client core.

State orchestration for the ChainBrawler on-chain game: event bus, state
store, operation lifecycle, validation, derived views and fight data
normalization behind the BrawlerClient facade.
"""

from .client import BrawlerClient
from .config import BrawlerConfig, get_config, reload_config
from .core.event_bus import EventBus
from .core.events import Event, EventType
from .core.state_store import StateStore
from .ledger.client import LedgerClient
from .logging_config import get_logger, setup_logging
from .schemas import MenuAction, OperationErrorCodes, OperationResult, OperationStatus, OperationType, UXState

__version__ = "0.1.0"

__all__ = [
    "BrawlerClient",
    "BrawlerConfig",
    "get_config",
    "reload_config",
    "EventBus",
    "Event",
    "EventType",
    "StateStore",
    "LedgerClient",
    "get_logger",
    "setup_logging",
    "MenuAction",
    "OperationErrorCodes",
    "OperationResult",
    "OperationStatus",
    "OperationType",
    "UXState",
]
