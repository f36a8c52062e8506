"""
Shared fixtures for the ChainBrawler test suite.
"""

import pytest
import pytest_asyncio

from chainbrawler.client import BrawlerClient
from chainbrawler.config import BrawlerConfig
from chainbrawler.core.event_bus import EventBus
from chainbrawler.core.state_store import StateStore
from chainbrawler.tests.ledger_fakes import PLAYER, FakeLedger


@pytest.fixture
def config():
    """Default configuration, independent of the YAML file and environment."""
    return BrawlerConfig()


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def store():
    return StateStore()


@pytest.fixture
def bus():
    return EventBus()


@pytest_asyncio.fixture
async def client(ledger, config):
    """A client whose session has been initialized (watchers started, pools loaded)."""
    brawler = BrawlerClient(ledger, config)
    await brawler.initialize()
    yield brawler
    await brawler.close()


@pytest_asyncio.fixture
async def player_client(client, ledger):
    """An initialized client bound to PLAYER, who has a living character."""
    ledger.set_character(PLAYER, level=3, current_endurance=60, max_endurance=100)
    ledger.players = [PLAYER]
    result = await client.initialize_player(PLAYER)
    assert result.success
    return client
