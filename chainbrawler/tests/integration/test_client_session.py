"""
Integration tests for the BrawlerClient session lifecycle against a fake ledger.
"""

import asyncio

import pytest

from chainbrawler.client import BrawlerClient
from chainbrawler.core.events import EventType
from chainbrawler.schemas import MenuAction, OperationErrorCodes, OperationType, UXState
from chainbrawler.tests.ledger_fakes import OTHER_PLAYER, PLAYER, FakeLedger

ALL_STREAMS = ["character_healed", "character_resurrected", "equipment_dropped", "fight_summary"]


async def wait_for_operation(client, operation_type):
    for _ in range(50):
        operation = client.get_operation()
        if operation is not None and operation.operation_type == operation_type and operation.is_active:
            return operation
        await asyncio.sleep(0)
    raise AssertionError(f"{operation_type} never became active")


async def wait_for_calls(ledger, method, total):
    for _ in range(50):
        if len(ledger.called(method)) >= total:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"{method} was not called {total} times")


class TestInitialize:

    @pytest.mark.asyncio
    async def test_initialize(self, client, ledger):
        state = client.get_state()

        assert state.is_loading is False
        assert state.error is None
        assert state.pools.total_value == 1000
        assert state.status_message == "Ready for action"
        assert sorted(ledger.watchers) == ALL_STREAMS
        assert state.menu.available_actions == [MenuAction.CREATE_CHARACTER]

    @pytest.mark.asyncio
    async def test_watcher_failure_sets_error(self, config):
        ledger = FakeLedger()
        ledger.fail("equipment_dropped", RuntimeError("subscription refused"))
        brawler = BrawlerClient(ledger, config)

        result = await brawler.initialize()

        assert not result.success
        assert result.code == OperationErrorCodes.LEDGER_ERROR
        assert result.error.startswith("Failed to start event watchers")
        assert brawler.get_state().error == result.error
        assert brawler.get_state().is_loading is False
        assert brawler.get_status_message() == f"Error: {result.error}"
        await brawler.close()

    @pytest.mark.asyncio
    async def test_pool_failure_does_not_fail_session(self, config):
        ledger = FakeLedger()
        ledger.fail("get_all_pool_data", RuntimeError("rpc down"))
        brawler = BrawlerClient(ledger, config)

        result = await brawler.initialize()

        assert result.success
        assert brawler.get_pools() is None
        assert brawler.get_state().error is None
        assert brawler.get_status_message() == "Ready for action"
        await brawler.close()


class TestInitializePlayer:

    @pytest.mark.asyncio
    async def test_loads_character_leaderboard_and_claims(self, player_client, ledger):
        state = player_client.get_state()

        assert state.player_address == PLAYER
        assert state.character.level == 3
        assert state.leaderboard is not None
        assert state.claims is not None
        assert state.menu.can_fight is True
        assert state.menu.can_heal is True
        assert ledger.called("get_merkle_proof_for_player")

    @pytest.mark.asyncio
    async def test_player_without_character_skips_claims(self, client, ledger):
        result = await client.initialize_player(PLAYER)

        assert result.success
        assert result.data is None
        assert client.get_claims() is None
        assert ledger.called("get_merkle_proof_for_player") == []
        assert client.get_leaderboard() is not None
        assert client.get_menu().can_create_character is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("address", ["", "ab" * 21, "0x1234", "0x" + "zz" * 20])
    async def test_invalid_address(self, client, address):
        result = await client.initialize_player(address)

        assert result.code == OperationErrorCodes.INVALID_INPUT
        assert client.get_player_address() is None

    @pytest.mark.asyncio
    async def test_character_read_failure(self, client, ledger):
        errors = []
        client.events.on(EventType.ERROR_OCCURRED, errors.append)
        ledger.fail("get_character", RuntimeError("node down"))

        result = await client.initialize_player(PLAYER)

        assert not result.success
        assert result.error.startswith("Failed to load character")
        assert client.get_state().error == result.error
        assert len(errors) == 1
        assert ledger.called("get_current_epoch") == []


class TestRefreshAll:

    @pytest.mark.asyncio
    async def test_refresh_all(self, player_client):
        result = await player_client.refresh_all()

        assert result.success
        assert len(result.data) == 3

    @pytest.mark.asyncio
    async def test_refresh_without_player_loads_pools_only(self, client):
        result = await client.refresh_all()

        assert result.success
        assert len(result.data) == 1

    @pytest.mark.asyncio
    async def test_partial_failure(self, player_client, ledger):
        ledger.fail("get_current_epoch", RuntimeError("rpc down"))

        result = await player_client.refresh_all()

        assert not result.success
        assert [item.success for item in result.data] == [True, False, False]
        assert player_client.get_state().error is None


class TestSessionControls:

    @pytest.mark.asyncio
    async def test_healing_cooldown_disables_heal(self, player_client):
        player_client.set_healing_cooldown(30)

        menu = player_client.get_menu()
        assert menu.can_heal is False
        assert menu.healing_cooldown_remaining == 30
        assert menu.disabled_reasons[MenuAction.HEAL] == "Healing cooldown: 30s remaining"

        player_client.set_healing_cooldown(0)
        assert player_client.get_menu().can_heal is True

    @pytest.mark.asyncio
    async def test_clear_error(self, client, ledger):
        ledger.fail("get_character", RuntimeError("node down"))
        await client.initialize_player(PLAYER)
        assert client.get_state().error is not None

        client.clear_error()

        assert client.get_state().error is None
        assert not client.get_status_message().startswith("Error")

    @pytest.mark.asyncio
    async def test_active_operation_cannot_be_cleared(self, player_client, ledger):
        release = ledger.hold("fight_enemy")
        task = asyncio.create_task(player_client.fight_enemy(1, 1))
        await wait_for_operation(player_client, OperationType.FIGHT_ENEMY)

        assert player_client.clear_operation() is False
        assert player_client.get_operation().is_active is True

        release.set()
        assert (await task).success
        assert player_client.clear_operation() is True
        assert player_client.get_operation() is None

    @pytest.mark.asyncio
    async def test_reset_is_idempotent(self, player_client):
        player_client.set_healing_cooldown(10)

        player_client.reset()
        first = player_client.get_state()
        player_client.reset()

        assert first == UXState()
        assert player_client.get_state() == first
        assert player_client.get_menu() is None

    @pytest.mark.asyncio
    async def test_refresh_in_flight_does_not_survive_reset(self, player_client, ledger):
        reads = len(ledger.called("get_character"))
        release = ledger.hold("get_character")
        task = asyncio.create_task(player_client.character.refresh_character())
        await wait_for_calls(ledger, "get_character", reads + 1)

        player_client.reset()
        release.set()

        assert await task is None
        assert player_client.get_character() is None
        assert player_client.get_state() == UXState()

    @pytest.mark.asyncio
    async def test_refresh_in_flight_does_not_leak_into_new_player(self, player_client, ledger):
        ledger.set_character(OTHER_PLAYER, level=7)
        updates = []
        player_client.events.on(EventType.CHARACTER_UPDATED, updates.append)
        reads = len(ledger.called("get_character"))
        release = ledger.hold("get_character")
        stale = asyncio.create_task(player_client.character.refresh_character())
        await wait_for_calls(ledger, "get_character", reads + 1)

        rebind = asyncio.create_task(player_client.initialize_player(OTHER_PLAYER))
        await wait_for_calls(ledger, "get_character", reads + 2)
        release.set()

        assert await stale is None
        assert (await rebind).success
        assert player_client.get_player_address() == OTHER_PLAYER
        assert player_client.get_character().level == 7
        assert updates == []

    @pytest.mark.asyncio
    async def test_close_unwatches_every_stream(self, config):
        ledger = FakeLedger()
        brawler = BrawlerClient(ledger, config)
        await brawler.initialize()

        await brawler.close()

        assert sorted(ledger.unwatched) == ALL_STREAMS
        assert all(not callbacks for callbacks in ledger.watchers.values())

    @pytest.mark.asyncio
    async def test_clients_are_isolated(self, config):
        first = BrawlerClient(FakeLedger(), config)
        second = BrawlerClient(FakeLedger(), config)
        await first.initialize()

        assert first.get_state().is_loading is False
        assert second.get_state().is_loading is True
        assert second.get_pools() is None

        await first.close()
        await second.close()
