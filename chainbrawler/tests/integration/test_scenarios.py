"""
End-to-end scenarios run through BrawlerClient with a fake ledger.
"""

import pytest

from chainbrawler.core.events import EventType, PoolsUpdatedEvent
from chainbrawler.operations.pools import build_pools_data
from chainbrawler.schemas import MenuAction, OperationStatus
from chainbrawler.tests.ledger_fakes import PLAYER, PROOF_NODE, fight_summary_args, log_entry

GOBLIN_FIGHT = {
    "player": PLAYER,
    "enemyId": 1,
    "enemyLevel": 1,
    "victory": True,
    "unresolved": False,
    "roundsElapsed": 3,
    "roundNumbers": [1, 2, 3],
    "playerDamages": [10, 15, 20],
    "enemyDamages": [5, 8, 12],
    "playerCriticals": [False, True, False],
    "enemyCriticals": [False, False, False],
}


class TestMenuScenarios:

    @pytest.mark.asyncio
    async def test_no_character(self, client):
        await client.initialize_player(PLAYER)

        menu = client.get_menu()
        assert menu.can_create_character is True
        assert menu.can_fight is False
        assert menu.can_heal is False
        assert menu.can_resurrect is False
        assert menu.available_actions == [MenuAction.CREATE_CHARACTER]

    @pytest.mark.asyncio
    async def test_living_character_out_of_combat(self, player_client):
        menu = player_client.get_menu()

        assert menu.can_fight is True
        assert menu.can_heal is True
        assert menu.can_resurrect is False
        assert menu.can_continue_fight is False
        assert menu.can_flee is False

    @pytest.mark.asyncio
    async def test_dead_character(self, client, ledger):
        ledger.set_character(PLAYER, alive=False, current_endurance=0)
        await client.initialize_player(PLAYER)

        menu = client.get_menu()
        assert menu.can_resurrect is True
        assert menu.can_fight is False
        assert menu.can_heal is False
        assert MenuAction.RESURRECT in menu.available_actions


class TestFightScenario:

    @pytest.mark.asyncio
    async def test_goblin_fight_log_normalizes(self, player_client, ledger):
        ledger.deliver("fight_summary", [log_entry(GOBLIN_FIGHT, tx="0xgoblin")])

        summary = player_client.get_last_fight_summary()
        assert summary.player_died is False
        assert summary.enemy_died is True
        assert summary.enemy_name == "Goblin Warrior"
        assert summary.rounds.count == 3
        assert summary.rounds.player_criticals == (False, True, False)

    @pytest.mark.asyncio
    async def test_full_fight_flow(self, player_client, ledger):
        result = await player_client.fight_enemy(1, 1)
        assert result.success
        assert player_client.get_operation().status == OperationStatus.COMPLETED

        ledger.set_combat(PLAYER, enemy_id=1, enemy_level=1)
        await player_client.character.refresh_character()
        assert player_client.get_menu().can_continue_fight is True
        assert player_client.get_menu().can_fight is False

        assert (await player_client.continue_fight()).success

        ledger.clear_combat(PLAYER)
        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx=result.data)])
        await player_client.character.refresh_character()

        assert player_client.get_last_fight_summary().transaction_hash == result.data
        assert player_client.get_menu().can_fight is True


class TestListenerIsolation:

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_starve_others(self, client):
        calls = []

        def broken(event):
            raise RuntimeError("listener bug")

        client.events.on(EventType.POOLS_UPDATED, broken)
        client.events.on(EventType.POOLS_UPDATED, calls.append)

        client.events.emit(EventType.POOLS_UPDATED, PoolsUpdatedEvent(pools=build_pools_data([1, 1, 1, 1, 1, 1])))

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failing_state_listener_does_not_break_actions(self, player_client):
        def broken(state):
            raise RuntimeError("render bug")

        player_client.subscribe(broken)

        assert (await player_client.load_pools()).success
        assert player_client.get_status_message() == "Pools updated"


class TestClaimScenario:

    @pytest.mark.asyncio
    async def test_discover_and_claim_reward(self, player_client, ledger):
        ledger.add_proof(epoch=2, amount=500, index=7)
        await player_client.load_claims()

        reward = player_client.get_claims().available[0]
        assert (reward.epoch, reward.index, reward.amount) == (2, 7, 500)

        result = await player_client.claim_prize(reward.epoch, reward.index, reward.amount, reward.proof)

        assert result.success
        assert ledger.called("claim_prize") == [(2, 7, 500, [PROOF_NODE])]
        assert player_client.get_claims().available == []

        await player_client.load_claims()
        assert player_client.get_claims().available == []
