"""
Integration tests for ledger log ingestion: player filtering, de-duplication,
equipment drop pairing and follow-up character refreshes.
"""

import asyncio

import pytest

from chainbrawler.client import BrawlerClient
from chainbrawler.core.events import EventType
from chainbrawler.tests.ledger_fakes import (
    OTHER_PLAYER,
    PLAYER,
    FakeLedger,
    fight_summary_args,
    log_entry,
)


def drop_args(player=PLAYER, bonuses=(3, 0, 1, 0), description="Iron Sword"):
    return {"player": player, "bonuses": list(bonuses), "description": description}


async def settle():
    """Let scheduled refresh tasks run."""
    for _ in range(10):
        await asyncio.sleep(0)


def record(client, event_type):
    received = []
    client.events.on(event_type, received.append)
    return received


class TestPlayerFiltering:

    @pytest.mark.asyncio
    async def test_own_fight_is_ingested(self, player_client, ledger):
        fights = record(player_client, EventType.FIGHT_COMPLETED)

        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx="0xaaa")])

        assert len(fights) == 1
        summary = player_client.get_last_fight_summary()
        assert summary.transaction_hash == "0xaaa"
        assert summary.enemy_died is True
        assert player_client.get_status_message() == "Fight completed: VICTORY!"

    @pytest.mark.asyncio
    async def test_other_players_logs_are_ignored(self, player_client, ledger):
        fights = record(player_client, EventType.FIGHT_COMPLETED)

        ledger.deliver("fight_summary", [log_entry(fight_summary_args(player=OTHER_PLAYER))])

        assert fights == []
        assert player_client.get_last_fight_summary() is None

    @pytest.mark.asyncio
    async def test_player_match_ignores_case(self, player_client, ledger):
        args = fight_summary_args(player=PLAYER.upper().replace("0X", "0x"))

        ledger.deliver("fight_summary", [log_entry(args)])

        assert player_client.get_last_fight_summary() is not None

    @pytest.mark.asyncio
    async def test_log_without_player_is_accepted(self, player_client, ledger):
        ledger.deliver("character_healed", [log_entry({"newEndurance": 100, "cost": 5})])

        assert player_client.get_state().last_healing.new_endurance == 100

    @pytest.mark.asyncio
    async def test_logs_dropped_without_session_player(self, client, ledger):
        fights = record(client, EventType.FIGHT_COMPLETED)

        ledger.deliver("fight_summary", [log_entry(fight_summary_args())])

        assert fights == []

    @pytest.mark.asyncio
    async def test_malformed_entry_does_not_block_batch(self, player_client, ledger):
        fights = record(player_client, EventType.FIGHT_COMPLETED)

        ledger.deliver("fight_summary", ["garbage", log_entry(fight_summary_args(), tx="0xbbb")])

        assert len(fights) == 1


class TestDeduplication:

    @pytest.mark.asyncio
    async def test_redelivered_log_is_ignored(self, player_client, ledger):
        fights = record(player_client, EventType.FIGHT_COMPLETED)
        entry = log_entry(fight_summary_args(), tx="0xabc", log_index=2)

        ledger.deliver("fight_summary", [entry])
        ledger.deliver("fight_summary", [entry, dict(entry, transactionHash="0xABC")])

        assert len(fights) == 1

    @pytest.mark.asyncio
    async def test_same_transaction_different_index(self, player_client, ledger):
        fights = record(player_client, EventType.FIGHT_COMPLETED)

        ledger.deliver("fight_summary", [
            log_entry(fight_summary_args(), tx="0xabc", log_index=0),
            log_entry(fight_summary_args(), tx="0xabc", log_index=1),
        ])

        assert len(fights) == 2

    @pytest.mark.asyncio
    async def test_logs_without_hash_are_not_deduplicated(self, player_client, ledger):
        heals = record(player_client, EventType.HEALING_COMPLETED)
        entry = {"args": {"player": PLAYER, "newEndurance": 90, "cost": 5}}

        ledger.deliver("character_healed", [entry, entry])

        assert len(heals) == 2

    @pytest.mark.asyncio
    async def test_window_forgets_oldest(self, config):
        config.session.event_dedupe_window = 2
        ledger = FakeLedger()
        ledger.set_character(PLAYER)
        brawler = BrawlerClient(ledger, config)
        await brawler.initialize()
        await brawler.initialize_player(PLAYER)
        fights = record(brawler, EventType.FIGHT_COMPLETED)

        for tx in ("0x01", "0x02", "0x03", "0x01"):
            ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx=tx)])

        assert len(fights) == 4
        await brawler.close()

    @pytest.mark.asyncio
    async def test_reset_forgets_seen_logs(self, player_client, ledger):
        fights = record(player_client, EventType.FIGHT_COMPLETED)
        entry = log_entry(fight_summary_args(), tx="0xabc")
        ledger.deliver("fight_summary", [entry])

        player_client.reset()
        player_client.store.set_player_address(PLAYER)
        ledger.deliver("fight_summary", [entry])

        assert len(fights) == 2


class TestEquipmentDrops:

    @pytest.mark.asyncio
    async def test_drop_before_summary_is_attached(self, player_client, ledger):
        drops = record(player_client, EventType.EQUIPMENT_DROPPED)

        ledger.deliver("equipment_dropped", [log_entry(drop_args(), tx="0xabc")])
        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx="0xabc")])

        assert len(drops) == 1
        equipment = player_client.get_last_fight_summary().equipment_dropped
        assert equipment.name == "Iron Sword"
        assert (equipment.combat, equipment.endurance, equipment.defense, equipment.luck) == (3, 0, 1, 0)

    @pytest.mark.asyncio
    async def test_drop_after_summary_is_merged(self, player_client, ledger):
        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx="0xabc")])
        before = player_client.get_last_fight_summary()
        assert before.equipment_dropped is None

        ledger.deliver("equipment_dropped", [log_entry(drop_args(), tx="0xabc")])

        after = player_client.get_last_fight_summary()
        assert after.equipment_dropped.name == "Iron Sword"
        assert after.victory == before.victory
        assert after.rounds == before.rounds
        assert player_client.get_state().last_equipment_dropped.combat == 3
        assert player_client.get_status_message() == "Equipment dropped!"

    @pytest.mark.asyncio
    async def test_drop_for_other_transaction_is_not_merged(self, player_client, ledger):
        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx="0xabc")])
        ledger.deliver("equipment_dropped", [log_entry(drop_args(), tx="0xdef")])

        assert player_client.get_last_fight_summary().equipment_dropped is None
        assert player_client.get_state().last_equipment_dropped is not None


class TestFollowUpRefresh:

    @pytest.mark.asyncio
    async def test_fight_summary_refreshes_character(self, player_client, ledger):
        reads = len(ledger.called("get_character"))
        ledger.set_character(PLAYER, level=4, current_endurance=60)

        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx="0xabc")])
        await settle()

        assert len(ledger.called("get_character")) == reads + 1
        assert player_client.get_character().level == 4

    @pytest.mark.asyncio
    async def test_healing_refreshes_character(self, player_client, ledger):
        heals = record(player_client, EventType.HEALING_COMPLETED)
        ledger.set_character(PLAYER, level=3, current_endurance=100)

        ledger.deliver("character_healed", [log_entry({"player": PLAYER, "newEndurance": 100, "cost": 5})])
        await settle()

        assert heals[0].payload.healing.cost == 5
        assert player_client.get_character().endurance.current == 100

    @pytest.mark.asyncio
    async def test_resurrection_event(self, player_client, ledger):
        ledger.deliver(
            "character_resurrected",
            [log_entry({"player": PLAYER, "newEndurance": 50, "cost": 20}, tx="0xres")],
        )
        await settle()

        resurrection = player_client.get_state().last_resurrection
        assert (resurrection.new_endurance, resurrection.cost) == (50, 20)
        assert resurrection.transaction_hash == "0xres"

    @pytest.mark.asyncio
    async def test_refresh_failure_is_quiet(self, player_client, ledger):
        ledger.fail("get_character", RuntimeError("node down"))

        ledger.deliver("fight_summary", [log_entry(fight_summary_args(), tx="0xabc")])
        await settle()

        assert player_client.get_state().error is None
        assert player_client.get_last_fight_summary() is not None
