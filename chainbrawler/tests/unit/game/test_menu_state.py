"""
Unit tests for the menu calculation.
"""

from chainbrawler.game.menu_state import calculate_menu_state
from chainbrawler.schemas import (
    CharacterData,
    EnduranceData,
    MenuAction,
    OperationState,
    OperationStatus,
    OperationType,
)


def character(alive=True, in_combat=False, exists=True):
    return CharacterData(
        exists=exists,
        is_alive=alive,
        level=1 if exists else 0,
        endurance=EnduranceData.of(50, 100),
        in_combat=in_combat,
    )


class TestNoCharacter:

    def test_only_create_is_available(self):
        menu = calculate_menu_state(None)

        assert menu.can_create_character is True
        assert menu.can_fight is False
        assert menu.can_heal is False
        assert menu.can_resurrect is False
        assert menu.available_actions == [MenuAction.CREATE_CHARACTER]

    def test_pools_and_leaderboard_viewable_but_not_claims(self):
        menu = calculate_menu_state(None)

        assert menu.can_view_pools is True
        assert menu.can_view_leaderboard is True
        assert menu.can_view_claims is False
        assert menu.can_claim_prize is False

    def test_nonexistent_character_is_treated_as_absent(self):
        assert calculate_menu_state(character(exists=False)) == calculate_menu_state(None)


class TestWithCharacter:

    def test_alive_idle_character(self):
        menu = calculate_menu_state(character())

        assert menu.can_create_character is False
        assert menu.can_act is True
        assert menu.can_fight is True
        assert menu.can_heal is True
        assert menu.can_resurrect is False
        assert menu.can_continue_fight is False
        assert menu.available_actions == [
            MenuAction.VIEW_POOLS,
            MenuAction.VIEW_LEADERBOARD,
            MenuAction.VIEW_CLAIMS,
            MenuAction.FIGHT,
            MenuAction.HEAL,
        ]
        assert menu.disabled_actions == []

    def test_in_combat(self):
        menu = calculate_menu_state(character(in_combat=True))

        assert menu.can_fight is False
        assert menu.can_heal is False
        assert menu.can_continue_fight is True
        assert menu.can_flee is True
        assert MenuAction.CONTINUE_FIGHT in menu.available_actions
        assert MenuAction.FLEE in menu.available_actions
        assert MenuAction.FIGHT not in menu.available_actions

    def test_dead_character(self):
        menu = calculate_menu_state(character(alive=False))

        assert menu.can_act is False
        assert menu.can_fight is False
        assert menu.can_resurrect is True
        assert menu.available_actions[-1] == MenuAction.RESURRECT

    def test_healing_cooldown_disables_heal(self):
        menu = calculate_menu_state(character(), healing_cooldown_remaining=30)

        assert menu.can_fight is True
        assert menu.can_heal is False
        assert MenuAction.HEAL not in menu.available_actions
        assert menu.disabled_actions == [MenuAction.HEAL]
        assert menu.disabled_reasons == {MenuAction.HEAL: "Healing cooldown: 30s remaining"}
        assert menu.healing_cooldown_remaining == 30


class TestPurity:

    def test_equal_inputs_give_equal_outputs(self):
        first = calculate_menu_state(character(in_combat=True), None, 5)
        second = calculate_menu_state(character(in_combat=True), None, 5)

        assert first == second
        assert first is not second

    def test_operation_does_not_change_flags(self):
        operation = OperationState(
            is_active=True,
            operation_type=OperationType.FIGHT_ENEMY,
            status=OperationStatus.PROCESSING,
            start_time=1.0,
        )
        assert calculate_menu_state(character(), operation) == calculate_menu_state(character())
