"""
Unit tests for the character view and status lines.
"""

from chainbrawler.game.character_view import build_character_data, character_status_message
from chainbrawler.game.derived_state import status_message_for
from chainbrawler.schemas import OperationState, OperationStatus, OperationType, UXState
from chainbrawler.tests.ledger_fakes import raw_character, raw_combat_state


class TestBuildCharacterData:

    def test_missing_record(self):
        assert build_character_data(None) is None

    def test_level_zero_does_not_exist(self):
        character = build_character_data(raw_character(level=0))
        assert character.exists is False
        assert character.in_combat is False

    def test_fields_are_coerced(self):
        raw = raw_character(level=4, current_endurance=30, max_endurance=120, character_class=2, kills=7)
        raw["level"] = "4"
        character = build_character_data(raw)

        assert character.exists is True
        assert character.level == 4
        assert character.class_name == "Rogue"
        assert character.endurance.current == 30
        assert character.endurance.max == 120
        assert character.endurance.percentage == 25.0
        assert character.stats.combat == 10
        assert character.total_kills == 7

    def test_unknown_class_name(self):
        assert build_character_data(raw_character(character_class=9)).class_name == "Unknown"

    def test_equipment_from_equipped_bonuses(self):
        raw = raw_character()
        raw["equippedCombatBonus"] = 4
        raw["equippedLuckBonus"] = 2
        equipment = build_character_data(raw).equipment

        assert len(equipment) == 1
        assert equipment[0].combat == 4
        assert equipment[0].luck == 2

    def test_zero_max_endurance(self):
        character = build_character_data(raw_character(current_endurance=0, max_endurance=0))
        assert character.endurance.percentage == 0.0

    def test_null_fields_default_to_zero(self):
        raw = raw_character()
        raw["totalKills"] = None
        assert build_character_data(raw).total_kills == 0

    def test_combat_state_attached_when_enemy_present(self):
        character = build_character_data(raw_character(), raw_combat_state(enemy_id=5, enemy_level=3))

        assert character.in_combat is True
        assert character.combat_state.enemy_id == 5
        assert character.combat_state.rounds_elapsed == 2

    def test_combat_state_ignored_without_enemy(self):
        character = build_character_data(raw_character(), raw_combat_state(enemy_id=0))
        assert character.in_combat is False
        assert character.combat_state is None

    def test_combat_state_ignored_for_dead_character(self):
        character = build_character_data(raw_character(alive=False), raw_combat_state())
        assert character.in_combat is False


class TestStatusMessages:

    def test_character_lines(self):
        assert character_status_message(None) == "No character found - create one to start playing"
        assert character_status_message(build_character_data(raw_character(), raw_combat_state())) == "Character in combat"
        assert character_status_message(build_character_data(raw_character(alive=False))) == (
            "Character is dead - resurrection required"
        )
        assert character_status_message(build_character_data(raw_character(current_endurance=30))) == (
            "Character needs healing"
        )
        assert character_status_message(build_character_data(raw_character())) == "Character ready"

    def test_state_lines_by_urgency(self):
        assert status_message_for(UXState()) == "Initializing..."
        assert status_message_for(UXState(is_loading=False, error="boom")) == "Error: boom"
        assert status_message_for(UXState(is_loading=False)) == "Ready for action"

    def test_operation_lines(self):
        operation = OperationState(
            is_active=True,
            operation_type=OperationType.HEAL_CHARACTER,
            status=OperationStatus.PROCESSING,
            start_time=1.0,
            progress="Healing character...",
        )
        assert status_message_for(UXState(is_loading=False, operation=operation)) == "Healing character..."

        failed = operation.model_copy(update={
            "is_active": False, "status": OperationStatus.ERROR, "error": "Insufficient fee",
        })
        assert status_message_for(UXState(is_loading=False, operation=failed)) == "Operation failed: Insufficient fee"

    def test_character_line_when_idle(self):
        state = UXState(is_loading=False, character=build_character_data(raw_character()))
        assert status_message_for(state) == "Character ready"
