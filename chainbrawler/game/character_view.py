"""
Character view: turns raw ledger records into CharacterData.
"""

from typing import Any, Mapping, Optional, Union

from ..ledger.records import RawCharacter, RawCombatState
from ..schemas import (
    CharacterData,
    CharacterStats,
    CombatState,
    EnduranceData,
    EquipmentData,
    get_class_name,
)

RawCharacterInput = Union[RawCharacter, Mapping[str, Any]]
RawCombatInput = Union[RawCombatState, Mapping[str, Any]]


def _as_record(raw, model):
    if isinstance(raw, model):
        return raw
    return model.model_validate(dict(raw))


def build_combat_state(raw_combat_state: Optional[RawCombatInput]) -> Optional[CombatState]:
    """CombatState for an ongoing fight, or None when the enemy id is 0."""
    if raw_combat_state is None:
        return None
    record = _as_record(raw_combat_state, RawCombatState)
    if record.enemy_id <= 0:
        return None
    return CombatState(**record.model_dump())


def build_character_data(
    raw_character: Optional[RawCharacterInput],
    raw_combat_state: Optional[RawCombatInput] = None,
) -> Optional[CharacterData]:
    """
    Build the character view from the ledger's character and combat records.

    A character exists when its level is above 0. Combat state is attached
    only for an existing, living character whose combat record names an enemy.
    """
    if raw_character is None:
        return None

    record = _as_record(raw_character, RawCharacter)
    exists = record.level > 0

    combat_state = None
    if exists and record.alive_flag:
        combat_state = build_combat_state(raw_combat_state)

    equipment = EquipmentData(
        combat=record.equipped_combat_bonus,
        endurance=record.equipped_endurance_bonus,
        defense=record.equipped_defense_bonus,
        luck=record.equipped_luck_bonus,
    )

    return CharacterData(
        exists=exists,
        is_alive=record.alive_flag,
        character_class=record.character_class,
        class_name=get_class_name(record.character_class),
        level=record.level,
        experience=record.experience,
        endurance=EnduranceData.of(record.current_endurance, record.max_endurance),
        stats=CharacterStats(
            combat=record.total_combat,
            defense=record.total_defense,
            luck=record.total_luck,
        ),
        equipment=[equipment],
        in_combat=combat_state is not None,
        combat_state=combat_state,
        total_kills=record.total_kills,
    )


def character_status_message(character: Optional[CharacterData]) -> str:
    if character is None or not character.exists:
        return "No character found - create one to start playing"
    if character.in_combat:
        return "Character in combat"
    if not character.is_alive:
        return "Character is dead - resurrection required"
    if character.endurance.percentage < 50:
        return "Character needs healing"
    return "Character ready"
