"""
Fight data normalization.

Turns raw FightSummary / EquipmentDropped ledger payloads into canonical
FightSummaryData records. This is the only place raw fight payloads are
coerced; everything downstream works with the strict domain types.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from ..core.enemies import MAX_ENEMY_ID, MIN_ENEMY_ID, get_enemy_name
from ..ledger.records import RawEquipmentDrop, RawFightSummaryEvent
from ..logging_config import get_logger
from ..schemas import EquipmentData, FightRounds, FightSummaryData, FightSummaryValidation

logger = get_logger(__name__)

V = TypeVar("V")

MAX_SUMMARY_ENEMY_LEVEL = 250

RawFightInput = Union[RawFightSummaryEvent, Mapping[str, Any]]
RawDropInput = Union[RawEquipmentDrop, Mapping[str, Any], Sequence[int]]


def _as_fight_record(raw: RawFightInput) -> RawFightSummaryEvent:
    if isinstance(raw, RawFightSummaryEvent):
        return raw
    return RawFightSummaryEvent.model_validate(dict(raw))


def _as_drop_record(raw: RawDropInput) -> RawEquipmentDrop:
    if isinstance(raw, RawEquipmentDrop):
        return raw
    if isinstance(raw, Mapping):
        return RawEquipmentDrop.model_validate(dict(raw))
    return RawEquipmentDrop(bonuses=list(raw))


def normalize_equipment_drop(raw_drop: RawDropInput) -> EquipmentData:
    """
    Map a drop's bonus array onto named stats.

    Bonuses are ordered combat, endurance, defense, luck; missing entries are 0.
    """
    record = _as_drop_record(raw_drop)
    bonuses = list(record.bonuses) + [0, 0, 0, 0]
    return EquipmentData(
        name=record.description or None,
        combat=bonuses[0],
        endurance=bonuses[1],
        defense=bonuses[2],
        luck=bonuses[3],
    )


def _fit(values: List[V], count: int, filler: V, label: str) -> Tuple[V, ...]:
    if len(values) == count:
        return tuple(values)
    logger.warning(f"Fight summary {label} has {len(values)} entries, expected {count}")
    if len(values) > count:
        return tuple(values[:count])
    return tuple(values) + (filler,) * (count - len(values))


def normalize_rounds(record: RawFightSummaryEvent) -> FightRounds:
    """
    Build the per-round arrays. The round count is the number of round
    numbers; every other array is padded or truncated to match it.
    """
    numbers = tuple(record.round_numbers)
    count = len(numbers)
    return FightRounds(
        count=count,
        numbers=numbers,
        player_damages=_fit(record.player_damages, count, 0, "player damages"),
        enemy_damages=_fit(record.enemy_damages, count, 0, "enemy damages"),
        player_criticals=_fit(record.player_criticals, count, False, "player criticals"),
        enemy_criticals=_fit(record.enemy_criticals, count, False, "enemy criticals"),
    )


def normalize_fight_summary(
    raw_event: RawFightInput,
    raw_equipment_drop: Optional[RawDropInput] = None,
    transaction_hash: Optional[str] = None,
) -> FightSummaryData:
    """
    Normalize a raw fight summary event into FightSummaryData.

    Args:
        raw_event: FightSummary log args (camelCase or snake_case keys)
        raw_equipment_drop: Optional matching EquipmentDropped args or bonus list
        transaction_hash: Hash of the transaction that emitted the event

    Returns:
        The canonical, immutable fight summary
    """
    record = _as_fight_record(raw_event)

    equipment = None
    if raw_equipment_drop is not None:
        equipment = normalize_equipment_drop(raw_equipment_drop)

    return FightSummaryData(
        enemy_id=record.enemy_id,
        enemy_level=record.enemy_level,
        enemy_name=get_enemy_name(record.enemy_id),
        rounds_elapsed=record.rounds_elapsed,
        victory=record.victory,
        unresolved=record.unresolved,
        player_died=not record.victory and not record.unresolved,
        enemy_died=record.victory,
        player_start_endurance=record.player_start_endurance,
        player_health_remaining=record.player_endurance,
        enemy_start_endurance=record.enemy_start_endurance,
        enemy_health_remaining=record.enemy_endurance,
        rounds=normalize_rounds(record),
        equipment_dropped=equipment,
        xp_gained=record.xp_gained,
        difficulty_multiplier=record.difficulty_multiplier or 1.0,
        transaction_hash=transaction_hash,
    )


def validate_fight_summary(
    data: FightSummaryData,
    max_enemy_level: int = MAX_SUMMARY_ENEMY_LEVEL,
) -> FightSummaryValidation:
    """Report every consistency problem in a summary without raising."""
    errors: List[str] = []

    if not MIN_ENEMY_ID <= data.enemy_id <= MAX_ENEMY_ID:
        errors.append(f"Invalid enemy ID: {data.enemy_id}")

    if not 1 <= data.enemy_level <= max_enemy_level:
        errors.append(f"Invalid enemy level: {data.enemy_level}")

    if data.rounds_elapsed < 0:
        errors.append(f"Invalid rounds elapsed: {data.rounds_elapsed}")

    if data.player_health_remaining < 0:
        errors.append(f"Invalid player health: {data.player_health_remaining}")

    if data.enemy_health_remaining < 0:
        errors.append(f"Invalid enemy health: {data.enemy_health_remaining}")

    rounds = data.rounds
    arrays = {
        "round numbers": rounds.numbers,
        "player damages": rounds.player_damages,
        "enemy damages": rounds.enemy_damages,
        "player criticals": rounds.player_criticals,
        "enemy criticals": rounds.enemy_criticals,
    }
    for label, values in arrays.items():
        if len(values) != rounds.count:
            errors.append(f"Round count mismatch in {label}: {rounds.count} vs {len(values)}")

    return FightSummaryValidation(is_valid=not errors, errors=errors)
