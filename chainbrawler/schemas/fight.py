"""
Pydantic models (schemas) for resolved fights.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .character import EquipmentData


class FightRounds(BaseModel):
    """
    Per-round breakdown of a fight. Every sequence has ``count`` entries.
    """

    model_config = ConfigDict(frozen=True)

    count: int
    numbers: Tuple[int, ...] = ()
    player_damages: Tuple[int, ...] = ()
    enemy_damages: Tuple[int, ...] = ()
    player_criticals: Tuple[bool, ...] = ()
    enemy_criticals: Tuple[bool, ...] = ()


class FightSummaryData(BaseModel):
    """
    Canonical record of one resolved (or partially resolved) encounter.

    Instances are immutable; a late equipment drop produces a new copy via
    ``with_equipment_drop``.
    """

    model_config = ConfigDict(frozen=True)

    enemy_id: int
    enemy_level: int
    enemy_name: str
    rounds_elapsed: int
    victory: bool
    unresolved: bool
    player_died: bool
    enemy_died: bool
    player_start_endurance: int
    player_health_remaining: int
    enemy_start_endurance: int
    enemy_health_remaining: int
    rounds: FightRounds
    equipment_dropped: Optional[EquipmentData] = None
    xp_gained: Optional[int] = None
    difficulty_multiplier: float = 1.0
    transaction_hash: Optional[str] = None

    def with_equipment_drop(self, equipment: EquipmentData) -> "FightSummaryData":
        return self.model_copy(update={"equipment_dropped": equipment})
