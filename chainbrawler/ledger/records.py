"""
Raw transport records delivered by the ledger collaborator.

These models accept the contract's camelCase field names (or snake_case),
coerce loosely-typed values (numeric strings, 0/1 flags) and treat missing
or null fields as zero. They are only consumed by the character view and the
fight normalizer; nothing else in the package sees them.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RawRecord(BaseModel):
    """Base for lenient ledger records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class RawCharacter(RawRecord):
    character_class: int = 0
    level: int = 0
    experience: int = 0
    current_endurance: int = 0
    max_endurance: int = 0
    total_combat: int = 0
    total_defense: int = 0
    total_luck: int = 0
    alive_flag: bool = False
    equipped_combat_bonus: int = 0
    equipped_endurance_bonus: int = 0
    equipped_defense_bonus: int = 0
    equipped_luck_bonus: int = 0
    total_kills: int = 0


class RawCombatState(RawRecord):
    enemy_id: int = 0
    enemy_level: int = 0
    enemy_current_endurance: int = 0
    player_current_endurance: int = 0
    rounds_elapsed: int = 0
    player_start_endurance: int = 0
    enemy_start_endurance: int = 0
    last_updated: int = 0
    difficulty_multiplier: float = 1.0


class RawFightSummaryEvent(RawRecord):
    player: Optional[str] = None
    enemy_id: int = 0
    enemy_level: int = 0
    rounds_elapsed: int = 0
    player_start_endurance: int = 0
    player_endurance: int = 0
    enemy_start_endurance: int = 0
    enemy_endurance: int = 0
    victory: bool = False
    unresolved: bool = False
    round_numbers: List[int] = Field(default_factory=list)
    player_damages: List[int] = Field(default_factory=list)
    enemy_damages: List[int] = Field(default_factory=list)
    player_criticals: List[bool] = Field(default_factory=list)
    enemy_criticals: List[bool] = Field(default_factory=list)
    xp_gained: Optional[int] = None
    difficulty_multiplier: Optional[float] = None


class RawEquipmentDrop(RawRecord):
    player: Optional[str] = None
    bonuses: List[int] = Field(default_factory=list)
    description: str = ""


class RawHealingEvent(RawRecord):
    player: Optional[str] = None
    new_endurance: int = 0
    cost: int = 0


class RawResurrectionEvent(RawRecord):
    player: Optional[str] = None
    new_endurance: int = 0
    cost: int = 0


class RawMerkleProof(RawRecord):
    amount: int = 0
    index: int = 0
    proof: List[str] = Field(default_factory=list)


class RawEnemyStats(RawRecord):
    health: int = 0
    combat: int = 0
    defense: int = 0
    luck: int = 0
    xp_reward: int = 0
    difficulty_multiplier: float = 1.0


class RawLog(RawRecord):
    """One log entry from a watch stream."""
    args: Dict[str, Any] = Field(default_factory=dict)
    block_number: Optional[int] = None
    transaction_hash: Optional[str] = None
    log_index: Optional[int] = None
