"""
Pydantic models (schemas) for character data.
Domain records produced by the character view and cached in the state store.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

CLASS_NAMES = ["Warrior", "Mage", "Rogue", "Paladin"]


def get_class_name(class_id: int) -> str:
    """Display name for a character class id."""
    if 0 <= class_id < len(CLASS_NAMES):
        return CLASS_NAMES[class_id]
    return "Unknown"


class EquipmentData(BaseModel):
    """
    Stat bonuses granted by a piece of equipment.
    """

    name: Optional[str] = None
    combat: int = 0
    endurance: int = 0
    defense: int = 0
    luck: int = 0


class EnduranceData(BaseModel):
    """
    Current/max endurance with the derived percentage.
    """

    current: int = 0
    max: int = 0
    percentage: float = 0.0

    @classmethod
    def of(cls, current: int, maximum: int) -> "EnduranceData":
        percentage = (current / maximum) * 100 if maximum > 0 else 0.0
        return cls(current=current, max=maximum, percentage=percentage)


class CharacterStats(BaseModel):
    combat: int = 0
    defense: int = 0
    luck: int = 0


class CombatState(BaseModel):
    """
    Snapshot of an in-progress fight as reported by the ledger.

    Replaced on every round; cleared once the fight is over.
    """

    enemy_id: int
    enemy_level: int
    enemy_current_endurance: int = 0
    player_current_endurance: int = 0
    rounds_elapsed: int = 0
    player_start_endurance: int = 0
    enemy_start_endurance: int = 0
    last_updated: int = 0
    difficulty_multiplier: float = 1.0


class CharacterData(BaseModel):
    """
    Schema for the player's character view.

    When ``exists`` is False every numeric field holds a default and carries
    no meaning.
    """

    exists: bool = False
    is_alive: bool = False
    character_class: int = 0
    class_name: str = "Unknown"
    level: int = 0
    experience: int = 0
    endurance: EnduranceData = Field(default_factory=EnduranceData)
    stats: CharacterStats = Field(default_factory=CharacterStats)
    equipment: List[EquipmentData] = Field(default_factory=list)
    in_combat: bool = False
    combat_state: Optional[CombatState] = None
    total_kills: int = 0


class HealingData(BaseModel):
    new_endurance: int = 0
    cost: int = 0
    transaction_hash: Optional[str] = None


class ResurrectionData(BaseModel):
    new_endurance: int = 0
    cost: int = 0
    transaction_hash: Optional[str] = None
