"""
Enemy roster as defined by the game contract.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class EnemyType:
    id: int
    name: str
    description: str


ENEMY_TYPES = (
    EnemyType(1, "Goblin Warrior", "A small but fierce warrior"),
    EnemyType(2, "Orc Berserker", "A massive, rage-filled fighter"),
    EnemyType(3, "Shadow Assassin", "A stealthy, deadly killer"),
    EnemyType(4, "Ice Troll", "A massive, frost-covered beast"),
    EnemyType(5, "Fire Elemental", "A living flame creature"),
    EnemyType(6, "Stone Golem", "An ancient, animated statue"),
    EnemyType(7, "Dark Wizard", "A powerful spellcaster"),
    EnemyType(8, "Skeleton Knight", "An undead warrior"),
    EnemyType(9, "Dragon Whelp", "A young but dangerous dragon"),
    EnemyType(10, "Demon Scout", "A fast, agile demon"),
    EnemyType(11, "Crystal Spider", "A crystalline arachnid"),
    EnemyType(12, "Storm Giant", "A towering giant of storms"),
    EnemyType(13, "Lich King", "An undead master of dark magic"),
    EnemyType(14, "Phoenix Guardian", "A reborn fire bird"),
    EnemyType(15, "Void Stalker", "A creature from the void"),
    EnemyType(16, "Ancient Dragon", "An ancient, powerful dragon"),
)

_ENEMIES_BY_ID: Dict[int, EnemyType] = {enemy.id: enemy for enemy in ENEMY_TYPES}

MIN_ENEMY_ID = ENEMY_TYPES[0].id
MAX_ENEMY_ID = ENEMY_TYPES[-1].id


def get_enemy_type(enemy_id: int) -> Optional[EnemyType]:
    return _ENEMIES_BY_ID.get(enemy_id)


def get_enemy_name(enemy_id: int) -> str:
    """Canonical enemy name, or ``Enemy {id}`` for ids outside the roster."""
    enemy = get_enemy_type(enemy_id)
    return enemy.name if enemy else f"Enemy {enemy_id}"
