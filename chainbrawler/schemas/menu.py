"""
Pydantic models (schemas) for the derived menu view.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field


class MenuAction(str, Enum):
    """
    Identifiers of the actions a menu can offer.
    """

    CREATE_CHARACTER = "create_character"
    FIGHT = "fight"
    HEAL = "heal"
    RESURRECT = "resurrect"
    CONTINUE_FIGHT = "continue_fight"
    FLEE = "flee"
    VIEW_POOLS = "view_pools"
    VIEW_LEADERBOARD = "view_leaderboard"
    VIEW_CLAIMS = "view_claims"


class MenuState(BaseModel):
    """
    Schema for what the player can do right now.

    Always produced by ``calculate_menu_state``; never edited in place.
    """

    can_create_character: bool = False
    can_act: bool = False
    can_fight: bool = False
    can_heal: bool = False
    can_resurrect: bool = False
    can_continue_fight: bool = False
    can_flee: bool = False
    can_view_pools: bool = False
    can_view_leaderboard: bool = False
    can_view_claims: bool = False
    can_claim_prize: bool = False
    available_actions: List[MenuAction] = Field(default_factory=list)
    disabled_actions: List[MenuAction] = Field(default_factory=list)
    disabled_reasons: Dict[MenuAction, str] = Field(default_factory=dict)
    healing_cooldown_remaining: int = 0
