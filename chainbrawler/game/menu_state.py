"""
Menu state calculation.

The menu is a pure function of the character, the tracked operation and the
healing cooldown. It is recomputed after every store mutation and never
patched in place.
"""

from typing import Dict, List, Optional

from ..schemas import CharacterData, MenuAction, MenuState, OperationState


def _healing_cooldown_reason(seconds: int) -> str:
    return f"Healing cooldown: {seconds}s remaining"


def calculate_menu_state(
    character: Optional[CharacterData],
    operation: Optional[OperationState] = None,
    healing_cooldown_remaining: int = 0,
) -> MenuState:
    """
    Compute what the player can do right now.

    Args:
        character: Current character view, or None when not loaded
        operation: Tracked operation. It does not change the flags; whether
            an action may start while another runs is decided by validation.
        healing_cooldown_remaining: Seconds until healing is allowed again

    Returns:
        A fresh MenuState; equal inputs always give equal output
    """
    cooldown = max(0, healing_cooldown_remaining)

    if character is None or not character.exists:
        return MenuState(
            can_create_character=True,
            can_view_pools=True,
            can_view_leaderboard=True,
            available_actions=[MenuAction.CREATE_CHARACTER],
            healing_cooldown_remaining=cooldown,
        )

    alive = character.is_alive
    in_combat = character.in_combat
    can_act = alive and not in_combat
    can_heal = can_act and cooldown == 0

    available: List[MenuAction] = [
        MenuAction.VIEW_POOLS,
        MenuAction.VIEW_LEADERBOARD,
        MenuAction.VIEW_CLAIMS,
    ]
    disabled: List[MenuAction] = []
    reasons: Dict[MenuAction, str] = {}

    if can_act:
        available.append(MenuAction.FIGHT)
        if can_heal:
            available.append(MenuAction.HEAL)
        else:
            disabled.append(MenuAction.HEAL)
            reasons[MenuAction.HEAL] = _healing_cooldown_reason(cooldown)
    if in_combat:
        available.extend([MenuAction.CONTINUE_FIGHT, MenuAction.FLEE])
    if not alive:
        available.append(MenuAction.RESURRECT)

    return MenuState(
        can_create_character=False,
        can_act=can_act,
        can_fight=can_act,
        can_heal=can_heal,
        can_resurrect=not alive,
        can_continue_fight=in_combat,
        can_flee=in_combat,
        can_view_pools=True,
        can_view_leaderboard=True,
        can_view_claims=True,
        can_claim_prize=True,
        available_actions=available,
        disabled_actions=disabled,
        disabled_reasons=reasons,
        healing_cooldown_remaining=cooldown,
    )
