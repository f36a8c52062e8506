"""
Aggregate UX state owned by the StateStore.
"""

from typing import Optional

from pydantic import BaseModel

from .character import CharacterData, EquipmentData, HealingData, ResurrectionData
from .fight import FightSummaryData
from .ledger import ClaimsData, LeaderboardData, PoolsData
from .menu import MenuState
from .operation import OperationState

INITIAL_STATUS_MESSAGE = "Initializing..."


class UXState(BaseModel):
    """
    Everything the host needs to render the current session.
    """

    player_address: Optional[str] = None
    character: Optional[CharacterData] = None
    menu: Optional[MenuState] = None
    operation: Optional[OperationState] = None
    pools: Optional[PoolsData] = None
    leaderboard: Optional[LeaderboardData] = None
    claims: Optional[ClaimsData] = None
    status_message: str = INITIAL_STATUS_MESSAGE
    is_loading: bool = True
    error: Optional[str] = None
    last_fight_summary: Optional[FightSummaryData] = None
    last_equipment_dropped: Optional[EquipmentData] = None
    last_healing: Optional[HealingData] = None
    last_resurrection: Optional[ResurrectionData] = None

    @property
    def has_active_operation(self) -> bool:
        return self.operation is not None and self.operation.is_active
