"""
Pydantic models (schemas) for cached ledger-wide data: reward pools,
the epoch leaderboard and claimable rewards.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class PoolInfo(BaseModel):
    value: int = 0
    formatted: str = ""
    description: str = ""
    percentage: float = 0.0


class PoolsData(BaseModel):
    """
    Schema for the six contract pools.
    """

    prize_pool: PoolInfo
    equipment_pool: PoolInfo
    gas_refund_pool: PoolInfo
    developer_pool: PoolInfo
    next_epoch_pool: PoolInfo
    emergency_pool: PoolInfo
    total_value: int = 0
    last_updated: float = 0.0


class LeaderboardPlayer(BaseModel):
    address: str
    score: int = 0
    rank: int = 0
    level: int = 0
    kills: int = 0
    is_current_player: bool = False


class LeaderboardData(BaseModel):
    """
    Schema for the current epoch's standings.
    """

    current_epoch: int
    player_score: int = 0
    player_rank: int = 0
    total_players: int = 0
    top_players: List[LeaderboardPlayer] = Field(default_factory=list)
    epoch_time_remaining: int = 0
    last_updated: float = 0.0


class ClaimableReward(BaseModel):
    """
    A reward the player may claim with a Merkle proof.
    """

    reward_type: Literal["epoch", "equipment", "gas_refund"] = "epoch"
    amount: int
    description: str = ""
    can_claim: bool = True
    epoch: Optional[int] = None
    index: Optional[int] = None
    proof: List[str] = Field(default_factory=list)


class ClaimsData(BaseModel):
    available: List[ClaimableReward] = Field(default_factory=list)
    total_claimable: int = 0
    last_checked: float = 0.0

    @classmethod
    def from_rewards(cls, rewards: List[ClaimableReward], last_checked: float) -> "ClaimsData":
        return cls(
            available=rewards,
            total_claimable=sum(reward.amount for reward in rewards),
            last_checked=last_checked,
        )
