"""Tracked actions, grouped by family, and the lifecycle they share."""

from .base import BaseOperations
from .character import CharacterOperations
from .claims import ClaimsOperations, find_reward, without_reward
from .combat import CombatOperations
from .leaderboard import LeaderboardOperations, build_top_players, rank_for_score
from .lifecycle import OperationLifecycle, OperationPlan
from .pools import POOL_FIELDS, PoolsOperations, build_pools_data

__all__ = [
    "BaseOperations",
    "CharacterOperations",
    "ClaimsOperations",
    "find_reward",
    "without_reward",
    "CombatOperations",
    "LeaderboardOperations",
    "build_top_players",
    "rank_for_score",
    "OperationLifecycle",
    "OperationPlan",
    "POOL_FIELDS",
    "PoolsOperations",
    "build_pools_data",
]
