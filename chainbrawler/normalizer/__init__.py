"""Fight summary normalization and display helpers."""

from .fight_data import (
    normalize_equipment_drop,
    normalize_fight_summary,
    normalize_rounds,
    validate_fight_summary,
)
from .presentation import (
    FightOutcome,
    MeterDisplay,
    RoundSummary,
    calculate_health_percentage,
    calculate_progress_percentage,
    format_address,
    format_damage,
    format_eth_amount,
    format_health_display,
    format_progress_display,
    format_time_remaining,
    get_difficulty_color,
    get_difficulty_level,
    get_fight_outcome,
    get_health_color,
    get_progress_color,
    get_round_summary,
)

__all__ = [
    "normalize_equipment_drop",
    "normalize_fight_summary",
    "normalize_rounds",
    "validate_fight_summary",
    "FightOutcome",
    "MeterDisplay",
    "RoundSummary",
    "calculate_health_percentage",
    "calculate_progress_percentage",
    "format_address",
    "format_damage",
    "format_eth_amount",
    "format_health_display",
    "format_progress_display",
    "format_time_remaining",
    "get_difficulty_color",
    "get_difficulty_level",
    "get_fight_outcome",
    "get_health_color",
    "get_progress_color",
    "get_round_summary",
]
