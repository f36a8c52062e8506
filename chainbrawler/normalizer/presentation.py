"""
Display helpers for fight results and ledger amounts.

All functions are deterministic: the output depends on the arguments only.
"""

from dataclasses import dataclass

from ..schemas import FightRounds, FightSummaryData


@dataclass(frozen=True)
class MeterDisplay:
    current: int
    total: int
    percentage: float
    color: str
    display: str


@dataclass(frozen=True)
class FightOutcome:
    type: str
    color: str
    text: str


@dataclass(frozen=True)
class RoundSummary:
    total_player_damage: int
    total_enemy_damage: int
    critical_hits: int
    average_damage: float


def _clamped_percentage(current: float, total: float) -> float:
    if total == 0:
        return 0.0
    return max(0.0, min(100.0, (current / total) * 100))


def calculate_health_percentage(current: int, maximum: int) -> float:
    return _clamped_percentage(current, maximum)


def get_health_color(percentage: float) -> str:
    if percentage >= 80:
        return "#22c55e"  # green
    if percentage >= 60:
        return "#84cc16"  # lime
    if percentage >= 40:
        return "#eab308"  # yellow
    if percentage >= 20:
        return "#f97316"  # orange
    return "#ef4444"  # red


def calculate_progress_percentage(current: int, total: int) -> float:
    return _clamped_percentage(current, total)


def get_progress_color(percentage: float) -> str:
    if percentage >= 90:
        return "#22c55e"
    if percentage >= 70:
        return "#84cc16"
    if percentage >= 50:
        return "#eab308"
    if percentage >= 30:
        return "#f97316"
    return "#3b82f6"  # blue


def format_health_display(current: int, maximum: int) -> MeterDisplay:
    percentage = calculate_health_percentage(current, maximum)
    return MeterDisplay(
        current=current,
        total=maximum,
        percentage=percentage,
        color=get_health_color(percentage),
        display=f"{current}/{maximum} ({percentage:.1f}%)",
    )


def format_progress_display(current: int, total: int, label: str = "Progress") -> MeterDisplay:
    percentage = calculate_progress_percentage(current, total)
    return MeterDisplay(
        current=current,
        total=total,
        percentage=percentage,
        color=get_progress_color(percentage),
        display=f"{label}: {current}/{total} ({percentage:.1f}%)",
    )


def get_fight_outcome(summary: FightSummaryData) -> FightOutcome:
    """Classify a fight as victory, defeat, unresolved or ended."""
    if summary.victory:
        return FightOutcome(type="victory", color="#4CAF50", text="VICTORY!")
    if summary.player_died:
        return FightOutcome(type="defeat", color="#F44336", text="DEFEAT")
    if summary.unresolved:
        return FightOutcome(type="unresolved", color="#FF9800", text="UNRESOLVED")
    return FightOutcome(type="ended", color="#666", text="FIGHT ENDED")


def format_damage(damage: int, is_critical: bool) -> str:
    return f"{damage} (CRITICAL!)" if is_critical else str(damage)


def get_round_summary(rounds: FightRounds) -> RoundSummary:
    total_player_damage = sum(rounds.player_damages)
    total_enemy_damage = sum(rounds.enemy_damages)
    critical_hits = sum(rounds.player_criticals) + sum(rounds.enemy_criticals)
    average_damage = (
        (total_player_damage + total_enemy_damage) / (rounds.count * 2)
        if rounds.count > 0
        else 0.0
    )
    return RoundSummary(
        total_player_damage=total_player_damage,
        total_enemy_damage=total_enemy_damage,
        critical_hits=critical_hits,
        average_damage=average_damage,
    )


def get_difficulty_level(multiplier: float) -> str:
    if multiplier <= 1.2:
        return "Easy"
    if multiplier <= 1.8:
        return "Medium"
    if multiplier <= 2.5:
        return "Hard"
    return "Extreme"


def get_difficulty_color(multiplier: float) -> str:
    if multiplier <= 1.2:
        return "#4CAF50"
    if multiplier <= 1.8:
        return "#FF9800"
    return "#F44336"


def format_eth_amount(amount: int, decimals: int = 18, symbol: str = "CFX") -> str:
    """Format a base-unit amount, e.g. 1500000000000000000 -> '1.5000 CFX'."""
    return f"{amount / 10 ** decimals:.4f} {symbol}"


def format_time_remaining(seconds: int) -> str:
    hours = seconds / 3600
    if hours >= 24:
        return f"{hours / 24:.1f} days"
    if hours >= 1:
        return f"{hours:.1f} hours"
    return f"{seconds / 60:.1f} minutes"


def format_address(address: str) -> str:
    """Shorten an address to 0x1234...abcd."""
    if not address or len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"
