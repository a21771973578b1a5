"""Business logic services."""

from league_luck.services.history import LuckHistoryService
from league_luck.services.luck import (
    calculate_actual_record,
    calculate_actual_wins,
    calculate_expected_wins,
    calculate_luck_index,
    calculate_luck_stats,
    calculate_schedule_strength,
    calculate_season_luck_stats,
    calculate_win_percentage,
)

__all__ = [
    # Calculators
    "calculate_actual_record",
    "calculate_actual_wins",
    "calculate_expected_wins",
    "calculate_luck_index",
    "calculate_luck_stats",
    "calculate_schedule_strength",
    "calculate_season_luck_stats",
    "calculate_win_percentage",
    # History
    "LuckHistoryService",
]
