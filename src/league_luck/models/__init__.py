"""Pydantic models and schemas."""

from league_luck.models.history import (
    LeagueHistory,
    MatchupRecord,
    SeasonInfo,
    TeamRecord,
)
from league_luck.models.league import League, Roster, User
from league_luck.models.luck import (
    LeagueLuckReport,
    LuckClassification,
    LuckStats,
    LuckStatsRequest,
    MemberLuckReport,
    MemberLuckSummary,
    OpponentRecord,
    ScheduleClassification,
    SeasonLuckStats,
    WeeklyScore,
)

__all__ = [
    # History
    "LeagueHistory",
    "MatchupRecord",
    "SeasonInfo",
    "TeamRecord",
    # League
    "League",
    "Roster",
    "User",
    # Luck
    "LeagueLuckReport",
    "LuckClassification",
    "LuckStats",
    "LuckStatsRequest",
    "MemberLuckReport",
    "MemberLuckSummary",
    "OpponentRecord",
    "ScheduleClassification",
    "SeasonLuckStats",
    "WeeklyScore",
]
