"""
Luck Analysis Models

Weekly scores, opponent records and the luck statistics derived from them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WeeklyScore(BaseModel):
    """One team's score for one week, flattened from a matchup."""

    model_config = ConfigDict(frozen=True)

    season_id: str
    week: int = Field(ge=1)
    team_id: str
    member_id: str
    score: float = Field(ge=0)
    actual_win: bool = Field(description="Beat the scheduled opponent")
    actual_tie: bool = Field(
        default=False, description="Tied the scheduled opponent"
    )
    is_playoff: bool = False


class OpponentRecord(BaseModel):
    """Final record of an opponent faced."""

    model_config = ConfigDict(frozen=True)

    member_id: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)


class LuckStats(BaseModel):
    """Actual vs all-play expected record for a member."""

    model_config = ConfigDict(frozen=True)

    actual_wins: int = 0
    actual_losses: int = 0
    actual_ties: int = 0
    expected_wins: float = Field(
        default=0.0, description="Sum of weekly all-play win fractions"
    )
    luck_index: float = Field(
        default=0.0,
        description="Positive = lucky (more wins than expected), negative = unlucky",
    )
    schedule_strength: float = Field(
        default=0.0, description="Average opponent win percentage (0-1)"
    )
    weeks_played: int = 0


class SeasonLuckStats(LuckStats):
    """Luck statistics for a single season."""

    season_id: str
    year: int


class LuckClassification(str, Enum):
    """How lucky a luck index is."""

    VERY_LUCKY = "very_lucky"
    LUCKY = "lucky"
    NEUTRAL = "neutral"
    UNLUCKY = "unlucky"
    VERY_UNLUCKY = "very_unlucky"


class ScheduleClassification(str, Enum):
    """How hard a schedule strength is."""

    VERY_HARD = "very_hard"
    HARD = "hard"
    AVERAGE = "average"
    EASY = "easy"
    VERY_EASY = "very_easy"


class LuckStatsRequest(BaseModel):
    """Raw engine inputs for a single member."""

    member_scores: list[WeeklyScore] = Field(default_factory=list)
    all_scores: list[WeeklyScore] = Field(default_factory=list)
    opponents: list[OpponentRecord] = Field(default_factory=list)
    include_playoffs: bool = False


class MemberLuckReport(BaseModel):
    """Career and season-by-season luck for one member."""

    member_id: str
    member_name: str
    career: LuckStats | None = None
    seasons: list[SeasonLuckStats] = Field(default_factory=list)
    luck_display: str | None = Field(default=None, description="e.g., '+2.3'")
    luck_classification: LuckClassification | None = None
    luck_description: str | None = None
    schedule_display: str | None = Field(default=None, description="e.g., '54%'")
    schedule_classification: ScheduleClassification | None = None


class MemberLuckSummary(BaseModel):
    """One row of a league-wide luck table."""

    member_id: str
    member_name: str
    luck_rank: int = Field(description="1 = luckiest")
    stats: LuckStats


class LeagueLuckReport(BaseModel):
    """League-wide luck analysis."""

    league_name: str | None = None
    seasons_analyzed: int
    members: list[MemberLuckSummary]
    luckiest_member: str | None = Field(
        default=None, description="Member with highest luck index"
    )
    unluckiest_member: str | None = Field(
        default=None, description="Member with lowest luck index"
    )
    luckiest_score: float | None = None
    unluckiest_score: float | None = None
