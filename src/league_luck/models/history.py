"""
League history models.

Stored season, team and matchup rows that the luck engine's inputs are
flattened from.
"""

from pydantic import BaseModel, Field, field_validator


class SeasonInfo(BaseModel):
    """A league season."""

    season_id: str
    year: int


class TeamRecord(BaseModel):
    """A member's team for one season, with its final record."""

    team_id: str
    member_id: str
    season_id: str
    team_name: str | None = None
    final_wins: int = 0
    final_losses: int = 0
    final_ties: int = 0

    @field_validator("final_wins", "final_losses", "final_ties", mode="before")
    @classmethod
    def null_record_is_zero(cls, v):
        return 0 if v is None else v


class MatchupRecord(BaseModel):
    """A head-to-head game between two teams."""

    season_id: str
    week: int = Field(ge=1)
    home_team_id: str
    away_team_id: str
    home_score: float | None = None
    away_score: float | None = None
    winner_team_id: str | None = None
    is_tie: bool = False
    is_playoff: bool = False
    status: str = Field(default="final", description="final, scheduled, or in_progress")

    @field_validator("is_tie", "is_playoff", mode="before")
    @classmethod
    def null_flag_is_false(cls, v):
        return False if v is None else v

    @property
    def is_final(self) -> bool:
        return (
            self.status == "final"
            and self.home_score is not None
            and self.away_score is not None
        )


class LeagueHistory(BaseModel):
    """Everything needed to compute luck across a league's seasons."""

    league_name: str | None = None
    seasons: list[SeasonInfo] = Field(default_factory=list)
    teams: list[TeamRecord] = Field(default_factory=list)
    matchups: list[MatchupRecord] = Field(default_factory=list)
