"""
Sleeper league Pydantic models.
"""

from pydantic import BaseModel, Field


class League(BaseModel):
    """Sleeper league information."""

    league_id: str
    name: str
    status: str
    sport: str = "nfl"
    season: str
    season_type: str = "regular"
    total_rosters: int
    settings: dict = Field(default_factory=dict)
    previous_league_id: str | None = None

    @property
    def year(self) -> int:
        return int(self.season)

    @property
    def playoff_week_start(self) -> int | None:
        """First playoff week, or None if the league has no playoffs set."""
        return self.settings.get("playoff_week_start") or None

    @property
    def last_scored_leg(self) -> int | None:
        """Last week with final scores, or None before week 1 is scored."""
        return self.settings.get("last_scored_leg") or None

    @property
    def has_previous_season(self) -> bool:
        # Sleeper uses "0" for leagues with no prior season
        return bool(self.previous_league_id) and self.previous_league_id != "0"


class User(BaseModel):
    """Sleeper user information."""

    user_id: str
    username: str | None = None
    display_name: str
    avatar: str | None = None
    metadata: dict | None = Field(default_factory=dict)

    @property
    def team_name(self) -> str:
        """Get team name from metadata or display name."""
        if self.metadata and "team_name" in self.metadata:
            return self.metadata["team_name"]
        return self.display_name


class Roster(BaseModel):
    """League roster information."""

    roster_id: int
    owner_id: str | None = None
    league_id: str
    settings: dict = Field(default_factory=dict)

    @property
    def wins(self) -> int:
        return self.settings.get("wins", 0)

    @property
    def losses(self) -> int:
        return self.settings.get("losses", 0)

    @property
    def ties(self) -> int:
        return self.settings.get("ties", 0)
