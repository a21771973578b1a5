"""
Async Sleeper API Client

Fetches league, roster and matchup data from the Sleeper Fantasy Football
platform and turns a league's season chain into a LeagueHistory.
Uses httpx for async HTTP requests with connection pooling.

API Documentation: https://docs.sleeper.com/
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any

import httpx

from league_luck.config import Settings, get_settings
from league_luck.models import (
    League,
    LeagueHistory,
    MatchupRecord,
    Roster,
    SeasonInfo,
    TeamRecord,
    User,
)

logger = logging.getLogger(__name__)


class SleeperAPIError(Exception):
    """Exception raised for Sleeper API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SleeperClient:
    """
    Async client for the Sleeper Fantasy Football API.

    Usage:
        async with SleeperClient() as client:
            league = await client.get_league("1127116641403351040")
            matchups = await client.get_matchups(league.league_id, 1)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SleeperClient":
        """Create HTTP client on context entry."""
        self._client = httpx.AsyncClient(
            base_url=self.settings.sleeper_base_url,
            timeout=httpx.Timeout(self.settings.sleeper_timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close HTTP client on context exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError(
                "SleeperClient must be used as async context manager: "
                "async with SleeperClient() as client: ..."
            )
        return self._client

    async def _get(self, endpoint: str) -> Any:
        """Make a GET request to the Sleeper API."""
        try:
            response = await self.client.get(endpoint)
        except httpx.HTTPError as e:
            raise SleeperAPIError(f"API request failed: {endpoint} ({e})") from e

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            raise SleeperAPIError(
                f"API request failed: {endpoint}",
                status_code=response.status_code,
            )

        return response.json()

    # ==================== League Endpoints ====================

    async def get_league(self, league_id: str) -> League | None:
        """
        Get league information.

        Args:
            league_id: Sleeper league ID

        Returns:
            League object or None if not found
        """
        data = await self._get(f"/league/{league_id}")
        if data is None:
            return None
        return League(**data)

    async def get_league_rosters(self, league_id: str) -> list[Roster]:
        data = await self._get(f"/league/{league_id}/rosters")
        if data is None:
            return []
        return [Roster(**roster) for roster in data]

    async def get_league_users(self, league_id: str) -> list[User]:
        data = await self._get(f"/league/{league_id}/users")
        if data is None:
            return []
        return [User(**user) for user in data]

    # ==================== Matchup Endpoints ====================

    async def get_matchups(self, league_id: str, week: int) -> list[dict]:
        """
        Get matchups for a specific week.

        Args:
            league_id: Sleeper league ID
            week: Week number

        Returns:
            List of raw matchup dictionaries, one per roster
        """
        data = await self._get(f"/league/{league_id}/matchups/{week}")
        return data if data else []

    async def get_matchups_range(
        self, league_id: str, start_week: int = 1, end_week: int = 17
    ) -> dict[int, list[dict]]:
        """
        Get matchups for a range of weeks concurrently.

        Weeks that fail to load come back empty.

        Returns:
            Dict mapping week number to matchups
        """
        tasks = [
            self.get_matchups(league_id, week)
            for week in range(start_week, end_week + 1)
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        matchups_by_week = {}
        for week, result in enumerate(results, start=start_week):
            if isinstance(result, Exception):
                logger.warning(
                    "Could not load league %s week %s: %s", league_id, week, result
                )
                matchups_by_week[week] = []
            else:
                matchups_by_week[week] = result

        return matchups_by_week


class SleeperHistoryLoader:
    """
    Builds a LeagueHistory from a Sleeper league and its previous seasons.

    Each Sleeper league is one season: the league ID doubles as the season ID,
    teams are "{league_id}:{roster_id}" and members are roster owners.
    """

    def __init__(self, client: SleeperClient, max_weeks: int | None = None):
        self.client = client
        self.max_weeks = max_weeks or client.settings.max_weeks

    async def load(self, league_id: str, max_seasons: int | None = None) -> LeagueHistory:
        """
        Load a league and every earlier season reachable via previous_league_id.

        Args:
            league_id: Most recent Sleeper league ID
            max_seasons: Stop after this many seasons (default: all)

        Returns:
            LeagueHistory covering the loaded seasons
        """
        league = await self.client.get_league(league_id)
        if league is None:
            raise SleeperAPIError(f"League not found: {league_id}", status_code=404)

        history = LeagueHistory(league_name=league.name)
        seen: set[str] = set()

        while league is not None and league.league_id not in seen:
            seen.add(league.league_id)
            teams, matchups = await self._load_season(league)

            history.seasons.append(SeasonInfo(season_id=league.league_id, year=league.year))
            history.teams.extend(teams)
            history.matchups.extend(matchups)

            if max_seasons is not None and len(seen) >= max_seasons:
                break
            if not league.has_previous_season:
                break
            league = await self.client.get_league(league.previous_league_id)

        logger.info(
            "Loaded %d season(s), %d matchups for league %s",
            len(history.seasons),
            len(history.matchups),
            league_id,
        )
        return history

    async def _load_season(
        self, league: League
    ) -> tuple[list[TeamRecord], list[MatchupRecord]]:
        last_week = league.last_scored_leg or self.max_weeks

        users, rosters, matchups_by_week = await asyncio.gather(
            self.client.get_league_users(league.league_id),
            self.client.get_league_rosters(league.league_id),
            self.client.get_matchups_range(league.league_id, 1, last_week),
        )

        teams = self.build_teams(league, users, rosters)
        known = {t.team_id for t in teams}

        matchups = []
        for week, raw in matchups_by_week.items():
            for matchup in self.build_matchups(league, week, raw):
                if matchup.home_team_id in known and matchup.away_team_id in known:
                    matchups.append(matchup)

        return teams, matchups

    @staticmethod
    def team_id(league_id: str, roster_id: int) -> str:
        return f"{league_id}:{roster_id}"

    @classmethod
    def build_teams(
        cls, league: League, users: list[User], rosters: list[Roster]
    ) -> list[TeamRecord]:
        user_map = {u.user_id: u for u in users}

        teams = []
        for roster in rosters:
            if not roster.owner_id:
                logger.debug(
                    "Roster %s in league %s has no owner", roster.roster_id, league.league_id
                )
                continue

            user = user_map.get(roster.owner_id)
            teams.append(
                TeamRecord(
                    team_id=cls.team_id(league.league_id, roster.roster_id),
                    member_id=roster.owner_id,
                    season_id=league.league_id,
                    team_name=user.team_name if user else None,
                    final_wins=roster.wins,
                    final_losses=roster.losses,
                    final_ties=roster.ties,
                )
            )
        return teams

    @classmethod
    def build_matchups(
        cls, league: League, week: int, raw_matchups: list[dict]
    ) -> list[MatchupRecord]:
        """Pair one week's roster rows by matchup_id into MatchupRecords."""
        groups: dict[int, list[dict]] = defaultdict(list)
        for m in raw_matchups:
            matchup_id = m.get("matchup_id")
            if matchup_id is not None:
                groups[matchup_id].append(m)

        playoff_start = league.playoff_week_start
        is_playoff = playoff_start is not None and week >= playoff_start

        matchups = []
        for matchup_id, teams in sorted(groups.items()):
            if len(teams) != 2:
                continue

            home, away = teams
            home_id = cls.team_id(league.league_id, home["roster_id"])
            away_id = cls.team_id(league.league_id, away["roster_id"])
            home_score = home.get("points") or 0.0
            away_score = away.get("points") or 0.0

            if home_score > away_score:
                winner = home_id
            elif away_score > home_score:
                winner = away_id
            else:
                winner = None

            matchups.append(
                MatchupRecord(
                    season_id=league.league_id,
                    week=week,
                    home_team_id=home_id,
                    away_team_id=away_id,
                    home_score=home_score,
                    away_score=away_score,
                    winner_team_id=winner,
                    is_tie=winner is None,
                    is_playoff=is_playoff,
                    # 0-0 means the week has not been played
                    status="scheduled" if home_score == away_score == 0 else "final",
                )
            )
        return matchups
