"""Tests for the Sleeper client and history loader against a mocked API."""

import httpx
import pytest

from league_luck.clients.sleeper import SleeperAPIError, SleeperClient, SleeperHistoryLoader
from league_luck.config import Settings
from league_luck.models import League
from league_luck.services.history import LuckHistoryService

USERS = [
    {"user_id": "u1", "display_name": "Ann", "metadata": {"team_name": "Ann's Team"}},
    {"user_id": "u2", "display_name": "Ben", "metadata": None},
]

ROUTES = {
    "/league/L2": {
        "league_id": "L2",
        "name": "Dynasty League",
        "status": "complete",
        "season": "2024",
        "season_type": "regular",
        "total_rosters": 3,
        "settings": {"last_scored_leg": 2, "playoff_week_start": 2},
        "previous_league_id": "L1",
    },
    "/league/L2/users": USERS,
    "/league/L2/rosters": [
        {"roster_id": 1, "owner_id": "u1", "league_id": "L2", "settings": {"wins": 1, "losses": 0, "ties": 1}},
        {"roster_id": 2, "owner_id": "u2", "league_id": "L2", "settings": {"wins": 0, "losses": 1, "ties": 1}},
        {"roster_id": 3, "owner_id": None, "league_id": "L2", "settings": {}},
    ],
    "/league/L2/matchups/1": [
        {"roster_id": 1, "matchup_id": 1, "points": 110.5},
        {"roster_id": 2, "matchup_id": 1, "points": 99.0},
    ],
    "/league/L2/matchups/2": [
        {"roster_id": 1, "matchup_id": 1, "points": 80.0},
        {"roster_id": 2, "matchup_id": 1, "points": 80.0},
        {"roster_id": 3, "matchup_id": None, "points": 50.0},
    ],
    "/league/L1": {
        "league_id": "L1",
        "name": "Dynasty League",
        "status": "complete",
        "season": "2023",
        "total_rosters": 2,
        "settings": {"last_scored_leg": 1},
        "previous_league_id": "0",
    },
    "/league/L1/users": USERS,
    "/league/L1/rosters": [
        {"roster_id": 1, "owner_id": "u1", "league_id": "L1", "settings": {"wins": 0, "losses": 1}},
        {"roster_id": 2, "owner_id": "u2", "league_id": "L1", "settings": {"wins": 1, "losses": 0}},
    ],
    "/league/L1/matchups/1": [
        {"roster_id": 1, "matchup_id": 1, "points": 50.0},
        {"roster_id": 2, "matchup_id": 1, "points": 60.0},
    ],
}


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path.removeprefix("/v1")
    if path == "/league/BROKEN":
        return httpx.Response(500)
    if path == "/league/L2/matchups/9":
        return httpx.Response(503)
    if path not in ROUTES:
        return httpx.Response(404)
    return httpx.Response(200, json=ROUTES[path])


def _client() -> SleeperClient:
    return SleeperClient(settings=Settings(), transport=httpx.MockTransport(_handler))


class TestSleeperClient:
    @pytest.mark.asyncio
    async def test_get_league(self):
        async with _client() as client:
            league = await client.get_league("L2")
        assert league.name == "Dynasty League"
        assert league.year == 2024
        assert league.playoff_week_start == 2
        assert league.has_previous_season

    @pytest.mark.asyncio
    async def test_missing_league_is_none(self):
        async with _client() as client:
            assert await client.get_league("nope") is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        async with _client() as client:
            with pytest.raises(SleeperAPIError) as exc_info:
                await client.get_league("BROKEN")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_failed_week_comes_back_empty(self):
        async with _client() as client:
            weeks = await client.get_matchups_range("L2", 8, 9)
        assert weeks == {8: [], 9: []}

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        client = _client()
        with pytest.raises(RuntimeError):
            await client.get_league("L2")


class TestSleeperHistoryLoader:
    @pytest.mark.asyncio
    async def test_follows_previous_seasons(self):
        async with _client() as client:
            history = await SleeperHistoryLoader(client).load("L2")

        assert history.league_name == "Dynasty League"
        assert [(s.season_id, s.year) for s in history.seasons] == [("L2", 2024), ("L1", 2023)]
        # ownerless roster 3 skipped
        assert len(history.teams) == 4
        assert len(history.matchups) == 3

    @pytest.mark.asyncio
    async def test_team_records(self):
        async with _client() as client:
            history = await SleeperHistoryLoader(client).load("L2", max_seasons=1)

        teams = {t.team_id: t for t in history.teams}
        assert teams["L2:1"].member_id == "u1"
        assert teams["L2:1"].team_name == "Ann's Team"
        assert teams["L2:2"].team_name == "Ben"
        assert (teams["L2:1"].final_wins, teams["L2:1"].final_ties) == (1, 1)

    @pytest.mark.asyncio
    async def test_max_seasons(self):
        async with _client() as client:
            history = await SleeperHistoryLoader(client).load("L2", max_seasons=1)
        assert [s.year for s in history.seasons] == [2024]

    @pytest.mark.asyncio
    async def test_ties_and_playoffs(self):
        async with _client() as client:
            history = await SleeperHistoryLoader(client).load("L2", max_seasons=1)

        week1, week2 = sorted(history.matchups, key=lambda m: m.week)
        assert week1.winner_team_id == "L2:1"
        assert not week1.is_tie
        assert not week1.is_playoff
        assert week2.is_tie
        assert week2.winner_team_id is None
        assert week2.is_playoff

    @pytest.mark.asyncio
    async def test_unknown_league_raises(self):
        async with _client() as client:
            with pytest.raises(SleeperAPIError) as exc_info:
                await SleeperHistoryLoader(client).load("nope")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_loaded_history_feeds_luck_service(self):
        async with _client() as client:
            history = await SleeperHistoryLoader(client).load("L2")

        stats = LuckHistoryService(history).career_stats("u1")
        # 2024 wk1 win over the only other team, 2023 wk1 loss; wk2 is playoffs
        assert stats.actual_wins == 1
        assert stats.actual_losses == 1
        assert stats.expected_wins == pytest.approx(1.0)
        assert stats.weeks_played == 2


class TestBuildMatchups:
    LEAGUE = League(
        league_id="L9",
        name="Test",
        status="in_season",
        season="2025",
        total_rosters=4,
        settings={},
    )

    def test_unplayed_week_is_not_final(self):
        raw = [
            {"roster_id": 1, "matchup_id": 1, "points": 0},
            {"roster_id": 2, "matchup_id": 1, "points": None},
        ]
        (matchup,) = SleeperHistoryLoader.build_matchups(self.LEAGUE, 5, raw)
        assert matchup.status == "scheduled"
        assert not matchup.is_final

    def test_unpaired_rows_skipped(self):
        raw = [
            {"roster_id": 1, "matchup_id": 1, "points": 90},
            {"roster_id": 2, "matchup_id": 2, "points": 80},
            {"roster_id": 3, "points": 70},
        ]
        assert SleeperHistoryLoader.build_matchups(self.LEAGUE, 1, raw) == []

    def test_no_playoff_start_means_regular_season(self):
        raw = [
            {"roster_id": 1, "matchup_id": 1, "points": 90},
            {"roster_id": 2, "matchup_id": 1, "points": 80},
        ]
        (matchup,) = SleeperHistoryLoader.build_matchups(self.LEAGUE, 17, raw)
        assert not matchup.is_playoff
        assert matchup.away_team_id == "L9:2"
