"""Shared fixtures: a small two-season, four-team league."""

import pytest

from league_luck.models import LeagueHistory, MatchupRecord, SeasonInfo, TeamRecord

NAMES = {"m1": "Alpha", "m2": "Bravo", "m3": "Charlie", "m4": "Delta"}


def _teams(season_id: str, prefix: str, records: dict[str, tuple[int, int, int]], suffix: str = ""):
    return [
        TeamRecord(
            team_id=f"{prefix}{member_id[1]}",
            member_id=member_id,
            season_id=season_id,
            team_name=NAMES[member_id] + suffix,
            final_wins=w,
            final_losses=l,
            final_ties=t,
        )
        for member_id, (w, l, t) in records.items()
    ]


def _game(season_id, week, home, away, home_score, away_score, **kwargs):
    if home_score > away_score:
        winner = home
    elif away_score > home_score:
        winner = away
    else:
        winner = None
    return MatchupRecord(
        season_id=season_id,
        week=week,
        home_team_id=home,
        away_team_id=away,
        home_score=home_score,
        away_score=away_score,
        winner_team_id=winner,
        is_tie=winner is None,
        **kwargs,
    )


@pytest.fixture
def league_history() -> LeagueHistory:
    """
    2024 (s24, teams t1-t4):
      wk1 t1 120-100 t2, t3 90-80 t4
      wk2 t1 110-130 t3, t2 95-95 t4 (tie)
      wk3 playoff t1 100-105 t3
      wk4 t2 vs t4 not played yet
    2023 (s23, teams u1-u4):
      wk1 u1 70-100 u4, u2 110-60 u3
    """
    teams = _teams(
        "s24", "t", {"m1": (1, 1, 0), "m2": (0, 1, 1), "m3": (2, 0, 0), "m4": (0, 1, 1)}
    ) + _teams(
        "s23", "u", {"m1": (0, 1, 0), "m2": (1, 0, 0), "m3": (0, 1, 0), "m4": (1, 0, 0)},
        suffix=" Old",
    )

    matchups = [
        _game("s24", 1, "t1", "t2", 120, 100),
        _game("s24", 1, "t3", "t4", 90, 80),
        _game("s24", 2, "t1", "t3", 110, 130),
        _game("s24", 2, "t2", "t4", 95, 95),
        _game("s24", 3, "t1", "t3", 100, 105, is_playoff=True),
        MatchupRecord(
            season_id="s24", week=4, home_team_id="t2", away_team_id="t4", status="scheduled"
        ),
        _game("s24", 1, "t1", "ghost", 50, 40),
        _game("s23", 1, "u1", "u4", 70, 100),
        _game("s23", 1, "u2", "u3", 110, 60),
    ]

    return LeagueHistory(
        league_name="Test League",
        seasons=[SeasonInfo(season_id="s24", year=2024), SeasonInfo(season_id="s23", year=2023)],
        teams=teams,
        matchups=matchups,
    )
