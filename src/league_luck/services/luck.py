"""
Luck & Schedule Strength Calculators

Pure functions for all-play expected wins, luck index and schedule strength.

The "all-play" method compares a team's weekly score against every other
team that week, not just the scheduled opponent. The gap between actual and
expected wins shows whether a manager was lucky or unlucky with matchups.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from league_luck.models.luck import (
    LuckStats,
    OpponentRecord,
    SeasonLuckStats,
    WeeklyScore,
)

WeekKey = tuple[str, int]


def _qualifying(scores: Iterable[WeeklyScore], include_playoffs: bool) -> list[WeeklyScore]:
    if include_playoffs:
        return list(scores)
    return [s for s in scores if not s.is_playoff]


def _group_by_week(scores: Iterable[WeeklyScore]) -> dict[WeekKey, list[WeeklyScore]]:
    weeks: dict[WeekKey, list[WeeklyScore]] = defaultdict(list)
    for s in scores:
        weeks[(s.season_id, s.week)].append(s)
    return weeks


def _all_play_fraction(member_week: WeeklyScore, week_scores: Sequence[WeeklyScore]) -> float | None:
    """
    Fraction of the week's other teams the member would have beaten.

    None when the week has nothing to compare against, including a week whose
    scores lack the member's own row.
    """
    if not any(s.team_id == member_week.team_id for s in week_scores):
        return None

    others = [s.score for s in week_scores if s.team_id != member_week.team_id]
    if not others:
        return None

    beaten = sum(1 for score in others if member_week.score > score)
    tied = sum(1 for score in others if member_week.score == score)
    return (beaten + 0.5 * tied) / len(others)


# ==================== Wins ====================


def calculate_expected_wins(
    member_scores: Iterable[WeeklyScore],
    all_scores: Iterable[WeeklyScore],
    include_playoffs: bool = False,
) -> float:
    """
    Calculate expected wins using the all-play method.

    Each qualifying week contributes (teams outscored + 0.5 * teams tied)
    divided by the number of other teams that week. Weeks with nobody to
    compare against, or missing the member's own row in all_scores,
    contribute nothing.

    Args:
        member_scores: Weekly scores for the target member
        all_scores: Weekly scores for every team over the same weeks
        include_playoffs: Whether playoff weeks count

    Returns:
        Expected wins as a decimal (e.g., 8.5)
    """
    weeks = _group_by_week(_qualifying(all_scores, include_playoffs))

    expected_wins = 0.0
    for member_week in _qualifying(member_scores, include_playoffs):
        fraction = _all_play_fraction(
            member_week, weeks.get((member_week.season_id, member_week.week), [])
        )
        if fraction is not None:
            expected_wins += fraction

    return expected_wins


def calculate_actual_wins(
    member_scores: Iterable[WeeklyScore], include_playoffs: bool = False
) -> int:
    """Count the weeks the member beat their scheduled opponent."""
    return sum(1 for s in _qualifying(member_scores, include_playoffs) if s.actual_win)


def calculate_actual_record(
    member_scores: Iterable[WeeklyScore], include_playoffs: bool = False
) -> tuple[int, int, int]:
    """
    Get the member's actual (wins, losses, ties).

    A week is a tie when flagged actual_tie, a loss when neither won nor tied.
    """
    wins = losses = ties = 0
    for s in _qualifying(member_scores, include_playoffs):
        if s.actual_win:
            wins += 1
        elif s.actual_tie:
            ties += 1
        else:
            losses += 1
    return wins, losses, ties


def calculate_luck_index(actual_wins: float, expected_wins: float) -> float:
    """Actual minus expected wins. Positive = lucky, negative = unlucky."""
    return actual_wins - expected_wins


# ==================== Schedule Strength ====================


def calculate_win_percentage(wins: int, losses: int, ties: int) -> float:
    """Win percentage with ties as half a win; 0 for no games."""
    total_games = wins + losses + ties
    if total_games == 0:
        return 0.0
    return (wins + 0.5 * ties) / total_games


def calculate_schedule_strength(opponents: Iterable[OpponentRecord]) -> float:
    """
    Calculate schedule strength as the average opponent win percentage.

    Expects one record per unique opponent. Opponents without games are
    skipped.

    Args:
        opponents: Final records of the opponents faced

    Returns:
        Schedule strength between 0 and 1 (0 when nobody qualifies)
    """
    percentages = [
        calculate_win_percentage(o.wins, o.losses, o.ties)
        for o in opponents
        if o.wins + o.losses + o.ties > 0
    ]
    if not percentages:
        return 0.0
    return sum(percentages) / len(percentages)


# ==================== Combined Stats ====================


def calculate_luck_stats(
    member_scores: Iterable[WeeklyScore],
    all_scores: Iterable[WeeklyScore],
    opponents: Iterable[OpponentRecord],
    include_playoffs: bool = False,
) -> LuckStats:
    """
    Calculate complete luck statistics for a member.

    Args:
        member_scores: Weekly scores for the target member
        all_scores: Weekly scores for every team
        opponents: Records of the unique opponents faced
        include_playoffs: Whether playoff weeks count

    Returns:
        LuckStats with actual record, expected wins, luck and schedule strength
    """
    member_scores = _qualifying(member_scores, include_playoffs)

    wins, losses, ties = calculate_actual_record(member_scores, include_playoffs=True)
    expected_wins = calculate_expected_wins(member_scores, all_scores, include_playoffs)

    return LuckStats(
        actual_wins=wins,
        actual_losses=losses,
        actual_ties=ties,
        expected_wins=expected_wins,
        luck_index=calculate_luck_index(wins, expected_wins),
        schedule_strength=calculate_schedule_strength(opponents),
        weeks_played=len(member_scores),
    )


def calculate_season_luck_stats(
    member_scores: Iterable[WeeklyScore],
    all_scores: Iterable[WeeklyScore],
    opponents_by_season: Mapping[str, Sequence[OpponentRecord]],
    years: Mapping[str, int],
    include_playoffs: bool = False,
) -> list[SeasonLuckStats]:
    """
    Calculate luck statistics separately for every season the member played.

    Seasons missing from ``years`` are skipped.

    Returns:
        SeasonLuckStats sorted by year, most recent first
    """
    member_by_season: dict[str, list[WeeklyScore]] = defaultdict(list)
    for s in member_scores:
        member_by_season[s.season_id].append(s)

    pool_by_season: dict[str, list[WeeklyScore]] = defaultdict(list)
    for s in all_scores:
        if s.season_id in member_by_season:
            pool_by_season[s.season_id].append(s)

    results: list[SeasonLuckStats] = []
    for season_id, season_scores in member_by_season.items():
        year = years.get(season_id)
        if year is None:
            continue

        stats = calculate_luck_stats(
            season_scores,
            pool_by_season[season_id],
            opponents_by_season.get(season_id, []),
            include_playoffs,
        )
        results.append(
            SeasonLuckStats(season_id=season_id, year=year, **stats.model_dump())
        )

    results.sort(key=lambda r: r.year, reverse=True)
    return results
