"""
League Luck History Service

Flattens stored matchups into weekly scores and rolls the luck calculators up
into career, season-by-season and league-wide reports.
"""

import logging

from league_luck.models.history import LeagueHistory, MatchupRecord, TeamRecord
from league_luck.models.luck import (
    LeagueLuckReport,
    LuckStats,
    MemberLuckReport,
    MemberLuckSummary,
    OpponentRecord,
    SeasonLuckStats,
    WeeklyScore,
)
from league_luck.services.formatting import (
    classify_luck,
    classify_schedule,
    format_luck_index,
    format_schedule_strength,
    luck_description,
)
from league_luck.services.luck import calculate_luck_stats, calculate_season_luck_stats

logger = logging.getLogger(__name__)

ScorePair = tuple[WeeklyScore, WeeklyScore]


class LuckHistoryService:
    """
    Service for computing luck statistics over a league's history.

    Only final matchups with both scores present are used. Ties come from the
    matchup's is_tie flag and wins from its winner_team_id.
    """

    def __init__(self, history: LeagueHistory, include_playoffs: bool = False):
        self.history = history
        self.include_playoffs = include_playoffs

        self._teams: dict[str, TeamRecord] = {t.team_id: t for t in history.teams}
        self._years: dict[str, int] = {s.season_id: s.year for s in history.seasons}
        self._pairs: list[ScorePair] = self._flatten_matchups(history.matchups)

    def _flatten_matchups(self, matchups: list[MatchupRecord]) -> list[ScorePair]:
        pairs: list[ScorePair] = []
        for matchup in matchups:
            if not matchup.is_final:
                continue

            home_team = self._teams.get(matchup.home_team_id)
            away_team = self._teams.get(matchup.away_team_id)
            if home_team is None or away_team is None:
                logger.debug(
                    "Skipping season %s week %s matchup: unknown team",
                    matchup.season_id,
                    matchup.week,
                )
                continue

            if matchup.home_score < 0 or matchup.away_score < 0:
                logger.warning(
                    "Skipping season %s week %s matchup: negative score",
                    matchup.season_id,
                    matchup.week,
                )
                continue

            home = WeeklyScore(
                season_id=matchup.season_id,
                week=matchup.week,
                team_id=home_team.team_id,
                member_id=home_team.member_id,
                score=matchup.home_score,
                actual_win=matchup.winner_team_id == home_team.team_id,
                actual_tie=matchup.is_tie,
                is_playoff=matchup.is_playoff,
            )
            away = WeeklyScore(
                season_id=matchup.season_id,
                week=matchup.week,
                team_id=away_team.team_id,
                member_id=away_team.member_id,
                score=matchup.away_score,
                actual_win=matchup.winner_team_id == away_team.team_id,
                actual_tie=matchup.is_tie,
                is_playoff=matchup.is_playoff,
            )
            pairs.append((home, away))

        return pairs

    @property
    def all_scores(self) -> list[WeeklyScore]:
        return [score for pair in self._pairs for score in pair]

    def _opponent_record(self, opponent: WeeklyScore) -> OpponentRecord:
        team = self._teams[opponent.team_id]
        return OpponentRecord(
            member_id=team.member_id,
            wins=team.final_wins,
            losses=team.final_losses,
            ties=team.final_ties,
        )

    def build_member_inputs(
        self, member_id: str, season_id: str | None = None
    ) -> tuple[list[WeeklyScore], list[WeeklyScore], list[OpponentRecord]]:
        """
        Build the luck calculator inputs for a member.

        Args:
            member_id: Member to analyze
            season_id: Restrict to a single season (default: all seasons)

        Returns:
            (all_scores, member_scores, opponents) with one opponent record per
            unique opponent member, taken from the first meeting
        """
        all_scores: list[WeeklyScore] = []
        member_scores: list[WeeklyScore] = []
        opponents: dict[str, OpponentRecord] = {}

        for home, away in self._pairs:
            if season_id is not None and home.season_id != season_id:
                continue

            all_scores.extend((home, away))

            for own, opponent in ((home, away), (away, home)):
                if own.member_id != member_id:
                    continue
                member_scores.append(own)
                if opponent.member_id not in opponents:
                    opponents[opponent.member_id] = self._opponent_record(opponent)

        return all_scores, member_scores, list(opponents.values())

    def member_ids(self) -> list[str]:
        """All members with at least one final game, sorted."""
        return sorted({score.member_id for score in self.all_scores})

    def member_name(self, member_id: str) -> str:
        """Most recent team name for a member, falling back to the member ID."""
        named = [
            t for t in self.history.teams if t.member_id == member_id and t.team_name
        ]
        if not named:
            return member_id
        latest = max(named, key=lambda t: self._years.get(t.season_id, 0))
        return latest.team_name

    def career_stats(self, member_id: str) -> LuckStats | None:
        """
        Get luck stats for a member's career (all seasons combined).

        Returns:
            LuckStats, or None if the member never played a final game
        """
        all_scores, member_scores, opponents = self.build_member_inputs(member_id)
        if not member_scores:
            return None
        return calculate_luck_stats(
            member_scores, all_scores, opponents, self.include_playoffs
        )

    def season_stats(self, member_id: str) -> list[SeasonLuckStats]:
        """Get luck stats per season played, most recent first."""
        member_scores: list[WeeklyScore] = []
        opponents_by_season: dict[str, list[OpponentRecord]] = {}

        for season_id in {score.season_id for score in self.all_scores}:
            _, season_scores, opponents = self.build_member_inputs(member_id, season_id)
            if season_scores:
                member_scores.extend(season_scores)
                opponents_by_season[season_id] = opponents

        missing = set(opponents_by_season) - set(self._years)
        if missing:
            logger.warning("No season info for %s; skipping", sorted(missing))

        return calculate_season_luck_stats(
            member_scores,
            self.all_scores,
            opponents_by_season,
            self._years,
            self.include_playoffs,
        )

    def member_report(self, member_id: str) -> MemberLuckReport:
        """Career and season-by-season luck with display labels."""
        career = self.career_stats(member_id)
        report = MemberLuckReport(
            member_id=member_id,
            member_name=self.member_name(member_id),
            career=career,
            seasons=self.season_stats(member_id),
        )
        if career is None:
            return report

        luck_class = classify_luck(career.luck_index)
        return report.model_copy(
            update={
                "luck_display": format_luck_index(career.luck_index),
                "luck_classification": luck_class,
                "luck_description": luck_description(luck_class),
                "schedule_display": format_schedule_strength(
                    career.schedule_strength
                ),
                "schedule_classification": classify_schedule(
                    career.schedule_strength
                ),
            }
        )

    def league_report(self) -> LeagueLuckReport:
        """
        Get league-wide career luck, luckiest first.

        Members with equal luck index are ordered by name.
        """
        rows: list[tuple[str, str, LuckStats]] = []
        for member_id in self.member_ids():
            stats = self.career_stats(member_id)
            if stats is not None:
                rows.append((member_id, self.member_name(member_id), stats))

        rows.sort(key=lambda row: (-row[2].luck_index, row[1]))
        members = [
            MemberLuckSummary(
                member_id=member_id, member_name=name, luck_rank=rank, stats=stats
            )
            for rank, (member_id, name, stats) in enumerate(rows, start=1)
        ]

        seasons_analyzed = len({score.season_id for score in self.all_scores})
        if not members:
            return LeagueLuckReport(
                league_name=self.history.league_name,
                seasons_analyzed=seasons_analyzed,
                members=[],
            )

        luckiest, unluckiest = members[0], members[-1]
        return LeagueLuckReport(
            league_name=self.history.league_name,
            seasons_analyzed=seasons_analyzed,
            members=members,
            luckiest_member=luckiest.member_name,
            unluckiest_member=unluckiest.member_name,
            luckiest_score=luckiest.stats.luck_index,
            unluckiest_score=unluckiest.stats.luck_index,
        )
