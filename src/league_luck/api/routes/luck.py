"""
Luck Analysis API Routes

Endpoints for all-play expected wins, luck index and schedule strength.
"""

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, Path

from league_luck.api.dependencies import IncludePlayoffsQuery, SleeperHistoryDep
from league_luck.models import (
    LeagueHistory,
    LeagueLuckReport,
    LuckStats,
    LuckStatsRequest,
    MemberLuckReport,
    OpponentRecord,
)
from league_luck.services.history import LuckHistoryService
from league_luck.services.luck import calculate_luck_stats, calculate_schedule_strength

router = APIRouter()


@router.post(
    "/stats",
    response_model=LuckStats,
    summary="Calculate luck stats",
    description="Calculate actual vs all-play expected wins and schedule strength from raw weekly scores.",
)
async def post_luck_stats(request: LuckStatsRequest) -> LuckStats:
    return calculate_luck_stats(
        request.member_scores,
        request.all_scores,
        request.opponents,
        request.include_playoffs,
    )


@router.post(
    "/schedule-strength",
    summary="Calculate schedule strength",
    description="Average win percentage of the unique opponents faced.",
)
async def post_schedule_strength(
    opponents: Annotated[list[OpponentRecord], Body()],
) -> dict[str, float]:
    return {"schedule_strength": calculate_schedule_strength(opponents)}


@router.post(
    "/history/members/{member_id}",
    response_model=MemberLuckReport,
    summary="Get member luck report from history",
    description="Career and season-by-season luck for a member of the supplied league history.",
)
async def post_member_report(
    history: LeagueHistory,
    member_id: Annotated[str, Path(description="Member ID")],
    include_playoffs: IncludePlayoffsQuery,
) -> MemberLuckReport:
    service = LuckHistoryService(history, include_playoffs)
    return service.member_report(member_id)


@router.post(
    "/history/league",
    response_model=LeagueLuckReport,
    summary="Get league luck report from history",
    description="Career luck for every member of the supplied league history, luckiest first.",
)
async def post_league_report(
    history: LeagueHistory,
    include_playoffs: IncludePlayoffsQuery,
) -> LeagueLuckReport:
    service = LuckHistoryService(history, include_playoffs)
    return service.league_report()


@router.get(
    "/sleeper/{league_id}/members/{user_id}",
    response_model=MemberLuckReport,
    summary="Get Sleeper member luck report",
    description="Career and season-by-season luck for a Sleeper user across the league's seasons.",
)
async def get_sleeper_member_report(
    history: SleeperHistoryDep,
    user_id: Annotated[str, Path(description="Sleeper user ID")],
    include_playoffs: IncludePlayoffsQuery,
) -> MemberLuckReport:
    service = LuckHistoryService(history, include_playoffs)
    report = service.member_report(user_id)
    if report.career is None:
        raise HTTPException(
            status_code=404,
            detail=f"No final games for user {user_id} in this league",
        )
    return report


@router.get(
    "/sleeper/{league_id}/league",
    response_model=LeagueLuckReport,
    summary="Get Sleeper league luck report",
    description="Career luck for every manager across the league's seasons, with luckiest/unluckiest.",
)
async def get_sleeper_league_report(
    history: SleeperHistoryDep,
    include_playoffs: IncludePlayoffsQuery,
) -> LeagueLuckReport:
    service = LuckHistoryService(history, include_playoffs)
    return service.league_report()
