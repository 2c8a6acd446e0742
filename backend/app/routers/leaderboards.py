from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas import LeaderboardOut, TotalOut
from ..services.sessions import SessionStore, get_session_store
from ..services.stats import leaderboard, totals_by_player

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


# GET /api/v0/leaderboards
# GET /api/v0/leaderboards?date=2024-10-28  (only that session's roster)
@router.get("", response_model=LeaderboardOut)
async def all_time_leaderboard(
    roster_date: Annotated[
        Optional[date],
        Query(
            alias="date",
            description="Rank only the roster of the session held on this date",
        ),
    ] = None,
    store: SessionStore = Depends(get_session_store),
) -> LeaderboardOut:
    players = None
    if roster_date is not None:
        players = store.get_or_create(roster_date).players
    return LeaderboardOut(**leaderboard(store.all_rounds(), players))


# GET /api/v0/leaderboards/totals
@router.get("/totals", response_model=list[TotalOut])
async def all_time_totals(
    store: SessionStore = Depends(get_session_store),
) -> list[TotalOut]:
    return [TotalOut(**row) for row in totals_by_player(store.all_rounds())]
