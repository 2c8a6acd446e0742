import logging
from datetime import date

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import ProblemDetail, http_problem
from ..limiter import limiter, write_rate_limit
from ..schemas import (
    PlayerRename,
    RoundCreate,
    RoundOut,
    SessionOut,
    SessionStatsOut,
    SessionSummaryOut,
)
from ..services.games import save_game
from ..services.sessions import (
    Round,
    RoundInput,
    Session,
    SessionStore,
    get_session_store,
)
from ..services.stats import role_stats, session_summary, totals_by_player
from ..services.validation import ValidationError

logger = logging.getLogger(__name__)

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={404: {"model": ProblemDetail}, 409: {"model": ProblemDetail}},
)


def to_round_out(r: Round) -> RoundOut:
    return RoundOut(
        id=r.id,
        round=r.round,
        mode=r.mode,
        players=list(r.players),
        host=r.host,
        friends=list(r.friends),
        bid=r.bid,
        opponentScore=r.opponent_score,
        scores=dict(r.scores),
        winner=r.winner,
        distribution=r.distribution,
        date=r.date,
    )


def _to_session_out(session: Session, store: SessionStore) -> SessionOut:
    return SessionOut(
        date=session.date,
        label=session.label,
        players=list(session.players),
        rounds=[to_round_out(r) for r in session.rounds],
        nextRound=session.current_round,
        locked=store.is_locked(session.date),
    )


# GET /api/v0/sessions
@router.get("", response_model=list[SessionSummaryOut])
async def list_sessions(
    store: SessionStore = Depends(get_session_store),
) -> list[SessionSummaryOut]:
    return [
        SessionSummaryOut(
            **session_summary(s.date, s.rounds),
            locked=store.is_locked(s.date),
        )
        for s in store.sessions()
    ]


# GET /api/v0/sessions/2024-10-28
@router.get("/{session_date}", response_model=SessionOut)
async def get_session_detail(
    session_date: date,
    store: SessionStore = Depends(get_session_store),
) -> SessionOut:
    return _to_session_out(store.get_or_create(session_date), store)


@router.put("/{session_date}/players/{index}", response_model=SessionOut)
async def rename_player(
    session_date: date,
    index: int,
    body: PlayerRename,
    store: SessionStore = Depends(get_session_store),
) -> SessionOut:
    try:
        session = store.rename(session_date, index, body.name)
    except ValidationError as exc:
        raise http_problem(
            status_code=422,
            detail=str(exc),
            code="invalid_player_name",
        )
    return _to_session_out(session, store)


@router.post(
    "/{session_date}/rounds",
    response_model=RoundOut,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ProblemDetail}, 503: {"model": ProblemDetail}},
)
@limiter.limit(write_rate_limit)
async def append_round(
    request: Request,
    session_date: date,
    body: RoundCreate,
    store: SessionStore = Depends(get_session_store),
    session: AsyncSession = Depends(get_session),
) -> RoundOut:
    data = RoundInput(
        mode=body.mode,
        host=body.host,
        friends=tuple(body.friends),
        bid=body.bid,
        opponent_score=body.opponentScore,
    )
    # The round number is read, persisted and committed in one exclusive scope
    # so a failed write never consumes it.
    async with store.lock(session_date):
        try:
            new_round = store.build_round(session_date, data)
        except ValidationError as exc:
            logger.warning("Rejected round for %s: %s", session_date, exc)
            raise http_problem(
                status_code=422,
                detail=str(exc),
                code="invalid_round",
            )
        await save_game(session, new_round.players, new_round.scores, new_round.mode)
        store.commit_round(session_date, new_round)
    return to_round_out(new_round)


@router.get("/{session_date}/stats", response_model=SessionStatsOut)
async def session_stats(
    session_date: date,
    store: SessionStore = Depends(get_session_store),
) -> SessionStatsOut:
    session = store.get_or_create(session_date)
    return SessionStatsOut(
        date=session.date,
        label=session.label,
        totals=totals_by_player(session.rounds),
        roles=role_stats(session.players, session.rounds),
    )
