from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import MAX_GAMES_LIMIT, RECENT_GAMES_LIMIT
from ..db import get_session
from ..exceptions import ProblemDetail
from ..limiter import limiter, write_rate_limit
from ..models import Game
from ..schemas import GameCreate, GameOut
from ..services.games import load_recent_games, save_game
from ..time_utils import coerce_utc

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={503: {"model": ProblemDetail}},
)


def _to_game_out(game: Game) -> GameOut:
    return GameOut(
        id=game.id,
        players=list(game.players or []),
        scores=dict(game.scores or {}),
        mode=game.mode,
        playedAt=coerce_utc(game.played_at),
    )


# POST /api/v0/games
@router.post("", response_model=GameOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(write_rate_limit)
async def create_game(
    request: Request,
    body: GameCreate,
    session: AsyncSession = Depends(get_session),
) -> GameOut:
    game = await save_game(session, body.players, body.scores, body.mode)
    return _to_game_out(game)


# GET /api/v0/games?limit=10
@router.get("", response_model=list[GameOut])
async def list_recent_games(
    limit: int = Query(RECENT_GAMES_LIMIT, ge=1, le=MAX_GAMES_LIMIT),
    session: AsyncSession = Depends(get_session),
) -> list[GameOut]:
    games = await load_recent_games(session, limit)
    return [_to_game_out(game) for game in games]
