"""Record store for completed rounds.

Reads and writes go to the ``game`` table. Database failures surface as
``StoreError`` carrying the driver's message; an empty table is simply an
empty list.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping, Sequence

import ulid
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import RECENT_GAMES_LIMIT
from ..exceptions import StoreError
from ..models import Game
from ..scoring.common import Points

logger = logging.getLogger(__name__)


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


async def save_game(
    session: AsyncSession,
    players: Sequence[str],
    scores: Mapping[str, Points],
    mode: str,
) -> Game:
    """Insert one round record and return it with its id and timestamp."""

    game = Game(
        id=str(ulid.new()),
        players=list(players),
        scores=dict(scores),
        mode=mode,
        played_at=datetime.now(timezone.utc),
    )
    session.add(game)
    try:
        await session.commit()
        await session.refresh(game)
    except SQLAlchemyError as exc:
        await session.rollback()
        message = _error_message(exc)
        logger.error("Error saving game: %s", message, exc_info=exc)
        raise StoreError(message) from exc
    logger.info("Stored game %s (%s, %d players)", game.id, mode, len(game.players))
    return game


async def load_recent_games(
    session: AsyncSession, limit: int = RECENT_GAMES_LIMIT
) -> list[Game]:
    """Return up to ``limit`` records, most recently played first."""

    stmt = (
        select(Game)
        .order_by(Game.played_at.desc(), Game.id.desc())
        .limit(limit)
    )
    try:
        return list((await session.execute(stmt)).scalars().all())
    except SQLAlchemyError as exc:
        message = _error_message(exc)
        logger.error("Error loading games: %s", message, exc_info=exc)
        raise StoreError(message) from exc
