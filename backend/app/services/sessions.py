"""In-memory store of date-keyed game sessions.

Each mutation reads the current session, builds a replacement and swaps it
in, so readers never observe a half-applied update.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import ulid

from ..config import SESSION_TIMEZONE
from ..exceptions import PlayerIndexOutOfRange, SessionLocked
from ..scoring import (
    NORMAL,
    ONE_VS_FIVE,
    ONE_VS_FIVE_BID,
    ROSTER_SIZE,
    START_BID,
    compute_round,
)
from ..scoring.common import Points, Winner
from ..time_utils import session_label, today
from .validation import validate_player_name, validate_round

logger = logging.getLogger(__name__)


def default_players() -> Tuple[str, ...]:
    return tuple(f"Player {i}" for i in range(1, ROSTER_SIZE + 1))


@dataclass(frozen=True)
class RoundInput:
    """A round as submitted by the client, players referenced by roster index."""

    mode: str = NORMAL
    host: int = 0
    friends: Sequence[int] = ()
    bid: Optional[int] = None
    opponent_score: int = 0


@dataclass(frozen=True)
class Round:
    id: str
    round: int
    mode: str
    players: Tuple[str, ...]
    host: str
    friends: Tuple[str, ...]
    bid: int
    opponent_score: int
    scores: Mapping[str, Points]
    winner: Winner
    distribution: str
    date: date


@dataclass(frozen=True)
class Session:
    date: date
    players: Tuple[str, ...] = field(default_factory=default_players)
    rounds: Tuple[Round, ...] = ()
    current_round: int = 1

    @property
    def label(self) -> str:
        return session_label(self.date)


class SessionStore:
    """Sessions keyed by calendar date, created lazily with a default roster."""

    def __init__(self, clock: Callable[[], date] | None = None) -> None:
        self._clock = clock or (lambda: today(SESSION_TIMEZONE))
        self._sessions: Dict[date, Session] = {}
        self._locks: Dict[date, asyncio.Lock] = {}

    def today(self) -> date:
        return self._clock()

    def get_or_create(self, day: date) -> Session:
        session = self._sessions.get(day)
        if session is None:
            session = Session(date=day)
            self._sessions[day] = session
        return session

    def _update(self, day: date, updater: Callable[[Session], Session]) -> Session:
        updated = updater(self.get_or_create(day))
        self._sessions[day] = updated
        return updated

    def lock(self, day: date) -> asyncio.Lock:
        """Exclusive scope for read-counter / persist / append on one session."""
        return self._locks.setdefault(day, asyncio.Lock())

    def is_locked(self, day: date) -> bool:
        return day != self.today()

    def dates(self) -> List[date]:
        """Known session dates, newest first. Today's session always exists."""
        self.get_or_create(self.today())
        return sorted(self._sessions, reverse=True)

    def sessions(self) -> List[Session]:
        return [self._sessions[day] for day in self.dates()]

    def all_rounds(self) -> List[Round]:
        return [r for day in sorted(self._sessions) for r in self._sessions[day].rounds]

    def rename(self, day: date, index: int, name: str) -> Session:
        """Replace roster slot ``index``; recorded rounds keep the old name."""

        session = self.get_or_create(day)
        if index < 0 or index >= len(session.players):
            raise PlayerIndexOutOfRange(index)
        new_name = validate_player_name(name, session.players, index)

        def updater(current: Session) -> Session:
            players = list(current.players)
            players[index] = new_name
            return replace(current, players=tuple(players))

        updated = self._update(day, updater)
        logger.info(
            "Renamed roster slot %d in session %s: %r -> %r",
            index,
            session.label,
            session.players[index],
            new_name,
        )
        return updated

    def build_round(self, day: date, data: RoundInput) -> Round:
        """Validate and score ``data`` against the session without storing it."""

        session = self.get_or_create(day)
        if self.is_locked(day):
            raise SessionLocked(session.label)

        players = session.players
        if data.host < 0 or data.host >= len(players):
            raise PlayerIndexOutOfRange(data.host)
        friends = [i for i in dict.fromkeys(data.friends) if i != data.host]
        bid = START_BID if data.bid is None else data.bid
        # 1v5 ignores whatever friends and bid the client sent.
        if data.mode == ONE_VS_FIVE:
            friends = []
            bid = ONE_VS_FIVE_BID
        for i in friends:
            if i < 0 or i >= len(players):
                raise PlayerIndexOutOfRange(i)

        validate_round(data.mode, friends, bid, data.opponent_score)
        result = compute_round(
            data.mode, players, data.host, friends, bid, data.opponent_score
        )
        return Round(
            id=str(ulid.new()),
            round=session.current_round,
            mode=data.mode,
            players=players,
            host=players[data.host],
            friends=tuple(players[i] for i in friends),
            bid=bid,
            opponent_score=data.opponent_score,
            scores=MappingProxyType(dict(result.scores)),
            winner=result.winner,
            distribution=result.distribution,
            date=day,
        )

    def commit_round(self, day: date, round_: Round) -> Round:
        """Append a built round and advance the session's round counter."""

        def updater(current: Session) -> Session:
            if round_.round != current.current_round:
                raise RuntimeError(
                    f"round {round_.round} is stale; session {current.label} "
                    f"is at round {current.current_round}"
                )
            return replace(
                current,
                rounds=current.rounds + (round_,),
                current_round=current.current_round + 1,
            )

        self._update(day, updater)
        logger.info(
            "Recorded round %d (%s) in session %s: winner=%s",
            round_.round,
            round_.mode,
            session_label(day),
            round_.winner,
        )
        return round_

    def append_round(self, day: date, data: RoundInput) -> Round:
        return self.commit_round(day, self.build_round(day, data))


session_store = SessionStore()


def get_session_store() -> SessionStore:
    """FastAPI dependency returning the process-wide session store."""
    return session_store
