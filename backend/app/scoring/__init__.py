"""Scoring engines for the Finding Friends game modes."""

from typing import Sequence

from . import normal, one_vs_five
from .common import (
    BID_STEP,
    HOST,
    HOST_TEAM,
    HOST_WINS,
    MAX_BID,
    MAX_FRIENDS,
    MIN_BID,
    MODES,
    NO_BIDS_VALUE,
    NORMAL,
    ONE_VS_FIVE,
    ONE_VS_FIVE_BID,
    OPPONENTS,
    ROSTER_SIZE,
    START_BID,
    TOTAL_POINTS,
    RoundResult,
    round_half_away,
)


def compute_round(
    mode: str,
    players: Sequence[str],
    host_index: int,
    friend_indices: Sequence[int],
    bid: int,
    opponent_score: int,
) -> RoundResult:
    """Return per-player deltas, the winner and a distribution note.

    ``friend_indices`` must already exclude ``host_index``. Every name in
    ``players`` gets an entry; players outside the scoring side get ``0``.
    """
    host = players[host_index]
    if mode == ONE_VS_FIVE:
        return one_vs_five.score(players, host, bid, opponent_score)
    if mode == NORMAL:
        friends = [players[i] for i in friend_indices]
        return normal.score(players, host, friends, bid, opponent_score)
    raise ValueError(f"unknown game mode: {mode!r}")


__all__ = [
    "BID_STEP",
    "HOST",
    "HOST_TEAM",
    "HOST_WINS",
    "MAX_BID",
    "MAX_FRIENDS",
    "MIN_BID",
    "MODES",
    "NO_BIDS_VALUE",
    "NORMAL",
    "ONE_VS_FIVE",
    "ONE_VS_FIVE_BID",
    "OPPONENTS",
    "ROSTER_SIZE",
    "START_BID",
    "TOTAL_POINTS",
    "RoundResult",
    "compute_round",
    "normal",
    "one_vs_five",
    "round_half_away",
]
