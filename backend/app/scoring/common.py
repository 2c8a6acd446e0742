"""Shared constants and result type for the Finding Friends scoring engines."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Literal, Union

NORMAL = "Normal"
ONE_VS_FIVE = "1v5"
MODES = (NORMAL, ONE_VS_FIVE)

HOST = "Host"
HOST_TEAM = "Host Team"
OPPONENTS = "Opponents"
HOST_WINS = frozenset({HOST, HOST_TEAM})

TOTAL_POINTS = 400
ROSTER_SIZE = 6
MAX_FRIENDS = 2

START_BID = 150
MIN_BID = 80
MAX_BID = 150
BID_STEP = 5
NO_BIDS_VALUE = 160
ONE_VS_FIVE_BID = 200

# Opponents split one and a half times their card points.
OPPONENT_MULTIPLIER = 1.5

Winner = Literal["Host", "Host Team", "Opponents"]
Points = Union[int, float]


@dataclass(frozen=True)
class RoundResult:
    """Per-player deltas for one round plus who won it."""

    scores: Dict[str, Points]
    winner: Winner
    distribution: str


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` rounds halves to even, which would turn
    ``202.5`` into ``202``.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def opponent_share(opponent_score: int, opponent_count: int) -> float:
    """Points each opponent receives when the host side loses (unrounded)."""
    return opponent_score * OPPONENT_MULTIPLIER / opponent_count


def host_side_wins(bid: int, opponent_score: int) -> bool:
    # A tie goes to the opponents.
    return opponent_score < bid
