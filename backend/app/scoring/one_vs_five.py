"""1v5 scoring: the host plays alone against the other five players."""

from typing import Dict, Sequence

from .common import (
    HOST,
    OPPONENTS,
    TOTAL_POINTS,
    Points,
    RoundResult,
    host_side_wins,
    opponent_share,
    round_half_away,
)


def score(
    players: Sequence[str],
    host: str,
    bid: int,
    opponent_score: int,
) -> RoundResult:
    scores: Dict[str, Points] = {name: 0 for name in players}

    if host_side_wins(bid, opponent_score):
        scores[host] = TOTAL_POINTS
        return RoundResult(
            scores=scores,
            winner=HOST,
            distribution=f"1v5 host win: +{TOTAL_POINTS}",
        )

    opponents = [name for name in players if name != host]
    each = opponent_share(opponent_score, len(opponents))
    for name in opponents:
        scores[name] = each
    return RoundResult(
        scores=scores,
        winner=OPPONENTS,
        distribution=f"1v5 opponents: each +{round_half_away(each)}",
    )
