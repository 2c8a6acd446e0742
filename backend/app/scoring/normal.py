"""Normal mode scoring.
The host picks up to two friends; everyone else plays as the opponents."""

from typing import Dict, List, Sequence

from .common import (
    HOST_TEAM,
    MAX_FRIENDS,
    OPPONENTS,
    TOTAL_POINTS,
    Points,
    RoundResult,
    host_side_wins,
    opponent_share,
    round_half_away,
)


def split_distributable(distributable: int, friend_count: int) -> List[int]:
    """Split the host team's pool: host share first, then each friend.

    The last share is always the exact remainder so the parts add up to
    ``distributable`` whatever the intermediate rounding did.
    """
    if friend_count == 0:
        return [distributable]
    if friend_count == 1:
        host_share = round_half_away(distributable * 0.75)
        return [host_share, distributable - host_share]
    if friend_count == 2:
        host_share = round_half_away(distributable * 0.5)
        friend_share = round_half_away((distributable - host_share) / 2)
        return [host_share, friend_share, distributable - host_share - friend_share]
    raise ValueError(
        f"normal mode allows at most {MAX_FRIENDS} friends, got {friend_count}"
    )


def score(
    players: Sequence[str],
    host: str,
    friends: Sequence[str],
    bid: int,
    opponent_score: int,
) -> RoundResult:
    scores: Dict[str, Points] = {name: 0 for name in players}
    team = {host, *friends}
    opponents = [name for name in players if name not in team]

    if host_side_wins(bid, opponent_score):
        distributable = TOTAL_POINTS - opponent_score
        shares = split_distributable(distributable, len(friends))
        for name, share in zip([host, *friends], shares):
            scores[name] = share
        return RoundResult(
            scores=scores,
            winner=HOST_TEAM,
            distribution=f"Host team split of {distributable}",
        )

    each = opponent_share(opponent_score, len(opponents))
    for name in opponents:
        scores[name] = each
    return RoundResult(
        scores=scores,
        winner=OPPONENTS,
        distribution=f"Opponents each +{round_half_away(each)}",
    )
