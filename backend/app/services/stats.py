from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..scoring import HOST_WINS, round_half_away
from ..time_utils import session_label

QUALIFYING_GAMES = 3


def _role_counter() -> Dict[str, int]:
    return {"hosted": 0, "hostWins": 0, "friendGames": 0, "friendWins": 0, "played": 0}


def _names_seen(rounds: Sequence[Any]) -> List[str]:
    seen: dict[str, None] = {}
    for r in rounds:
        for name in r.players:
            seen.setdefault(name, None)
        for name in r.scores:
            seen.setdefault(name, None)
    return list(seen)


def _rate(wins: int, games: int) -> int:
    return round_half_away(wins / games * 100) if games else 0


def totals_by_player(rounds: Iterable[Any]) -> List[Dict[str, Any]]:
    """Sum each player's deltas across ``rounds``, highest total first.

    Players with equal totals keep the order in which they first appeared.
    """
    totals: Dict[str, float] = {}
    for r in rounds:
        for name, pts in r.scores.items():
            totals[name] = totals.get(name, 0) + pts
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [{"player": name, "total": total} for name, total in ranked]


def role_stats(players: Sequence[str], rounds: Iterable[Any]) -> Dict[str, Dict[str, int]]:
    """Host/friend counts for each roster member.

    Names that are not in ``players`` (renamed or from another roster) are
    ignored.
    """
    stats = {name: _role_counter() for name in players}
    for r in rounds:
        won = r.winner in HOST_WINS
        for name in r.players:
            if name in stats:
                stats[name]["played"] += 1
        if r.host in stats:
            stats[r.host]["hosted"] += 1
            if won:
                stats[r.host]["hostWins"] += 1
        for friend in r.friends:
            if friend in stats:
                stats[friend]["friendGames"] += 1
                if won:
                    stats[friend]["friendWins"] += 1
    return stats


def rankings(rounds: Sequence[Any], players: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    """Combine totals, role counts and win rates, ranked by total score.

    Restricted to ``players`` when given, otherwise every name that appears in
    ``rounds`` is ranked.
    """
    names = list(players) if players is not None else _names_seen(rounds)
    roles = role_stats(names, rounds)
    totals = {name: 0 for name in names}
    for r in rounds:
        for name, pts in r.scores.items():
            if name in totals:
                totals[name] += pts

    rows = []
    for name in names:
        role = roles[name]
        rows.append(
            {
                "name": name,
                "totalScore": round_half_away(totals[name]),
                "gamesPlayed": role["played"],
                "hosted": role["hosted"],
                "hostWins": role["hostWins"],
                "hostRate": _rate(role["hostWins"], role["hosted"]),
                "friendGames": role["friendGames"],
                "friendWins": role["friendWins"],
                "friendRate": _rate(role["friendWins"], role["friendGames"]),
            }
        )
    rows.sort(key=lambda row: row["totalScore"], reverse=True)
    return rows


def best_host(ranked: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    qualified = [row for row in ranked if row["hosted"] >= QUALIFYING_GAMES]
    return max(qualified, key=lambda row: row["hostRate"], default=None)


def best_friend(ranked: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    qualified = [row for row in ranked if row["friendGames"] >= QUALIFYING_GAMES]
    return max(qualified, key=lambda row: row["friendRate"], default=None)


def most_games_played(ranked: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return max(ranked, key=lambda row: row["gamesPlayed"], default=None)


def leaderboard(rounds: Sequence[Any], players: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """Rankings plus best performers for ``rounds``.

    Pass every session's rounds for the all-time board.
    """
    ranked = rankings(rounds, players)
    return {
        "totalRounds": len(rounds),
        "playerRankings": ranked,
        "bestHost": best_host(ranked),
        "bestFriend": best_friend(ranked),
        "mostGamesPlayed": most_games_played(ranked),
    }


def session_summary(day: date, rounds: Sequence[Any], top: int = 3) -> Dict[str, Any]:
    """Overview of one session for the past games list."""
    return {
        "date": day,
        "label": session_label(day),
        "rounds": len(rounds),
        "leaders": totals_by_player(rounds)[:top],
    }
