"""Internal application services."""

from .validation import InvalidRound, ValidationError, validate_round
from .stats import (
    totals_by_player,
    role_stats,
    rankings,
    best_host,
    best_friend,
    most_games_played,
    leaderboard,
    session_summary,
)
from .sessions import Round, RoundInput, Session, SessionStore

__all__ = [
    "validate_round",
    "ValidationError",
    "InvalidRound",
    "totals_by_player",
    "role_stats",
    "rankings",
    "best_host",
    "best_friend",
    "most_games_played",
    "leaderboard",
    "session_summary",
    "Round",
    "RoundInput",
    "Session",
    "SessionStore",
]
