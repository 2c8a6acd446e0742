from typing import Sequence

from ..scoring import MAX_FRIENDS, MIN_BID, MODES, NO_BIDS_VALUE, NORMAL, TOTAL_POINTS


class ValidationError(Exception):
    """Raised when submitted input is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRound(ValidationError):
    """Raised when a round configuration breaks the game rules."""


def validate_round(
    mode: str,
    friends: Sequence[int],
    bid: int,
    opponent_score: int,
) -> None:
    """Validate a round configuration before it is scored.

    Rules:
    - ``mode`` must be ``Normal`` or ``1v5``
    - Normal rounds take at most two friends (host already removed)
    - ``bid`` must be >= 80 unless it is the 160 "No Bids" value
    - ``opponent_score`` must lie in [0, 400]

    The upper end of the bid range is left to the client.
    """

    if mode not in MODES:
        raise InvalidRound(f"Unknown mode {mode!r}. Expected one of: {', '.join(MODES)}.")

    # Reject booleans explicitly (bool is a subclass of int in Python)
    for label, value in (("Bid", bid), ("Opponent score", opponent_score)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRound(f"{label} must be an integer.")

    if mode == NORMAL and len(friends) > MAX_FRIENDS:
        raise InvalidRound(
            f"Too many friends. Max allowed is {MAX_FRIENDS}, got {len(friends)}."
        )
    if bid < MIN_BID and bid != NO_BIDS_VALUE:
        raise InvalidRound(
            f"Bid must be >= {MIN_BID} (or {NO_BIDS_VALUE} for No Bids), got {bid}."
        )
    if opponent_score < 0 or opponent_score > TOTAL_POINTS:
        raise InvalidRound(
            f"Opponent score must be between 0 and {TOTAL_POINTS}, got {opponent_score}."
        )

    return None


def validate_player_name(name: str, roster: Sequence[str], index: int) -> str:
    """Return the trimmed ``name`` if it can take roster slot ``index``."""

    if not isinstance(name, str):
        raise ValidationError("Player name must be a string.")
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Player name must not be empty.")
    for i, existing in enumerate(roster):
        if i != index and existing == trimmed:
            raise ValidationError(f"Player name '{trimmed}' is already in the roster.")
    return trimmed
