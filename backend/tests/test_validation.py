import pytest
from app.services.validation import (
    InvalidRound,
    ValidationError,
    validate_player_name,
    validate_round,
)


def test_accepts_valid_rounds() -> None:
    validate_round("Normal", [], 150, 100)
    validate_round("Normal", [1, 2], 80, 0)
    validate_round("Normal", [3], 160, 400)
    validate_round("1v5", [], 200, 210)


def test_bid_above_ui_range_is_allowed() -> None:
    # Only the lower bound is a rule; the 150 cap belongs to the client.
    validate_round("Normal", [], 155, 100)


@pytest.mark.parametrize(
    "mode, friends, bid, score, msg",
    [
        ("Normal", [1, 2, 3], 150, 100, "Too many friends"),
        ("Normal", [], 70, 100, "Bid must be >= 80"),
        ("Normal", [], 79, 100, "Bid must be >= 80"),
        ("Normal", [], 150, -1, "between 0 and 400"),
        ("Normal", [], 150, 401, "between 0 and 400"),
        ("Solo", [], 150, 100, "Unknown mode"),
        ("Normal", [], True, 100, "must be an integer"),
        ("Normal", [], 150, "90", "must be an integer"),
    ],
    ids=[
        "three-friends",
        "bid-70",
        "bid-79",
        "negative-score",
        "score-over-400",
        "unknown-mode",
        "boolean-bid",
        "string-score",
    ],
)
def test_rejects_invalid_rounds(mode, friends, bid, score, msg) -> None:
    with pytest.raises(InvalidRound) as exc:
        validate_round(mode, friends, bid, score)  # type: ignore[arg-type]
    assert msg.lower() in str(exc.value).lower()


def test_invalid_round_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        validate_round("Normal", [], 10, 0)


def test_player_name_trimmed() -> None:
    assert validate_player_name("  Alice ", ["Player 1", "Player 2"], 0) == "Alice"


def test_player_name_may_keep_own_slot() -> None:
    assert validate_player_name("Player 1", ["Player 1", "Player 2"], 0) == "Player 1"


@pytest.mark.parametrize(
    "name, msg",
    [("   ", "must not be empty"), ("Player 2", "already in the roster")],
    ids=["blank", "duplicate"],
)
def test_player_name_rejected(name, msg) -> None:
    with pytest.raises(ValidationError, match=msg):
        validate_player_name(name, ["Player 1", "Player 2"], 0)
