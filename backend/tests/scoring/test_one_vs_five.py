import os, sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from app.scoring import one_vs_five

PLAYERS = ["Ann", "Bo", "Cy", "Di", "Ed", "Flo"]


def test_host_win_awards_400():
    result = one_vs_five.score(PLAYERS, "Cy", bid=200, opponent_score=150)
    assert result.winner == "Host"
    assert result.scores == {"Ann": 0, "Bo": 0, "Cy": 400, "Di": 0, "Ed": 0, "Flo": 0}
    assert result.distribution == "1v5 host win: +400"


def test_opponents_split_when_bid_is_reached():
    result = one_vs_five.score(PLAYERS, "Ann", bid=200, opponent_score=210)
    assert result.winner == "Opponents"
    assert result.scores["Ann"] == 0
    for name in PLAYERS[1:]:
        assert result.scores[name] == pytest.approx(63)
    assert result.distribution == "1v5 opponents: each +63"


def test_exact_bid_is_a_host_loss():
    result = one_vs_five.score(PLAYERS, "Ann", bid=200, opponent_score=200)
    assert result.winner == "Opponents"
    assert result.scores["Bo"] == pytest.approx(60)
