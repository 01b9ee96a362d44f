import pytest

from baseball_analytics.domain.game_state import GameState
from baseball_analytics.domain.play import Bases
from baseball_analytics.services.game_state_codec import (
    canonicalize,
    clamp_score_diff,
    display_bases,
    normalize_runners,
    runners_code,
    runners_on,
)


class TestRunnersCode:
    def test_positional(self) -> None:
        assert runners_code(False, False, False) == "___"
        assert runners_code(True, False, False) == "1__"
        assert runners_code(False, True, False) == "_2_"
        assert runners_code(True, False, True) == "1_3"
        assert runners_code(True, True, True) == "123"

    def test_normalize_accepts_both_forms(self) -> None:
        assert normalize_runners("101") == "1_3"
        assert normalize_runners("1_3") == "1_3"
        assert normalize_runners("000") == "___"
        assert normalize_runners(Bases(second=True)) == "_2_"

    def test_normalize_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError):
            normalize_runners("12")

    def test_display_bases(self) -> None:
        assert display_bases("1_3") == "101"
        assert display_bases("___") == "000"

    def test_runners_on_either_form(self) -> None:
        assert runners_on("110") == 2
        assert runners_on("12_") == 2
        assert runners_on("___") == 0
        assert runners_on("123") == 3


class TestCanonicalize:
    def test_extra_innings_capped(self) -> None:
        assert canonicalize(12, True, 1).inning == 9

    def test_score_diff_clamped(self) -> None:
        assert canonicalize(3, False, 0, score_diff=15).score_diff == 11
        assert canonicalize(3, False, 0, score_diff=-15).score_diff == -11
        assert clamp_score_diff(4) == 4

    def test_full_state(self) -> None:
        state = canonicalize(7, True, 2, Bases(first=True, third=True), -2)
        assert state == GameState(inning=7, is_bottom=True, outs=2, runners_code="1_3", score_diff=-2)

    def test_equivalent_inputs_share_a_key(self) -> None:
        assert canonicalize(10, False, 1, "110", 20) == canonicalize(9, False, 1, "12_", 11)
