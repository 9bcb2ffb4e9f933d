"""Tests for cc_common.credits: integer cents/bps arithmetic."""

import pytest

from src.cc_common.credits import (
    apply_bps,
    bps_to_percent,
    cents_to_display,
    change_bps,
    div_round_half_up,
    ratio_bps,
)


class TestDivRoundHalfUp:
    def test_exact(self) -> None:
        assert div_round_half_up(100, 4) == 25

    def test_half_rounds_up(self) -> None:
        assert div_round_half_up(5, 2) == 3

    def test_below_half_rounds_down(self) -> None:
        assert div_round_half_up(14, 10) == 1

    def test_negative_half_rounds_away_from_zero(self) -> None:
        assert div_round_half_up(-5, 2) == -3

    def test_zero_denominator_raises(self) -> None:
        with pytest.raises(ValueError):
            div_round_half_up(1, 0)


class TestApplyBps:
    def test_minus_fifteen_percent(self) -> None:
        assert apply_bps(10000, -1500) == 8500

    def test_plus_ten_percent(self) -> None:
        assert apply_bps(8500, 1000) == 9350

    def test_rounds_to_nearest_cent(self) -> None:
        # 333 × 1.05 = 349.65
        assert apply_bps(333, 500) == 350

    def test_zero_change(self) -> None:
        assert apply_bps(12345, 0) == 12345

    def test_minus_hundred_percent_is_zero(self) -> None:
        assert apply_bps(10000, -10000) == 0


class TestChangeBps:
    def test_down_fifteen(self) -> None:
        assert change_bps(10000, 8500) == -1500

    def test_unchanged(self) -> None:
        assert change_bps(10000, 10000) == 0

    def test_rounds(self) -> None:
        # 9350 / 10000 - 1 = -6.5%
        assert change_bps(10000, 9350) == -650


class TestRatioBps:
    def test_basic(self) -> None:
        assert ratio_bps(500, 10000) == 500

    def test_zero_whole(self) -> None:
        assert ratio_bps(123, 0) == 0


class TestDisplay:
    def test_percent(self) -> None:
        assert bps_to_percent(-1500) == -15.0

    def test_basic(self) -> None:
        assert cents_to_display(8500) == "85.00 CC"

    def test_large(self) -> None:
        assert cents_to_display(100000) == "1,000.00 CC"

    def test_one_cent(self) -> None:
        assert cents_to_display(1) == "0.01 CC"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-12.00 CC"
