"""Tests for the constant product curve."""

import pytest

from amm_engine.curves import CurveKind, get_curve, uncorrelated_curve
from amm_engine.curves.base import Curve
from amm_engine.errors import ArithmeticOverflow, DivisionByZero
from amm_engine.fees import FeeRate
from amm_engine.safe_int import U64_MAX


class TestCoinOut:
    """Tests for the fee-free constant product output."""

    def test_basic(self):
        """Selling 1000 into 1000/1000 returns half the output reserve."""
        assert uncorrelated_curve.coin_out(1000, 1000, 1000, 0, 0) == 500

    def test_truncates(self):
        """floor(1000 * 1_000_000 / 1_001_000) = 999."""
        assert uncorrelated_curve.coin_out(1000, 1_000_000, 1_000_000, 0, 0) == 999


class TestCoinIn:
    """Tests for the fee-free constant product input."""

    def test_basic(self):
        """Buying 500 from 1000/1000 costs floor(500 * 1000 / 500) + 1."""
        assert uncorrelated_curve.coin_in(500, 1000, 1000, 0, 0) == 1001

    def test_rounds_up(self):
        """floor(999 * 1_000_000 / 999_001) + 1 = 1000."""
        assert uncorrelated_curve.coin_in(999, 1_000_000, 1_000_000, 0, 0) == 1000

    def test_inverts_coin_out(self):
        """Paying the quoted input buys at least the requested output."""
        needed = uncorrelated_curve.coin_in(999, 1_000_000, 1_000_000, 0, 0)
        assert uncorrelated_curve.coin_out(needed, 1_000_000, 1_000_000, 0, 0) >= 999

    def test_output_at_reserve_raises(self):
        with pytest.raises(DivisionByZero):
            uncorrelated_curve.coin_in(1000, 1000, 1000, 0, 0)


class TestLpValue:
    """Tests for the constant product invariant."""

    def test_product_of_reserves(self):
        assert uncorrelated_curve.lp_value(1000, 0, 4000, 0) == 4_000_000

    def test_scales_ignored(self):
        assert uncorrelated_curve.lp_value(1000, 10**6, 4000, 10**8) == 4_000_000

    def test_widens_past_u64(self):
        assert uncorrelated_curve.lp_value(U64_MAX, 0, U64_MAX, 0) == U64_MAX * U64_MAX


class TestAmountOutFor:
    """Tests for the fee-inclusive exact input formula."""

    def test_reference_swap(self, fee_3_per_mille):
        """1000 into 1e6/1e6 at 0.3% returns 996."""
        out = uncorrelated_curve.amount_out_for(1000, 10**6, 10**6, 0, 0, fee_3_per_mille)
        assert out == 996

    def test_same_rate_over_other_denominator(self, fee_30bps):
        """30/10000 prices the same swap identically."""
        out = uncorrelated_curve.amount_out_for(1000, 10**6, 10**6, 0, 0, fee_30bps)
        assert out == 996

    def test_zero_fee(self):
        """With no fee the result is the fee-free output."""
        out = uncorrelated_curve.amount_out_for(1000, 10**6, 10**6, 0, 0, FeeRate(0, 1))
        assert out == 999

    def test_reserves_near_u64_ceiling(self, fee_30bps):
        """Wide intermediates keep near-maximal reserves usable."""
        out = uncorrelated_curve.amount_out_for(1000, U64_MAX, U64_MAX, 0, 0, fee_30bps)
        assert out == 996

    def test_product_beyond_u128_raises(self, fee_30bps):
        """An intermediate product past u128 is reported, not wrapped."""
        with pytest.raises(ArithmeticOverflow):
            uncorrelated_curve.amount_out_for(U64_MAX, U64_MAX, U64_MAX, 0, 0, fee_30bps)

    def test_output_below_reserve(self, fee_30bps):
        """Even a huge input cannot drain the output reserve."""
        out = uncorrelated_curve.amount_out_for(10**15, 1000, 1000, 0, 0, fee_30bps)
        assert out < 1000


class TestAmountInFor:
    """Tests for the fee-inclusive exact output formula."""

    def test_reference_swap(self, fee_3_per_mille):
        """Buying 996 from 1e6/1e6 at 0.3% costs 1000."""
        needed = uncorrelated_curve.amount_in_for(996, 10**6, 10**6, 0, 0, fee_3_per_mille)
        assert needed == 1000

    def test_quote_does_not_exceed_original_input(self, fee_3_per_mille):
        """Quoting the output of a swap back never asks for more than was sold."""
        out = uncorrelated_curve.amount_out_for(1000, 10**6, 10**6, 0, 0, fee_3_per_mille)
        needed = uncorrelated_curve.amount_in_for(out, 10**6, 10**6, 0, 0, fee_3_per_mille)
        assert needed <= 1000

    @pytest.mark.parametrize(
        "amount_out,reserve_out,reserve_in",
        [
            (996, 10**6, 10**6),
            (1, 10**6, 4 * 10**6),
            (123_456, 4 * 10**6, 10**6),
            (3, 7, 5000),
            (10**9, 3 * 10**9, 10**12),
        ],
    )
    def test_quoted_input_buys_requested_output(
        self, amount_out, reserve_out, reserve_in, fee_30bps
    ):
        """Selling the quoted input yields at least the requested output."""
        needed = uncorrelated_curve.amount_in_for(
            amount_out, reserve_out, reserve_in, 0, 0, fee_30bps
        )
        out = uncorrelated_curve.amount_out_for(needed, reserve_in, reserve_out, 0, 0, fee_30bps)
        assert out >= amount_out


class TestCurveLookup:
    """Tests for curve dispatch."""

    def test_get_curve(self):
        assert get_curve(CurveKind.UNCORRELATED) is uncorrelated_curve

    def test_get_curve_accepts_value(self):
        assert get_curve("uncorrelated") is uncorrelated_curve


class TestCurveInterface:
    """Tests for the abstract curve interface."""

    def test_curves_share_fee_free_interface(self):
        """Every curve provides the fee-free primitives."""
        for name in ("coin_out", "coin_in", "lp_value", "amount_out_for", "amount_in_for"):
            assert name in Curve.__abstractmethods__
