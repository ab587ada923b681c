"""Constant product curve for uncorrelated pairs.

Prices move along x * y = k. Decimal scales cancel out of the ratio and are
ignored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from amm_engine.curves.base import Curve, CurveKind
from amm_engine.math.kernel import mul_div_wide, mul_to_wide
from amm_engine.safe_int import S

if TYPE_CHECKING:
    from amm_engine.fees.config import FeeRate


class UncorrelatedCurve(Curve):
    """Constant product math with the fee folded into the formula.

    Formula: amount_out = (in * m * res_out) / (res_in * d + in * m)
    Inverse: amount_in = (out * res_in * d) / ((res_out - out) * m) + 1

    where m / d is the share of the input kept after fees (9970 / 10000 for a
    0.3% fee). The fee-adjusted input is never rounded on its own: the fee
    terms scale the reserves passed to coin_out and coin_in instead.
    """

    kind = CurveKind.UNCORRELATED

    def coin_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        scale_in: int,
        scale_out: int,
    ) -> int:
        """Fee-free constant product output: in * res_out / (res_in + in).

        Operands may be u128 (pre-scaled by the fee terms).
        """
        new_reserve_in = (S(reserve_in) + S(amount_in)).to_u128()
        return mul_div_wide(amount_in, reserve_out, new_reserve_in)

    def coin_in(
        self,
        amount_out: int,
        reserve_out: int,
        reserve_in: int,
        scale_out: int,
        scale_in: int,
    ) -> int:
        """Fee-free constant product input: out * res_in / (res_out - out) + 1.

        Operands may be u128 (pre-scaled by the fee terms).
        """
        new_reserve_out = (S(reserve_out) - S(amount_out)).to_u128()
        # Ceiling division: (numerator // denominator) + 1
        amount_in = mul_div_wide(amount_out, reserve_in, new_reserve_out)
        return (S(amount_in) + 1).to_u64()

    def lp_value(self, reserve_x: int, scale_x: int, reserve_y: int, scale_y: int) -> int:
        """Invariant x * y."""
        return mul_to_wide(reserve_x, reserve_y)

    def amount_out_for(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        scale_in: int,
        scale_out: int,
        fee: FeeRate,
    ) -> int:
        amount_in_after_fees = mul_to_wide(amount_in, fee.multiplier)
        scaled_reserve_in = mul_to_wide(reserve_in, fee.denominator)
        return self.coin_out(
            amount_in_after_fees, scaled_reserve_in, reserve_out, scale_in, scale_out
        )

    def amount_in_for(
        self,
        amount_out: int,
        reserve_out: int,
        reserve_in: int,
        scale_out: int,
        scale_in: int,
        fee: FeeRate,
    ) -> int:
        remaining = mul_to_wide((S(reserve_out) - S(amount_out)).to_u64(), fee.multiplier)
        # Chosen so that scaled_reserve_out - amount_out == (reserve_out - amount_out) * m
        scaled_reserve_out = (S(remaining) + S(amount_out)).to_u128()
        scaled_reserve_in = mul_to_wide(reserve_in, fee.denominator)
        return self.coin_in(amount_out, scaled_reserve_out, scaled_reserve_in, scale_out, scale_in)


uncorrelated_curve = UncorrelatedCurve()
