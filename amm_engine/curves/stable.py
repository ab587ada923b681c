"""Stable curve for pegged pairs.

Uses the invariant x^3 * y + x * y^3 = k, which is flat around a 1:1 price.
Amounts are normalized to a common 8-decimal unit before the invariant is
applied and denormalized afterwards. The reserve that keeps k constant is
found with Newton's method on integers.

IMPORTANT: All intermediate values are bounded to 256 bits. Every rounding
step is part of the pricing and must not be reordered or simplified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from amm_engine.curves.base import Curve, CurveKind
from amm_engine.errors import InsufficientLiquidity
from amm_engine.math.kernel import mul_div, mul_to_wide
from amm_engine.safe_int import S, SafeInt

if TYPE_CHECKING:
    from amm_engine.fees.config import FeeRate

logger = structlog.get_logger()

# Common unit amounts are normalized to before applying the invariant
ONE_E_8 = 10**8

# Maximum iterations for Newton's method
_STABLE_MAX_ITERATIONS = 255


def _normalize(amount: int | SafeInt, scale: int) -> SafeInt:
    """Express amount in the common 8-decimal unit (rounds down)."""
    return (S(amount) * S(ONE_E_8)) // S(scale)


def _denormalize(amount: SafeInt, scale: int) -> SafeInt:
    """Express a normalized amount in token units (rounds down)."""
    return (amount * S(scale)) // S(ONE_E_8)


def _f(x0: SafeInt, y: SafeInt) -> SafeInt:
    """Invariant value x0 * y^3 + x0^3 * y."""
    a = x0 * (y * y * y)
    b = (x0 * x0 * x0) * y
    result = a + b
    result.to_u256()
    return result


def _d(x0: SafeInt, y: SafeInt) -> SafeInt:
    """Derivative of the invariant in y: 3 * x0 * y^2 + x0^3."""
    result = S(3) * x0 * (y * y) + x0 * x0 * x0
    result.to_u256()
    return result


def get_y(x0: int | SafeInt, xy: int | SafeInt, y: int | SafeInt) -> SafeInt:
    """Solve f(x0, y) = xy for y with Newton's method, starting from y.

    Each round moves y by dy = (k - xy) / f'(y). Steps up are rounded up
    (+1) and steps down are rounded down, and iteration stops as soon as a
    step is at most one unit.

    Args:
        x0: The known (normalized) reserve after the trade
        xy: Invariant value to preserve
        y: Starting guess, normally the current (normalized) reserve

    Returns:
        The solved reserve (normalized)

    Raises:
        Underflow: If a step would take y below zero
        DivisionByZero: If the derivative vanishes (x0 == 0)
    """
    x0, xy, y = S(x0), S(xy), S(y)

    for _ in range(_STABLE_MAX_ITERATIONS):
        k = _f(x0, y)
        if k < xy:
            dy = (xy - k) // _d(x0, y) + 1
            y = y + dy
        else:
            dy = (k - xy) // _d(x0, y)
            y = y - dy

        if dy <= 1:
            return y

    logger.debug(
        "stable_get_y_not_converged",
        iterations=_STABLE_MAX_ITERATIONS,
        x0=x0.value,
        y=y.value,
    )
    return y


class StableCurve(Curve):
    """Stable-swap math with decimal normalization."""

    kind = CurveKind.STABLE

    def lp_value(self, reserve_x: int, scale_x: int, reserve_y: int, scale_y: int) -> int:
        """Invariant x * y * (x^2 + y^2) over normalized reserves."""
        x = _normalize(reserve_x, scale_x)
        y = _normalize(reserve_y, scale_y)
        return ((x * y) * (x * x + y * y)).to_u256()

    def coin_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        scale_in: int,
        scale_out: int,
    ) -> int:
        """Calculate output amount for a fee-adjusted input.

        Algorithm:
            1. k = lp_value(reserve_in, reserve_out)
            2. x0 = normalized reserve_in + normalized amount_in
            3. y = get_y(x0, k, normalized reserve_out)
            4. Return denormalized (normalized reserve_out - y)
        """
        xy = self.lp_value(reserve_in, scale_in, reserve_out, scale_out)

        reserve_in_n = _normalize(reserve_in, scale_in)
        reserve_out_n = _normalize(reserve_out, scale_out)
        amount_in_n = _normalize(amount_in, scale_in)

        total_reserve = amount_in_n + reserve_in_n
        y = reserve_out_n - get_y(total_reserve, xy, reserve_out_n)

        return _denormalize(y, scale_out).to_u128()

    def coin_in(
        self,
        amount_out: int,
        reserve_out: int,
        reserve_in: int,
        scale_out: int,
        scale_in: int,
    ) -> int:
        """Calculate input needed for an exact output, before fees.

        Algorithm:
            1. k = lp_value(reserve_in, reserve_out)
            2. x0 = normalized reserve_out - normalized amount_out
            3. x = get_y(x0, k, normalized reserve_in)
            4. Return denormalized (x - normalized reserve_in)

        Raises:
            InsufficientLiquidity: If normalization leaves no output reserve
                beyond the requested amount
        """
        xy = self.lp_value(reserve_in, scale_in, reserve_out, scale_out)

        reserve_in_n = _normalize(reserve_in, scale_in)
        reserve_out_n = _normalize(reserve_out, scale_out)
        amount_out_n = _normalize(amount_out, scale_out)
        if amount_out_n >= reserve_out_n:
            raise InsufficientLiquidity(
                f"Normalized output {amount_out_n} exhausts normalized reserve {reserve_out_n}"
            )

        total_reserve = reserve_out_n - amount_out_n
        x = get_y(total_reserve, xy, reserve_in_n) - reserve_in_n

        return _denormalize(x, scale_in).to_u128()

    def amount_out_for(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        scale_in: int,
        scale_out: int,
        fee: FeeRate,
    ) -> int:
        """Deduct the fee from the input, rounding the kept amount up, then swap."""
        scaled = S(mul_to_wide(amount_in, fee.multiplier))
        amount_in_after_fees = scaled.ceiling_div(fee.denominator)
        amount_out = self.coin_out(
            amount_in_after_fees.value, reserve_in, reserve_out, scale_in, scale_out
        )
        return S(amount_out).to_u64()

    def amount_in_for(
        self,
        amount_out: int,
        reserve_out: int,
        reserve_in: int,
        scale_out: int,
        scale_in: int,
        fee: FeeRate,
    ) -> int:
        """Solve the fee-free input, then gross it up by the fee.

        Both steps add one unit after truncating.
        """
        raw_in = S(self.coin_in(amount_out, reserve_out, reserve_in, scale_out, scale_in))
        amount_in = (raw_in + 1).to_u64()
        return (S(mul_div(amount_in, fee.denominator, fee.multiplier)) + 1).to_u64()


stable_curve = StableCurve()
