"""Overflow-checked integer kernel.

Multiply-then-divide primitives over emulated u64/u128 widths. Intermediate
products are formed at double width, and every result is narrowed back with
an explicit bounds check so nothing ever wraps or truncates silently.

All division truncates toward zero; operands are never negative.
"""

from __future__ import annotations

import math

from amm_engine.errors import ArithmeticOverflow, DivisionByZero
from amm_engine.safe_int import U64_MAX, U128_MAX, S

__all__ = [
    "mul_to_wide",
    "mul_div",
    "mul_div_wide",
    "sqrt",
    "pow10",
    "MAX_POW10_EXPONENT",
]

# 10^19 is the largest power of ten that fits in u64
MAX_POW10_EXPONENT = 19


def _require(value: int, bound: int, name: str) -> int:
    """Check that an operand fits its declared width."""
    if value < 0 or value > bound:
        raise ArithmeticOverflow(f"{name}={value} is outside [0, {bound}]")
    return value


def mul_to_wide(a: int, b: int) -> int:
    """Exact widening multiply of two u64 values into u128.

    Raises:
        ArithmeticOverflow: If either operand is not a u64
    """
    _require(a, U64_MAX, "a")
    _require(b, U64_MAX, "b")
    return (S(a) * S(b)).to_u128()


def mul_div(a: int, b: int, c: int) -> int:
    """Compute floor(a * b / c) for u64 operands.

    The product is formed at u128 width, so only the final result can
    overflow.

    Args:
        a: First factor (u64)
        b: Second factor (u64)
        c: Divisor (u64, non-zero)

    Returns:
        The quotient as u64

    Raises:
        DivisionByZero: If c is zero
        ArithmeticOverflow: If the result exceeds u64, or an operand is not a u64
    """
    _require(a, U64_MAX, "a")
    _require(b, U64_MAX, "b")
    _require(c, U64_MAX, "c")
    if c == 0:
        raise DivisionByZero(f"mul_div({a}, {b}, 0)")
    return ((S(a) * S(b)) // S(c)).to_u64()


def mul_div_wide(a: int, b: int, c: int) -> int:
    """Compute floor(a * b / c) for u128 operands, narrowed to u64.

    Used for chained computations whose inputs are already widened. The
    product a * b must itself fit in u128.

    Raises:
        DivisionByZero: If c is zero
        ArithmeticOverflow: If a * b exceeds u128, the result exceeds u64,
            or an operand is not a u128
    """
    _require(a, U128_MAX, "a")
    _require(b, U128_MAX, "b")
    _require(c, U128_MAX, "c")
    if c == 0:
        raise DivisionByZero(f"mul_div_wide({a}, {b}, 0)")
    product = S(a) * S(b)
    product.to_u128()
    return (product // S(c)).to_u64()


def sqrt(y: int) -> int:
    """Floor square root of a u128 value (always fits in u64)."""
    _require(y, U128_MAX, "y")
    return math.isqrt(y)


def pow10(exponent: int) -> int:
    """Return 10**exponent as u64.

    Raises:
        ArithmeticOverflow: If exponent is negative or the power exceeds u64
    """
    if exponent < 0 or exponent > MAX_POW10_EXPONENT:
        raise ArithmeticOverflow(f"10^{exponent} does not fit in u64")
    return 10**exponent
