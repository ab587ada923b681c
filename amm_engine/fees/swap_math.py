"""Fee-inclusive swap math.

Validates swap inputs and dispatches to the pool's curve. Rounding always
favors the pool:
- Exact input: the output is truncated
- Exact output: the required input is rounded up at every truncation point,
  so swapping the returned input yields at least the requested output
"""

from __future__ import annotations

from amm_engine.curves import CurveKind, get_curve
from amm_engine.errors import InsufficientLiquidity, InvalidAmount, InvalidReserve
from amm_engine.fees.config import FeeRate
from amm_engine.safe_int import U64_MAX


def _validate_amount(amount: int, name: str) -> None:
    if amount <= 0 or amount > U64_MAX:
        raise InvalidAmount(f"{name} must be in [1, {U64_MAX}], got {amount}")


def _validate_reserves(reserve_in: int, reserve_out: int) -> None:
    for name, reserve in (("reserve_in", reserve_in), ("reserve_out", reserve_out)):
        if reserve <= 0 or reserve > U64_MAX:
            raise InvalidReserve(f"{name} must be in [1, {U64_MAX}], got {reserve}")


def amount_out_for(
    curve: CurveKind,
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    scale_in: int,
    scale_out: int,
    fee: FeeRate,
) -> int:
    """Calculate the output of selling amount_in into a pool.

    Args:
        curve: Pool curve kind
        amount_in: Exact input amount, fee not yet deducted
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        scale_in: Decimal scale of the input token (stable only)
        scale_out: Decimal scale of the output token (stable only)
        fee: Pool fee rate

    Returns:
        Output token amount

    Raises:
        InvalidAmount: If amount_in is zero or not a u64
        InvalidReserve: If either reserve is zero or not a u64
        ArithmeticOverflow: If the result does not fit in u64
        Unreachable: If curve is not a known curve kind
    """
    _validate_amount(amount_in, "amount_in")
    _validate_reserves(reserve_in, reserve_out)
    return get_curve(curve).amount_out_for(
        amount_in, reserve_in, reserve_out, scale_in, scale_out, fee
    )


def amount_in_for(
    curve: CurveKind,
    amount_out: int,
    reserve_out: int,
    reserve_in: int,
    scale_out: int,
    scale_in: int,
    fee: FeeRate,
) -> int:
    """Calculate the input needed to buy exactly amount_out from a pool.

    Args:
        curve: Pool curve kind
        amount_out: Desired output amount
        reserve_out: Reserve of output token in pool
        reserve_in: Reserve of input token in pool
        scale_out: Decimal scale of the output token (stable only)
        scale_in: Decimal scale of the input token (stable only)
        fee: Pool fee rate

    Returns:
        Required input amount, fee included

    Raises:
        InvalidAmount: If amount_out is zero or not a u64
        InvalidReserve: If either reserve is zero or not a u64
        InsufficientLiquidity: If amount_out >= reserve_out
        ArithmeticOverflow: If the result does not fit in u64
        Unreachable: If curve is not a known curve kind
    """
    _validate_amount(amount_out, "amount_out")
    _validate_reserves(reserve_in, reserve_out)
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"amount_out ({amount_out}) must be less than reserve_out ({reserve_out})"
        )
    return get_curve(curve).amount_in_for(
        amount_out, reserve_out, reserve_in, scale_out, scale_in, fee
    )
