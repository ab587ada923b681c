"""Liquidity allocation math.

Deposits are fee-free and must not move the pool price, so both sides are
sized from the current reserve ratio. Withdrawals pay out a proportional
share of each reserve.

All results truncate toward zero, which keeps rounding in the pool's favor:
a deposit followed by a withdrawal of the minted LP amount never returns
more than was deposited.
"""

from __future__ import annotations

import structlog

from amm_engine.errors import (
    ArithmeticOverflow,
    ConversionOverflow,
    InsufficientInitialLiquidity,
    InsufficientOutputX,
    InsufficientOutputY,
    InvalidAmount,
    InvalidReserve,
    Unreachable,
    ZeroAmount,
)
from amm_engine.math.kernel import mul_div, mul_to_wide, sqrt
from amm_engine.safe_int import S

logger = structlog.get_logger()

# LP amount locked forever on the first deposit so the supply never returns to zero
MINIMAL_LIQUIDITY = 1000


def convert_with_current_price(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Convert an amount of one token to the other at the spot price.

    Formula: amount_in * reserve_out / reserve_in (no fee)

    Raises:
        InvalidAmount: If amount_in is zero
        InvalidReserve: If either reserve is zero
        ConversionOverflow: If the result does not fit in u64
    """
    if amount_in <= 0:
        raise InvalidAmount(f"Amount to convert must be positive, got {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InvalidReserve(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    try:
        return mul_div(amount_in, reserve_out, reserve_in)
    except ArithmeticOverflow as err:
        raise ConversionOverflow(
            f"{amount_in} * {reserve_out} / {reserve_in} does not fit in u64"
        ) from err


def optimal_deposit(
    x_desired: int,
    y_desired: int,
    x_min: int,
    y_min: int,
    reserve_x: int,
    reserve_y: int,
) -> tuple[int, int]:
    """Size a deposit to the current price without exceeding desired amounts.

    A fresh pool (both reserves zero) takes the desired amounts as-is; the
    first depositor sets the price. Otherwise the X side is tried in full
    first, and the Y side caps the deposit when X would need too much Y.

    Args:
        x_desired: Most X the caller will deposit
        y_desired: Most Y the caller will deposit
        x_min: Least X the caller accepts to deposit
        y_min: Least Y the caller accepts to deposit
        reserve_x: Current X reserve
        reserve_y: Current Y reserve

    Returns:
        Tuple of (x_used, y_used)

    Raises:
        InsufficientOutputY: If the Y amount implied by x_desired is below y_min
        InsufficientOutputX: If the X amount implied by y_desired is below x_min
        InvalidAmount / InvalidReserve / ConversionOverflow: From the price conversion
    """
    if reserve_x == 0 and reserve_y == 0:
        return x_desired, y_desired

    y_implied = convert_with_current_price(x_desired, reserve_x, reserve_y)
    if y_implied <= y_desired:
        if y_implied < y_min:
            raise InsufficientOutputY(f"Implied Y {y_implied} is below minimum {y_min}")
        return x_desired, y_implied

    x_implied = convert_with_current_price(y_desired, reserve_y, reserve_x)
    if x_implied > x_desired:
        raise Unreachable(f"Implied X {x_implied} exceeds desired X {x_desired}")
    if x_implied < x_min:
        raise InsufficientOutputX(f"Implied X {x_implied} is below minimum {x_min}")
    return x_implied, y_desired


def withdrawal_amounts(
    lp_burn_amount: int,
    lp_total_supply: int,
    reserve_x: int,
    reserve_y: int,
) -> tuple[int, int]:
    """Proportional share of both reserves for burning LP tokens.

    Formula: x_out = lp_burn_amount * reserve_x / lp_total_supply (same for y)

    Raises:
        InvalidAmount: If the burn amount is zero or above the supply
        InvalidReserve: If the LP supply is zero
        ZeroAmount: If either share rounds down to zero
    """
    if lp_total_supply <= 0:
        raise InvalidReserve("LP supply is zero")
    if lp_burn_amount <= 0 or lp_burn_amount > lp_total_supply:
        raise InvalidAmount(
            f"LP burn amount must be in [1, {lp_total_supply}], got {lp_burn_amount}"
        )

    x_out = mul_div(reserve_x, lp_burn_amount, lp_total_supply)
    y_out = mul_div(reserve_y, lp_burn_amount, lp_total_supply)
    if x_out == 0 or y_out == 0:
        raise ZeroAmount(f"Burning {lp_burn_amount} LP yields ({x_out}, {y_out})")
    return x_out, y_out


def lp_amount_for_deposit(
    amount_x: int,
    amount_y: int,
    reserve_x: int,
    reserve_y: int,
    lp_total_supply: int,
) -> int:
    """LP amount minted for a deposit already sized by optimal_deposit.

    First deposit: sqrt(x * y) - MINIMAL_LIQUIDITY. The locked amount is
    counted in the supply but never minted to anyone.
    Later deposits: min(x * supply / reserve_x, y * supply / reserve_y).

    Raises:
        InsufficientInitialLiquidity: If sqrt(x * y) <= MINIMAL_LIQUIDITY
        ZeroAmount: If the minted amount rounds down to zero
    """
    if lp_total_supply == 0:
        initial = sqrt(mul_to_wide(amount_x, amount_y))
        if initial <= MINIMAL_LIQUIDITY:
            raise InsufficientInitialLiquidity(
                f"Initial liquidity {initial} must exceed {MINIMAL_LIQUIDITY}"
            )
        return initial - MINIMAL_LIQUIDITY

    if reserve_x <= 0 or reserve_y <= 0:
        raise InvalidReserve(f"Reserves must be positive: ({reserve_x}, {reserve_y})")
    x_liquidity = S(mul_div(amount_x, lp_total_supply, reserve_x))
    y_liquidity = S(mul_div(amount_y, lp_total_supply, reserve_y))
    minted = x_liquidity.min(y_liquidity).value
    if minted == 0:
        logger.debug("lp_mint_rounded_to_zero", amount_x=amount_x, amount_y=amount_y)
        raise ZeroAmount(f"Depositing ({amount_x}, {amount_y}) mints no LP")
    return minted
