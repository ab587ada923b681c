"""Swap and liquidity orchestration.

SwapRouter is the caller-facing entry point. Every operation follows the
same sequence:

    validate -> canonicalize orientation -> compute -> re-orient -> bounds-check -> apply

Pools are stored under the canonical order of their pair. Callers may name
the tokens in either order; amounts are flipped into pool orientation for
the math and flipped back before being returned, so the reordering is never
visible. A pool update is written only after every check has passed.

Supports:
- Exact input swaps with a minimum output
- Exact output swaps with a maximum input
- Unchecked swaps for callers (e.g. multi-hop routers) that bound the
  aggregate route themselves
- Price-preserving deposits and proportional withdrawals
"""

from __future__ import annotations

import structlog

from amm_engine.curves.base import CurveKind
from amm_engine.errors import (
    InsufficientOutputX,
    InsufficientOutputY,
    InvalidAmount,
    OutputBelowMinimum,
    PoolNotFound,
    RequiredInputExceedsMax,
    UnknownToken,
)
from amm_engine.fees.swap_math import amount_in_for, amount_out_for
from amm_engine.liquidity import (
    MINIMAL_LIQUIDITY,
    convert_with_current_price,
    lp_amount_for_deposit,
    optimal_deposit,
    withdrawal_amounts,
)
from amm_engine.models.pool import PoolSnapshot
from amm_engine.models.quotes import DepositQuote, SwapQuote, WithdrawalQuote
from amm_engine.pairs import is_sorted
from amm_engine.pools.registry import PoolRegistry
from amm_engine.safe_int import U64_MAX, S
from amm_engine.tokens import TokenMetadata, decimals_scale

logger = structlog.get_logger()


def _flip(pair: tuple[int, int], sorted_: bool) -> tuple[int, int]:
    """Map a pair of amounts between caller and pool orientation."""
    if sorted_:
        return pair
    return pair[1], pair[0]


def _validate_bound(value: int, name: str) -> None:
    if value < 0 or value > U64_MAX:
        raise InvalidAmount(f"{name} must be in [0, {U64_MAX}], got {value}")


class SwapRouter:
    """Routes swaps and liquidity operations through registered pools.

    Args:
        pool_registry: Source of pool snapshots and sink for updates.
        token_metadata: Token decimals, required only for stable pools.
    """

    def __init__(
        self,
        pool_registry: PoolRegistry,
        token_metadata: TokenMetadata | None = None,
    ) -> None:
        self._registry = pool_registry
        self._token_metadata = token_metadata

    # --- Pool lookups ---

    def _get_pool(self, token_a: str, token_b: str, curve: CurveKind) -> PoolSnapshot:
        pool = self._registry.get_pool(token_a, token_b, curve)
        if pool is None:
            curve_name = getattr(curve, "value", curve)
            raise PoolNotFound(f"No {curve_name} pool for {token_a}/{token_b}")
        return pool

    def _pool_scales(self, pool: PoolSnapshot) -> tuple[int, int]:
        """Decimal scales in pool orientation; (0, 0) for uncorrelated pools."""
        if pool.curve != CurveKind.STABLE:
            return 0, 0
        if self._token_metadata is None:
            raise UnknownToken("Stable pools need token metadata, none configured")
        return (
            decimals_scale(self._token_metadata, pool.token_x),
            decimals_scale(self._token_metadata, pool.token_y),
        )

    def get_reserves(self, token_x: str, token_y: str, curve: CurveKind) -> tuple[int, int]:
        """Reserves of (token_x, token_y) in the caller's order."""
        sorted_ = is_sorted(token_x, token_y)
        pool = self._get_pool(token_x, token_y, curve)
        return _flip((pool.reserve_x, pool.reserve_y), sorted_)

    def get_decimals_scales(self, token_x: str, token_y: str, curve: CurveKind) -> tuple[int, int]:
        """Decimal scales of (token_x, token_y) in the caller's order."""
        sorted_ = is_sorted(token_x, token_y)
        pool = self._get_pool(token_x, token_y, curve)
        return _flip(self._pool_scales(pool), sorted_)

    # --- Quotes ---

    def get_amount_out(
        self, token_in: str, token_out: str, curve: CurveKind, amount_in: int
    ) -> int:
        """Output for selling amount_in of token_in. No state change."""
        sorted_ = is_sorted(token_in, token_out)
        pool = self._get_pool(token_in, token_out, curve)
        return self._amount_out(pool, sorted_, amount_in)

    def get_amount_in(
        self, token_in: str, token_out: str, curve: CurveKind, amount_out: int
    ) -> int:
        """Input of token_in needed to buy amount_out of token_out. No state change."""
        sorted_ = is_sorted(token_in, token_out)
        pool = self._get_pool(token_in, token_out, curve)
        return self._amount_in(pool, sorted_, amount_out)

    def _amount_out(self, pool: PoolSnapshot, sorted_: bool, amount_in: int) -> int:
        reserve_in, reserve_out = _flip((pool.reserve_x, pool.reserve_y), sorted_)
        scale_in, scale_out = _flip(self._pool_scales(pool), sorted_)
        return amount_out_for(
            pool.curve, amount_in, reserve_in, reserve_out, scale_in, scale_out, pool.fee
        )

    def _amount_in(self, pool: PoolSnapshot, sorted_: bool, amount_out: int) -> int:
        reserve_in, reserve_out = _flip((pool.reserve_x, pool.reserve_y), sorted_)
        scale_in, scale_out = _flip(self._pool_scales(pool), sorted_)
        return amount_in_for(
            pool.curve, amount_out, reserve_out, reserve_in, scale_out, scale_in, pool.fee
        )

    # --- Swaps ---

    def swap_exact_in(
        self,
        token_in: str,
        token_out: str,
        curve: CurveKind,
        amount_in: int,
        min_amount_out: int,
    ) -> SwapQuote:
        """Sell exactly amount_in, receiving at least min_amount_out.

        Raises:
            OutputBelowMinimum: If the computed output is below min_amount_out
        """
        _validate_bound(min_amount_out, "min_amount_out")
        sorted_ = is_sorted(token_in, token_out)
        pool = self._get_pool(token_in, token_out, curve)

        amount_out = self._amount_out(pool, sorted_, amount_in)
        if amount_out < min_amount_out:
            logger.debug(
                "swap_output_below_minimum",
                amount_out=amount_out,
                min_amount_out=min_amount_out,
            )
            raise OutputBelowMinimum(f"Output {amount_out} is below minimum {min_amount_out}")

        self._apply_swap(pool, sorted_, amount_in, amount_out)
        logger.debug(
            "swap_exact_in",
            token_in=token_in,
            token_out=token_out,
            curve=pool.curve.value,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return SwapQuote(token_in, token_out, pool.curve, amount_in, amount_out)

    def swap_exact_out(
        self,
        token_in: str,
        token_out: str,
        curve: CurveKind,
        amount_out: int,
        max_amount_in: int,
    ) -> SwapQuote:
        """Buy exactly amount_out, paying at most max_amount_in.

        Raises:
            RequiredInputExceedsMax: If the required input is above max_amount_in
        """
        _validate_bound(max_amount_in, "max_amount_in")
        sorted_ = is_sorted(token_in, token_out)
        pool = self._get_pool(token_in, token_out, curve)

        amount_in = self._amount_in(pool, sorted_, amount_out)
        if amount_in > max_amount_in:
            logger.debug(
                "swap_input_above_maximum",
                amount_in=amount_in,
                max_amount_in=max_amount_in,
            )
            raise RequiredInputExceedsMax(
                f"Required input {amount_in} exceeds maximum {max_amount_in}"
            )

        self._apply_swap(pool, sorted_, amount_in, amount_out)
        logger.debug(
            "swap_exact_out",
            token_in=token_in,
            token_out=token_out,
            curve=pool.curve.value,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return SwapQuote(token_in, token_out, pool.curve, amount_in, amount_out)

    def swap_unchecked(
        self,
        token_in: str,
        token_out: str,
        curve: CurveKind,
        amount_in: int,
    ) -> SwapQuote:
        """Sell exactly amount_in with no slippage bound.

        For callers that already bound the aggregate of a multi-pool route.
        Orientation and fee math are identical to swap_exact_in.
        """
        sorted_ = is_sorted(token_in, token_out)
        pool = self._get_pool(token_in, token_out, curve)

        amount_out = self._amount_out(pool, sorted_, amount_in)
        self._apply_swap(pool, sorted_, amount_in, amount_out)
        logger.debug(
            "swap_unchecked",
            token_in=token_in,
            token_out=token_out,
            curve=pool.curve.value,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return SwapQuote(token_in, token_out, pool.curve, amount_in, amount_out)

    def _apply_swap(
        self, pool: PoolSnapshot, sorted_: bool, amount_in: int, amount_out: int
    ) -> None:
        """Write post-swap reserves. The whole input, fee included, stays in the pool."""
        reserve_in, reserve_out = _flip((pool.reserve_x, pool.reserve_y), sorted_)
        new_reserve_in = (S(reserve_in) + S(amount_in)).to_u64()
        new_reserve_out = (S(reserve_out) - S(amount_out)).to_u64()
        reserve_x, reserve_y = _flip((new_reserve_in, new_reserve_out), sorted_)
        self._registry.update_pool(pool.with_reserves(reserve_x, reserve_y))

    # --- Liquidity ---

    def convert_with_current_price(
        self, token_in: str, token_out: str, curve: CurveKind, amount_in: int
    ) -> int:
        """Value of amount_in of token_in in token_out at the spot price, no fee."""
        sorted_ = is_sorted(token_in, token_out)
        pool = self._get_pool(token_in, token_out, curve)
        reserve_in, reserve_out = _flip((pool.reserve_x, pool.reserve_y), sorted_)
        return convert_with_current_price(amount_in, reserve_in, reserve_out)

    def calc_optimal_deposit(
        self,
        token_x: str,
        token_y: str,
        curve: CurveKind,
        x_desired: int,
        y_desired: int,
        x_min: int,
        y_min: int,
    ) -> tuple[int, int]:
        """Deposit amounts (x_used, y_used) that keep the pool price unchanged."""
        sorted_ = is_sorted(token_x, token_y)
        pool = self._get_pool(token_x, token_y, curve)
        return self._optimal_deposit(pool, sorted_, x_desired, y_desired, x_min, y_min)

    def _optimal_deposit(
        self,
        pool: PoolSnapshot,
        sorted_: bool,
        x_desired: int,
        y_desired: int,
        x_min: int,
        y_min: int,
    ) -> tuple[int, int]:
        desired_x, desired_y = _flip((x_desired, y_desired), sorted_)
        min_x, min_y = _flip((x_min, y_min), sorted_)
        try:
            used = optimal_deposit(
                desired_x, desired_y, min_x, min_y, pool.reserve_x, pool.reserve_y
            )
        except InsufficientOutputX as err:
            if sorted_:
                raise
            raise InsufficientOutputY(str(err)) from err
        except InsufficientOutputY as err:
            if sorted_:
                raise
            raise InsufficientOutputX(str(err)) from err
        return _flip(used, sorted_)

    def add_liquidity(
        self,
        token_x: str,
        token_y: str,
        curve: CurveKind,
        x_desired: int,
        y_desired: int,
        x_min: int,
        y_min: int,
    ) -> DepositQuote:
        """Deposit into a pool at the current price and mint LP.

        The first deposit into an empty pool sets the price and locks
        MINIMAL_LIQUIDITY LP units in the supply.
        """
        for name, value in (
            ("x_desired", x_desired),
            ("y_desired", y_desired),
            ("x_min", x_min),
            ("y_min", y_min),
        ):
            _validate_bound(value, name)
        sorted_ = is_sorted(token_x, token_y)
        pool = self._get_pool(token_x, token_y, curve)

        amount_x, amount_y = self._optimal_deposit(
            pool, sorted_, x_desired, y_desired, x_min, y_min
        )
        pool_x, pool_y = _flip((amount_x, amount_y), sorted_)
        lp_minted = lp_amount_for_deposit(
            pool_x, pool_y, pool.reserve_x, pool.reserve_y, pool.lp_supply
        )

        locked = MINIMAL_LIQUIDITY if pool.lp_supply == 0 else 0
        new_supply = (S(pool.lp_supply) + S(lp_minted) + S(locked)).to_u64()
        new_reserve_x = (S(pool.reserve_x) + S(pool_x)).to_u64()
        new_reserve_y = (S(pool.reserve_y) + S(pool_y)).to_u64()
        self._registry.update_pool(pool.with_reserves(new_reserve_x, new_reserve_y, new_supply))

        logger.info(
            "liquidity_added",
            token_x=token_x,
            token_y=token_y,
            curve=pool.curve.value,
            amount_x=amount_x,
            amount_y=amount_y,
            lp_minted=lp_minted,
        )
        return DepositQuote(amount_x=amount_x, amount_y=amount_y, lp_minted=lp_minted)

    def get_withdrawal_amounts(
        self, token_x: str, token_y: str, curve: CurveKind, lp_amount: int
    ) -> tuple[int, int]:
        """Amounts of (token_x, token_y) paid out for burning lp_amount."""
        sorted_ = is_sorted(token_x, token_y)
        pool = self._get_pool(token_x, token_y, curve)
        shares = withdrawal_amounts(lp_amount, pool.lp_supply, pool.reserve_x, pool.reserve_y)
        return _flip(shares, sorted_)

    def remove_liquidity(
        self,
        token_x: str,
        token_y: str,
        curve: CurveKind,
        lp_amount: int,
        x_min: int,
        y_min: int,
    ) -> WithdrawalQuote:
        """Burn LP for a proportional share of both reserves.

        Raises:
            InsufficientOutputX: If the X share is below x_min
            InsufficientOutputY: If the Y share is below y_min
        """
        _validate_bound(x_min, "x_min")
        _validate_bound(y_min, "y_min")
        sorted_ = is_sorted(token_x, token_y)
        pool = self._get_pool(token_x, token_y, curve)

        pool_x, pool_y = withdrawal_amounts(
            lp_amount, pool.lp_supply, pool.reserve_x, pool.reserve_y
        )
        amount_x, amount_y = _flip((pool_x, pool_y), sorted_)
        if amount_x < x_min:
            raise InsufficientOutputX(f"X share {amount_x} is below minimum {x_min}")
        if amount_y < y_min:
            raise InsufficientOutputY(f"Y share {amount_y} is below minimum {y_min}")

        new_supply = (S(pool.lp_supply) - S(lp_amount)).to_u64()
        new_reserve_x = (S(pool.reserve_x) - S(pool_x)).to_u64()
        new_reserve_y = (S(pool.reserve_y) - S(pool_y)).to_u64()
        self._registry.update_pool(pool.with_reserves(new_reserve_x, new_reserve_y, new_supply))

        logger.info(
            "liquidity_removed",
            token_x=token_x,
            token_y=token_y,
            curve=pool.curve.value,
            amount_x=amount_x,
            amount_y=amount_y,
            lp_burned=lp_amount,
        )
        return WithdrawalQuote(amount_x=amount_x, amount_y=amount_y, lp_burned=lp_amount)
