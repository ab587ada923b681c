"""Results returned by the swap router.

Quotes are computed values, never persisted. Amounts are always reported in
the caller's orientation.
"""

from dataclasses import dataclass

from amm_engine.curves.base import CurveKind


@dataclass(frozen=True)
class SwapQuote:
    """Result of a swap through one pool."""

    token_in: str
    token_out: str
    curve: CurveKind
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class DepositQuote:
    """Amounts taken from the caller for a deposit and the LP amount minted."""

    amount_x: int
    amount_y: int
    lp_minted: int


@dataclass(frozen=True)
class WithdrawalQuote:
    """Amounts paid out for burning LP tokens."""

    amount_x: int
    amount_y: int
    lp_burned: int
