"""AMM pricing and liquidity-math engine."""

from amm_engine.curves import CurveKind
from amm_engine.fees import FeeConfig, FeeRate, amount_in_for, amount_out_for
from amm_engine.liquidity import (
    convert_with_current_price,
    lp_amount_for_deposit,
    optimal_deposit,
    withdrawal_amounts,
)
from amm_engine.pairs import canonical_pair, is_sorted
from amm_engine.pools import InMemoryPoolRegistry, PoolRegistry
from amm_engine.router import SwapRouter

__version__ = "0.1.0"
__all__ = [
    "CurveKind",
    "FeeRate",
    "FeeConfig",
    "amount_out_for",
    "amount_in_for",
    "convert_with_current_price",
    "optimal_deposit",
    "withdrawal_amounts",
    "lp_amount_for_deposit",
    "is_sorted",
    "canonical_pair",
    "PoolRegistry",
    "InMemoryPoolRegistry",
    "SwapRouter",
    "__version__",
]
