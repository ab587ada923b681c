"""Data models for pools and quotes."""

from amm_engine.models.pool import PoolKey, PoolSnapshot
from amm_engine.models.quotes import DepositQuote, SwapQuote, WithdrawalQuote
from amm_engine.models.types import U64, TokenId, validate_u64

__all__ = [
    "PoolKey",
    "PoolSnapshot",
    "SwapQuote",
    "DepositQuote",
    "WithdrawalQuote",
    "U64",
    "TokenId",
    "validate_u64",
]
