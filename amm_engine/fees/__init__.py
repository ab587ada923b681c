"""Fee configuration and fee-inclusive swap math."""

from amm_engine.fees.config import DEFAULT_FEE_CONFIG, FeeConfig, FeeRate
from amm_engine.fees.swap_math import amount_in_for, amount_out_for

__all__ = [
    "FeeRate",
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    "amount_out_for",
    "amount_in_for",
]
