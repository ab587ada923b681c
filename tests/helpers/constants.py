"""Shared token constants for tests.

Token identifiers are fully qualified type names. Canonical order compares
the length prefix first, so the shorter identifiers sort first:
BTC < ETH < USDC < USDT.

Usage:
    from tests.helpers import BTC, USDT
    # or
    from tests.helpers.constants import BTC, USDT
"""

# =============================================================================
# Volatile assets
# =============================================================================

BTC = "0x1::coins::BTC"  # 8 decimals
ETH = "0x1::coins::ETH"  # 8 decimals

# =============================================================================
# Stablecoins
# =============================================================================

USDC = "0x1::coins::USDC"  # 6 decimals
USDT = "0x1::coins::USDT"  # 8 decimals

# =============================================================================
# Token decimals lookup (for stable pools)
# =============================================================================

TOKEN_DECIMALS = {
    BTC: 8,
    ETH: 8,
    USDC: 6,
    USDT: 8,
}

# =============================================================================
# Common amounts
# =============================================================================

ONE_MILLION = 1_000_000
SCALE_6 = 10**6
SCALE_8 = 10**8
