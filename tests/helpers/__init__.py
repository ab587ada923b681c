"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token identifiers, decimals and common amounts
- factories: Registry, pool and router factory functions
"""

from tests.helpers.constants import (
    BTC,
    ETH,
    ONE_MILLION,
    SCALE_6,
    SCALE_8,
    TOKEN_DECIMALS,
    USDC,
    USDT,
)
from tests.helpers.factories import make_pool, make_registry, make_router

__all__ = [
    # Constants
    "BTC",
    "ETH",
    "USDC",
    "USDT",
    "TOKEN_DECIMALS",
    "ONE_MILLION",
    "SCALE_6",
    "SCALE_8",
    # Factories
    "make_registry",
    "make_pool",
    "make_router",
]
