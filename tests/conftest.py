"""Pytest configuration and fixtures."""

import pytest
import structlog

from amm_engine.fees import FeeRate
from amm_engine.pools import InMemoryPoolRegistry
from amm_engine.router import SwapRouter
from amm_engine.tokens import StaticTokenMetadata
from tests.helpers import TOKEN_DECIMALS, make_registry, make_router


@pytest.fixture
def registry() -> InMemoryPoolRegistry:
    """Return an empty pool registry."""
    return make_registry()


@pytest.fixture
def token_metadata() -> StaticTokenMetadata:
    """Return decimals for the shared test tokens."""
    return StaticTokenMetadata(TOKEN_DECIMALS)


@pytest.fixture
def router(registry: InMemoryPoolRegistry) -> SwapRouter:
    """Return a router over the registry fixture."""
    return make_router(registry)


@pytest.fixture
def fee_30bps() -> FeeRate:
    """0.3% fee."""
    return FeeRate(30, 10_000)


@pytest.fixture
def fee_3_per_mille() -> FeeRate:
    """0.3% fee expressed over 1000."""
    return FeeRate(3, 1000)


@pytest.fixture
def stable_fee() -> FeeRate:
    """0.04% fee."""
    return FeeRate(4, 10_000)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by scripts under test."""
    yield
    structlog.reset_defaults()
