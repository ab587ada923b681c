"""Pool storage contracts.

The engine reads pools through the PoolRegistry protocol; InMemoryPoolRegistry
is a dict-backed implementation for hosts and tests.
"""

from amm_engine.pools.registry import InMemoryPoolRegistry, PoolRegistry

__all__ = ["PoolRegistry", "InMemoryPoolRegistry"]
