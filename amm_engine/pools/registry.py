"""Pool registry contract and an in-memory implementation.

The engine never owns pool storage. It reads snapshots through a
PoolRegistry and hands back updated snapshots once an operation has been
fully computed and checked. Hosts must serialize access to any one pool;
the registry here performs no locking.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from amm_engine.curves.base import CurveKind
from amm_engine.errors import PoolAlreadyExists, PoolNotFound
from amm_engine.fees.config import DEFAULT_FEE_CONFIG, FeeConfig, FeeRate
from amm_engine.models.pool import PoolKey, PoolSnapshot

logger = structlog.get_logger()


@runtime_checkable
class PoolRegistry(Protocol):
    """Lookup and update of pools by canonical identity."""

    def get_pool(self, token_a: str, token_b: str, curve: CurveKind) -> PoolSnapshot | None:
        """Get the pool for a pair (order independent), or None."""
        ...

    def update_pool(self, snapshot: PoolSnapshot) -> None:
        """Store a computed post-operation snapshot."""
        ...


class InMemoryPoolRegistry:
    """Registry of pools held in a dict keyed by PoolKey.

    Args:
        fee_config: Source of default fees for pools registered without one.
    """

    def __init__(self, fee_config: FeeConfig = DEFAULT_FEE_CONFIG) -> None:
        self._fee_config = fee_config
        self._pools: dict[PoolKey, PoolSnapshot] = {}

    def register_pool(
        self,
        token_a: str,
        token_b: str,
        curve: CurveKind,
        fee: FeeRate | None = None,
    ) -> PoolSnapshot:
        """Register an empty pool for an unordered pair.

        Args:
            token_a: One token of the pair (any order)
            token_b: The other token
            curve: Curve kind of the pool
            fee: Pool fee; defaults to the configured fee for the curve

        Returns:
            The new (empty) snapshot in canonical orientation

        Raises:
            IdenticalTokens: If both tokens are the same
            PoolAlreadyExists: If the pair already has a pool with this curve
            ValueError: If curve is not a known curve kind
        """
        curve = CurveKind(curve)
        key = PoolKey.for_pair(token_a, token_b, curve)
        if key in self._pools:
            raise PoolAlreadyExists(f"Pool {key.token_x}/{key.token_y} ({curve.value}) exists")

        snapshot = PoolSnapshot(
            token_x=key.token_x,
            token_y=key.token_y,
            curve=curve,
            fee=fee if fee is not None else self._fee_config.fee_for(curve),
        )
        self._pools[key] = snapshot
        logger.info(
            "pool_registered",
            token_x=key.token_x,
            token_y=key.token_y,
            curve=curve.value,
            fee=f"{snapshot.fee.numerator}/{snapshot.fee.denominator}",
        )
        return snapshot

    def get_pool(self, token_a: str, token_b: str, curve: CurveKind) -> PoolSnapshot | None:
        return self._pools.get(PoolKey.for_pair(token_a, token_b, curve))

    def update_pool(self, snapshot: PoolSnapshot) -> None:
        """Replace the stored snapshot for an existing pool.

        Raises:
            PoolNotFound: If the pool was never registered
        """
        key = snapshot.key
        if key not in self._pools:
            raise PoolNotFound(f"Pool {key.token_x}/{key.token_y} ({key.curve.value}) not found")
        self._pools[key] = snapshot
        logger.debug(
            "reserves_updated",
            token_x=key.token_x,
            token_y=key.token_y,
            reserve_x=snapshot.reserve_x,
            reserve_y=snapshot.reserve_y,
            lp_supply=snapshot.lp_supply,
        )

    def __contains__(self, key: object) -> bool:
        return key in self._pools

    def __len__(self) -> int:
        return len(self._pools)
