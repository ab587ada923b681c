"""Pool identity and reserve snapshots.

Snapshots are supplied by the pool registry and validated on construction,
so the math layers can rely on u64 reserves and a canonical pair order.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, model_validator

from amm_engine.curves.base import CurveKind
from amm_engine.fees.config import FeeRate
from amm_engine.models.types import U64, TokenId
from amm_engine.pairs import canonical_pair, is_sorted


@dataclass(frozen=True)
class PoolKey:
    """Canonical identity of a pool: sorted pair plus curve kind."""

    token_x: str
    token_y: str
    curve: CurveKind

    @classmethod
    def for_pair(cls, token_a: str, token_b: str, curve: CurveKind) -> PoolKey:
        """Build the key for an unordered pair.

        Raises:
            IdenticalTokens: If both tokens are the same
        """
        token_x, token_y = canonical_pair(token_a, token_b)
        return cls(token_x=token_x, token_y=token_y, curve=CurveKind(curve))


class PoolSnapshot(BaseModel):
    """Reserves of one pool at a point in time, in canonical orientation."""

    model_config = ConfigDict(frozen=True)

    token_x: TokenId
    token_y: TokenId
    curve: CurveKind
    fee: FeeRate
    reserve_x: U64 = 0
    reserve_y: U64 = 0
    lp_supply: U64 = 0

    @model_validator(mode="after")
    def _check_canonical_order(self) -> PoolSnapshot:
        if not is_sorted(self.token_x, self.token_y):
            raise ValueError(f"Pool tokens not in canonical order: {self.token_x}, {self.token_y}")
        return self

    @property
    def key(self) -> PoolKey:
        return PoolKey(token_x=self.token_x, token_y=self.token_y, curve=self.curve)

    @property
    def is_empty(self) -> bool:
        """True if the pool has never been funded (both reserves zero)."""
        return self.reserve_x == 0 and self.reserve_y == 0

    def with_reserves(
        self, reserve_x: int, reserve_y: int, lp_supply: int | None = None
    ) -> PoolSnapshot:
        """Return a copy with updated reserves (and optionally LP supply).

        Values are revalidated, so an out-of-range reserve is rejected here.
        """
        data = self.model_dump()
        data.update(reserve_x=reserve_x, reserve_y=reserve_y, fee=self.fee)
        if lp_supply is not None:
            data["lp_supply"] = lp_supply
        return PoolSnapshot.model_validate(data)
