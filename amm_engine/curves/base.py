"""Base classes for curve implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from amm_engine.fees.config import FeeRate


class CurveKind(str, Enum):
    """Pricing curve of a pool. Fixed for the pool's lifetime."""

    UNCORRELATED = "uncorrelated"
    STABLE = "stable"


class Curve(ABC):
    """Abstract base class for pricing curves.

    coin_out, coin_in and lp_value are fee-free. amount_out_for and
    amount_in_for are fee-inclusive and assume validated inputs (positive
    amount, positive reserves, amount_out below reserve_out); validation
    lives in amm_engine.fees.swap_math. Scale arguments are powers of ten
    that normalize token decimals; curves that do not need them ignore them.
    """

    kind: CurveKind

    @abstractmethod
    def coin_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        scale_in: int,
        scale_out: int,
    ) -> int:
        """Output for an input that has already had the fee deducted."""
        ...

    @abstractmethod
    def coin_in(
        self,
        amount_out: int,
        reserve_out: int,
        reserve_in: int,
        scale_out: int,
        scale_in: int,
    ) -> int:
        """Input needed for an exact output, before fees."""
        ...

    @abstractmethod
    def lp_value(self, reserve_x: int, scale_x: int, reserve_y: int, scale_y: int) -> int:
        """Invariant value of a pool holding the given reserves."""
        ...

    @abstractmethod
    def amount_out_for(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        scale_in: int,
        scale_out: int,
        fee: FeeRate,
    ) -> int:
        """Calculate output amount for a given input, fee deducted from the input.

        Args:
            amount_in: Input token amount (u64)
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            scale_in: Decimal scale of the input token
            scale_out: Decimal scale of the output token
            fee: Pool fee rate

        Returns:
            Output token amount (u64), rounded in the pool's favor
        """
        ...

    @abstractmethod
    def amount_in_for(
        self,
        amount_out: int,
        reserve_out: int,
        reserve_in: int,
        scale_out: int,
        scale_in: int,
        fee: FeeRate,
    ) -> int:
        """Calculate required input for a desired output, fee included.

        Args:
            amount_out: Desired output amount (u64, below reserve_out)
            reserve_out: Reserve of output token in pool
            reserve_in: Reserve of input token in pool
            scale_out: Decimal scale of the output token
            scale_in: Decimal scale of the input token
            fee: Pool fee rate

        Returns:
            Required input amount (u64), rounded up
        """
        ...
