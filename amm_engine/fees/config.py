"""Fee configuration for the engine."""

import os
from dataclasses import dataclass

from amm_engine.curves.base import CurveKind
from amm_engine.errors import InvalidFee, Unreachable


@dataclass(frozen=True)
class FeeRate:
    """Proportional swap fee as numerator / denominator.

    Attributes:
        numerator: Fee share (30 with denominator 10_000 is 0.3%)
        denominator: Fee scale, must be positive
    """

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        for name, v in (("numerator", self.numerator), ("denominator", self.denominator)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise InvalidFee(f"{name} must be an int, got {type(v).__name__}")
        if self.numerator < 0:
            raise InvalidFee(f"Fee numerator must be non-negative, got {self.numerator}")
        if self.numerator >= self.denominator:
            raise InvalidFee(
                f"Fee numerator must be below denominator: {self.numerator}/{self.denominator}"
            )

    @property
    def multiplier(self) -> int:
        """Share of the input kept for the swap (denominator - numerator).

        For 30/10_000 this returns 9970.
        """
        return self.denominator - self.numerator


@dataclass(frozen=True)
class FeeConfig:
    """Default fees applied to newly registered pools.

    Per-pool fees are owned by the pool registry; this only supplies the
    values used when a pool is registered without an explicit fee.

    Attributes:
        fee_scale: Denominator shared by the default fees (default: 10,000)
        uncorrelated_fee: Numerator for constant product pools (default: 30 = 0.3%)
        stable_fee: Numerator for stable pools (default: 4 = 0.04%)
    """

    fee_scale: int = 10_000
    uncorrelated_fee: int = 30
    stable_fee: int = 4

    def fee_for(self, curve: CurveKind) -> FeeRate:
        """Default fee for a curve kind."""
        if curve == CurveKind.STABLE:
            return FeeRate(self.stable_fee, self.fee_scale)
        if curve == CurveKind.UNCORRELATED:
            return FeeRate(self.uncorrelated_fee, self.fee_scale)
        raise Unreachable(f"Unknown curve kind: {curve!r}")

    @classmethod
    def from_env(cls) -> "FeeConfig":
        """Build a config from environment variables with sensible defaults.

        - AMM_ENGINE_FEE_SCALE: Fee denominator (default: 10000)
        - AMM_ENGINE_UNCORRELATED_FEE: Constant product fee numerator (default: 30)
        - AMM_ENGINE_STABLE_FEE: Stable fee numerator (default: 4)
        """
        config = cls(
            fee_scale=int(os.environ.get("AMM_ENGINE_FEE_SCALE", "10000")),
            uncorrelated_fee=int(os.environ.get("AMM_ENGINE_UNCORRELATED_FEE", "30")),
            stable_fee=int(os.environ.get("AMM_ENGINE_STABLE_FEE", "4")),
        )
        # Fail at load time rather than on first pool registration
        config.fee_for(CurveKind.UNCORRELATED)
        config.fee_for(CurveKind.STABLE)
        return config


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
