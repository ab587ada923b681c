"""Tests for fee rates and fee configuration."""

import pytest

from amm_engine.curves import CurveKind
from amm_engine.errors import InvalidFee, Unreachable
from amm_engine.fees import DEFAULT_FEE_CONFIG, FeeConfig, FeeRate


class TestFeeRate:
    """Tests for FeeRate validation."""

    def test_multiplier(self):
        assert FeeRate(30, 10_000).multiplier == 9970
        assert FeeRate(0, 1).multiplier == 1

    @pytest.mark.parametrize(
        "numerator,denominator",
        [(10, 10), (11, 10), (-1, 10), (0, 0)],
    )
    def test_invalid_rates_raise(self, numerator, denominator):
        """Fee must be non-negative and strictly below the denominator."""
        with pytest.raises(InvalidFee):
            FeeRate(numerator, denominator)

    def test_non_int_raises(self):
        with pytest.raises(InvalidFee):
            FeeRate(0.3, 100)  # type: ignore
        with pytest.raises(InvalidFee):
            FeeRate(True, 100)

    def test_invalid_fee_is_value_error(self):
        assert issubclass(InvalidFee, ValueError)

    def test_frozen(self):
        rate = FeeRate(30, 10_000)
        with pytest.raises(AttributeError):
            rate.numerator = 1  # type: ignore


class TestFeeConfig:
    """Tests for FeeConfig defaults and environment loading."""

    def test_defaults(self):
        assert DEFAULT_FEE_CONFIG.fee_for(CurveKind.UNCORRELATED) == FeeRate(30, 10_000)
        assert DEFAULT_FEE_CONFIG.fee_for(CurveKind.STABLE) == FeeRate(4, 10_000)

    def test_unknown_curve_raises(self):
        with pytest.raises(Unreachable):
            DEFAULT_FEE_CONFIG.fee_for("weighted")  # type: ignore

    def test_from_env_defaults(self, monkeypatch):
        for var in ("AMM_ENGINE_FEE_SCALE", "AMM_ENGINE_UNCORRELATED_FEE", "AMM_ENGINE_STABLE_FEE"):
            monkeypatch.delenv(var, raising=False)
        assert FeeConfig.from_env() == FeeConfig()

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AMM_ENGINE_FEE_SCALE", "1000")
        monkeypatch.setenv("AMM_ENGINE_UNCORRELATED_FEE", "3")
        monkeypatch.setenv("AMM_ENGINE_STABLE_FEE", "1")

        config = FeeConfig.from_env()

        assert config.fee_for(CurveKind.UNCORRELATED) == FeeRate(3, 1000)
        assert config.fee_for(CurveKind.STABLE) == FeeRate(1, 1000)

    def test_from_env_rejects_invalid_fee(self, monkeypatch):
        """A fee at or above the scale fails when the config is loaded."""
        monkeypatch.setenv("AMM_ENGINE_FEE_SCALE", "10000")
        monkeypatch.setenv("AMM_ENGINE_STABLE_FEE", "10000")
        with pytest.raises(InvalidFee):
            FeeConfig.from_env()
