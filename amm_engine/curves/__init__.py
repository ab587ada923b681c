"""Pricing curve implementations.

Two curves form a closed set, selected by CurveKind:
- Uncorrelated (constant product)
- Stable (x^3*y + x*y^3 invariant)
"""

from amm_engine.curves.base import Curve, CurveKind
from amm_engine.curves.stable import StableCurve, get_y, stable_curve
from amm_engine.curves.uncorrelated import UncorrelatedCurve, uncorrelated_curve
from amm_engine.errors import Unreachable

_CURVES: dict[CurveKind, Curve] = {
    CurveKind.UNCORRELATED: uncorrelated_curve,
    CurveKind.STABLE: stable_curve,
}


def get_curve(kind: CurveKind) -> Curve:
    """Return the curve implementation for a curve kind.

    Raises:
        Unreachable: If kind is not one of the known curves
    """
    try:
        return _CURVES[CurveKind(kind)]
    except (KeyError, ValueError) as err:
        raise Unreachable(f"Unknown curve kind: {kind!r}") from err


__all__ = [
    "Curve",
    "CurveKind",
    "UncorrelatedCurve",
    "StableCurve",
    "uncorrelated_curve",
    "stable_curve",
    "get_curve",
    "get_y",
]
