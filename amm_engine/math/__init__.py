"""Mathematical utilities for the AMM engine.

This package provides the overflow-checked integer kernel used by every
curve and allocator:
- mul_to_wide / mul_div / mul_div_wide: widening multiply-then-divide
- sqrt / pow10: helpers for LP minting and decimal scales
"""

from amm_engine.math.kernel import mul_div, mul_div_wide, mul_to_wide, pow10, sqrt

__all__ = ["mul_to_wide", "mul_div", "mul_div_wide", "sqrt", "pow10"]
