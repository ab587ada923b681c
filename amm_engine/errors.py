"""Engine error classes.

Every failure the engine can report is one of these. Errors are raised
immediately and never retried; nothing is applied to a pool before all
checks for an operation have passed.
"""


class EngineError(Exception):
    """Base error for engine operations."""

    pass


# =============================================================================
# Input errors
# =============================================================================


class InvalidAmount(EngineError, ValueError):
    """Zero or out-of-range amount supplied to a conversion."""

    pass


class InvalidReserve(EngineError, ValueError):
    """A reserve required for a ratio conversion is zero."""

    pass


class InvalidFee(EngineError, ValueError):
    """Fee numerator must be non-negative and below the denominator."""

    pass


class IdenticalTokens(EngineError, ValueError):
    """A pair was built from the same token twice."""

    pass


# =============================================================================
# Arithmetic errors
# =============================================================================


class ArithmeticOverflow(EngineError, ArithmeticError):
    """A value does not fit the integer width it must be narrowed to."""

    pass


class ConversionOverflow(ArithmeticOverflow):
    """A price conversion result cannot be represented as u64."""

    pass


class DivisionByZero(EngineError, ArithmeticError):
    """Division or modulo by zero."""

    pass


class Underflow(EngineError, ArithmeticError):
    """Subtraction would produce a negative result."""

    pass


# =============================================================================
# Liquidity and slippage errors
# =============================================================================


class InsufficientLiquidity(EngineError):
    """Requested output meets or exceeds the pool's reserve."""

    pass


class InsufficientOutputX(EngineError):
    """Computed X amount is below the caller's minimum."""

    pass


class InsufficientOutputY(EngineError):
    """Computed Y amount is below the caller's minimum."""

    pass


class InsufficientInitialLiquidity(EngineError):
    """First deposit does not cover the permanently locked LP amount."""

    pass


class OutputBelowMinimum(EngineError):
    """Exact-in swap output is below the caller's minimum."""

    pass


class RequiredInputExceedsMax(EngineError):
    """Exact-out swap needs more input than the caller's cap."""

    pass


class ZeroAmount(EngineError):
    """A proportional share rounds down to zero."""

    pass


# =============================================================================
# Collaborator errors
# =============================================================================


class PoolNotFound(EngineError, LookupError):
    """No pool is registered for the pair and curve."""

    pass


class PoolAlreadyExists(EngineError):
    """A pool for the pair and curve is already registered."""

    pass


class UnknownToken(EngineError, LookupError):
    """Token metadata has no entry for the token."""

    pass


# =============================================================================
# Internal invariant violations
# =============================================================================


class Unreachable(EngineError):
    """Internal invariant violation.

    Raised for an unknown curve kind or a broken internal bound. It means the
    engine itself is wrong, never that the caller passed bad input, and the whole
    call must be abandoned.
    """

    pass
