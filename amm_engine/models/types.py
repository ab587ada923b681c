"""Shared type definitions for engine models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_engine.safe_int import U64_MAX


def validate_u64(value: Any) -> int:
    """Validate that a value is a valid u64 integer.

    Accepts ints and decimal strings (as token amounts often arrive as
    strings from JSON).

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("U64 must be an integer, got bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"U64 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"U64 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")
    return value


# 64-bit unsigned integer (validated)
U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer"),
]

# Token identifier, ordered by its canonical bytes
TokenId = Annotated[str, Field(min_length=1)]
