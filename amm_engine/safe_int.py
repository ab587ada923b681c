"""Checked unsigned integers for amount arithmetic.

SafeInt holds a non-negative integer of unbounded size. Python integers
never wrap, so the on-chain widths (u64, u128, u256) are enforced only where
a value is narrowed back to one of them:

- A negative intermediate raises Underflow as soon as it is produced
- Division or modulo by zero raises DivisionByZero
- Narrowing past a width raises ArithmeticOverflow

Usage pattern:
    from amm_engine.safe_int import S

    def price(amount: int, reserve_in: int, reserve_out: int) -> int:
        return (S(amount) * S(reserve_out) // S(reserve_in)).to_u64()
"""

from __future__ import annotations

from amm_engine.errors import ArithmeticOverflow, DivisionByZero, Underflow

U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
U256_MAX = 2**256 - 1

__all__ = ["U64_MAX", "U128_MAX", "U256_MAX", "SafeInt", "S"]


def _raw(x: SafeInt | int) -> int:
    return x._value if isinstance(x, SafeInt) else x


class SafeInt:
    """Non-negative integer whose arithmetic fails loudly.

    Attributes:
        value: The wrapped integer (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Wrap an int or copy another SafeInt.

        Raises:
            TypeError: If value is not an int (bool is rejected)
            Underflow: If value is negative
        """
        if isinstance(value, SafeInt):
            value = value._value
        elif not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"Negative amount: {value}")
        self._value = value

    @classmethod
    def zero(cls) -> SafeInt:
        return cls(0)

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Arithmetic ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Raises Underflow if other is larger than self."""
        return self._difference(self._value, _raw(other))

    def __rsub__(self, other: int) -> SafeInt:
        return self._difference(other, self._value)

    @staticmethod
    def _difference(minuend: int, subtrahend: int) -> SafeInt:
        if subtrahend > minuend:
            raise Underflow(f"Underflow: {minuend} - {subtrahend}")
        return SafeInt(minuend - subtrahend)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Truncating division.

        Raises:
            DivisionByZero: If other is zero
        """
        divisor = self._divisor(other, "//")
        return SafeInt(self._value // divisor)

    def __mod__(self, other: SafeInt | int) -> SafeInt:
        divisor = self._divisor(other, "%")
        return SafeInt(self._value % divisor)

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up, e.g. ceil(10 / 3) = 4.

        Raises:
            DivisionByZero: If other is zero
        """
        divisor = self._divisor(other, "ceiling_div")
        return SafeInt(-(-self._value // divisor))

    def _divisor(self, other: SafeInt | int, op: str) -> int:
        divisor = _raw(other)
        if divisor == 0:
            raise DivisionByZero(f"Division by zero: {self._value} {op} 0")
        return divisor

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self._value, _raw(other)))

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _raw(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _raw(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _raw(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _raw(other)

    # --- Narrowing ---

    def to_u64(self) -> int:
        """Return the value as u64.

        Raises:
            ArithmeticOverflow: If the value exceeds 2^64-1
        """
        return self._narrow(U64_MAX, "u64")

    def to_u128(self) -> int:
        return self._narrow(U128_MAX, "u128")

    def to_u256(self) -> int:
        return self._narrow(U256_MAX, "u256")

    def is_u64(self) -> bool:
        return self._value <= U64_MAX

    def _narrow(self, bound: int, width: str) -> int:
        if self._value > bound:
            raise ArithmeticOverflow(f"Value exceeds {width} max: {self._value}")
        return self._value


# Short alias used throughout the math modules
S = SafeInt
