"""Bounded signed integer, the unscaled companion of Dec.

Int wraps a Python int whose bit length never exceeds MAX_INT_BIT_LEN. It is
what Dec converts to and from when a whole-number view is needed:

    from fixdec import Dec, Int

    d = Dec.from_unscaled(Int(7))   # 7.000000000000000000
    d.truncate_int()                # Int(7)

Arithmetic raises instead of producing out-of-range values:
- results wider than MAX_INT_BIT_LEN bits raise IntOverflow
- division by zero raises DivisionByZero
- ``//`` truncates toward zero, matching Dec.quo_int
"""

from __future__ import annotations

from fixdec.constants import INT64_MAX, INT64_MIN, MAX_INT_BIT_LEN, MAX_INT_DIGITS
from fixdec.encoding import is_ascii_digits
from fixdec.errors import Int64OutOfBound, IntOverflow
from fixdec.math.rounding import div_trunc


class Int:
    """Signed integer bounded to MAX_INT_BIT_LEN bits.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | Int) -> None:
        """Create an Int from an integer or another Int.

        Raises:
            TypeError: If value is not an int or Int
            IntOverflow: If value is wider than MAX_INT_BIT_LEN bits
        """
        if isinstance(value, Int):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = _check_bits(value)
        else:
            raise TypeError(f"Int requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"Int({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: Int | int) -> Int:
        return Int(self._value + _extract_value(other))

    def __radd__(self, other: int) -> Int:
        return Int(other + self._value)

    def __sub__(self, other: Int | int) -> Int:
        return Int(self._value - _extract_value(other))

    def __rsub__(self, other: int) -> Int:
        return Int(other - self._value)

    def __mul__(self, other: Int | int) -> Int:
        return Int(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> Int:
        return Int(other * self._value)

    def __floordiv__(self, other: Int | int) -> Int:
        """Integer division, truncating toward zero.

        Raises:
            DivisionByZero: If other is zero
        """
        return Int(div_trunc(self._value, _extract_value(other)))

    def __neg__(self) -> Int:
        return Int(-self._value)

    def __abs__(self) -> Int:
        return Int(abs(self._value))

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Int):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: Int | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: Int | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: Int | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: Int | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def is_zero(self) -> bool:
        return self._value == 0

    def is_negative(self) -> bool:
        return self._value < 0

    def is_positive(self) -> bool:
        return self._value > 0

    def sign(self) -> int:
        return (self._value > 0) - (self._value < 0)

    def bit_length(self) -> int:
        return self._value.bit_length()

    def is_int64(self) -> bool:
        """Check if value fits in int64 without raising."""
        return INT64_MIN <= self._value <= INT64_MAX

    def to_int64(self) -> int:
        """Return the value, validating int64 bounds.

        Raises:
            Int64OutOfBound: If value does not fit in a signed 64-bit integer
        """
        if not self.is_int64():
            raise Int64OutOfBound(f"Int64() out of bound: {self._value}")
        return self._value

    @classmethod
    def zero(cls) -> Int:
        return cls(0)

    @classmethod
    def one(cls) -> Int:
        return cls(1)

    @classmethod
    def from_str(cls, s: str) -> Int:
        """Parse a base-10 Int: an optional sign followed by ASCII digits.

        Whitespace, ``_`` separators and non-ASCII digits are rejected.

        Raises:
            ValueError: If the string is not a valid integer
            IntOverflow: If the value is out of range
        """
        digits = s[1:] if s[:1] in ("+", "-") else s
        if not is_ascii_digits(digits):
            raise ValueError(f"invalid integer string: {s!r}")
        significant = len(digits.lstrip("0"))
        if significant > MAX_INT_DIGITS:
            raise IntOverflow(f"Int overflow: {significant} digits exceeds {MAX_INT_DIGITS}")
        return cls(int(s, 10))


def _check_bits(value: int) -> int:
    if value.bit_length() > MAX_INT_BIT_LEN:
        raise IntOverflow(f"Int overflow: bit length {value.bit_length()} exceeds {MAX_INT_BIT_LEN}")
    return value


def _extract_value(x: Int | int) -> int:
    """Extract integer value from Int or int."""
    if isinstance(x, Int):
        return x._value
    return x
