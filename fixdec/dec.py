"""18-decimal fixed-point number backed by an arbitrary-precision int.

All values are stored as integers scaled by 10^18.
Example: 1.5 is stored as 1_500_000_000_000_000_000

Every operation exists in two forms:

- ``x.add(y)`` clones x, mutates the clone and returns it; x is untouched.
- ``x.add_mut(y)`` mutates x in place and returns x for chaining.

The ``_mut`` forms change the receiver object, so every name bound to that
object sees the change. Clone before mutating a value that is shared, and
before handing a value to another thread.

A Dec may be *absent* (``Dec()`` or ``Dec(None)``, or decoded from empty wire
input). Absent is not zero: arithmetic, comparison and formatting on an
absent value raise NilDecimalError.

Overflow is never silent. A result wider than MAX_DEC_BIT_LEN bits raises
DecOverflow, except inside approx_root, which reports ApproxRootOutOfBounds.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from decimal import Decimal
from typing import ClassVar

import structlog

from fixdec import encoding
from fixdec.config import DEFAULT_DEC_CONFIG, DecConfig
from fixdec.constants import (
    INT64_MAX,
    INT64_MIN,
    MAX_DEC_BIT_LEN,
    MAX_SORTABLE_RAW,
    ONE_18,
    PRECISION,
    PRECISION_MULTIPLIERS,
    SMALLEST,
)
from fixdec.errors import (
    ApproxRootOutOfBounds,
    DecOverflow,
    Int64OutOfBound,
    NilDecimalError,
    PrecisionTooLarge,
)
from fixdec.integer import Int
from fixdec.math import checked
from fixdec.math.rounding import (
    Chop,
    ceil_raw,
    chop_precision_and_round,
    chop_precision_and_round_up,
    chop_precision_and_truncate,
    div_trunc,
)

__all__ = [
    "Dec",
    "decs_equal",
    "min_dec",
    "max_dec",
    "max_sortable_dec",
    "valid_sortable_dec",
    "sortable_dec_bytes",
]

logger = structlog.get_logger()


def precision_multiplier(prec: int) -> int:
    """Factor that scales an integer with ``prec`` fractional digits to 18.

    Raises:
        PrecisionTooLarge: If prec > PRECISION
    """
    if prec > PRECISION:
        raise PrecisionTooLarge(f"too much precision, maximum {PRECISION}, provided {prec}")
    if prec < 0:
        raise PrecisionTooLarge(f"precision must be non-negative, provided {prec}")
    return PRECISION_MULTIPLIERS[prec]


def _must(raw: int | None) -> int:
    if raw is None:
        raise DecOverflow(f"Int overflow: result exceeds {MAX_DEC_BIT_LEN} bits")
    return raw


def _check_int64(i: int) -> int:
    if not INT64_MIN <= i <= INT64_MAX:
        raise Int64OutOfBound(f"int64 operand out of bound: {i}")
    return i


class Dec:
    """18-decimal fixed-point number stored as int."""

    ONE: ClassVar[int] = ONE_18

    __slots__ = ("_i",)
    __hash__ = None  # type: ignore[assignment]  # Mutable, so unhashable

    def __init__(self, value: int | None = None) -> None:
        """Create a Dec from a raw scaled value, or an absent Dec.

        Raises:
            TypeError: If value is not an int or None
            DecOverflow: If value is wider than MAX_DEC_BIT_LEN bits
        """
        if value is not None:
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Dec requires int, got {type(value).__name__}")
            _must(checked.bounded(value))
        self._i: int | None = value

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def zero(cls) -> Dec:
        return cls(0)

    @classmethod
    def one(cls) -> Dec:
        return cls(ONE_18)

    @classmethod
    def smallest(cls) -> Dec:
        """The least positive value, 10^-18."""
        return cls(SMALLEST)

    @classmethod
    def from_int(cls, i: int, prec: int = 0) -> Dec:
        """Create from an integer with the decimal point ``prec`` digits from the right.

        ``Dec.from_int(12345, 2)`` is 123.45.

        Raises:
            PrecisionTooLarge: If prec > 18
        """
        return cls(i * precision_multiplier(prec))

    @classmethod
    def from_unscaled(cls, i: Int, prec: int = 0) -> Dec:
        """Create from a companion Int, like from_int."""
        return cls(i.value * precision_multiplier(prec))

    @classmethod
    def from_str(cls, s: str) -> Dec:
        """Parse a decimal string such as ``-123.456``.

        Raises:
            DecimalParseError: With a subclass naming the failed check
        """
        return cls(encoding.parse_decimal_str(s))

    @classmethod
    def from_decimal(cls, d: Decimal) -> Dec:
        """Create from a decimal.Decimal with at most 18 fractional digits.

        Raises:
            DecimalParseError: If d is not finite or has too many digits
        """
        return cls.from_str(format(d, "f"))

    # =========================================================================
    # State
    # =========================================================================

    def _require(self) -> int:
        if self._i is None:
            raise NilDecimalError()
        return self._i

    def is_nil(self) -> bool:
        return self._i is None

    def clone(self) -> Dec:
        return Dec(self._i)

    def set(self, other: Dec) -> Dec:
        """Copy other's value into this Dec."""
        self._i = other._i
        return self

    def set_int(self, i: int) -> Dec:
        """Set this Dec to the whole number i."""
        self._i = _must(checked.bounded(i * ONE_18))
        return self

    def big_int(self) -> int | None:
        """The scaled integer, or None when absent."""
        return self._i

    def is_zero(self) -> bool:
        return self._require() == 0

    def is_negative(self) -> bool:
        return self._require() < 0

    def is_positive(self) -> bool:
        return self._require() > 0

    def is_integer(self) -> bool:
        """True if there are no fractional digits."""
        return self._require() % ONE_18 == 0

    # =========================================================================
    # Comparison
    # =========================================================================

    def equal(self, other: Dec) -> bool:
        return self._require() == other._require()

    def gt(self, other: Dec) -> bool:
        return self._require() > other._require()

    def gte(self, other: Dec) -> bool:
        return self._require() >= other._require()

    def lt(self, other: Dec) -> bool:
        return self._require() < other._require()

    def lte(self, other: Dec) -> bool:
        return self._require() <= other._require()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self._i == other._i

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.lt(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.lte(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.gt(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.gte(other)

    def __bool__(self) -> bool:
        return not self.is_zero()

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _immut(self, op: Callable[[Dec, Dec], Dec], other: Dec) -> Dec:
        return op(self.clone(), other)

    def neg(self) -> Dec:
        return Dec(-self._require())

    def neg_mut(self) -> Dec:
        self._i = -self._require()
        return self

    def abs(self) -> Dec:
        return Dec(abs(self._require()))

    def add(self, other: Dec) -> Dec:
        return self._immut(Dec.add_mut, other)

    def add_mut(self, other: Dec) -> Dec:
        self._i = _must(checked.add(self._require(), other._require()))
        return self

    def sub(self, other: Dec) -> Dec:
        return self._immut(Dec.sub_mut, other)

    def sub_mut(self, other: Dec) -> Dec:
        self._i = _must(checked.sub(self._require(), other._require()))
        return self

    def _mul_mut(self, other: Dec, chop: Chop) -> Dec:
        self._i = _must(checked.mul(self._require(), other._require(), chop))
        return self

    def mul(self, other: Dec) -> Dec:
        """Multiply, rounding half to even."""
        return self._immut(Dec.mul_mut, other)

    def mul_mut(self, other: Dec) -> Dec:
        return self._mul_mut(other, chop_precision_and_round)

    def mul_truncate(self, other: Dec) -> Dec:
        """Multiply, truncating toward zero."""
        return self._immut(Dec.mul_truncate_mut, other)

    def mul_truncate_mut(self, other: Dec) -> Dec:
        return self._mul_mut(other, chop_precision_and_truncate)

    def mul_int(self, i: Int) -> Dec:
        return self.clone().mul_int_mut(i)

    def mul_int_mut(self, i: Int) -> Dec:
        self._i = _must(checked.mul_int(self._require(), i.value))
        return self

    def mul_int64(self, i: int) -> Dec:
        return self.clone().mul_int64_mut(i)

    def mul_int64_mut(self, i: int) -> Dec:
        self._i = _must(checked.mul_int(self._require(), _check_int64(i)))
        return self

    def _quo_mut(self, other: Dec, chop: Chop) -> Dec:
        self._i = _must(checked.quo(self._require(), other._require(), chop))
        return self

    def quo(self, other: Dec) -> Dec:
        """Divide, rounding half to even.

        Raises:
            DivisionByZero: If other is zero
        """
        return self._immut(Dec.quo_mut, other)

    def quo_mut(self, other: Dec) -> Dec:
        return self._quo_mut(other, chop_precision_and_round)

    def quo_truncate(self, other: Dec) -> Dec:
        """Divide, truncating toward zero."""
        return self._immut(Dec.quo_truncate_mut, other)

    def quo_truncate_mut(self, other: Dec) -> Dec:
        return self._quo_mut(other, chop_precision_and_truncate)

    def quo_round_up(self, other: Dec) -> Dec:
        """Divide, rounding any remainder away from zero."""
        return self._immut(Dec.quo_round_up_mut, other)

    def quo_round_up_mut(self, other: Dec) -> Dec:
        return self._quo_mut(other, chop_precision_and_round_up)

    def quo_int(self, i: Int) -> Dec:
        """Divide by a plain integer, truncating the remainder."""
        return self.clone().quo_int_mut(i)

    def quo_int_mut(self, i: Int) -> Dec:
        self._i = div_trunc(self._require(), i.value)
        return self

    def quo_int64(self, i: int) -> Dec:
        return self.clone().quo_int64_mut(i)

    def quo_int64_mut(self, i: int) -> Dec:
        self._i = div_trunc(self._require(), _check_int64(i))
        return self

    def __neg__(self) -> Dec:
        return self.neg()

    def __abs__(self) -> Dec:
        return self.abs()

    def __add__(self, other: Dec) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Dec) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: Dec | Int | int) -> Dec:
        if isinstance(other, Dec):
            return self.mul(other)
        if isinstance(other, Int):
            return self.mul_int(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self.mul_int64(other)
        return NotImplemented

    def __rmul__(self, other: Int | int) -> Dec:
        return self.__mul__(other)

    def __truediv__(self, other: Dec) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.quo(other)

    # =========================================================================
    # Power and roots
    # =========================================================================

    def power(self, exp: int) -> Dec:
        """Raise to a non-negative integer power.

        Every intermediate product rounds half to even, so the result is an
        approximation for fractional bases.
        """
        return self.clone().power_mut(exp)

    def power_mut(self, exp: int) -> Dec:
        if exp < 0:
            raise ValueError(f"power requires a non-negative exponent, got {exp}")
        self._i = _must(checked.power(self._require(), exp))
        return self

    def approx_root(self, root: int, config: DecConfig = DEFAULT_DEC_CONFIG) -> Dec:
        """Approximate the positive real ``root``-th root with Newton's method.

        Starts from a guess of 1 and iterates until the correction is at most
        10^-18 or config.max_approx_root_iterations steps have run, whichever
        comes first. Running out of iterations is not an error; the last guess
        is returned. For negative input this returns ``-(|d|.approx_root())``.

        Args:
            root: Non-negative root degree
            config: Iteration bound

        Returns:
            The approximated root

        Raises:
            ApproxRootOutOfBounds: If an intermediate value overflows
        """
        if root < 0:
            raise ValueError(f"approx_root requires a non-negative root, got {root}")

        value = self._require()
        if value < 0:
            return self.neg().approx_root(root, config).neg_mut()

        if root == 1 or value == 0 or value == ONE_18:
            return self.clone()

        if root == 0:
            return Dec.one()

        guess, delta = ONE_18, ONE_18
        iteration = 0
        while abs(delta) > SMALLEST and iteration < config.max_approx_root_iterations:
            prev = checked.power(guess, root - 1)
            if prev is None:
                raise _root_out_of_bounds(root, iteration, "power")
            if prev == 0:
                prev = SMALLEST

            quotient = checked.quo(value, prev)
            if quotient is None:
                raise _root_out_of_bounds(root, iteration, "quo")
            step = checked.sub(quotient, guess)
            if step is None:
                raise _root_out_of_bounds(root, iteration, "sub")
            delta = div_trunc(step, root)

            next_guess = checked.add(guess, delta)
            if next_guess is None:
                raise _root_out_of_bounds(root, iteration, "add")
            guess = next_guess
            iteration += 1

        if abs(delta) > SMALLEST:
            logger.debug(
                "approx_root_not_converged",
                root=root,
                iterations=iteration,
                delta=delta,
            )

        return Dec(guess)

    def approx_sqrt(self) -> Dec:
        """Square root via approx_root(2); negative input gives -sqrt(|d|)."""
        return self.approx_root(2)

    # =========================================================================
    # Rounding to whole numbers
    # =========================================================================

    def round_int64(self) -> int:
        """Round half to even and return as int64.

        Raises:
            Int64OutOfBound: If the rounded value does not fit in int64
        """
        chopped = chop_precision_and_round(self._require())
        if not INT64_MIN <= chopped <= INT64_MAX:
            raise Int64OutOfBound("Int64() out of bound")
        return chopped

    def round_int(self) -> Int:
        """Round half to even and return as Int."""
        return Int(chop_precision_and_round(self._require()))

    def truncate_int64(self) -> int:
        """Drop the fractional digits and return as int64.

        Raises:
            Int64OutOfBound: If the truncated value does not fit in int64
        """
        chopped = chop_precision_and_truncate(self._require())
        if not INT64_MIN <= chopped <= INT64_MAX:
            raise Int64OutOfBound("Int64() out of bound")
        return chopped

    def truncate_int(self) -> Int:
        """Drop the fractional digits and return as Int."""
        return Int(chop_precision_and_truncate(self._require()))

    def truncate_dec(self) -> Dec:
        """Drop the fractional digits, keeping a Dec."""
        return Dec.from_int(chop_precision_and_truncate(self._require()))

    def ceil(self) -> Dec:
        """Smallest whole number greater than or equal to this value."""
        return Dec.from_int(ceil_raw(self._require()))

    # =========================================================================
    # Formatting
    # =========================================================================

    def to_string(self) -> str:
        """Fixed-point text with all 18 fractional digits, e.g. ``-1.500000000000000000``."""
        return encoding.format_fixed(self._require())

    def to_float(self) -> float:
        """Lossy float conversion, for display only."""
        return float(self.to_string())

    def to_decimal(self) -> Decimal:
        """Exact conversion to decimal.Decimal, for display."""
        return Decimal(self._require()).scaleb(-PRECISION)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        return format(self.to_string(), format_spec)

    def __float__(self) -> float:
        return self.to_float()

    def __repr__(self) -> str:
        if self._i is None:
            return "Dec(nil)"
        return f"Dec({encoding.format_fixed(self._i)})"

    # =========================================================================
    # Serialization
    # =========================================================================

    def marshal_json(self) -> bytes:
        return encoding.marshal_json(self._i)

    def unmarshal_json(self, data: bytes | str) -> None:
        """Replace this value with the decoded JSON string.

        Raises:
            DecimalParseError: If the JSON string is not a valid decimal
        """
        self._i = encoding.unmarshal_json(data)

    def to_yaml(self) -> str:
        return encoding.to_yaml(self._require())

    def marshal(self) -> bytes:
        """Wire text: the scaled integer in base 10."""
        return encoding.marshal_wire(self._i)

    def marshal_to(self, buffer: bytearray | memoryview) -> int:
        """Write the wire text into buffer; returns the number of bytes written."""
        return encoding.marshal_wire_to(self._i, buffer)

    def unmarshal(self, data: bytes) -> None:
        """Replace this value with decoded wire text; empty data makes it absent.

        Raises:
            WireDecodeError: If data is malformed or out of range
        """
        self._i = encoding.unmarshal_wire(data)

    def size(self) -> int:
        """Byte length of the wire text."""
        return encoding.wire_size(self._i)

    def marshal_amino(self) -> bytes:
        return self.marshal()

    def unmarshal_amino(self, data: bytes) -> None:
        self.unmarshal(data)


def _root_out_of_bounds(root: int, iteration: int, step: str) -> ApproxRootOutOfBounds:
    logger.debug("approx_root_out_of_bounds", root=root, iteration=iteration, step=step)
    return ApproxRootOutOfBounds(f"out of bounds: {step} overflowed at iteration {iteration}")


# =============================================================================
# Helpers
# =============================================================================


def decs_equal(d1s: Sequence[Dec], d2s: Sequence[Dec]) -> bool:
    """True if both sequences have the same length and equal elements."""
    if len(d1s) != len(d2s):
        return False
    return all(d1.equal(d2) for d1, d2 in zip(d1s, d2s))


def min_dec(d1: Dec, d2: Dec) -> Dec:
    if d1.lt(d2):
        return d1
    return d2


def max_dec(d1: Dec, d2: Dec) -> Dec:
    if d1.lt(d2):
        return d2
    return d1


def max_sortable_dec() -> Dec:
    """The largest Dec accepted by sortable_dec_bytes (10^18); its negation is the least."""
    return Dec(MAX_SORTABLE_RAW)


def valid_sortable_dec(dec: Dec) -> bool:
    return encoding.valid_sortable(dec._require())


def sortable_dec_bytes(dec: Dec) -> bytes:
    """Byte key whose lexicographic order matches numeric order.

    Raises:
        SortableOutOfBounds: If |dec| exceeds max_sortable_dec()
    """
    return encoding.sortable_bytes(dec._require())
