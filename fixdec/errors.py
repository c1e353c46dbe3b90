"""Decimal error classes.

Two families live here. Parse and decode errors are ordinary ``ValueError``
subclasses that callers are expected to handle. The rest signal contract
violations (overflow, division by zero, out-of-bounds sortable input) and
are never caught inside the library.
"""


class DecError(Exception):
    """Base error for fixed-point decimal operations."""

    pass


# =============================================================================
# Reported errors
# =============================================================================


class DecimalParseError(DecError, ValueError):
    """A decimal string could not be parsed."""

    pass


class EmptyDecimalStr(DecimalParseError):
    """Input is empty, or only a sign."""

    def __init__(self, message: str = "decimal string cannot be empty") -> None:
        super().__init__(message)


class InvalidDecimalLength(DecimalParseError):
    """Integer or fractional segment around the decimal point is empty."""

    def __init__(self, message: str = "invalid decimal length") -> None:
        super().__init__(message)


class InvalidDecimalStr(DecimalParseError):
    """More than one decimal point, or non-digit characters."""

    def __init__(self, message: str = "invalid decimal string") -> None:
        super().__init__(message)


class InvalidPrecision(DecimalParseError):
    """More fractional digits than PRECISION."""

    pass


class DecimalOutOfRange(DecimalParseError):
    """Parsed magnitude exceeds MAX_DEC_BIT_LEN bits."""

    pass


class WireDecodeError(DecError, ValueError):
    """Wire text is not a base-10 integer, or is out of range."""

    pass


class BufferTooSmall(DecError, ValueError):
    """Destination buffer cannot hold the wire text."""

    pass


class ApproxRootOutOfBounds(DecError, ArithmeticError):
    """An intermediate value of the root approximation overflowed."""

    pass


# =============================================================================
# Fatal errors
# =============================================================================


class DecOverflow(DecError, OverflowError):
    """Result bit length exceeds MAX_DEC_BIT_LEN."""

    pass


class Int64OutOfBound(DecOverflow):
    """Value does not fit in a signed 64-bit integer."""

    pass


class IntOverflow(DecError, OverflowError):
    """Companion integer exceeds MAX_INT_BIT_LEN bits."""

    pass


class PrecisionTooLarge(DecError, ValueError):
    """Requested fractional-digit count exceeds PRECISION."""

    pass


class DivisionByZero(DecError, ZeroDivisionError):
    """Division or quotient by zero."""

    pass


class SortableOutOfBounds(DecError, ValueError):
    """Absolute value exceeds the maximum sortable decimal."""

    pass


class NilDecimalError(DecError, ValueError):
    """Operation applied to an absent (nil) decimal."""

    def __init__(self, message: str = "operation on nil decimal") -> None:
        super().__init__(message)


__all__ = [
    "DecError",
    "DecimalParseError",
    "EmptyDecimalStr",
    "InvalidDecimalLength",
    "InvalidDecimalStr",
    "InvalidPrecision",
    "DecimalOutOfRange",
    "WireDecodeError",
    "BufferTooSmall",
    "ApproxRootOutOfBounds",
    "DecOverflow",
    "Int64OutOfBound",
    "IntOverflow",
    "PrecisionTooLarge",
    "DivisionByZero",
    "SortableOutOfBounds",
    "NilDecimalError",
]
