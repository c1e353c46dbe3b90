"""Deterministic 18-decimal fixed-point arithmetic.

This package provides:
- Dec: fixed-point decimal backed by an arbitrary-precision int
- Int: bounded unscaled integer used for whole-number conversions
- JSON, wire-text and sortable byte encodings
"""

from fixdec.config import DEFAULT_DEC_CONFIG, DecConfig
from fixdec.constants import MAX_DEC_BIT_LEN, PRECISION
from fixdec.dec import (
    Dec,
    decs_equal,
    max_dec,
    max_sortable_dec,
    min_dec,
    sortable_dec_bytes,
    valid_sortable_dec,
)
from fixdec.errors import (
    ApproxRootOutOfBounds,
    DecError,
    DecimalOutOfRange,
    DecimalParseError,
    DecOverflow,
    DivisionByZero,
    EmptyDecimalStr,
    InvalidDecimalLength,
    InvalidDecimalStr,
    InvalidPrecision,
    NilDecimalError,
    PrecisionTooLarge,
    SortableOutOfBounds,
    WireDecodeError,
)
from fixdec.integer import Int

__version__ = "0.1.0"
__all__ = [
    "Dec",
    "Int",
    "DecConfig",
    "DEFAULT_DEC_CONFIG",
    "PRECISION",
    "MAX_DEC_BIT_LEN",
    "decs_equal",
    "min_dec",
    "max_dec",
    "max_sortable_dec",
    "valid_sortable_dec",
    "sortable_dec_bytes",
    "DecError",
    "DecimalParseError",
    "EmptyDecimalStr",
    "InvalidDecimalLength",
    "InvalidDecimalStr",
    "InvalidPrecision",
    "DecimalOutOfRange",
    "WireDecodeError",
    "ApproxRootOutOfBounds",
    "DecOverflow",
    "PrecisionTooLarge",
    "DivisionByZero",
    "SortableOutOfBounds",
    "NilDecimalError",
    "__version__",
]
