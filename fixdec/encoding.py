"""Text and byte encodings of scaled decimal values.

Every function here takes or returns the raw scaled integer (``None`` for an
absent value), so the formats can be tested without going through Dec.

There are three byte formats and they are not interchangeable:

- JSON: the quoted human string, ``"1.500000000000000000"``
- wire: the scaled integer in base 10, ``1500000000000000000``
- sortable: a fixed-width key whose byte order matches numeric order
"""

from __future__ import annotations

import json

import structlog

from fixdec.constants import (
    MAX_DEC_BIT_LEN,
    MAX_DEC_DIGITS,
    MAX_SORTABLE_RAW,
    NIL_JSON,
    PRECISION,
)
from fixdec.errors import (
    BufferTooSmall,
    DecimalOutOfRange,
    EmptyDecimalStr,
    InvalidDecimalLength,
    InvalidDecimalStr,
    InvalidPrecision,
    SortableOutOfBounds,
    WireDecodeError,
)

__all__ = [
    "is_ascii_digits",
    "parse_decimal_str",
    "format_fixed",
    "marshal_json",
    "unmarshal_json",
    "to_yaml",
    "marshal_wire",
    "marshal_wire_to",
    "unmarshal_wire",
    "wire_size",
    "valid_sortable",
    "sortable_bytes",
    "SORTABLE_WIDTH",
    "SORTABLE_MAX",
    "SORTABLE_MIN",
]

logger = structlog.get_logger()

# 18 integer digits, the point, 18 fractional digits
SORTABLE_WIDTH = PRECISION * 2 + 1

# Boundary keys: "max" sorts after every digit, "--" before every "-digit"
SORTABLE_MAX = b"max"
SORTABLE_MIN = b"--"

_NINES_COMPLEMENT = str.maketrans("0123456789", "9876543210")


# =============================================================================
# Human string
# =============================================================================


def is_ascii_digits(s: str) -> bool:
    """True if s is non-empty and made only of the ASCII digits 0-9."""
    return s.isascii() and s.isdigit()


def parse_decimal_str(s: str) -> int:
    """Parse a decimal string into its scaled representation.

    Valid input is ``[-]integer[.fraction]`` with at most 18 fractional
    digits, for example ``-123.456``, ``456.7890``, ``345``, ``-456789``.

    Args:
        s: Decimal string (not mutated)

    Returns:
        The value multiplied by 10^18

    Raises:
        EmptyDecimalStr: If s is empty or only a sign
        InvalidDecimalStr: If s has more than one ``.`` or non-digit characters
        InvalidDecimalLength: If the integer or fractional segment is empty
        InvalidPrecision: If there are more than 18 fractional digits
        DecimalOutOfRange: If the magnitude exceeds MAX_DEC_BIT_LEN bits
    """
    if len(s) == 0:
        raise EmptyDecimalStr()

    neg = False
    if s[0] == "-":
        neg = True
        s = s[1:]

    if len(s) == 0:
        raise EmptyDecimalStr()

    parts = s.split(".")
    if len(parts) > 2:
        raise InvalidDecimalStr()

    combined = parts[0]
    len_decs = 0
    if len(parts) == 2:
        len_decs = len(parts[1])
        if len_decs == 0 or len(combined) == 0:
            raise InvalidDecimalLength()
        combined += parts[1]

    if len_decs > PRECISION:
        raise InvalidPrecision(f"invalid precision; max: {PRECISION}, got: {len_decs}")

    # pad to exactly PRECISION fractional digits
    combined += "0" * (PRECISION - len_decs)

    if not is_ascii_digits(combined):
        raise InvalidDecimalStr(f"failed to set decimal string: {combined}")

    if len(combined.lstrip("0")) > MAX_DEC_DIGITS:
        raise DecimalOutOfRange(
            f"decimal out of range; digits: got {len(combined.lstrip('0'))}, max {MAX_DEC_DIGITS}"
        )

    magnitude = int(combined)
    if magnitude.bit_length() > MAX_DEC_BIT_LEN:
        raise DecimalOutOfRange(
            f"decimal out of range; bitLen: got {magnitude.bit_length()}, max {MAX_DEC_BIT_LEN}"
        )

    return -magnitude if neg else magnitude


def format_fixed(raw: int) -> str:
    """Render a scaled value with all 18 fractional digits.

    Trailing zeros are kept: 1.5 renders as ``1.500000000000000000``.
    """
    digits = str(abs(raw))

    if len(digits) <= PRECISION:
        text = "0." + digits.rjust(PRECISION, "0")
    else:
        point = len(digits) - PRECISION
        text = digits[:point] + "." + digits[point:]

    if raw < 0:
        return "-" + text
    return text


def to_yaml(raw: int) -> str:
    """YAML representation, identical to the human string."""
    return format_fixed(raw)


# =============================================================================
# JSON
# =============================================================================


def marshal_json(raw: int | None) -> bytes:
    """Encode as a JSON string of the human form."""
    if raw is None:
        return NIL_JSON
    return json.dumps(format_fixed(raw)).encode()


def unmarshal_json(data: bytes | str) -> int:
    """Decode a JSON string through the decimal parser.

    Raises:
        json.JSONDecodeError: If data is not valid JSON
        InvalidDecimalStr: If the JSON value is not a string
        DecimalParseError: If the string is not a valid decimal
    """
    text = json.loads(data)
    if not isinstance(text, str):
        logger.debug("dec_json_not_string", json_type=type(text).__name__)
        raise InvalidDecimalStr(f"decimal JSON must be a string, got {type(text).__name__}")
    return parse_decimal_str(text)


# =============================================================================
# Wire text
# =============================================================================


def marshal_wire(raw: int | None) -> bytes:
    """Encode the scaled integer as base-10 ASCII, no decimal point.

    An absent value encodes like zero.
    """
    if raw is None or raw == 0:
        return b"0"
    return str(raw).encode("ascii")


def marshal_wire_to(raw: int | None, buffer: bytearray | memoryview) -> int:
    """Write the wire text into buffer and return the number of bytes written.

    Raises:
        BufferTooSmall: If buffer is shorter than wire_size(raw)
    """
    bz = marshal_wire(raw)
    if len(buffer) < len(bz):
        raise BufferTooSmall(f"buffer too small; need {len(bz)} bytes, got {len(buffer)}")
    buffer[: len(bz)] = bz
    return len(bz)


def unmarshal_wire(data: bytes) -> int | None:
    """Decode wire text. Empty input decodes to an absent value.

    Raises:
        WireDecodeError: If data is not an optionally signed base-10 integer,
            or the value exceeds MAX_DEC_BIT_LEN bits
    """
    if len(data) == 0:
        return None

    try:
        text = bytes(data).decode("ascii")
    except UnicodeDecodeError as err:
        logger.debug("dec_wire_not_ascii", length=len(data))
        raise WireDecodeError("decimal wire text must be ASCII") from err

    digits = text[1:] if text[0] in "+-" else text
    if not is_ascii_digits(digits):
        logger.debug("dec_wire_invalid", text=text)
        raise WireDecodeError(f"invalid decimal wire text: {text!r}")

    if len(digits.lstrip("0")) > MAX_DEC_DIGITS:
        raise WireDecodeError(
            f"decimal out of range; digits: got {len(digits.lstrip('0'))}, max: {MAX_DEC_DIGITS}"
        )

    raw = int(text)
    if raw.bit_length() > MAX_DEC_BIT_LEN:
        raise WireDecodeError(f"decimal out of range; got: {raw.bit_length()}, max: {MAX_DEC_BIT_LEN}")
    return raw


def wire_size(raw: int | None) -> int:
    """Byte length of the wire text."""
    return len(marshal_wire(raw))


# =============================================================================
# Sortable key
# =============================================================================


def valid_sortable(raw: int) -> bool:
    """Check that |raw| is within the maximum sortable decimal."""
    return abs(raw) <= MAX_SORTABLE_RAW


def sortable_bytes(raw: int) -> bytes:
    """Encode a value so byte-wise order matches numeric order.

    Non-negative values are left-padded with zeros to 18 integer digits.
    Negative values get a ``-`` prefix and the nines' complement of their
    padded magnitude, so larger magnitudes produce smaller keys. The two
    bounds use the sentinels ``max`` and ``--`` instead of an extra byte on
    every key.

    Negative keys are not byte-compatible with keys written as ``-`` plus
    the plain padded magnitude; stores holding such keys must be re-encoded.

    Raises:
        SortableOutOfBounds: If |raw| exceeds the maximum sortable decimal
    """
    if not valid_sortable(raw):
        raise SortableOutOfBounds("dec must be within bounds")

    if raw == MAX_SORTABLE_RAW:
        return SORTABLE_MAX
    if raw == -MAX_SORTABLE_RAW:
        return SORTABLE_MIN

    padded = format_fixed(abs(raw)).rjust(SORTABLE_WIDTH, "0")
    if raw < 0:
        return b"-" + padded.translate(_NINES_COMPLEMENT).encode("ascii")
    return padded.encode("ascii")
