"""Precision-chopping primitives.

A product of two scaled values carries one extra factor of 10^18. The
functions here remove that factor under a given rounding policy. They all
work on the magnitude and reapply the sign afterwards, so rounding is
symmetric around zero.

Integer division here truncates toward zero. Python's ``//`` floors, which
differs for negative operands, so every signed division goes through
``div_trunc`` or ``quo_rem``.
"""

from __future__ import annotations

from collections.abc import Callable

from fixdec.constants import HALF_ONE_18, ONE_18
from fixdec.errors import DivisionByZero

__all__ = [
    "Chop",
    "div_trunc",
    "quo_rem",
    "chop_precision_and_round",
    "chop_precision_and_truncate",
    "chop_precision_and_round_up",
    "ceil_raw",
]

Chop = Callable[[int], int]


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Args:
        a: Dividend (can be positive or negative)
        b: Divisor (must be non-zero)

    Returns:
        a / b truncated toward zero

    Raises:
        DivisionByZero: If b is zero

    Examples:
        -7 // 3 == -3 (floors), div_trunc(-7, 3) == -2
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")

    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def quo_rem(a: int, b: int) -> tuple[int, int]:
    """Truncated quotient and remainder; the remainder takes the sign of a."""
    q = div_trunc(a, b)
    return q, a - q * b


def chop_precision_and_round(m: int) -> int:
    """Remove one unit factor with round-half-to-even (bankers rounding)."""
    if m < 0:
        return -chop_precision_and_round(-m)

    q, r = divmod(m, ONE_18)

    if r == 0 or r < HALF_ONE_18:
        return q
    if r > HALF_ONE_18:
        return q + 1
    # exactly half: round to the even neighbour
    if q % 2 == 0:
        return q
    return q + 1


def chop_precision_and_truncate(m: int) -> int:
    """Remove one unit factor, dropping the remainder."""
    return div_trunc(m, ONE_18)


def chop_precision_and_round_up(m: int) -> int:
    """Remove one unit factor, rounding any remainder away from zero."""
    if m < 0:
        return -chop_precision_and_round_up(-m)

    q, r = divmod(m, ONE_18)
    if r == 0:
        return q
    return q + 1


def ceil_raw(m: int) -> int:
    """Smallest integer greater than or equal to m / 10^18, unscaled."""
    q, r = quo_rem(m, ONE_18)

    # negative remainders already sit on the ceiling after truncation
    if r == 0 or r < 0:
        return q
    return q + 1
