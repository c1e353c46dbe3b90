"""Checked arithmetic on scaled integers.

Each function returns the scaled result, or None when the result's bit
length exceeds MAX_DEC_BIT_LEN. Callers decide whether an overflow is fatal
(Dec operators) or reportable (the root approximation loop).

Usage:
    raw = checked.mul(a, b)
    if raw is None:
        ...  # overflow
"""

from __future__ import annotations

from fixdec.constants import MAX_DEC_BIT_LEN, ONE_18
from fixdec.math.rounding import Chop, chop_precision_and_round, div_trunc

__all__ = [
    "bounded",
    "add",
    "sub",
    "mul",
    "mul_int",
    "quo",
    "power",
]


def bounded(value: int) -> int | None:
    """Return value if it fits in MAX_DEC_BIT_LEN bits, else None."""
    if value.bit_length() > MAX_DEC_BIT_LEN:
        return None
    return value


def add(a: int, b: int) -> int | None:
    return bounded(a + b)


def sub(a: int, b: int) -> int | None:
    return bounded(a - b)


def mul(a: int, b: int, chop: Chop = chop_precision_and_round) -> int | None:
    """Multiply two scaled values and chop the extra unit factor."""
    return bounded(chop(a * b))


def mul_int(a: int, i: int) -> int | None:
    """Multiply a scaled value by a plain integer (no rescaling)."""
    return bounded(a * i)


def quo(a: int, b: int, chop: Chop = chop_precision_and_round) -> int | None:
    """Divide two scaled values.

    The dividend is multiplied by the unit twice: once to keep the quotient
    scaled, once more so ``chop`` has a full unit of digits to round on.

    Raises:
        DivisionByZero: If b is zero
    """
    return bounded(chop(div_trunc(a * ONE_18 * ONE_18, b)))


def power(base: int, exp: int) -> int | None:
    """Raise a scaled value to a non-negative integer power.

    Square-and-multiply where every product rounds half-to-even, so error
    accumulates per step. Any intermediate overflow returns None.
    """
    if exp == 0:
        return ONE_18

    acc = ONE_18
    result = base
    i = exp
    while i > 1:
        if i % 2 != 0:
            step = mul(acc, result)
            if step is None:
                return None
            acc = step
        i //= 2
        squared = mul(result, result)
        if squared is None:
            return None
        result = squared

    return mul(result, acc)
