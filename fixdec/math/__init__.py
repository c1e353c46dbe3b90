"""Scaled-integer kernels for the decimal engine.

- rounding: precision chopping (half-to-even, truncate, round-up, ceiling)
- checked: overflow-checked add/sub/mul/quo/power returning None on overflow
"""

from fixdec.math import checked
from fixdec.math.rounding import (
    chop_precision_and_round,
    chop_precision_and_round_up,
    chop_precision_and_truncate,
    div_trunc,
)

__all__ = [
    "checked",
    "chop_precision_and_round",
    "chop_precision_and_round_up",
    "chop_precision_and_truncate",
    "div_trunc",
]
