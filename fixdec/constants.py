"""Constants for 18-decimal fixed-point arithmetic.

Every value here is computed once at import and never mutated.
"""

# Number of decimal places
PRECISION = 18

# Bits required to represent the above precision: Ceiling[Log2[10^18 - 1]]
DECIMAL_PRECISION_BITS = 60

# Minimum number of bits removed by a truncate operation: Floor[Log2[10^18 - 1]]
DECIMAL_TRUNCATE_BITS = DECIMAL_PRECISION_BITS - 1

# Bit bound of the companion integer type (fixdec.integer.Int)
MAX_INT_BIT_LEN = 256

# Bit bound of a scaled decimal representation
MAX_DEC_BIT_LEN = MAX_INT_BIT_LEN + DECIMAL_TRUNCATE_BITS

# Digit counts of 2**bound. A digit string longer than this, leading zeros
# stripped, is out of range and is rejected before int() sees it
MAX_INT_DIGITS = len(str(2**MAX_INT_BIT_LEN))
MAX_DEC_DIGITS = len(str(2**MAX_DEC_BIT_LEN))

ONE_18 = 10**PRECISION
HALF_ONE_18 = ONE_18 // 2
SMALLEST = 1

# PRECISION_MULTIPLIERS[p] scales an integer with p fractional digits to 18
PRECISION_MULTIPLIERS: tuple[int, ...] = tuple(10 ** (PRECISION - p) for p in range(PRECISION + 1))

# one / smallest = 10^18, stored scaled
MAX_SORTABLE_RAW = ONE_18 * ONE_18

# Backup bound for Newton's method when the guess never settles
MAX_APPROX_ROOT_ITERATIONS = 100

# JSON emitted for an absent value: the quoted text of an empty integer
NIL_JSON = b'"0"'

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

__all__ = [
    "PRECISION",
    "DECIMAL_PRECISION_BITS",
    "DECIMAL_TRUNCATE_BITS",
    "MAX_INT_BIT_LEN",
    "MAX_DEC_BIT_LEN",
    "MAX_INT_DIGITS",
    "MAX_DEC_DIGITS",
    "ONE_18",
    "HALF_ONE_18",
    "SMALLEST",
    "PRECISION_MULTIPLIERS",
    "MAX_SORTABLE_RAW",
    "MAX_APPROX_ROOT_ITERATIONS",
    "NIL_JSON",
    "INT64_MIN",
    "INT64_MAX",
]
