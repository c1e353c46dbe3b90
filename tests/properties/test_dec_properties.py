"""
Property-based tests for the decimal engine.

Covers string round-trips, sortable key ordering, rounding idempotence and
the approximate inverse relation between approx_root and power.
"""

from decimal import Decimal

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from fixdec import Dec, max_sortable_dec, sortable_dec_bytes
from fixdec.constants import MAX_SORTABLE_RAW
from fixdec.testing import assert_dec_approx_eq

# =============================================================================
# HYPOTHESIS STRATEGIES
# =============================================================================

# Any value accepted by the sortable encoder, boundaries included
sortable_raw_strategy = st.one_of(
    st.integers(min_value=-MAX_SORTABLE_RAW, max_value=MAX_SORTABLE_RAW),
    st.integers(min_value=-10**20, max_value=10**20),
    st.sampled_from([-MAX_SORTABLE_RAW, MAX_SORTABLE_RAW, 0, 1, -1]),
)

# Decimal strings with up to 18 fractional digits
decimal_text_strategy = st.builds(
    lambda neg, whole, frac: ("-" if neg else "") + str(whole) + (f".{frac}" if frac else ""),
    neg=st.booleans(),
    whole=st.integers(min_value=0, max_value=10**30),
    frac=st.text(alphabet="0123456789", min_size=0, max_size=18),
)

positive_dec_strategy = st.decimals(
    min_value=Decimal("0.001"),
    max_value=Decimal("1000000"),
    places=6,
    allow_nan=False,
    allow_infinity=False,
).map(Dec.from_decimal)


# =============================================================================
# PROPERTIES
# =============================================================================


@settings(max_examples=200)
@given(text=decimal_text_strategy)
def test_string_round_trip(text):
    x = Dec.from_str(text)
    rendered = x.to_string()
    assert Dec.from_str(rendered) == x
    # canonical form: exactly 18 fractional digits
    assert len(rendered.split(".")[1]) == 18
    assert Decimal(rendered) == Decimal(text)


@settings(max_examples=300)
@given(a=sortable_raw_strategy, b=sortable_raw_strategy)
def test_sortable_order_matches_numeric_order(a, b):
    ka = sortable_dec_bytes(Dec(a))
    kb = sortable_dec_bytes(Dec(b))
    assert (a < b) == (ka < kb)
    assert (a == b) == (ka == kb)


@given(raw=sortable_raw_strategy)
def test_sortable_boundaries_are_extreme(raw):
    assume(abs(raw) != MAX_SORTABLE_RAW)
    key = sortable_dec_bytes(Dec(raw))
    assert sortable_dec_bytes(max_sortable_dec().neg()) < key < sortable_dec_bytes(max_sortable_dec())


@given(raw=st.integers(min_value=-10**40, max_value=10**40))
def test_truncate_and_abs_idempotent(raw):
    x = Dec(raw)
    assert x.truncate_dec().truncate_dec() == x.truncate_dec()
    assert x.abs().abs() == x.abs()
    assert x.truncate_dec().is_integer()


@given(raw=st.integers(min_value=-10**40, max_value=10**40))
def test_wire_round_trip(raw):
    x = Dec(raw)
    y = Dec()
    y.unmarshal(x.marshal())
    assert y == x
    assert x.size() == len(x.marshal())


@settings(max_examples=50)
@given(x=positive_dec_strategy, n=st.integers(min_value=2, max_value=4))
def test_root_then_power_is_close(x, n):
    root = x.approx_root(n)
    # relative tolerance: 10^-12 of the input, never below 10 units
    tol = Dec(max(10, abs(x.big_int()) // 10**12))
    assert_dec_approx_eq(root.power(n), x, tol)


@given(a=st.integers(min_value=-10**30, max_value=10**30), b=st.integers(min_value=1, max_value=10**30))
def test_quo_rounding_brackets(a, b):
    x, y = Dec(a), Dec(b)
    truncated = x.quo_truncate(y)
    rounded = x.quo(y)
    rounded_up = x.quo_round_up(y)
    assert truncated.abs().lte(rounded.abs())
    assert rounded.abs().lte(rounded_up.abs())
    assert rounded_up.abs().sub(truncated.abs()).lte(Dec.smallest())
