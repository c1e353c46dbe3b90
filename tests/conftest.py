"""Pytest configuration and fixtures."""

import pytest

from fixdec import Dec
from fixdec.constants import MAX_DEC_BIT_LEN


@pytest.fixture
def max_dec_value() -> Dec:
    """Largest representable Dec (all MAX_DEC_BIT_LEN bits set)."""
    return Dec(2**MAX_DEC_BIT_LEN - 1)


@pytest.fixture
def tolerance() -> Dec:
    """Tolerance for Newton's method results: ten smallest units."""
    return Dec(10)
