"""Assertion helpers for tests that compare decimals.

``dec_eq`` and ``dec_approx_eq`` return ``(ok, format, expected, actual)``
so a test framework can render its own message; the ``assert_*`` wrappers
raise AssertionError for plain pytest use:

    ok, fmt, exp, got = dec_eq(expected, result)
    assert ok, fmt % (exp, got)
"""

from __future__ import annotations

from fixdec.dec import Dec

__all__ = ["dec_eq", "dec_approx_eq", "assert_dec_eq", "assert_dec_approx_eq"]

EQ_FORMAT = "expected:\t%s\ngot:\t\t%s"
APPROX_EQ_FORMAT = "expected |d1 - d2| <:\t%s\ngot |d1 - d2| = \t\t%s"


def dec_eq(exp: Dec, got: Dec) -> tuple[bool, str, str, str]:
    """Exact equality check."""
    return exp.equal(got), EQ_FORMAT, exp.to_string(), got.to_string()


def dec_approx_eq(d1: Dec, d2: Dec, tol: Dec) -> tuple[bool, str, str, str]:
    """Check |d1 - d2| <= tol."""
    diff = d1.sub(d2).abs()
    return diff.lte(tol), APPROX_EQ_FORMAT, tol.to_string(), diff.to_string()


def assert_dec_eq(exp: Dec, got: Dec) -> None:
    ok, fmt, exp_text, got_text = dec_eq(exp, got)
    assert ok, fmt % (exp_text, got_text)


def assert_dec_approx_eq(d1: Dec, d2: Dec, tol: Dec) -> None:
    ok, fmt, tol_text, diff_text = dec_approx_eq(d1, d2, tol)
    assert ok, fmt % (tol_text, diff_text)
