"""Shared test helpers."""

from fixdec import Dec


def d(s: str) -> Dec:
    """Parse a decimal string (test shorthand)."""
    return Dec.from_str(s)


__all__ = ["d"]
