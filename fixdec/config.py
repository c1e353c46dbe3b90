"""Configuration for the decimal engine."""

from dataclasses import dataclass

from fixdec.constants import MAX_APPROX_ROOT_ITERATIONS


@dataclass(frozen=True)
class DecConfig:
    """Centralized tunables for decimal operations.

    Attributes:
        max_approx_root_iterations: Upper bound on Newton's method steps in
            Dec.approx_root (default: 100). When the bound is hit the last
            guess is returned as-is.
    """

    max_approx_root_iterations: int = MAX_APPROX_ROOT_ITERATIONS


# Default configuration instance
DEFAULT_DEC_CONFIG = DecConfig()
