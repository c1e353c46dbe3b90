#!/usr/bin/env python3
"""Command-line calculator for 18-decimal fixed-point values.

Useful for checking what a persisted or configured value decodes to, and
what a given operation produces, without writing code.

Usage:
    python scripts/dec_calc.py add 1.5 2.25
    python scripts/dec_calc.py quo 1 3
    python scripts/dec_calc.py root 27 --degree 3
    python scripts/dec_calc.py sortable -- -1.5

Exit codes:
    0 - Result printed
    1 - Input could not be parsed, or the operation failed
"""

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fixdec import Dec, DecError, sortable_dec_bytes  # noqa: E402

logger = structlog.get_logger()

BINARY_OPS: dict[str, Callable[[Dec, Dec], Dec]] = {
    "add": Dec.add,
    "sub": Dec.sub,
    "mul": Dec.mul,
    "mul-truncate": Dec.mul_truncate,
    "quo": Dec.quo,
    "quo-truncate": Dec.quo_truncate,
    "quo-round-up": Dec.quo_round_up,
}

UNARY_OPS: dict[str, Callable[[Dec], str]] = {
    "sqrt": lambda d: d.approx_sqrt().to_string(),
    "ceil": lambda d: d.ceil().to_string(),
    "truncate": lambda d: d.truncate_dec().to_string(),
    "sortable": lambda d: sortable_dec_bytes(d).decode("ascii"),
    "wire": lambda d: d.marshal().decode("ascii"),
    "json": lambda d: d.marshal_json().decode(),
}


def evaluate(op: str, a: str, b: str | None = None, degree: int = 2) -> str:
    """Apply op to the parsed operands and return the printable result.

    Raises:
        DecError: If an operand cannot be parsed or the operation fails
        ValueError: If a binary op is missing its second operand
    """
    x = Dec.from_str(a)

    if op in BINARY_OPS:
        if b is None:
            raise ValueError(f"{op} requires two operands")
        return BINARY_OPS[op](x, Dec.from_str(b)).to_string()

    if op == "power":
        return x.power(degree).to_string()
    if op == "root":
        return x.approx_root(degree).to_string()

    return UNARY_OPS[op](x)


def main() -> int:
    parser = argparse.ArgumentParser(description="18-decimal fixed-point calculator")
    parser.add_argument(
        "op",
        choices=[*BINARY_OPS, "power", "root", *UNARY_OPS],
        help="Operation to apply",
    )
    parser.add_argument("a", help="First operand, e.g. -123.456")
    parser.add_argument("b", nargs="?", default=None, help="Second operand for binary ops")
    parser.add_argument(
        "--degree",
        type=int,
        default=2,
        help="Exponent for power, degree for root (default: 2)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    try:
        result = evaluate(args.op, args.a, args.b, degree=args.degree)
    except (DecError, ValueError) as err:
        logger.error("dec_calc_failed", op=args.op, a=args.a, b=args.b, error=str(err))
        print(f"Error: {err}")
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
