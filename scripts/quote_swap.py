#!/usr/bin/env python3
"""Quote a single-pool swap from the command line.

Computes the exact-in output or exact-out input for a pool described by its
reserves, curve and fee, without any registry.

Usage:
    python scripts/quote_swap.py --curve uncorrelated --reserves 1000000 1000000 \
        --amount-in 1000
    python scripts/quote_swap.py --curve stable --reserves 15000000000 1500000000000 \
        --decimals 6 8 --fee 4 10000 --amount-out 100000000

Exit codes:
    0 - Quote computed
    1 - The engine rejected the inputs
"""

import argparse
import logging
import sys

import structlog

from amm_engine.curves import CurveKind
from amm_engine.errors import EngineError
from amm_engine.fees import FeeRate, amount_in_for, amount_out_for
from amm_engine.math.kernel import pow10

logger = structlog.get_logger()


def main() -> int:
    parser = argparse.ArgumentParser(description="Quote a swap through one pool")
    parser.add_argument(
        "--curve",
        choices=[kind.value for kind in CurveKind],
        default=CurveKind.UNCORRELATED.value,
        help="Pool curve (default: uncorrelated)",
    )
    parser.add_argument(
        "--reserves",
        nargs=2,
        type=int,
        required=True,
        metavar=("RESERVE_IN", "RESERVE_OUT"),
        help="Pool reserves of the input and output token",
    )
    parser.add_argument(
        "--decimals",
        nargs=2,
        type=int,
        default=(8, 8),
        metavar=("DECIMALS_IN", "DECIMALS_OUT"),
        help="Token decimals, used by the stable curve (default: 8 8)",
    )
    parser.add_argument(
        "--fee",
        nargs=2,
        type=int,
        default=(30, 10_000),
        metavar=("NUMERATOR", "DENOMINATOR"),
        help="Fee rate (default: 30 10000)",
    )
    side = parser.add_mutually_exclusive_group(required=True)
    side.add_argument("--amount-in", type=int, help="Exact input amount")
    side.add_argument("--amount-out", type=int, help="Exact output amount")
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
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    curve = CurveKind(args.curve)
    reserve_in, reserve_out = args.reserves
    try:
        fee = FeeRate(*args.fee)
        scale_in, scale_out = pow10(args.decimals[0]), pow10(args.decimals[1])
        if args.amount_in is not None:
            amount_out = amount_out_for(
                curve, args.amount_in, reserve_in, reserve_out, scale_in, scale_out, fee
            )
            print(f"amount_out: {amount_out}")
        else:
            amount_in = amount_in_for(
                curve, args.amount_out, reserve_out, reserve_in, scale_out, scale_in, fee
            )
            print(f"amount_in: {amount_in}")
    except EngineError as err:
        logger.error("quote_failed", error=type(err).__name__, detail=str(err))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
