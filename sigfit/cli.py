"""Command-line entry point for signature fitting."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

from sigfit.fit import DEFAULT_SIGNATURES_FILE, fit


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sigfit",
        description="Fit mutational signatures to patient mutation counts.",
    )
    parser.add_argument("samples", help="samples table (CSV or TSV)")
    parser.add_argument(
        "--signatures",
        default=DEFAULT_SIGNATURES_FILE,
        help="signatures table (CSV or TSV)",
    )
    parser.add_argument("--output", default="output", help="output folder")
    parser.add_argument("--threshold", type=float, default=0.01)
    parser.add_argument(
        "--mutation-count",
        type=int,
        default=1000,
        help="draws per bootstrap resample; -1 takes the sample's total",
    )
    parser.add_argument("-R", "--resamples", type=int, default=100)
    parser.add_argument("--significance-level", type=float, default=0.01)
    parser.add_argument("--drop-zeros-columns", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a fit from command-line arguments and report the elapsed time."""
    args = _parser().parse_args(argv)
    start = time.perf_counter()
    try:
        fit(
            args.samples,
            args.output,
            args.threshold,
            args.mutation_count,
            args.resamples,
            args.significance_level,
            args.signatures,
            args.drop_zeros_columns,
        )
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    print(f"⏱️ Execution time: {elapsed}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())