"""Command-line entry point: analyze a CSV of draws and export the tables."""

from __future__ import annotations

import argparse
import logging
import sys
import time

import pandas as pd

from .analysis import analyze
from .config import DEFAULT_CONFIDENCE_LEVEL, DEFAULT_MEDP_MIN, DEFAULT_MEDP_STEP
from .models import DrawsTableModel
from .output import save_analysis_to_csv

DEFAULT_OUTPUT_DIR = "output"

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        description="Effect direction summary of posterior or resampling draws."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to a CSV with one column of draws per coefficient.",
    )
    parser.add_argument(
        "--outdir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--ci",
        type=float,
        default=DEFAULT_CONFIDENCE_LEVEL,
        help="Credible interval level in percent (default: %(default)s).",
    )
    parser.add_argument(
        "--medp-step",
        type=float,
        default=DEFAULT_MEDP_STEP,
        help="Step of the MEDP search in percent (default: %(default)s).",
    )
    parser.add_argument(
        "--medp-min",
        type=float,
        default=DEFAULT_MEDP_MIN,
        help="Minimum effect boundary for MEDP (default: %(default)s).",
    )
    parser.add_argument(
        "--formula", default="", help="Model formula recorded with the results."
    )
    parser.add_argument(
        "--round",
        type=int,
        default=2,
        help="Decimals for the printed and formatted summary (default: 2).",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log one line per coefficient."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for running the effect direction analysis."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    start_time = time.time()
    try:
        draws = pd.read_csv(args.input)
        model = DrawsTableModel(draws, formula=args.formula)
        result = analyze(
            model,
            confidence_level=args.ci,
            step=args.medp_step,
            min_effect=args.medp_min,
        )
    except (OSError, ValueError) as exc:
        logger.error("Analysis failed: %s", exc)
        return 1

    print(result.summary(round_digits=args.round).to_string(index=False))
    try:
        summary_path, draws_path = save_analysis_to_csv(
            result, output_dir=args.outdir, digits=args.round
        )
    except OSError as exc:
        logger.error("Could not write outputs to %s: %s", args.outdir, exc)
        return 1

    logger.info("Total execution time: %.2f seconds", time.time() - start_time)
    logger.info("Generated output files:")
    logger.info("  - Coefficient summary: %s", summary_path)
    logger.info("  - Posterior draws: %s", draws_path)
    return 0
