"""Write analysis outputs to reproducible CSV files.

This module is the output boundary between in-memory analysis results and
submission-ready tabular artifacts.
"""

from __future__ import annotations

import logging
import os
from typing import Tuple

from .analysis import AnalysisResult
from .reporting import add_formatted_columns, add_label_column
from .schema import COLUMNS

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "coefficient_summary.csv"
DRAWS_FILENAME = "posterior_draws.csv"


def save_analysis_to_csv(
    result: AnalysisResult, output_dir: str = "output", digits: int = 2
) -> Tuple[str, str]:
    """Save the coefficient summary and the long-format draws.

    Args:
        result (AnalysisResult): Output of :func:`psyreport.analysis.analyze`.
        output_dir (str): Directory where CSV outputs are written.
        digits (int, optional): Precision of the ``(reported)`` string
            columns. Defaults to ``2``.

    Returns:
        tuple[str, str]: Paths to ``coefficient_summary.csv`` and
        ``posterior_draws.csv``.

    Note:
        The summary keeps full-precision numeric columns next to formatted
        ones so tables can be regenerated without rerunning the analysis.
    """
    os.makedirs(output_dir, exist_ok=True)

    summary_path = os.path.join(output_dir, SUMMARY_FILENAME)
    draws_path = os.path.join(output_dir, DRAWS_FILENAME)

    report = add_label_column(result.summary())
    report = add_formatted_columns(report, COLUMNS.numeric(), digits=digits)
    report.to_csv(summary_path, index=False)
    result.draws_long().to_csv(draws_path, index=False)

    logger.info("Saved coefficient summary to %s", summary_path)
    logger.info("Saved posterior draws to %s", draws_path)

    return summary_path, draws_path
