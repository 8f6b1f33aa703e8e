"""Format coefficient summary tables for APA-style reporting.

This module is used after estimation to label coefficients and to produce
string columns with consistent precision for exported tables. Numeric columns
are always preserved for downstream computation.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pandas as pd

from .schema import COLUMNS

INTERACTION_SEPARATOR = ":"


def describe_coefficient(name: str) -> str:
    """Label a coefficient for narrative reporting.

    Args:
        name (str): Coefficient name as produced by the fitted model, e.g.
            ``"mpg"`` or ``"mpg:cyl"``.

    Returns:
        str: ``"interaction effect between A and B"`` for a two-term
        interaction ``A:B``, the raw name for any other ``:``-compound, and
        ``"effect of X"`` otherwise.

    Examples:
        >>> describe_coefficient("mpg:cyl")
        'interaction effect between mpg and cyl'
        >>> describe_coefficient("mpg:cyl:am")
        'mpg:cyl:am'
        >>> describe_coefficient("mpg")
        'effect of mpg'
    """
    name = str(name)
    if INTERACTION_SEPARATOR not in name:
        return f"effect of {name}"
    parts = name.split(INTERACTION_SEPARATOR)
    if len(parts) == 2 and all(parts):
        return f"interaction effect between {parts[0]} and {parts[1]}"
    return name


def format_digit(x: float, digits: int = 2) -> str:
    """Format a number for reporting.

    Args:
        x (float): Value to format.
        digits (int, optional): Decimal places for values with magnitude
            ``>= 1``; significant figures for values below 1. Defaults to
            ``2``.

    Returns:
        str: Formatted number, or ``"NA"`` for missing/non-finite values.

    Note:
        Small coefficients keep their leading significant digits instead of
        collapsing to ``"0.00"``.
    """
    if x is None:
        return "NA"
    x = float(x)
    if not math.isfinite(x):
        return "NA"
    if x == 0 or abs(x) >= 1:
        return f"{x:.{digits}f}"
    decimals = digits - 1 - int(math.floor(math.log10(abs(x))))
    return f"{x:.{decimals}f}"


def add_formatted_columns(
    df: pd.DataFrame,
    columns: Iterable[str],
    digits: int = 2,
    suffix: str = " (reported)",
) -> pd.DataFrame:
    """Add reporting-ready string columns next to numeric ones.

    Args:
        df (pandas.DataFrame): Input numeric table.
        columns (Iterable[str]): Numeric columns to format.
        digits (int, optional): Passed to :func:`format_digit`.
        suffix (str, optional): Suffix appended to generated column names.
            Defaults to ``" (reported)"``.

    Returns:
        pandas.DataFrame: Copy of ``df`` with the formatted string columns.

    Raises:
        KeyError: If a requested column is absent.
    """
    columns = list(columns)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Missing columns for reporting format: {missing}")

    out = df.copy()
    for col in columns:
        values = pd.to_numeric(out[col], errors="coerce")
        out[f"{col}{suffix}"] = [format_digit(v, digits) for v in values]
    return out


def add_label_column(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with a ``Label`` column built from ``Variable``."""
    if COLUMNS.variable not in df.columns:
        raise KeyError(f"Missing '{COLUMNS.variable}' column for coefficient labels.")
    out = df.copy()
    out[COLUMNS.label] = [describe_coefficient(v) for v in out[COLUMNS.variable]]
    return out


def round_numeric(df: pd.DataFrame, digits: int = 2) -> pd.DataFrame:
    """Round every numeric column of ``df`` to ``digits`` decimals."""
    out = df.copy()
    numeric = out.select_dtypes(include=[np.number]).columns
    out[numeric] = out[numeric].round(digits)
    return out
