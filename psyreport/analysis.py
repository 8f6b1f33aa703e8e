"""
Coefficient-level effect direction analysis of fitted models.

This module runs the effect direction estimator over every coefficient of a
fitted model and collects:
- per-coefficient descriptive statistics (median, MAD, mean, SD),
- the interval at the requested confidence level,
- the maximum effect direction probability (MEDP) and its interval.

Models are reached only through the adapters in :mod:`psyreport.models`, so a
wide table of posterior draws, an inference-data object, a statsmodels result
or a bootstrap distribution are all analyzed the same way. Coefficients are
independent of each other and are processed in model order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import numpy as np
import pandas as pd

from .config import AnalysisConfig
from .models import ModelDraws, as_model
from .reporting import describe_coefficient, round_numeric
from .schema import COLUMNS
from .stats.effect_direction import (
    EffectDirectionEstimator,
    EffectSummary,
    as_sample,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoefficientResult:
    """Summary of one coefficient together with the draws it came from."""

    name: str
    label: str
    summary: EffectSummary
    posterior: np.ndarray = field(repr=False)


@dataclass(frozen=True)
class AnalysisResult:
    """Collected coefficient summaries of one model."""

    coefficients: Dict[str, CoefficientResult]
    formula: str
    family: str
    config: AnalysisConfig

    def __len__(self) -> int:
        return len(self.coefficients)

    def __getitem__(self, name: str) -> CoefficientResult:
        return self.coefficients[name]

    def __iter__(self):
        return iter(self.coefficients)

    def summary(self, round_digits: Optional[int] = None) -> pd.DataFrame:
        """Return one row per coefficient.

        Args:
            round_digits (int, optional): Round numeric columns to this many
                decimals. Defaults to no rounding.

        Returns:
            pandas.DataFrame: Columns ``Variable, MEDP, Median, MAD, Mean, SD,
            CI_lower, CI_higher, MEDP_lower, MEDP_higher``.
        """
        columns = [COLUMNS.variable, *COLUMNS.numeric()]
        rows = [
            {COLUMNS.variable: name, **res.summary.to_dict()}
            for name, res in self.coefficients.items()
        ]
        df = pd.DataFrame(rows, columns=columns)
        if round_digits is not None:
            df = round_numeric(df, round_digits)
        return df

    def values(self) -> Dict[str, dict]:
        """Return a plain ``dict`` per coefficient, keyed by coefficient name."""
        out = {}
        for name, res in self.coefficients.items():
            s = res.summary
            out[name] = {
                "label": res.label,
                "median": s.median,
                "mad": s.mad,
                "mean": s.mean,
                "sd": s.sd,
                "ci_values": s.interval.as_tuple(),
                "medp": s.medp,
                "medp_values": s.medp_interval.as_tuple(),
                "direction": s.direction,
                "n_draws": s.n_draws,
                "posterior": res.posterior,
            }
        return out

    def draws_long(self) -> pd.DataFrame:
        """Return all draws in long format with ``Variable`` and ``Coefficient``."""
        if not self.coefficients:
            return pd.DataFrame(columns=[COLUMNS.variable, "Coefficient"])
        parts = [
            pd.DataFrame({COLUMNS.variable: name, "Coefficient": res.posterior})
            for name, res in self.coefficients.items()
        ]
        return pd.concat(parts, ignore_index=True)


def analyze(
    model,
    confidence_level: Optional[float] = None,
    step: Optional[float] = None,
    min_effect: Optional[float] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Summarize every coefficient of a fitted model.

    Args:
        model: Anything :func:`psyreport.models.as_model` accepts.
        confidence_level (float, optional): Interval probability mass in
            percent. Overrides ``config``.
        step (float, optional): MEDP search increment. Overrides ``config``.
        min_effect (float, optional): Minimum-effect boundary. Overrides
            ``config``.
        config (AnalysisConfig, optional): Base parameters. Defaults to
            ``AnalysisConfig()`` (95%, 0.05, 0.001).

    Returns:
        AnalysisResult: Coefficient summaries in model order.

    Raises:
        InvalidInput: If a parameter is out of range or a coefficient's draws
            are empty or non-finite. The message names the coefficient.
        TypeError: If no adapter recognizes ``model``.
    """
    estimator = EffectDirectionEstimator(
        config,
        confidence_level=confidence_level,
        step=step,
        min_effect=min_effect,
    )
    adapted: ModelDraws = as_model(model)
    draws = adapted.coefficients()
    logger.info(
        "Analyzing %d coefficient(s) from %s model (CI=%s%%, MEDP step=%s, MEDP min=%s)",
        len(draws),
        adapted.family,
        estimator.config.confidence_level,
        estimator.config.step,
        estimator.config.min_effect,
    )

    results: Dict[str, CoefficientResult] = {}
    for name, values in draws.items():
        try:
            sample = as_sample(values)
            summary = estimator.estimate(sample)
        except ValueError as exc:
            raise type(exc)(f"Coefficient '{name}': {exc}") from exc
        logger.debug(
            "%s: median=%.4g, MEDP=%.2f, %s%% CI [%.4g, %.4g]",
            name,
            summary.median,
            summary.medp,
            summary.interval.level,
            summary.interval.lower,
            summary.interval.upper,
        )
        results[name] = CoefficientResult(
            name=name,
            label=describe_coefficient(name),
            summary=summary,
            posterior=sample,
        )

    return AnalysisResult(
        coefficients=results,
        formula=adapted.formula,
        family=adapted.family,
        config=estimator.config,
    )


def analyze_many(models: Mapping[str, object], **kwargs) -> Dict[str, AnalysisResult]:
    """Run :func:`analyze` on several models, keyed by a caller-chosen label."""
    out: Dict[str, AnalysisResult] = {}
    for label, model in models.items():
        logger.info("Model '%s'", label)
        out[label] = analyze(model, **kwargs)
    return out


def compare_models(results: Mapping[str, AnalysisResult]) -> pd.DataFrame:
    """Stack the summaries of several analyses with a leading ``Model`` column."""
    frames = []
    for label, result in results.items():
        df = result.summary()
        df.insert(0, "Model", label)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=["Model", COLUMNS.variable, *COLUMNS.numeric()])
    return pd.concat(frames, ignore_index=True)
