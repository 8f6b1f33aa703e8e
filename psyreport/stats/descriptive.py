"""Provide descriptive statistics and quantile intervals for draw samples.

All functions take a one-dimensional array of finite draws (already validated
by the caller) and return plain floats or :class:`IntervalEstimate` records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from scipy.stats import median_abs_deviation


@dataclass(frozen=True)
class IntervalEstimate:
    """Central interval covering ``level`` percent of a sample.

    Attributes:
        lower: Lower bound, the ``(50 - level/2)``-th percentile.
        upper: Upper bound, the ``(50 + level/2)``-th percentile.
        level: Probability mass covered, in percent.
    """

    lower: float
    upper: float
    level: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def as_tuple(self) -> tuple[float, float]:
        return (self.lower, self.upper)


def sample_median(sample: np.ndarray) -> float:
    return float(np.median(sample))


def sample_mad(sample: np.ndarray) -> float:
    """Return the median absolute deviation scaled for normal consistency.

    Args:
        sample (numpy.ndarray): One-dimensional array of draws.

    Returns:
        float: ``1.4826 * median(|x - median(x)|)``, the same convention as
        R's ``mad``.
    """
    return float(median_abs_deviation(sample, scale="normal"))


def sample_mean(sample: np.ndarray) -> float:
    return float(np.mean(sample))


def sample_sd(sample: np.ndarray) -> float:
    """Return the sample standard deviation (``ddof=1``).

    A single draw has no spread estimate, so ``nan`` is returned instead of
    letting numpy emit a degrees-of-freedom warning.
    """
    if len(sample) < 2:
        return math.nan
    return float(np.std(sample, ddof=1))


def quantile_bounds(sample: np.ndarray, probs: np.ndarray) -> np.ndarray:
    """Linear-interpolation quantiles (numpy default, R type 7)."""
    return np.quantile(sample, probs)


def credible_interval(sample: np.ndarray, level: float) -> IntervalEstimate:
    """Compute the symmetric-probability interval at ``level`` percent.

    Args:
        sample (numpy.ndarray): One-dimensional array of draws.
        level (float): Probability mass in percent, within ``[0, 100]``.

    Returns:
        IntervalEstimate: Bounds at the ``(100 - level) / 200`` and
        ``1 - (100 - level) / 200`` quantiles.

    Note:
        ``level=0`` collapses to ``[median, median]`` and ``level=100`` spans
        the full sample range.
    """
    tail = (100.0 - float(level)) / 200.0
    lower, upper = quantile_bounds(sample, np.array([tail, 1.0 - tail]))
    return IntervalEstimate(lower=float(lower), upper=float(upper), level=float(level))
