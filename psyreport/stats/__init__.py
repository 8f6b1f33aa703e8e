"""
Statistical utilities for coefficient reporting.

This subpackage provides the numerical routines behind every summary table.
All functions operate on arrays and primitive types; nothing here knows about
fitted-model objects.

Modules:
    descriptive:
        Median, normal-consistent MAD, mean, sample SD and central
        quantile intervals (linear interpolation).

    effect_direction:
        Per-coefficient EffectSummary including the maximum effect direction
        probability (MEDP) search.

Design Principle:
    This subpackage does not import the model adapters, the analysis driver
    or the output writers. It only shares the config, error and column-name
    modules with them, so it can be tested on plain arrays.
"""

from .descriptive import (
    IntervalEstimate,
    credible_interval,
    sample_mad,
    sample_mean,
    sample_median,
    sample_sd,
)
from .effect_direction import (
    EffectDirectionEstimator,
    EffectSummary,
    as_sample,
    estimate_effect_direction,
    medp_search,
)

__all__ = [
    "IntervalEstimate",
    "credible_interval",
    "sample_mad",
    "sample_mean",
    "sample_median",
    "sample_sd",
    "EffectDirectionEstimator",
    "EffectSummary",
    "as_sample",
    "estimate_effect_direction",
    "medp_search",
]
