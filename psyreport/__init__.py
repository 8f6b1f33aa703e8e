"""
A Python package for reporting fitted regression models in psychology.

Summarizes posterior or resampling draws per coefficient and computes the
maximum effect direction probability (MEDP) used in APA-style reports.

Modules:
    - stats: Descriptive statistics, quantile intervals and the MEDP search.
    - models: Adapters from fitted-model objects to coefficient draws.
    - analysis: Runs the estimator over every coefficient of a model.
    - reporting: Coefficient labels and formatted table columns.
    - output: CSV export of summaries and draws.
"""

__version__ = "1.0.0"

from .analysis import (
    AnalysisResult,
    CoefficientResult,
    analyze,
    analyze_many,
    compare_models,
)
from .config import AnalysisConfig
from .errors import InvalidInput
from .models import (
    BootstrapModel,
    DrawsTableModel,
    InferenceDataModel,
    ModelDraws,
    SamplingDistributionModel,
    as_model,
)
from .output import save_analysis_to_csv
from .reporting import describe_coefficient, format_digit
from .stats import (
    EffectDirectionEstimator,
    EffectSummary,
    IntervalEstimate,
    estimate_effect_direction,
)

__all__ = [
    # Estimation
    "EffectDirectionEstimator",
    "EffectSummary",
    "IntervalEstimate",
    "InvalidInput",
    "estimate_effect_direction",
    "AnalysisConfig",
    # Models
    "ModelDraws",
    "DrawsTableModel",
    "InferenceDataModel",
    "SamplingDistributionModel",
    "BootstrapModel",
    "as_model",
    # Analysis
    "AnalysisResult",
    "CoefficientResult",
    "analyze",
    "analyze_many",
    "compare_models",
    # Reporting
    "describe_coefficient",
    "format_digit",
    "save_analysis_to_csv",
]
