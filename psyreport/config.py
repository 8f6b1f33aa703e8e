"""Estimation defaults and the validated parameter set used by the driver."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from .errors import InvalidInput

DEFAULT_CONFIDENCE_LEVEL = 95.0
DEFAULT_MEDP_STEP = 0.05
DEFAULT_MEDP_MIN = 0.001


@dataclass(frozen=True)
class AnalysisConfig:
    """Parameters shared by every coefficient of one analysis.

    Attributes:
        confidence_level: Probability mass of the reported interval, in
            percent. Must lie strictly between 0 and 100.
        step: Decrement of the MEDP search, in percent. Must be positive.
        min_effect: Smallest effect magnitude treated as non-negligible.
            Must be non-negative.
    """

    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
    step: float = DEFAULT_MEDP_STEP
    min_effect: float = DEFAULT_MEDP_MIN

    def validate(self) -> "AnalysisConfig":
        """Return ``self`` after checking every field.

        Raises:
            InvalidInput: If any field is non-numeric, non-finite or out of
                range.
        """
        level = _as_float("confidence_level", self.confidence_level)
        step = _as_float("step", self.step)
        min_effect = _as_float("min_effect", self.min_effect)
        if not 0.0 < level < 100.0:
            raise InvalidInput(
                f"confidence_level must lie strictly between 0 and 100, got {level!r}"
            )
        if step <= 0.0:
            raise InvalidInput(f"step must be positive, got {step!r}")
        if min_effect < 0.0:
            raise InvalidInput(f"min_effect must be non-negative, got {min_effect!r}")
        return self

    def replace(self, **overrides) -> "AnalysisConfig":
        """Return a copy with the non-``None`` overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


def _as_float(name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(out):
        raise InvalidInput(f"{name} must be finite, got {value!r}")
    return out
