import math

import numpy as np
import pytest

from psyreport.stats.descriptive import (
    IntervalEstimate,
    credible_interval,
    sample_mad,
    sample_sd,
)


def test_credible_interval_extremes():
    draws = np.array([4.0, 1.0, 3.0, 2.0, 5.0])

    assert credible_interval(draws, 100.0).as_tuple() == (1.0, 5.0)
    assert credible_interval(draws, 0.0).as_tuple() == (3.0, 3.0)


def test_credible_interval_uses_linear_interpolation():
    draws = np.arange(11, dtype=float)
    interval = credible_interval(draws, 90.0)

    assert interval.lower == pytest.approx(0.5)
    assert interval.upper == pytest.approx(9.5)
    assert interval.width == pytest.approx(9.0)
    assert interval.contains(5.0)
    assert not interval.contains(10.0)


def test_single_draw_has_undefined_sd():
    assert math.isnan(sample_sd(np.array([1.5])))
    assert sample_mad(np.array([1.5])) == 0.0


def test_interval_is_immutable():
    interval = IntervalEstimate(lower=0.0, upper=1.0, level=50.0)
    with pytest.raises(AttributeError):
        interval.lower = 2.0
