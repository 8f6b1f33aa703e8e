"""Pytest configuration for repository-relative imports and shared draws."""

import os
import sys

import numpy as np
import pandas as pd
import pytest
from scipy.stats import norm

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture()
def normal_draws() -> np.ndarray:
    """1000 standard-normal draws placed at evenly spaced quantiles, shuffled."""
    grid = norm.ppf((np.arange(1000) + 0.5) / 1000)
    return np.random.default_rng(7).permutation(grid)


@pytest.fixture()
def draws_table() -> pd.DataFrame:
    rng = np.random.default_rng(2024)
    return pd.DataFrame(
        {
            "(Intercept)": rng.normal(-1.0, 0.3, 2000),
            "mpg": rng.normal(0.4, 0.1, 2000),
            "cyl": rng.normal(-0.2, 0.5, 2000),
            "mpg:cyl": rng.normal(0.05, 0.02, 2000),
        }
    )
