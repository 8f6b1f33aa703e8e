"""Tests for the fitted-model adapters."""

import logging
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest
import statsmodels.formula.api as smf

from psyreport.models import (
    BootstrapModel,
    DrawsTableModel,
    InferenceDataModel,
    ModelDraws,
    SamplingDistributionModel,
    as_model,
)


def _regression_frame(n: int = 200, seed: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    x = rng.normal(size=n)
    z = rng.normal(size=n)
    y = 1.0 + 2.0 * x - 0.5 * z + 0.3 * x * z + rng.normal(scale=0.5, size=n)
    return pd.DataFrame({"x": x, "z": z, "y": y})


def _grouped_frame(n_groups: int = 12, per_group: int = 15, seed: int = 1) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    g = np.repeat(np.arange(n_groups), per_group)
    intercepts = rng.normal(scale=1.0, size=n_groups)[g]
    x = rng.normal(size=g.size)
    y = 0.5 + 1.5 * x + intercepts + rng.normal(scale=0.5, size=g.size)
    return pd.DataFrame({"g": g, "x": x, "y": y})


class TestDrawsTableModel:
    def test_preserves_column_order(self, draws_table):
        model = DrawsTableModel(draws_table, formula="vs ~ mpg * cyl")
        coefs = model.coefficients()

        assert list(coefs) == ["(Intercept)", "mpg", "cyl", "mpg:cyl"]
        assert model.formula == "vs ~ mpg * cyl"
        np.testing.assert_array_equal(coefs["mpg"], draws_table["mpg"].to_numpy())

    def test_mapping_input(self):
        model = DrawsTableModel({"a": [1.0, 2.0], "b": np.array([3.0, 4.0, 5.0])})
        assert model.coefficient_names() == ["a", "b"]
        assert len(model.coefficients()["b"]) == 3

    def test_non_numeric_column_rejected(self):
        with pytest.raises(ValueError, match="'label' is not numeric"):
            DrawsTableModel(pd.DataFrame({"a": [1.0, 2.0], "label": ["x", "y"]}))

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError):
            DrawsTableModel(pd.DataFrame())

    def test_two_dimensional_values_rejected(self):
        with pytest.raises(ValueError, match="one-dimensional"):
            DrawsTableModel({"a": np.ones((2, 2))})


class TestInferenceDataModel:
    def test_scalar_and_vector_variables(self):
        rng = np.random.default_rng(0)
        idata = SimpleNamespace(
            posterior={
                "b": rng.normal(size=(2, 500)),
                "beta": rng.normal(size=(2, 500, 3)),
            }
        )
        coefs = InferenceDataModel(idata).coefficients()

        assert list(coefs) == ["b", "beta[0]", "beta[1]", "beta[2]"]
        assert all(len(v) == 1000 for v in coefs.values())
        np.testing.assert_array_equal(
            coefs["beta[1]"], idata.posterior["beta"][:, :, 1].reshape(-1)
        )

    def test_matrix_variable_labels(self):
        idata = SimpleNamespace(posterior={"w": np.zeros((2, 10, 2, 2))})
        coefs = InferenceDataModel(idata).coefficients()
        assert list(coefs) == ["w[0,0]", "w[0,1]", "w[1,0]", "w[1,1]"]

    def test_var_names_select_and_order(self):
        idata = SimpleNamespace(posterior={"a": np.ones((1, 5)), "b": np.zeros((1, 5))})
        model = InferenceDataModel(idata, var_names=["b", "a"])
        assert model.coefficient_names() == ["b", "a"]

    def test_unknown_variable(self):
        idata = SimpleNamespace(posterior={"a": np.ones((1, 5))})
        with pytest.raises(KeyError, match="missing"):
            InferenceDataModel(idata, var_names=["missing"])

    def test_object_without_posterior(self):
        with pytest.raises(TypeError, match="posterior"):
            InferenceDataModel(object())


class TestSamplingDistributionModel:
    def test_ols_draws_match_estimates(self):
        result = smf.ols("y ~ x * z", data=_regression_frame()).fit()
        model = SamplingDistributionModel(result, n_draws=4000, seed=1)
        coefs = model.coefficients()

        assert list(coefs) == list(result.params.index)
        assert model.formula == "y ~ x * z"
        assert model.family == "OLS"
        for name, draws in coefs.items():
            se = result.bse[name]
            assert len(draws) == 4000
            assert abs(np.mean(draws) - result.params[name]) < 0.2 * se
            assert np.std(draws, ddof=1) == pytest.approx(se, rel=0.1)

    def test_draws_are_reproducible(self):
        result = smf.ols("y ~ x", data=_regression_frame()).fit()
        first = SamplingDistributionModel(result, n_draws=100, seed=5).coefficients()
        second = SamplingDistributionModel(result, n_draws=100, seed=5).coefficients()
        np.testing.assert_array_equal(first["x"], second["x"])

    def test_mixed_model_uses_fixed_effects(self):
        df = _grouped_frame()
        result = smf.mixedlm("y ~ x", df, groups=df["g"]).fit()
        model = SamplingDistributionModel(result, n_draws=500)

        assert model.coefficient_names() == list(result.fe_params.index)
        assert model.family == "MixedLM"

    def test_requires_params(self):
        with pytest.raises(TypeError, match="params"):
            SamplingDistributionModel(SimpleNamespace())

    def test_requires_positive_draw_count(self):
        result = smf.ols("y ~ x", data=_regression_frame()).fit()
        with pytest.raises(ValueError):
            SamplingDistributionModel(result, n_draws=0)


def _slope_fit(frame: pd.DataFrame) -> pd.Series:
    slope, intercept = np.polyfit(frame["x"], frame["y"], 1)
    return pd.Series({"slope": slope, "intercept": intercept})


class TestBootstrapModel:
    def test_row_bootstrap(self):
        df = _regression_frame(n=80)
        model = BootstrapModel(df, _slope_fit, n_boot=200, seed=3)
        coefs = model.coefficients()

        assert list(coefs) == ["slope", "intercept"]
        assert len(coefs["slope"]) == 200
        assert np.median(coefs["slope"]) == pytest.approx(2.0, abs=0.3)

    def test_same_seed_same_draws(self):
        df = _regression_frame(n=40)
        a = BootstrapModel(df, _slope_fit, n_boot=20, seed=9).coefficients()
        b = BootstrapModel(df, _slope_fit, n_boot=20, seed=9).coefficients()
        np.testing.assert_array_equal(a["slope"], b["slope"])

    def test_cluster_bootstrap_keeps_cluster_count(self):
        df = _grouped_frame(n_groups=10, per_group=6)
        seen = []

        def fit(frame):
            seen.append((frame["g"].nunique(), len(frame)))
            return _slope_fit(frame)

        BootstrapModel(df, fit, n_boot=15, seed=0, groups="g").coefficients()

        assert len(seen) == 16
        assert all(n_clusters == 10 for n_clusters, _ in seen)
        assert all(n_rows == 60 for _, n_rows in seen)

    def test_failed_replicates_are_skipped(self, caplog):
        caplog.set_level(logging.WARNING)
        df = _regression_frame(n=30)
        calls = []

        def flaky_fit(frame):
            calls.append(1)
            if len(calls) % 2 == 0:
                raise np.linalg.LinAlgError("singular matrix")
            return _slope_fit(frame)

        coefs = BootstrapModel(df, flaky_fit, n_boot=10, seed=0).coefficients()

        assert len(coefs["slope"]) == 5
        assert sum("Bootstrap replicate" in rec.message for rec in caplog.records) == 5

    def test_all_replicates_failing(self):
        df = _regression_frame(n=30)
        calls = []

        def fit(frame):
            calls.append(1)
            if len(calls) > 1:
                raise RuntimeError("did not converge")
            return _slope_fit(frame)

        with pytest.raises(RuntimeError, match="usable replicate"):
            BootstrapModel(df, fit, n_boot=5).coefficients()

    def test_argument_checks(self):
        df = _regression_frame(n=10)
        with pytest.raises(ValueError):
            BootstrapModel(df, _slope_fit, n_boot=1)
        with pytest.raises(KeyError):
            BootstrapModel(df, _slope_fit, groups="participant")
        with pytest.raises(ValueError):
            BootstrapModel(df.iloc[0:0], _slope_fit)


class TestAsModel:
    def test_dispatch(self, draws_table):
        assert isinstance(as_model(draws_table), DrawsTableModel)
        assert isinstance(as_model({"a": [1.0]}), DrawsTableModel)
        idata = SimpleNamespace(posterior={"a": np.ones((1, 3))})
        assert isinstance(as_model(idata), InferenceDataModel)
        result = smf.ols("y ~ x", data=_regression_frame()).fit()
        assert isinstance(as_model(result), SamplingDistributionModel)

    def test_adapter_passes_through(self, draws_table):
        model = DrawsTableModel(draws_table)
        assert as_model(model) is model
        assert isinstance(model, ModelDraws)

    def test_unknown_object(self):
        with pytest.raises(TypeError):
            as_model(42)
