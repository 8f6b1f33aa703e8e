"""Adapt fitted-model objects to a mapping of coefficient name to draws.

Every adapter exposes the same small interface so the analysis driver never
inspects fitting-library objects directly:

- ``coefficients()`` returns an ordered ``dict`` of name -> 1-D draws,
- ``formula`` is the model formula text (``""`` when unknown),
- ``family`` is a short label for the kind of fit.

Supported sources:
    DrawsTableModel:
        Wide table of posterior draws, one column per coefficient.
    InferenceDataModel:
        Objects with a ``posterior`` mapping of variable -> (chain, draw, ...)
        arrays, such as ArviZ ``InferenceData``.
    SamplingDistributionModel:
        Frequentist results with ``params`` and ``cov_params()`` (statsmodels
        OLS/GLM/MixedLM). Draws come from the asymptotic normal sampling
        distribution of the estimates.
    BootstrapModel:
        Nonparametric (optionally cluster) bootstrap of any fitting callable.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Mapping, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_N_DRAWS = 4000
DEFAULT_N_BOOT = 1000


class ModelDraws:
    """Base adapter: coefficient name -> draws, plus formula text."""

    family: str = "draws"

    def __init__(self, formula: str = ""):
        self._formula = str(formula or "")

    @property
    def formula(self) -> str:
        return self._formula

    def coefficients(self) -> Dict[str, np.ndarray]:
        raise NotImplementedError

    def coefficient_names(self) -> list[str]:
        return list(self.coefficients())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(family={self.family!r}, formula={self.formula!r})"


class DrawsTableModel(ModelDraws):
    """Wide table of draws with one column per coefficient.

    Args:
        table (pandas.DataFrame | Mapping[str, array-like]): Draws. Columns of
            a DataFrame must be numeric; mapping values must be 1-D.
        formula (str, optional): Model formula text.

    Raises:
        ValueError: If the table is empty or a column is non-numeric or not
            one-dimensional.
    """

    family = "posterior draws"

    def __init__(self, table, formula: str = ""):
        super().__init__(formula)
        if isinstance(table, pd.DataFrame):
            draws = {str(col): table[col] for col in table.columns}
        elif isinstance(table, Mapping):
            draws = {str(name): values for name, values in table.items()}
        else:
            raise TypeError(
                f"Expected a DataFrame or mapping of draws, got {type(table).__name__}."
            )
        if not draws:
            raise ValueError("Draws table has no coefficient columns.")

        self._draws: Dict[str, np.ndarray] = {}
        for name, values in draws.items():
            if np.ndim(values) > 1:
                raise ValueError(f"Draws for '{name}' must be one-dimensional.")
            series = pd.Series(np.asarray(values).ravel())
            if not pd.api.types.is_numeric_dtype(series):
                raise ValueError(f"Draws column '{name}' is not numeric.")
            if series.empty:
                raise ValueError(f"Draws column '{name}' is empty.")
            self._draws[name] = series.to_numpy(dtype=float)

    def coefficients(self) -> Dict[str, np.ndarray]:
        return dict(self._draws)


def _expand_variable(name: str, values: np.ndarray) -> Dict[str, np.ndarray]:
    """Flatten a (chain, draw, *shape) array into per-element draws."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim <= 2:
        return {name: arr.reshape(-1)}
    shape = arr.shape[2:]
    flat = arr.reshape(arr.shape[0] * arr.shape[1], *shape)
    out: Dict[str, np.ndarray] = {}
    for idx in np.ndindex(*shape):
        label = ",".join(str(i) for i in idx)
        out[f"{name}[{label}]"] = flat[(slice(None),) + idx]
    return out


class InferenceDataModel(ModelDraws):
    """Posterior draws read from an inference-data style object.

    Args:
        idata: Object with a ``posterior`` attribute mapping variable name to
            an array shaped ``(chain, draw, *shape)``. An ArviZ
            ``InferenceData`` (whose posterior is an xarray ``Dataset``)
            qualifies, as does any plain ``dict`` of arrays.
        var_names (Iterable[str], optional): Variables to keep, in order.
            Defaults to every posterior variable.
        formula (str, optional): Model formula text.

    Raises:
        TypeError: If ``idata`` has no ``posterior``.
        KeyError: If a requested variable is absent.
    """

    family = "Bayesian posterior"

    def __init__(self, idata, var_names: Optional[Iterable[str]] = None, formula: str = ""):
        super().__init__(formula)
        posterior = getattr(idata, "posterior", None)
        if posterior is None:
            raise TypeError(
                f"{type(idata).__name__} has no 'posterior' group to read draws from."
            )
        names = list(var_names) if var_names is not None else list(posterior.keys())
        missing = [n for n in names if n not in posterior]
        if missing:
            raise KeyError(f"Variables not found in posterior: {missing}")
        self._posterior = posterior
        self._names = names

    def coefficients(self) -> Dict[str, np.ndarray]:
        out: Dict[str, np.ndarray] = {}
        for name in self._names:
            out.update(_expand_variable(str(name), np.asarray(self._posterior[name])))
        return out


class SamplingDistributionModel(ModelDraws):
    """Draws from the asymptotic sampling distribution of a frequentist fit.

    Args:
        result: Fitted results object exposing ``params`` (or ``fe_params``
            for mixed models) and ``cov_params()``.
        n_draws (int, optional): Number of draws per coefficient. Defaults to
            ``4000``.
        seed (int, optional): Seed for ``numpy.random.default_rng``.

    Raises:
        TypeError: If ``result`` exposes no parameter estimates.
        ValueError: If ``n_draws`` is smaller than 1.

    Note:
        For mixed models only the fixed effects are kept; variance components
        have no symmetric sampling distribution worth reporting this way.
    """

    def __init__(self, result, n_draws: int = DEFAULT_N_DRAWS, seed: int = 0):
        model = getattr(result, "model", None)
        super().__init__(getattr(model, "formula", "") or "")
        params = getattr(result, "fe_params", None)
        if params is None:
            params = getattr(result, "params", None)
        if params is None:
            raise TypeError(
                f"{type(result).__name__} exposes no 'params' to build draws from."
            )
        if int(n_draws) < 1:
            raise ValueError(f"n_draws must be >= 1, got {n_draws}")

        if not isinstance(params, pd.Series):
            names = getattr(model, "exog_names", None)
            params = np.asarray(params, dtype=float).ravel()
            if names is None or len(names) < len(params):
                names = [f"x{i}" for i in range(len(params))]
            params = pd.Series(params, index=list(names)[: len(params)])

        self._result = result
        self._params = params.astype(float)
        self.n_draws = int(n_draws)
        self.seed = seed
        self.family = type(model).__name__ if model is not None else "frequentist"

    def _covariance(self) -> np.ndarray:
        cov = self._result.cov_params()
        names = list(self._params.index)
        if isinstance(cov, pd.DataFrame):
            return cov.loc[names, names].to_numpy(dtype=float)
        k = len(names)
        return np.asarray(cov, dtype=float)[:k, :k]

    def coefficients(self) -> Dict[str, np.ndarray]:
        rng = np.random.default_rng(self.seed)
        draws = rng.multivariate_normal(
            self._params.to_numpy(), self._covariance(), size=self.n_draws
        )
        return {str(name): draws[:, i] for i, name in enumerate(self._params.index)}


class BootstrapModel(ModelDraws):
    """Nonparametric bootstrap distribution of a fitting callable.

    Args:
        data (pandas.DataFrame): Observations the model is fitted on.
        fit (Callable[[pandas.DataFrame], Mapping[str, float]]): Returns
            coefficient estimates for one data set, e.g.
            ``lambda d: smf.ols("y ~ x", d).fit().params``.
        n_boot (int, optional): Number of replicates. Defaults to ``1000``.
        seed (int, optional): Seed for ``numpy.random.default_rng``.
        groups (str, optional): Column identifying clusters (participants).
            When given, whole clusters are resampled and relabelled so that
            duplicated clusters stay distinct.
        formula (str, optional): Model formula text.

    Raises:
        ValueError: If ``data`` is empty or ``n_boot < 2``.
        KeyError: If ``groups`` is not a column of ``data``.

    Note:
        Replicates whose fit raises are logged and skipped. The coefficient
        set is fixed by the fit on the full data.
    """

    family = "bootstrap"

    def __init__(
        self,
        data: pd.DataFrame,
        fit: Callable[[pd.DataFrame], Mapping[str, float]],
        n_boot: int = DEFAULT_N_BOOT,
        seed: int = 0,
        groups: Optional[str] = None,
        formula: str = "",
    ):
        super().__init__(formula)
        if data.empty:
            raise ValueError("Cannot bootstrap an empty data table.")
        if int(n_boot) < 2:
            raise ValueError(f"n_boot must be >= 2, got {n_boot}")
        if groups is not None and groups not in data.columns:
            raise KeyError(f"Cluster column '{groups}' not found in data.")
        self.data = data
        self.fit = fit
        self.n_boot = int(n_boot)
        self.seed = seed
        self.groups = groups
        self._draws: Optional[Dict[str, np.ndarray]] = None

    def _resample(self, rng: np.random.Generator, clusters) -> pd.DataFrame:
        if clusters is None:
            idx = rng.integers(0, len(self.data), size=len(self.data))
            return self.data.iloc[idx].reset_index(drop=True)
        keys = list(clusters)
        picks = rng.integers(0, len(keys), size=len(keys))
        parts = []
        for new_id, k in enumerate(picks):
            part = clusters[keys[k]].copy()
            part[self.groups] = new_id
            parts.append(part)
        return pd.concat(parts, ignore_index=True)

    def coefficients(self) -> Dict[str, np.ndarray]:
        if self._draws is not None:
            return dict(self._draws)

        reference = pd.Series(self.fit(self.data), dtype=float)
        names = [str(n) for n in reference.index]
        clusters = (
            dict(tuple(self.data.groupby(self.groups, sort=False)))
            if self.groups is not None
            else None
        )

        rng = np.random.default_rng(self.seed)
        rows = []
        n_failed = 0
        for b in range(self.n_boot):
            frame = self._resample(rng, clusters)
            try:
                estimates = pd.Series(self.fit(frame), dtype=float)
            except Exception as exc:
                n_failed += 1
                logger.warning("Bootstrap replicate %d failed: %s", b, exc)
                continue
            estimates.index = [str(n) for n in estimates.index]
            rows.append(estimates.reindex(names).to_numpy(dtype=float))

        if len(rows) < 2:
            raise RuntimeError(
                f"Bootstrap produced {len(rows)} usable replicate(s) out of {self.n_boot}."
            )
        if n_failed:
            logger.info(
                "Bootstrap kept %d of %d replicates (%d failed)",
                len(rows),
                self.n_boot,
                n_failed,
            )

        draws = np.vstack(rows)
        self._draws = {
            name: col[np.isfinite(col)] for name, col in zip(names, draws.T)
        }
        return dict(self._draws)


def as_model(obj, formula: str = "") -> ModelDraws:
    """Wrap ``obj`` in the matching adapter.

    Args:
        obj: A :class:`ModelDraws`, a DataFrame/mapping of draws, an object
            with a ``posterior`` group, or a fitted result with ``params``.
        formula (str, optional): Formula text for table and posterior
            sources, which carry none of their own.

    Returns:
        ModelDraws: Adapter exposing ``coefficients()`` and ``formula``.

    Raises:
        TypeError: If no adapter recognizes ``obj``.
    """
    if isinstance(obj, ModelDraws):
        return obj
    if isinstance(obj, (pd.DataFrame, Mapping)):
        return DrawsTableModel(obj, formula=formula)
    if hasattr(obj, "posterior"):
        return InferenceDataModel(obj, formula=formula)
    if hasattr(obj, "params") and hasattr(obj, "cov_params"):
        return SamplingDistributionModel(obj)
    raise TypeError(f"Don't know how to extract draws from {type(obj).__name__}.")
