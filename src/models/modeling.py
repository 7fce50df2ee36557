# modeling.py
"""
Model fitting for the sales-volume lag regression.
- Ordinary least squares (statsmodels) of sales_volume on its lag columns, with intercept.
- Input checks run before fitting; too little history or a collinear design
  raises instead of returning degenerate coefficients.
- Nothing is written to disk: a FittedModel lives for the run only.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm

from features import LagFeatures
from utils.schema import TARGET_COL

logger = logging.getLogger(__name__)

CONST = "const"
INTERCEPT_TERM = "intercept"


class ModelFitError(ValueError):
    """Base class for fit failures."""


class InsufficientHistoryError(ModelFitError):
    """Fewer complete rows than predictors + 1."""


class RankDeficientFitError(ModelFitError):
    """Design matrix is not full column rank."""


def _where(label: str | None) -> str:
    return f" [{label}]" if label else ""


# ------------------ Fitted model ------------------
@dataclass(frozen=True, eq=False)
class FittedModel:
    results: object  # statsmodels RegressionResultsWrapper
    predictors: tuple
    lags: int
    label: str | None = None

    @property
    def intercept(self) -> float:
        return float(self.results.params[CONST])

    @property
    def coefficients(self) -> dict:
        return {p: float(self.results.params[p]) for p in self.predictors}

    @property
    def r_squared(self) -> float:
        return float(self.results.rsquared)

    @property
    def adj_r_squared(self) -> float:
        return float(self.results.rsquared_adj)

    @property
    def sigma(self) -> float:
        """Residual standard error; NaN when no residual degrees of freedom remain."""
        if self.results.df_resid <= 0:
            return float("nan")
        return float(np.sqrt(self.results.scale))

    @property
    def n_obs(self) -> int:
        return int(self.results.nobs)

    def predict(self, features: LagFeatures) -> np.ndarray:
        X = _design_matrix(features.X, list(self.predictors))
        return np.asarray(self.results.predict(X), dtype=float).ravel()

    def tidy(self) -> pd.DataFrame:
        """One row per term: estimate, standard error, t statistic, p-value."""
        r = self.results
        terms = [CONST] + list(self.predictors)
        return pd.DataFrame({
            "term": [INTERCEPT_TERM if t == CONST else t for t in terms],
            "estimate": [float(r.params[t]) for t in terms],
            "std_error": [float(r.bse[t]) for t in terms],
            "statistic": [float(r.tvalues[t]) for t in terms],
            "p_value": [float(r.pvalues[t]) for t in terms],
        })

    def glance(self) -> pd.DataFrame:
        """Single-row model statistics."""
        r = self.results
        return pd.DataFrame([{
            "r_squared": self.r_squared,
            "adj_r_squared": self.adj_r_squared,
            "sigma": self.sigma,
            "statistic": float(r.fvalue),
            "p_value": float(r.f_pvalue),
            "df": float(r.df_model),
            "log_lik": float(r.llf),
            "aic": float(r.aic),
            "bic": float(r.bic),
            "nobs": self.n_obs,
            "df_residual": float(r.df_resid),
        }])


# ------------------ Input checks ------------------
def _design_matrix(X: pd.DataFrame, predictors: list[str]) -> pd.DataFrame:
    missing = [c for c in predictors if c not in X.columns]
    if missing:
        raise ValueError(f"Missing predictor columns: {missing}")
    return sm.add_constant(X[predictors].astype("float64"), has_constant="add")


def _check_inputs(features: LagFeatures, label: str | None) -> pd.DataFrame:
    """Type and completeness checks; returns only complete target/predictor rows."""
    if not isinstance(features, LagFeatures):
        raise TypeError("features must be a LagFeatures instance.")

    cols = [TARGET_COL] + features.predictors
    data = features.frame[cols].dropna()

    n_needed = len(features.predictors) + 1
    if len(data) < n_needed:
        raise InsufficientHistoryError(
            f"Need at least {n_needed} complete rows to fit {features.lags} lag(s)"
            f"{_where(label)}, got {len(data)}."
        )
    return data


# ------------------ Training ------------------
def fit(features: LagFeatures, label: str | None = None) -> FittedModel:
    """
    Fit sales_volume ~ sales_volume_lag_1 + ... + sales_volume_lag_k by OLS.
    `label` (e.g. "train") is only used in log lines and error messages.
    """
    data = _check_inputs(features, label)
    predictors = features.predictors

    X = _design_matrix(data, predictors)
    y = data[TARGET_COL].astype("float64")

    rank = int(np.linalg.matrix_rank(X.to_numpy()))
    if rank < X.shape[1]:
        raise RankDeficientFitError(
            f"Design matrix has rank {rank} < {X.shape[1]} columns"
            f"{_where(label)}; lag columns are collinear or too few rows remain."
        )

    results = sm.OLS(y, X).fit()
    model = FittedModel(results=results, predictors=tuple(predictors), lags=features.lags, label=label)
    logger.info(
        "Fitted %d-lag OLS%s on %d rows: R^2=%.4f sigma=%.2f",
        features.lags, _where(label), model.n_obs, model.r_squared, model.sigma,
    )
    return model
