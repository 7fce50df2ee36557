# comparison.py
"""
Side-by-side comparison of lag configurations.

Each configuration is fitted and evaluated on the same subset it is given
(within-sample), for both the 12-lag model and the 1-lag baseline.
"""

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from evaluation import Evaluation, evaluate
from features import build_lag_features
from models.modeling import FittedModel, fit


@dataclass(frozen=True, eq=False)
class ModelReport:
    subset: str
    lags: int
    model: FittedModel
    evaluation: Evaluation

    @property
    def name(self) -> str:
        return f"{self.subset}_lag{self.lags}"


def run_configuration(table: pd.DataFrame, lags: int, subset: str) -> ModelReport:
    """Build features, fit, then rebuild features the same way and evaluate."""
    label = f"{subset}, {lags} lag(s)"
    model = fit(build_lag_features(table, lags=lags), label=label)
    evaluation = evaluate(model, build_lag_features(table, lags=lags))
    return ModelReport(subset=subset, lags=lags, model=model, evaluation=evaluation)


def compare_models(reports: Iterable[ModelReport]) -> pd.DataFrame:
    rows = []
    for r in reports:
        rows.append({
            "model": r.name,
            "subset": r.subset,
            "lags": r.lags,
            "n_obs": r.model.n_obs,
            "r_squared": r.model.r_squared,
            "adj_r_squared": r.model.adj_r_squared,
            "sigma": r.model.sigma,
            "mae": r.evaluation.mae,
            "r2": r.evaluation.r2,
        })
    return pd.DataFrame(rows)


def coefficient_table(reports: Iterable[ModelReport]) -> pd.DataFrame:
    """Stacked per-term estimates, standard errors and p-values."""
    frames = []
    for r in reports:
        t = r.model.tidy()
        t.insert(0, "model", r.name)
        frames.append(t)
    if not frames:
        return pd.DataFrame(columns=["model", "term", "estimate", "std_error", "statistic", "p_value"])
    return pd.concat(frames, ignore_index=True)
