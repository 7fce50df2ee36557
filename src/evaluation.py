# evaluation.py
"""
Fit diagnostics for a FittedModel on a LagFeatures set.
- evaluate(): predictions, residuals (actual - predicted), MAE and a
  min/Q1/median/mean/Q3/max summary of actuals, predictions and residuals.
- plot_residuals(): residual-vs-fitted scatter with a dashed zero line.
"""

import logging
from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, r2_score

from features import LagFeatures
from models.modeling import FittedModel
from utils.math_utils import summarise_columns
from utils.schema import TARGET_COL, PRED_COL, RESID_COL

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Evaluation:
    augmented: pd.DataFrame
    mae: float
    r2: float
    summary: pd.DataFrame


def evaluate(model: FittedModel, features: LagFeatures) -> Evaluation:
    """
    Attach `pred` and `resid` to the feature rows and compute metrics.
    The features must be built with the lag count the model was fitted on.
    """
    if features.lags != model.lags:
        raise ValueError(
            f"Feature set has {features.lags} lag(s) but the model was fitted on {model.lags}."
        )
    if features.empty:
        raise ValueError("Cannot evaluate on an empty feature set.")

    y_true = features.y.to_numpy(dtype=float)
    y_pred = model.predict(features)

    augmented = features.frame.copy()
    augmented[PRED_COL] = y_pred
    augmented[RESID_COL] = y_true - y_pred

    mae = float(mean_absolute_error(y_true, y_pred))
    r2 = float(r2_score(y_true, y_pred)) if len(y_true) > 1 else np.nan
    summary = summarise_columns(augmented, [TARGET_COL, PRED_COL, RESID_COL])

    logger.info("Evaluated %d rows%s: MAE=%.2f", len(augmented),
                f" [{model.label}]" if model.label else "", mae)
    return Evaluation(augmented=augmented, mae=mae, r2=r2, summary=summary)


def plot_residuals(evaluation: Evaluation, title: str, path: str | None = None):
    """
    Residuals vs fitted values.
    With `path` the figure is saved and closed; without it the caller owns the
    open figure and must plt.close() it.
    """
    df = evaluation.augmented
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(df[PRED_COL], df[RESID_COL], alpha=0.2, s=60, color="red", linewidths=1)
    ax.axhline(0, color="black", linestyle="--", linewidth=1)
    ax.set_xlabel("Fitted values", fontsize=12)
    ax.set_ylabel("Residuals", fontsize=12)
    ax.set_title(title, fontsize=15, fontweight="bold")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if path is not None:
        fig.savefig(path, dpi=150)
        plt.close(fig)
    return fig
