# schema.py
"""
Schema definition for the lag-regression features and target.
"""

from utils.constants import DATE_COL, REGION_COL

ID_COLS = [DATE_COL, REGION_COL]

TARGET_COL = "sales_volume"

OBSERVATION_COLS = ID_COLS + [TARGET_COL]

# Prediction/residual columns attached by evaluation
PRED_COL = "pred"
RESID_COL = "resid"


def lag_col(i: int) -> str:
    return f"{TARGET_COL}_lag_{i}"


def lag_cols(lags: int) -> list[str]:
    """Predictor names for lags 1..lags, nearest first."""
    return [lag_col(i) for i in range(1, lags + 1)]
