# features.py
from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from utils.constants import DATE_COL, PRIMARY_LAGS
from utils.schema import ID_COLS, TARGET_COL, lag_cols


@dataclass(frozen=True, eq=False)
class LagFeatures:
    """
    Lagged sales-volume rows ready for fitting.

    `frame` holds the identifier columns, the target and the lag columns.
    Identifier columns stay in the frame for output but are never part of `X`.
    """
    frame: pd.DataFrame
    lags: int
    id_cols: tuple = tuple(ID_COLS)

    @property
    def predictors(self) -> list[str]:
        return lag_cols(self.lags)

    @property
    def X(self) -> pd.DataFrame:
        return self.frame[self.predictors]

    @property
    def y(self) -> pd.Series:
        return self.frame[TARGET_COL]

    @property
    def ids(self) -> pd.DataFrame:
        return self.frame[list(self.id_cols)]

    @property
    def empty(self) -> bool:
        return self.frame.empty

    def __len__(self) -> int:
        return len(self.frame)


def build_lag_features(
    table: pd.DataFrame,
    lags: int = PRIMARY_LAGS,
    id_cols: Sequence[str] = ID_COLS,
) -> LagFeatures:
    """
    Build `sales_volume_lag_1..lags` on a copy of the table.

    Steps:
      - sort by date ascending (lags are positional, so a missing month shifts
        the window by one row rather than one calendar month)
      - lag i = target value from i rows earlier
      - drop rows whose target or any lag is missing; the first `lags` rows
        always go
    Fewer than lags + 1 rows gives an empty result, not an error.
    Calling it again on the same table gives the same rows.
    """
    lags = int(lags)
    if lags < 1:
        raise ValueError(f"lags must be >= 1, got {lags}")

    id_cols = tuple(id_cols)
    if DATE_COL not in id_cols:
        raise ValueError(f"id_cols must include '{DATE_COL}' to order rows: {id_cols}")
    missing = [c for c in id_cols + (TARGET_COL,) if c not in table.columns]
    if missing:
        raise ValueError(f"Missing columns for lag features: {missing}")

    out = (
        table[list(id_cols) + [TARGET_COL]]
        .sort_values(DATE_COL, kind="mergesort")
        .reset_index(drop=True)
    )
    out[TARGET_COL] = out[TARGET_COL].astype("float64")

    predictors = lag_cols(lags)
    for i, col in enumerate(predictors, start=1):
        # shift(i) only looks backwards, never at the row's own or later values
        out[col] = out[TARGET_COL].shift(i)

    out = out.dropna(subset=[TARGET_COL] + predictors).reset_index(drop=True)
    return LagFeatures(frame=out, lags=lags, id_cols=id_cols)


def describe_roles(features: LagFeatures) -> pd.DataFrame:
    """Column / type / role / source overview of a feature set."""
    rows = []
    for col in features.frame.columns:
        if col in features.id_cols:
            role = "id"
        elif col == TARGET_COL:
            role = "outcome"
        else:
            role = "predictor"

        dtype = features.frame[col].dtype
        if pd.api.types.is_datetime64_any_dtype(dtype):
            kind = "date"
        elif pd.api.types.is_numeric_dtype(dtype):
            kind = "numeric"
        else:
            kind = "nominal"

        source = "derived" if col in features.predictors else "original"
        rows.append({"variable": col, "type": kind, "role": role, "source": source})
    return pd.DataFrame(rows, columns=["variable", "type", "role", "source"])
