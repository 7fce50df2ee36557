# splitter.py
"""
Chronological train/test split of an ObservationTable.
"""

import pandas as pd

from data_loader import EmptyResultError
from utils.constants import DATE_COL


def split_by_date(table: pd.DataFrame, cutoff) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split into (train, test): train holds date <= cutoff, test holds
    date >= cutoff + 1 day. A row on the cutoff belongs to train only.
    """
    if table.empty:
        raise EmptyResultError("Cannot split an empty table.")

    cutoff = pd.Timestamp(cutoff).normalize()
    test_start = cutoff + pd.Timedelta(days=1)

    train = table[table[DATE_COL] <= cutoff].reset_index(drop=True)
    test = table[table[DATE_COL] >= test_start].reset_index(drop=True)
    return train, test


def require_rows(table: pd.DataFrame, subset: str) -> pd.DataFrame:
    if table.empty:
        raise EmptyResultError(
            f"Date split left the {subset} subset empty; check the cutoff against the data range."
        )
    return table
