import numpy as np
import pandas as pd

SUMMARY_STATS = ["min", "q1", "median", "mean", "q3", "max"]


def summary_stats(values) -> dict:
    """Five-number summary plus mean (min, Q1, median, mean, Q3, max)."""
    s = pd.Series(np.asarray(values, dtype=float).ravel()).dropna()
    if s.empty:
        return {k: np.nan for k in SUMMARY_STATS}
    return {
        "min": float(s.min()),
        "q1": float(s.quantile(0.25)),
        "median": float(s.median()),
        "mean": float(s.mean()),
        "q3": float(s.quantile(0.75)),
        "max": float(s.max()),
    }


def summarise_columns(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """One row per statistic, one column per requested column."""
    table = pd.DataFrame({c: summary_stats(df[c]) for c in columns})
    return table.reindex(SUMMARY_STATS)
