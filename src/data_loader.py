"""
data_loader.py
CSV loader for the UK House Price Index full file, with schema checks.
- Ensures the Date / RegionName / SalesVolume columns exist (from utils.constants).
- Enforces dtypes:
    * Date -> datetime64 (day/month/year text, no time component)
    * RegionName -> string
    * SalesVolume -> Int64, nullable, non-negative
- Raises DataLoaderError with a concise summary if any row fails validation.

select_region() narrows the loaded frame to one region's ObservationTable:
date / region / sales_volume, sorted by date, one row per date.
"""

import logging
import os

import pandas as pd

from utils.constants import (
    RAW_DATE_COL, RAW_REGION_COL, RAW_TARGET_COL, RAW_COLUMNS,
    DATE_COL, DATE_FORMAT, NA_VALUES, DEFAULT_DATASET, DEFAULT_REGION,
)
from utils.schema import OBSERVATION_COLS, TARGET_COL

logger = logging.getLogger(__name__)


class DataLoaderError(Exception):
    """Raised when the input file cannot be read or fails validation."""


class EmptyResultError(DataLoaderError):
    """Raised when a region or date filter leaves no rows."""


def _ensure_required_columns(df: pd.DataFrame, path: str) -> None:
    missing = [c for c in RAW_COLUMNS if c not in df.columns]
    if missing:
        raise DataLoaderError(f"Missing required columns in {path}: {missing}")


def _bool(mask: pd.Series) -> pd.Series:
    # nullable comparisons yield <NA>; treat as "not invalid"
    return mask.fillna(False).astype(bool)


def load_data(path: str | None = None, region: str | None = None) -> pd.DataFrame:
    """
    Read the HPI CSV and return a typed DataFrame (all source columns kept).
    With `region`, only that region's rows are kept and validated, so a bad
    value elsewhere in the file does not stop the analysis.
    Raises DataLoaderError if the file is missing, a required column is absent,
    or any Date / SalesVolume value cannot be coerced.
    """
    if path is None:
        path = DEFAULT_DATASET
    if not os.path.exists(path):
        raise DataLoaderError(f"Input file not found: {path}")

    df = pd.read_csv(
        path,
        dtype="string",
        keep_default_na=True,
        na_values=NA_VALUES,
    )
    _ensure_required_columns(df, path)
    logger.info("Read %d rows from %s", len(df), path)

    if region is not None:
        # original row indices are kept for error messages
        df = df[(df[RAW_REGION_COL] == region).fillna(False).astype(bool)].copy()

    # ---------- Coercions & validation ----------
    raw_dates = df[RAW_DATE_COL]
    dates = pd.to_datetime(raw_dates, format=DATE_FORMAT, errors="coerce")
    invalid_mask = dates.isna()

    df[RAW_REGION_COL] = df[RAW_REGION_COL].astype("string")
    invalid_mask |= df[RAW_REGION_COL].isna()

    # sales volume: may be empty, otherwise a non-negative whole number
    raw_volume = df[RAW_TARGET_COL]
    volume = pd.to_numeric(raw_volume, errors="coerce").astype("Float64")
    invalid_mask |= raw_volume.notna() & volume.isna()
    invalid_mask |= _bool(volume < 0)
    invalid_mask |= _bool((volume % 1) != 0)

    if invalid_mask.any():
        example_idx = list(df.index[invalid_mask.to_numpy()][:5])
        raise DataLoaderError(
            f"Validation failed for {int(invalid_mask.sum())} row(s) in {path}. "
            f"Invalid {RAW_DATE_COL}/{RAW_REGION_COL}/{RAW_TARGET_COL} at row indices (first 5): {example_idx}."
        )

    # ---------- Final tidy types ----------
    df[RAW_DATE_COL] = dates.dt.normalize()
    df[RAW_TARGET_COL] = volume.astype("Int64")
    return df


def select_region(df: pd.DataFrame, region: str = DEFAULT_REGION) -> pd.DataFrame:
    """
    Keep one region and the three analysis columns under canonical names.
    Raises EmptyResultError if the region matches nothing and DataLoaderError
    if the region has more than one row for a date.
    """
    out = df[df[RAW_REGION_COL] == region]
    if out.empty:
        raise EmptyResultError(f"Region filter matched no rows: {region!r}")

    out = (
        out[list(RAW_COLUMNS)]
        .rename(columns=RAW_COLUMNS)
        .sort_values(DATE_COL, kind="mergesort")
        .reset_index(drop=True)
    )

    dupes = out[DATE_COL][out[DATE_COL].duplicated()]
    if not dupes.empty:
        shown = [d.date().isoformat() for d in dupes.head(5)]
        raise DataLoaderError(f"Region {region!r} has duplicate dates (first 5): {shown}")

    logger.info(
        "Selected %d rows for %r (%d with missing %s)",
        len(out), region, int(out[TARGET_COL].isna().sum()), TARGET_COL,
    )
    return out[OBSERVATION_COLS].copy()


def drop_missing_target(table: pd.DataFrame) -> pd.DataFrame:
    """Rows without a sales volume are removed before lagging."""
    return table.dropna(subset=[TARGET_COL]).reset_index(drop=True)
