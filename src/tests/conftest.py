# src/tests/conftest.py
import sys
from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest

# Add the parent directory of this tests folder (i.e., src/) to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

matplotlib.use("Agg")

REGION = "United Kingdom"


@pytest.fixture
def make_table():
    """Build an ObservationTable from a list of sales volumes (None = missing)."""
    def _make(values, start="2010-01-01", region=REGION):
        dates = pd.date_range(start, periods=len(values), freq="MS")
        return pd.DataFrame({
            "date": dates,
            "region": region,
            "sales_volume": pd.array(values, dtype="Int64"),
        })
    return _make


@pytest.fixture
def noisy_table(make_table):
    """60 months of seasonal, noisy volumes (no collinearity between lags)."""
    rng = np.random.default_rng(42)
    n = 60
    t = np.arange(n)
    values = 80_000 + 6_000 * np.sin(2 * np.pi * t / 12) + rng.normal(0, 2_500, n)
    return make_table([int(v) for v in values], start="2015-01-01")


@pytest.fixture
def hpi_csv(tmp_path):
    """
    Raw UK HPI style CSV: 2015-01..2022-12 for two regions.
    The last two United Kingdom months have no SalesVolume, as in the real file.
    """
    rng = np.random.default_rng(7)
    dates = pd.date_range("2015-01-01", "2022-12-01", freq="MS")
    rows = []
    for region, level in [("United Kingdom", 90_000), ("England", 70_000)]:
        t = np.arange(len(dates))
        vols = level + 8_000 * np.sin(2 * np.pi * t / 12) + rng.normal(0, 3_000, len(dates))
        for i, (d, v) in enumerate(zip(dates, vols)):
            missing = region == "United Kingdom" and i >= len(dates) - 2
            rows.append({
                "Date": d.strftime("%d/%m/%Y"),
                "RegionName": region,
                "AreaCode": "K02000001" if region == "United Kingdom" else "E92000001",
                "AveragePrice": f"{250000 + 100 * i:.2f}",
                "SalesVolume": "" if missing else str(int(v)),
            })
    path = tmp_path / "UK-HPI-full-file.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


@pytest.fixture
def config_yaml(tmp_path, hpi_csv):
    out_dir = tmp_path / "reports"
    path = tmp_path / "config.yaml"
    path.write_text(
        "data:\n"
        f"  path: {hpi_csv}\n"
        "  region: United Kingdom\n"
        "split:\n"
        "  train_end: 2019-12-31\n"
        "features:\n"
        "  primary_lags: 12\n"
        "  baseline_lags: 1\n"
        "output:\n"
        f"  dir: {out_dir}\n",
        encoding="utf-8",
    )
    return path
