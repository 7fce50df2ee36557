# pipeline.py
"""
UK HPI sales-volume lag regression.

CLI:
- Full analysis (12-lag models, diagnostics, 1-lag baseline comparison):
  python pipeline.py run --data data/UK-HPI-full-file-2023-06.csv --out-dir reports

- Show identifier / outcome / predictor roles of the lag features:
  python pipeline.py describe --data data/UK-HPI-full-file-2023-06.csv

Defaults come from config.yaml; any flag overrides its config value.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import pandas as pd

from comparison import ModelReport, coefficient_table, compare_models, run_configuration
from data_loader import drop_missing_target, load_data, select_region
from evaluation import plot_residuals
from features import build_lag_features, describe_roles
from splitter import require_rows, split_by_date

from utils.constants import TRAIN_SUBSET, TEST_SUBSET
from utils.io_utils import ensure_dir, load_config, write_table

logger = logging.getLogger(__name__)


# ---------- Helpers ----------
def _settings(config_path, data_path, region, train_end, out_dir) -> dict:
    cfg = load_config(config_path)
    return {
        "data_path": data_path or cfg["data"]["path"],
        "region": region or cfg["data"]["region"],
        "train_end": pd.Timestamp(train_end).normalize() if train_end else cfg["split"]["train_end"],
        "primary_lags": int(cfg["features"]["primary_lags"]),
        "baseline_lags": int(cfg["features"]["baseline_lags"]),
        "out_dir": out_dir or cfg["output"]["dir"],
    }


def prepare_subsets(data_path: str, region: str, train_end) -> dict[str, pd.DataFrame]:
    """Load -> region -> split -> drop missing targets. Fails on any empty stage."""
    table = select_region(load_data(data_path, region=region), region)
    print(f"Loaded {len(table)} rows for {region}")

    train, test = split_by_date(table, train_end)
    subsets = {TRAIN_SUBSET: train, TEST_SUBSET: test}
    for name in subsets:
        require_rows(subsets[name], name)
        subsets[name] = require_rows(drop_missing_target(subsets[name]), name)
        logger.info("%s subset: %d rows (%s .. %s)", name, len(subsets[name]),
                    subsets[name]["date"].min().date(), subsets[name]["date"].max().date())
    return subsets


def _print_table(title: str, df: pd.DataFrame, index: bool = False) -> None:
    print(f"\n== {title} ==")
    print(df.to_string(index=index))


def _report_model(report: ModelReport) -> None:
    _print_table(f"{report.name}: coefficients", report.model.tidy())
    _print_table(f"{report.name}: fit statistics", report.model.glance())


# ---------- Commands ----------
def cmd_run(
    data_path: Optional[str] = None,
    config_path: Optional[str] = None,
    region: Optional[str] = None,
    train_end: Optional[str] = None,
    out_dir: Optional[str] = None,
    plots: bool = True,
) -> pd.DataFrame:
    s = _settings(config_path, data_path, region, train_end, out_dir)
    subsets = prepare_subsets(s["data_path"], s["region"], s["train_end"])
    out_dir = ensure_dir(s["out_dir"])

    reports: list[ModelReport] = []

    # Primary models: each subset fitted and diagnosed on itself
    for subset, table in subsets.items():
        report = run_configuration(table, s["primary_lags"], subset)
        reports.append(report)
        _report_model(report)

        ev = report.evaluation
        _print_table(f"{report.name}: MAE", pd.DataFrame([{"metric": "mae", "estimate": ev.mae}]))
        _print_table(f"{report.name}: summary", ev.summary, index=True)
        write_table(ev.summary, out_dir, f"summary_{subset}.csv", index=True)

        if plots:
            plot_path = os.path.join(out_dir, f"residuals_{subset}.png")
            plot_residuals(ev, f"{subset} ({report.lags} lags): Residuals vs Fitted", plot_path)
            print(f"✅ Residual plot saved to: {plot_path}")

    # Baseline: same procedure with a single lag
    for subset, table in subsets.items():
        report = run_configuration(table, s["baseline_lags"], subset)
        reports.append(report)
        _report_model(report)

    comparison = compare_models(reports)
    _print_table("Model comparison", comparison)
    write_table(comparison, out_dir, "model_comparison.csv")
    write_table(coefficient_table(reports), out_dir, "coefficients.csv")
    print(f"✅ Tables saved to: {out_dir}")
    return comparison


def cmd_describe(
    data_path: Optional[str] = None,
    config_path: Optional[str] = None,
    region: Optional[str] = None,
    train_end: Optional[str] = None,
) -> pd.DataFrame:
    s = _settings(config_path, data_path, region, train_end, None)
    subsets = prepare_subsets(s["data_path"], s["region"], s["train_end"])
    feats = build_lag_features(subsets[TRAIN_SUBSET], lags=s["primary_lags"])
    roles = describe_roles(feats)
    _print_table("Feature roles", roles)
    _print_table(
        f"{TRAIN_SUBSET} features (latest first)",
        feats.frame.sort_values("date", ascending=False).head(10),
    )
    return roles


# ---------- CLI ----------
def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="UK HPI sales-volume lag regression")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def _common(p):
        p.add_argument("--data", default=None, help="HPI CSV path (default: config data.path)")
        p.add_argument("--config", default=None, help="config.yaml path")
        p.add_argument("--region", default=None)
        p.add_argument("--train-end", default=None, help="last training date, YYYY-MM-DD")
        p.add_argument("--verbose", action="store_true")

    p_run = sub.add_parser("run", help="Fit, evaluate and compare lag models")
    _common(p_run)
    p_run.add_argument("--out-dir", default=None)
    p_run.add_argument("--no-plots", action="store_true")

    p_desc = sub.add_parser("describe", help="Show lag feature roles")
    _common(p_desc)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "run":
        cmd_run(args.data, args.config, args.region, args.train_end, args.out_dir, plots=not args.no_plots)
    elif args.cmd == "describe":
        cmd_describe(args.data, args.config, args.region, args.train_end)
    else:
        parser.print_help()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
