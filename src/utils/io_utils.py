# utils/io_utils.py
import os

import pandas as pd
import yaml

DEFAULT_CONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.yaml")

REQUIRED_CONFIG_KEYS = {
    "data": ["path", "region"],
    "split": ["train_end"],
    "features": ["primary_lags", "baseline_lags"],
    "output": ["dir"],
}


def load_config(path: str = None) -> dict:
    """
    Load config.yaml.
    If no path provided, defaults to the config.yaml shipped in this package.
    """
    if path is None:
        path = DEFAULT_CONFIG

    if not os.path.exists(path):
        raise FileNotFoundError(f"config.yaml not found at: {path}")
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    for section, keys in REQUIRED_CONFIG_KEYS.items():
        for key in keys:
            if key not in (cfg.get(section) or {}):
                raise KeyError(f"Missing config key: {section}.{key} ({path})")

    # YAML gives a datetime.date for unquoted dates; keep one type downstream
    cfg["split"]["train_end"] = pd.Timestamp(cfg["split"]["train_end"]).normalize()
    return cfg


def ensure_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path


def write_table(df: pd.DataFrame, out_dir: str, filename: str, index: bool = False) -> str:
    out_path = os.path.join(ensure_dir(out_dir), filename)
    df.to_csv(out_path, index=index)
    return out_path
