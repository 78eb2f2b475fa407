from __future__ import annotations

from pathlib import Path

import pandas as pd


def load_simulation_log(filepath: str | Path) -> pd.DataFrame:
    """
    Read a log written by CSVLogger.

    Returns a DataFrame indexed by time, one column per logged quantity.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"No simulation log at {path}")
    return pd.read_csv(path).set_index("t")


def body_columns(df: pd.DataFrame, body: str, field: str) -> pd.DataFrame:
    """
    Select one logged field of one body.

    Example: ``body_columns(df, "moon", "cm")`` gives columns x, y, z.
    """
    prefix = f"{body}.{field}_"
    cols = [c for c in df.columns if c.startswith(prefix)]
    if not cols:
        raise KeyError(f"No '{field}' columns for body '{body}'")
    return df[cols].rename(columns=lambda c: c[len(prefix):])
