from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

NUMERIC_COLS = (
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "efficiency_score",
    "moves", "time_ms", "nodes", "avg_depth",
)

TIER_ORDER = ["easy", "medium", "hard", "expert"]


@dataclass(frozen=True)
class LoadSpec:
    csv_path: Path
    expected_cols: tuple[str, ...] = ("name", *NUMERIC_COLS)


def tier_of(name: str) -> str:
    """'hard seed2' -> 'hard'. Unknown names map to themselves."""
    head = name.strip().split(" ", 1)[0].lower()
    return head if head in TIER_ORDER else name


def load_results(spec: LoadSpec) -> pd.DataFrame:
    """
    Read a league_results_*.csv into a DataFrame.

    "name" is required. Other expected columns may be missing (older
    exports) and are only logged; those present are coerced to numbers.
    A "tier" column is derived from the team name.
    """
    if not spec.csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {spec.csv_path}")

    df = pd.read_csv(spec.csv_path)
    df = df.rename(columns=lambda c: str(c).strip())

    if "name" not in df.columns:
        raise ValueError(f"CSV missing required column 'name'. Columns: {list(df.columns)}")

    missing = [c for c in spec.expected_cols if c not in df.columns]
    if missing:
        logger.warning("%s is missing columns %s", spec.csv_path.name, missing)

    numeric = [c for c in spec.expected_cols if c != "name" and c in df.columns]
    df[numeric] = df[numeric].apply(pd.to_numeric, errors="coerce")

    df["name"] = df["name"].astype(str).str.strip()
    df = df[df["name"] != ""].copy()
    df["tier"] = df["name"].map(tier_of)
    return df


def load_latest_from_dir(results_dir: Path, pattern: str = "league_results_*.csv") -> Path:
    if not results_dir.exists():
        raise FileNotFoundError(f"Results directory not found: {results_dir}")

    # timestamped names sort chronologically
    files = sorted(results_dir.glob(pattern))
    if not files:
        raise FileNotFoundError(f"No files matching {pattern} in {results_dir}")
    return files[-1]
