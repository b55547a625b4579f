from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

from ..io.load_results import TIER_ORDER


MetricKey = Literal[
    "ppg",
    "strength_wilson_lcb",
    "efficiency_score",
    "avg_ms_per_move",
    "wins",
    "points",
]

# smaller is better
ASCENDING_METRICS = {"avg_ms_per_move", "losses"}

TABLE_COLS = [
    "name", "tier",
    "games", "wins", "draws", "losses",
    "ppg",
    "strength_wilson_lcb",
    "efficiency_score",
    "avg_ms_per_move",
    "nodes", "avg_depth",
]


@dataclass(frozen=True)
class SummaryConfig:
    metric: MetricKey = "strength_wilson_lcb"
    top_n: int = 20
    min_games: int = 0


def _require_cols(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Present: {list(df.columns)}")


def filter_rows(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    if cfg.min_games <= 0:
        return df.copy()
    _require_cols(df, ["games"])
    return df.loc[df["games"].fillna(0) >= cfg.min_games].copy()


def top_table(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    """Teams ranked by cfg.metric, best first, with a 1-based "rk" column."""
    _require_cols(df, ["name", cfg.metric])

    ranked = filter_rows(df, cfg).sort_values(
        cfg.metric, ascending=cfg.metric in ASCENDING_METRICS, kind="stable"
    )
    ranked = ranked[[c for c in TABLE_COLS if c in ranked.columns]]
    ranked = ranked.head(cfg.top_n).reset_index(drop=True)
    ranked.insert(0, "rk", range(1, len(ranked) + 1))
    return ranked


def tier_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per difficulty tier: summed W/D/L and games, mean speed and
    depth, ordered easy -> expert.
    """
    _require_cols(df, ["tier", "games", "wins", "draws", "losses"])

    agg = {
        "games": ("games", "sum"),
        "wins": ("wins", "sum"),
        "draws": ("draws", "sum"),
        "losses": ("losses", "sum"),
    }
    if "avg_ms_per_move" in df.columns:
        agg["avg_ms_per_move"] = ("avg_ms_per_move", "mean")
    if "avg_depth" in df.columns:
        agg["avg_depth"] = ("avg_depth", "mean")

    out = df.groupby("tier", sort=False).agg(**agg)
    out["score_rate"] = (out["wins"] + 0.5 * out["draws"]) / out["games"].where(out["games"] > 0)

    order = [t for t in TIER_ORDER if t in out.index] + [t for t in out.index if t not in TIER_ORDER]
    return out.loc[order].reset_index()


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    num = df.select_dtypes(include="number")
    if num.empty:
        return pd.DataFrame()
    return num.describe(percentiles=[0.25, 0.5, 0.75]).T


def top_correlations(df: pd.DataFrame, top_k: int = 10) -> pd.DataFrame:
    """Strongest pairwise correlations between numeric columns, by absolute value."""
    num = df.select_dtypes(include="number")
    # constant columns have undefined correlation
    num = num.loc[:, num.nunique(dropna=True) > 1]
    cols = list(num.columns)
    if len(cols) < 2:
        return pd.DataFrame(columns=["a", "b", "corr", "abs"])

    corr = num.corr()
    rows = [
        (a, b, corr.at[a, b])
        for i, a in enumerate(cols)
        for b in cols[i + 1:]
        if pd.notna(corr.at[a, b])
    ]
    pairs = pd.DataFrame(rows, columns=["a", "b", "corr"])
    pairs["abs"] = pairs["corr"].abs()
    return pairs.sort_values("abs", ascending=False, kind="stable").head(top_k).reset_index(drop=True)
