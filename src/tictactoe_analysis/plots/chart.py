from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Optional[Path]:
    if show:
        plt.show()
        return None
    _ensure_dir(outdir)
    path = outdir / filename
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_histograms(df: pd.DataFrame, outdir: Path, cols: Iterable[str], *, show: bool) -> list[Path]:
    written = []
    for c in cols:
        if c not in df.columns or not pd.api.types.is_numeric_dtype(df[c]):
            continue
        fig = plt.figure()
        plt.hist(df[c].dropna(), bins=20)
        plt.title(f"Histogram: {c}")
        plt.xlabel(c)
        plt.ylabel("count")
        path = _finish(fig, outdir, f"hist_{c}.png", show=show)
        if path is not None:
            written.append(path)
    return written


def plot_scatter(df: pd.DataFrame, outdir: Path, x: str, y: str, *, show: bool) -> Optional[Path]:
    if x not in df.columns or y not in df.columns:
        return None
    if not (pd.api.types.is_numeric_dtype(df[x]) and pd.api.types.is_numeric_dtype(df[y])):
        return None

    fig = plt.figure()
    plt.scatter(df[x], df[y], alpha=0.7)
    if "name" in df.columns:
        for _, row in df.iterrows():
            plt.annotate(str(row["name"]), (row[x], row[y]), fontsize=8, alpha=0.8)
    plt.title(f"{y} vs {x}")
    plt.xlabel(x)
    plt.ylabel(y)
    return _finish(fig, outdir, f"scatter_{y}_vs_{x}.png", show=show)


def plot_top_bar(df: pd.DataFrame, outdir: Path, metric: str, top_n: int, *, show: bool) -> Optional[Path]:
    if "name" not in df.columns or metric not in df.columns:
        return None
    if not pd.api.types.is_numeric_dtype(df[metric]):
        return None

    top = df[["name", metric]].dropna().sort_values(metric, ascending=False).head(top_n)
    fig = plt.figure(figsize=(10, 5))
    plt.bar(top["name"].astype(str), top[metric].astype(float))
    plt.title(f"Top {min(top_n, len(top))}: {metric}")
    plt.xlabel("agent")
    plt.ylabel(metric)
    plt.xticks(rotation=45, ha="right")
    return _finish(fig, outdir, f"top_{top_n}_{metric}.png", show=show)


def plot_tier_results(tiers: pd.DataFrame, outdir: Path, *, show: bool) -> Optional[Path]:
    """Stacked win / draw / loss bars, one per difficulty tier."""
    needed = {"tier", "wins", "draws", "losses"}
    if tiers.empty or not needed.issubset(tiers.columns):
        return None

    labels = tiers["tier"].astype(str)
    wins = tiers["wins"].astype(float)
    draws = tiers["draws"].astype(float)
    losses = tiers["losses"].astype(float)

    fig = plt.figure(figsize=(8, 5))
    plt.bar(labels, wins, label="wins")
    plt.bar(labels, draws, bottom=wins, label="draws")
    plt.bar(labels, losses, bottom=wins + draws, label="losses")
    plt.title("Results by difficulty")
    plt.xlabel("difficulty")
    plt.ylabel("games")
    plt.legend()
    return _finish(fig, outdir, "tier_results.png", show=show)
