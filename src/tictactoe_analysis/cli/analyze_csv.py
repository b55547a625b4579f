from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import get_args

from tictactoe.config import LEAGUE_RESULTS_DIR

from ..io.load_results import LoadSpec, load_latest_from_dir, load_results
from ..metrics.summarize import MetricKey, SummaryConfig, filter_rows, numeric_summary, tier_summary, top_correlations, top_table
from ..plots import plot_histograms, plot_scatter, plot_tier_results, plot_top_bar

logger = logging.getLogger(__name__)

DEFAULT_NUMERIC_PLOTS = [
    "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "nodes",
    "avg_depth",
]


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tictactoe-analysis", description="Summarize and chart a difficulty-league CSV.")

    src = ap.add_argument_group("input")
    src.add_argument("--csv", type=str, default=None, help="League CSV to read (default: newest file in --results-dir)")
    src.add_argument("--results-dir", type=str, default=LEAGUE_RESULTS_DIR, help="Where `tictactoe league` wrote its CSVs")
    src.add_argument("--pattern", type=str, default="league_results_*.csv", help="File name glob used with --results-dir")

    out = ap.add_argument_group("output")
    out.add_argument("--outdir", type=str, default="data/figures", help="Figure directory")
    out.add_argument("--show", action="store_true", help="Open figures in a window instead of writing PNGs")
    out.add_argument("--no-plots", action="store_true", help="Tables only")

    ap.add_argument("--top", type=int, default=20, help="Rows in the ranking table and bar chart")
    ap.add_argument(
        "--metric",
        type=str,
        default="strength_wilson_lcb",
        choices=list(get_args(MetricKey)),
        help="Column to rank teams by",
    )
    ap.add_argument("--min-games", type=int, default=0, help="Ignore teams with fewer games")
    ap.add_argument("--log-level", type=str, default="WARNING")

    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if args.csv:
        csv_path = Path(args.csv)
    else:
        csv_path = load_latest_from_dir(Path(args.results_dir), pattern=args.pattern)

    df = load_results(LoadSpec(csv_path=csv_path))
    logger.info("loaded %s (%d rows)", csv_path, len(df))

    print(f"\nLoaded: {csv_path}")
    print(f"Rows: {len(df):,}  Cols: {len(df.columns)}")

    cfg = SummaryConfig(
        metric=args.metric,  # type: ignore[arg-type]
        top_n=args.top,
        min_games=args.min_games,
    )

    print("\n=== Top table ===")
    print(top_table(df, cfg).to_string(index=False))

    tiers = tier_summary(df)
    print("\n=== By difficulty ===")
    print(tiers.to_string(index=False))

    desc = numeric_summary(df)
    if not desc.empty:
        print("\n=== Numeric summary ===")
        print(desc.to_string())

    corrs = top_correlations(df)
    if not corrs.empty:
        print("\n=== Top correlations (abs) ===")
        print(corrs[["a", "b", "corr"]].to_string(index=False))

    if args.no_plots:
        return 0

    outdir = Path(args.outdir)
    filtered = filter_rows(df, cfg)

    plot_histograms(filtered, outdir, DEFAULT_NUMERIC_PLOTS, show=args.show)
    # quality vs speed
    plot_scatter(filtered, outdir, x="avg_ms_per_move", y=args.metric, show=args.show)
    plot_top_bar(filtered, outdir, metric=args.metric, top_n=args.top, show=args.show)
    plot_tier_results(tiers, outdir, show=args.show)

    if not args.show:
        print(f"\nSaved figures to: {outdir.resolve()}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
