from __future__ import annotations

import csv
import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from tictactoe.ai.pick import agent_for
from tictactoe.ai.tiers import Difficulty

from .league_format import A, Col, print_table
from .league_play import add_result, add_stats, run_pairing
from .league_scoring import avg_depth, avg_ms_per_move, efficiency_score, ppg, strength_score
from .league_types import Agg, LeagueSettings, Team

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "efficiency_score",
    "moves", "time_ms", "nodes", "avg_depth",
]


def make_tier_agent(difficulty: str, board_size: int, seed: int):
    return agent_for(Difficulty(difficulty), board_size, random.Random(seed))


def build_roster(board_size: int, tiers: Sequence[Difficulty] = tuple(Difficulty), seeds: Sequence[int] = (0,)) -> List[Team]:
    teams: List[Team] = []
    for d in tiers:
        for seed in seeds:
            name = d.value if len(seeds) == 1 else f"{d.value} seed{seed}"
            teams.append(Team(name, partial(make_tier_agent, d.value, board_size, seed)))
    return teams


def schedule(teams: Sequence[Team], settings: LeagueSettings) -> List[tuple]:
    items = []
    n = len(teams)
    for i in range(n):
        for j in range(i + 1, n):
            a, b = teams[i], teams[j]
            base_seed = settings.seed + i * 10_000 + j * 100
            items.append((
                a.name, b.name, a.make, b.make, base_seed,
                settings.games_per_pair, settings.board_size, settings.win_length, settings.opening_plies,
            ))
    return items


def run_league(teams: Sequence[Team], settings: LeagueSettings) -> Dict[str, Agg]:
    """Round robin between all teams. Results are aggregated per team name."""
    agg: Dict[str, Agg] = {t.name: Agg() for t in teams}
    items = schedule(teams, settings)

    logger.info(
        "league: %d teams, %d pairings x %d games on %dx%d (%d in a row), workers=%d",
        len(teams), len(items), settings.games_per_pair,
        settings.board_size, settings.board_size, settings.win_length, settings.max_workers,
    )

    def apply(results: Iterable[tuple]) -> None:
        for (a_name, b_name, a_is_x, outcome, stats) in results:
            add_result(agg[a_name], agg[b_name], outcome, a_is_x=a_is_x)
            add_stats(agg[a_name], stats["X" if a_is_x else "O"])
            add_stats(agg[b_name], stats["O" if a_is_x else "X"])

    if settings.max_workers <= 1:
        for item in items:
            apply(run_pairing(item))
    else:
        with ProcessPoolExecutor(max_workers=settings.max_workers) as ex:
            for results in ex.map(run_pairing, items):
                apply(results)

    return agg


def result_rows(agg: Dict[str, Agg], settings: LeagueSettings) -> List[list]:
    rows = []
    for name, a in agg.items():
        rows.append([
            name,
            a.games, a.wins, a.draws, a.losses,
            a.points, round(ppg(a), 6),
            round(strength_score(a, settings.z), 6),
            round(avg_ms_per_move(a), 3),
            round(efficiency_score(a, settings), 6),
            a.moves, a.time_ms, a.nodes, round(avg_depth(a), 3),
        ])
    return rows


def print_standings(agg: Dict[str, Agg], settings: LeagueSettings) -> None:
    cols = [
        Col("rk", 3, "right"),
        Col("agent", 24),
        Col("strength", 9, "right"),
        Col("eff", 9, "right"),
        Col("ppg", 5, "right"),
        Col("g", 4, "right"),
        Col("ms/mv", 7, "right"),
        Col("W-D-L", 9, "right"),
    ]
    ranked = sorted(agg.items(), key=lambda kv: strength_score(kv[1], settings.z), reverse=True)
    rows = []
    for i, (name, a) in enumerate(ranked, start=1):
        rows.append([
            str(i),
            name,
            f"{strength_score(a, settings.z):0.4f}",
            f"{efficiency_score(a, settings):0.4f}",
            f"{ppg(a):0.3f}",
            str(a.games),
            f"{avg_ms_per_move(a):0.1f}",
            f"{a.wins}-{a.draws}-{a.losses}",
        ])
    print_table(
        f"Standings ({settings.board_size}x{settings.board_size}, {settings.win_length} in a row)",
        cols,
        rows,
    )


def export_csv(agg: Dict[str, Agg], settings: LeagueSettings, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"league_results_{ts}.csv"

    with open(out_path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_COLUMNS)
        w.writerows(result_rows(agg, settings))

    logger.info("wrote %s", out_path)
    return out_path


def main(settings: LeagueSettings, seeds: Sequence[int] = (0,), out_dir: Path | None = None) -> Dict[str, Agg]:
    teams = build_roster(settings.board_size, seeds=seeds)
    print(A.bold(f"Roster size: {len(teams)} teams"))

    start = time.perf_counter()
    agg = run_league(teams, settings)
    elapsed = time.perf_counter() - start

    print_standings(agg, settings)
    if out_dir is not None:
        path = export_csv(agg, settings, out_dir)
        print(f"Wrote CSV: {path}")

    print(A.bold(f"Total runtime: {elapsed:0.2f}s"))
    return agg
