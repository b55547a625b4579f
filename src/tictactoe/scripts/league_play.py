from __future__ import annotations

import random
from typing import Dict, List, Tuple

from tictactoe.core.board import Board
from tictactoe.core.rules import wins_through
from tictactoe.types import Player, other

from .league_types import Agg

Outcome = str  # "X", "O" or "D"
SideStats = Dict[str, Dict[str, int]]


def seed_agent(agent, seed: int) -> None:
    rng = getattr(agent, "rng", None)
    if rng is not None:
        rng.seed(seed)


def play_headless(
    agent_x,
    agent_o,
    board_size: int = 3,
    win_length: int = 3,
    opening_plies: int = 0,
    seed_base: int = 0,
) -> Tuple[Outcome, SideStats]:
    """
    Play one AI-vs-AI game to the end without any UI.
    The first `opening_plies` moves are random so repeated pairings differ.
    """
    board = Board(board_size, win_length)
    stats: SideStats = {
        "X": {"moves": 0, "time_ms": 0, "nodes": 0, "depth": 0},
        "O": {"moves": 0, "time_ms": 0, "nodes": 0, "depth": 0},
    }

    seed_agent(agent_x, seed_base + 101)
    seed_agent(agent_o, seed_base + 202)

    rng = random.Random(seed_base)
    current: Player = "X"

    for ply in range(board_size * board_size):
        if ply < opening_plies:
            move = rng.choice(board.empty_cells())
        else:
            agent = agent_x if current == "X" else agent_o
            move = agent.choose_move(board, current)

            info = getattr(agent, "last_info", None) or {}
            side_stats = stats[current]
            side_stats["moves"] += 1
            side_stats["time_ms"] += max(1, int(info.get("time_ms", 0)))
            side_stats["nodes"] += int(info.get("nodes", 0))
            side_stats["depth"] += int(info.get("depth", 0))

        board.place(move[0], move[1], current)
        if wins_through(board, move[0], move[1], current):
            return current, stats
        current = other(current)

    return "D", stats


def add_result(agg_a: Agg, agg_b: Agg, outcome: Outcome, a_is_x: bool) -> None:
    agg_a.games += 1
    agg_b.games += 1

    if outcome == "D":
        agg_a.draws += 1
        agg_b.draws += 1
        agg_a.points += 0.5
        agg_b.points += 0.5
        return

    a_won = (outcome == "X" and a_is_x) or (outcome == "O" and not a_is_x)
    if a_won:
        agg_a.wins += 1
        agg_b.losses += 1
        agg_a.points += 1.0
    else:
        agg_b.wins += 1
        agg_a.losses += 1
        agg_b.points += 1.0


def add_stats(agg: Agg, side: Dict[str, int]) -> None:
    agg.moves += side["moves"]
    agg.time_ms += side["time_ms"]
    agg.nodes += side["nodes"]
    agg.depth_sum += side["depth"]


def run_pairing(args) -> List[tuple]:
    """
    Play one pairing, alternating who moves first.
    Top-level so it can be shipped to a worker process.
    """
    (a_name, b_name, a_make, b_make, base_seed, games, board_size, win_length, opening_plies) = args
    out = []
    for g in range(games):
        a_is_x = g % 2 == 0
        a, b = a_make(), b_make()
        ax, ao = (a, b) if a_is_x else (b, a)
        outcome, stats = play_headless(
            ax, ao,
            board_size=board_size,
            win_length=win_length,
            opening_plies=opening_plies,
            seed_base=base_seed + g,
        )
        out.append((a_name, b_name, a_is_x, outcome, stats))
    return out
