from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Team:
    name: str
    make: Callable[[], object]  # must be picklable (use functools.partial, not lambda)


@dataclass
class Agg:
    games: int = 0
    points: float = 0.0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    moves: int = 0
    time_ms: int = 0
    nodes: int = 0
    depth_sum: int = 0


@dataclass(frozen=True)
class LeagueSettings:
    board_size: int = 3
    win_length: int = 3
    games_per_pair: int = 2
    opening_plies: int = 1
    seed: int = 1234
    max_workers: int = 1
    z: float = 1.28
    ms_target: float = 50.0
    speed_alpha: float = 0.35
    speed_min_factor: float = 0.75
