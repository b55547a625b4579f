from __future__ import annotations

import math

from .league_types import Agg, LeagueSettings


def ppg(a: Agg) -> float:
    """Points per game: 1 for a win, 0.5 for a draw."""
    return (a.points / a.games) if a.games else 0.0


def avg_ms_per_move(a: Agg) -> float:
    return (a.time_ms / a.moves) if a.moves else 0.0


def avg_depth(a: Agg) -> float:
    return (a.depth_sum / a.moves) if a.moves else 0.0


def wilson_lcb(p: float, n: int, z: float) -> float:
    """Lower end of the Wilson score interval for a rate p over n games."""
    if n <= 0:
        return 0.0
    p = min(1.0, max(0.0, p))
    zz = z * z / n
    spread = z * math.sqrt(max(0.0, p * (1.0 - p) / n + zz / (4.0 * n)))
    return max(0.0, (p + zz / 2.0 - spread) / (1.0 + zz))


def strength_score(a: Agg, z: float) -> float:
    return wilson_lcb(ppg(a), a.games, z)


def compute_factor(ms_per_move: float, ms_target: float, alpha: float, min_factor: float) -> float:
    """Speed multiplier in [min_factor, 1]; 1 for instant moves, shrinking with sqrt(ms / target)."""
    ratio = max(1e-9, ms_per_move) / max(1e-9, ms_target)
    return max(min_factor, 1.0 / (1.0 + alpha * math.sqrt(ratio)))


def efficiency_score(a: Agg, settings: LeagueSettings) -> float:
    factor = compute_factor(
        avg_ms_per_move(a),
        ms_target=settings.ms_target,
        alpha=settings.speed_alpha,
        min_factor=settings.speed_min_factor,
    )
    return strength_score(a, settings.z) * factor
