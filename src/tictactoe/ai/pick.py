from __future__ import annotations

import random
from typing import Optional

from tictactoe.ai.base import Agent
from tictactoe.ai.heuristic_agent import HeuristicAgent
from tictactoe.ai.minimax_agent import MinimaxAgent
from tictactoe.ai.random_agent import RandomAgent
from tictactoe.ai.tiers import Difficulty, Strategy
from tictactoe.config import SEARCH_NODE_BUDGET, SEARCH_REACH


def agent_for(difficulty: Difficulty, board_size: int, rng: Optional[random.Random] = None) -> Agent:
    """
    Build the agent for a difficulty tier on a given board size.
    Called once per game; the tier is not looked up again per move.
    """
    rng = rng if rng is not None else random.Random()
    tier = difficulty.tier
    label = difficulty.value.capitalize()

    if tier.strategy is Strategy.RANDOM:
        return RandomAgent(name=f"{label} (random)", rng=rng)

    if tier.strategy is Strategy.HEURISTIC:
        return HeuristicAgent(name=f"{label} (heuristic)", rng=rng)

    depth = tier.depth_for(board_size)
    if depth is None:
        return MinimaxAgent(name=f"{label} (minimax full)", rng=rng)
    return MinimaxAgent(
        name=f"{label} (minimax d{depth})",
        depth=depth,
        reach=SEARCH_REACH,
        node_budget=SEARCH_NODE_BUDGET,
        rng=rng,
    )
