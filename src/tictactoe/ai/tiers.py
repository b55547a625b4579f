from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tictactoe.config import FULL_DEPTH_MAX_CELLS, SEARCH_DEPTHS


class Strategy(Enum):
    RANDOM = "random"
    HEURISTIC = "heuristic"
    MINIMAX = "minimax"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def tier(self) -> "Tier":
        return TIERS[self]


@dataclass(frozen=True)
class Tier:
    strategy: Strategy
    large_board_depth: Optional[int] = None

    def depth_for(self, board_size: int) -> Optional[int]:
        """Search depth on this board; None means search to the end."""
        if self.strategy is not Strategy.MINIMAX:
            return None
        if board_size * board_size <= FULL_DEPTH_MAX_CELLS:
            return None
        return self.large_board_depth


# easy: no lookahead at all
# medium: win / block / positional preference
# hard, expert: win / block / minimax, deeper on expert
TIERS = {
    Difficulty.EASY: Tier(Strategy.RANDOM),
    Difficulty.MEDIUM: Tier(Strategy.HEURISTIC),
    Difficulty.HARD: Tier(Strategy.MINIMAX, SEARCH_DEPTHS["hard"]),
    Difficulty.EXPERT: Tier(Strategy.MINIMAX, SEARCH_DEPTHS["expert"]),
}
