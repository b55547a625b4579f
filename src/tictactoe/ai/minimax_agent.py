from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Optional

from tictactoe.ai.advisor import find_immediate_block, find_immediate_win
from tictactoe.ai.search import MinimaxSearch
from tictactoe.core.board import Board
from tictactoe.errors import SearchExhausted
from tictactoe.types import Coord, Player, other


@dataclass
class MinimaxAgent:
    """
    Immediate win, then immediate block, then alpha-beta minimax.
    `depth=None` searches to the end of the game. `reach` and `node_budget`
    are handed to MinimaxSearch to keep large boards responsive.
    """
    name: str = "Minimax AI"
    depth: Optional[int] = None
    reach: Optional[int] = None
    node_budget: Optional[int] = None
    rng: random.Random = field(default_factory=random.Random)
    last_info: dict = field(default_factory=dict)

    def choose_move(self, board: Board, mark: Player) -> Coord:
        t0 = time.perf_counter()
        moves = board.empty_cells()
        if not moves:
            raise SearchExhausted("No valid moves.")

        opp = other(mark)

        # 1) win now
        m = find_immediate_win(board, mark)
        source = "win"

        # 2) block opponent win
        if m is None:
            m = find_immediate_block(board, opp)
            source = "block"

        if m is not None:
            self.last_info = {
                "source": source,
                "nodes": 2 * len(moves),
                "depth": 1,
                "time_ms": max(1, int((time.perf_counter() - t0) * 1000)),
            }
            return m

        # 3) search
        search = MinimaxSearch(
            max_depth=self.depth,
            rng=self.rng,
            reach=self.reach,
            node_budget=self.node_budget,
        )
        m = search.best_move(board, mark, opp)
        self.last_info = {"source": "minimax", **search.last_info}
        return m
