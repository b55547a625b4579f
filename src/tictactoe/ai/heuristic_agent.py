from __future__ import annotations

import random
import time
from dataclasses import dataclass, field

from tictactoe.ai.advisor import find_immediate_block, find_immediate_win, positional_fallback
from tictactoe.core.board import Board
from tictactoe.errors import SearchExhausted
from tictactoe.types import Coord, Player, other


@dataclass
class HeuristicAgent:
    """
    1-ply agent:
      1) play an immediate winning move
      2) block the opponent's immediate win
      3) center, then a random corner, then a random edge, then anything

    The random choices in 3) keep it from playing the same game twice.
    """
    name: str = "Heuristic AI"
    rng: random.Random = field(default_factory=random.Random)
    last_info: dict = field(default_factory=dict)

    def choose_move(self, board: Board, mark: Player) -> Coord:
        t0 = time.perf_counter()
        moves = board.empty_cells()
        if not moves:
            raise SearchExhausted("No valid moves.")

        m = find_immediate_win(board, mark)
        source = "win"
        if m is None:
            m = find_immediate_block(board, other(mark))
            source = "block"
        if m is None:
            m = positional_fallback(board, self.rng)
            source = "positional"

        self.last_info = {
            "source": source,
            "nodes": 2 * len(moves),
            "depth": 1,
            "time_ms": max(1, int((time.perf_counter() - t0) * 1000)),
        }
        return m
