from __future__ import annotations

import random
from dataclasses import dataclass, field

from tictactoe.core.board import Board
from tictactoe.errors import SearchExhausted
from tictactoe.types import Coord, Player


@dataclass
class RandomAgent:
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)
    last_info: dict = field(default_factory=dict)

    def choose_move(self, board: Board, mark: Player) -> Coord:
        moves = board.empty_cells()
        if not moves:
            raise SearchExhausted("No valid moves.")
        self.last_info = {"source": "random", "nodes": 0, "depth": 0, "time_ms": 1}
        return self.rng.choice(moves)
