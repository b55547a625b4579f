from __future__ import annotations
from typing import Protocol

from tictactoe.core.board import Board
from tictactoe.types import Coord, Player


class Agent(Protocol):
    name: str
    last_info: dict

    def choose_move(self, board: Board, mark: Player) -> Coord:
        ...
