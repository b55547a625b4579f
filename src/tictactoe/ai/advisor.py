from __future__ import annotations

import random
from typing import Optional

from tictactoe.core.board import Board
from tictactoe.core.geometry import center_cell, corner_cells, edge_cells
from tictactoe.core.rules import wins_through
from tictactoe.errors import SearchExhausted
from tictactoe.types import Coord, Player


def find_immediate_win(board: Board, mark: Player) -> Optional[Coord]:
    """First empty cell (row-major) that completes a line for `mark`."""
    for (r, c) in board.empty_cells():
        with board.placed(r, c, mark):
            if wins_through(board, r, c, mark):
                return (r, c)
    return None


def find_immediate_block(board: Board, opponent: Player) -> Optional[Coord]:
    """Cell the opponent would win on next move, if any."""
    return find_immediate_win(board, opponent)


def positional_fallback(board: Board, rng: random.Random) -> Coord:
    """
    Center if free, else a random free corner, else a random free edge,
    else any free cell.
    """
    empties = board.empty_cells()
    if not empties:
        raise SearchExhausted("No empty cells left for a positional move.")

    center = center_cell(board)
    if board.get(*center) is None:
        return center

    corners = [p for p in corner_cells(board) if board.get(*p) is None]
    if corners:
        return rng.choice(corners)

    edges = [p for p in edge_cells(board) if board.get(*p) is None]
    if edges:
        return rng.choice(edges)

    return rng.choice(empties)
