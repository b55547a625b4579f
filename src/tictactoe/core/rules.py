from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

from tictactoe.core.board import Board
from tictactoe.types import Coord, Player


class Direction(Enum):
    ROW = (0, 1)
    COLUMN = (1, 0)
    DIAG_DOWN_RIGHT = (1, 1)
    DIAG_DOWN_LEFT = (1, -1)

    @property
    def step(self) -> Tuple[int, int]:
        return self.value


@dataclass(frozen=True, slots=True)
class LineSpec:
    direction: Direction
    row: int
    col: int
    length: int

    def coords(self) -> List[Coord]:
        dr, dc = self.direction.step
        return [(self.row + i * dr, self.col + i * dc) for i in range(self.length)]


@lru_cache(maxsize=None)
def generate_lines(size: int, win_length: int) -> Tuple[LineSpec, ...]:
    """
    Every run of exactly `win_length` cells on a size x size board.

    Scan order is rows, columns, down-right diagonals, down-left diagonals,
    each top-to-bottom then left-to-right. The first winning line reported
    to the UI follows this order.
    """
    n, k = size, win_length
    span = n - k + 1
    if span <= 0:
        return ()

    lines: List[LineSpec] = []

    # Horizontal
    for r in range(n):
        for c in range(span):
            lines.append(LineSpec(Direction.ROW, r, c, k))

    # Vertical
    for r in range(span):
        for c in range(n):
            lines.append(LineSpec(Direction.COLUMN, r, c, k))

    # Diagonal down-right
    for r in range(span):
        for c in range(span):
            lines.append(LineSpec(Direction.DIAG_DOWN_RIGHT, r, c, k))

    # Diagonal down-left (starts in the right-hand columns)
    for r in range(span):
        for c in range(k - 1, n):
            lines.append(LineSpec(Direction.DIAG_DOWN_LEFT, r, c, k))

    return tuple(lines)


@lru_cache(maxsize=None)
def line_indices(size: int, win_length: int) -> Tuple[Tuple[int, ...], ...]:
    """Same lines as generate_lines, as flat cell indices (hot path for search)."""
    return tuple(
        tuple(r * size + c for (r, c) in line.coords())
        for line in generate_lines(size, win_length)
    )


@lru_cache(maxsize=None)
def lines_through(size: int, win_length: int) -> Tuple[Tuple[Tuple[int, ...], ...], ...]:
    """For each flat cell index, the lines (as flat indices) that contain it."""
    per_cell: List[List[Tuple[int, ...]]] = [[] for _ in range(size * size)]
    for idx in line_indices(size, win_length):
        for i in idx:
            per_cell[i].append(idx)
    return tuple(tuple(lines) for lines in per_cell)


def winning_line(board: Board, mark: Player) -> Optional[List[Coord]]:
    cells = board.cells
    for line, idx in zip(generate_lines(board.size, board.win_length), line_indices(board.size, board.win_length)):
        if all(cells[i] == mark for i in idx):
            return line.coords()
    return None


def has_win(board: Board, mark: Player) -> bool:
    cells = board.cells
    return any(
        all(cells[i] == mark for i in idx)
        for idx in line_indices(board.size, board.win_length)
    )


def wins_through(board: Board, row: int, col: int, mark: Player) -> bool:
    """
    True if `mark` has a run of win_length passing through (row, col).
    After a single placement on a board with no prior win this is
    equivalent to has_win, at a fraction of the cost.
    """
    n = board.size
    cells = board.cells
    for direction in Direction:
        dr, dc = direction.step
        count = 1
        r, c = row + dr, col + dc
        while 0 <= r < n and 0 <= c < n and cells[r * n + c] == mark:
            count += 1
            r += dr
            c += dc
        r, c = row - dr, col - dc
        while 0 <= r < n and 0 <= c < n and cells[r * n + c] == mark:
            count += 1
            r -= dr
            c -= dc
        if count >= board.win_length:
            return True
    return False


def check_winner_with_line(board: Board) -> Optional[Tuple[Player, List[Coord]]]:
    """
    Winner and the first winning line in scan order.
    If (illegally) both marks have a line, the earlier line wins the report.
    """
    cells = board.cells
    for line, idx in zip(generate_lines(board.size, board.win_length), line_indices(board.size, board.win_length)):
        p = cells[idx[0]]
        if p is not None and all(cells[i] == p for i in idx):
            return p, line.coords()
    return None


def check_winner(board: Board) -> Optional[Player]:
    res = check_winner_with_line(board)
    return res[0] if res else None


def is_draw(board: Board) -> bool:
    return board.is_full() and check_winner(board) is None

