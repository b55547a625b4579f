from __future__ import annotations
from functools import lru_cache
from typing import List, Tuple

from tictactoe.core.board import Board
from tictactoe.types import Coord


def empty_cells(board: Board) -> List[Coord]:
    return board.empty_cells()


def center_cell(board: Board) -> Coord:
    """
    The center of the grid. For even sizes there are four central cells;
    the upper-left one is used.
    """
    mid = (board.size - 1) // 2
    return (mid, mid)


def corner_cells(board: Board) -> List[Coord]:
    last = board.size - 1
    # dict.fromkeys keeps order and collapses the 1x1 case
    return list(dict.fromkeys([(0, 0), (0, last), (last, 0), (last, last)]))


def edge_cells(board: Board) -> List[Coord]:
    """Border cells that are not corners, row-major."""
    n = board.size
    last = n - 1
    corners = set(corner_cells(board))
    return [
        (r, c)
        for r in range(n)
        for c in range(n)
        if (r in (0, last) or c in (0, last)) and (r, c) not in corners
    ]


@lru_cache(maxsize=None)
def search_order(size: int) -> Tuple[Coord, ...]:
    """
    Every cell of a size x size grid in search order: center, corners,
    then the rest by distance from the center.
    """
    mid_cell = ((size - 1) // 2, (size - 1) // 2)
    last = size - 1
    corners = {(0, 0), (0, last), (last, 0), (last, last)}
    # true center of the grid, fractional for even sizes
    mid = (size - 1) / 2

    def rank(pos: Coord) -> tuple:
        if pos == mid_cell:
            return (0, 0.0)
        if pos in corners:
            return (1, 0.0)
        r, c = pos
        return (2, max(abs(r - mid), abs(c - mid)) + 0.01 * (abs(r - mid) + abs(c - mid)))

    cells = [(r, c) for r in range(size) for c in range(size)]
    return tuple(sorted(cells, key=rank))


def ordered_candidates(board: Board) -> List[Coord]:
    """Empty cells in search order. Good moves first means earlier cutoffs."""
    n = board.size
    cells = board.cells
    return [(r, c) for (r, c) in search_order(n) if cells[r * n + c] is None]


def candidates_near_marks(board: Board, reach: int) -> List[Coord]:
    """
    Empty cells within `reach` steps (any direction) of a placed mark, in
    search order. On an empty board every cell is a candidate.
    """
    n = board.size
    occupied = [board.coord(i) for i, v in enumerate(board.cells) if v is not None]
    if not occupied:
        return ordered_candidates(board)

    near = set()
    for (r, c) in occupied:
        for rr in range(max(0, r - reach), min(n, r + reach + 1)):
            for cc in range(max(0, c - reach), min(n, c + reach + 1)):
                near.add((rr, cc))
    return [p for p in ordered_candidates(board) if p in near]
