from __future__ import annotations
from typing import Iterable, Optional, Set

from tictactoe.config import CLEAR_SCREEN
from tictactoe.game.state import GameSnapshot
from tictactoe.types import Cell, Coord
from tictactoe.ui.colors import EMPTY, MUTED, STATUS, TITLE, WIN_LINE, mark_style, paint


def _piece(cell: Cell, winning: bool = False) -> str:
    if cell is None:
        return paint("·", EMPTY)
    style = mark_style(cell)
    return paint(cell, WIN_LINE + style if winning else style)


def clear_screen() -> None:
    if CLEAR_SCREEN:
        print("\033[2J\033[H", end="")


def render(state: GameSnapshot, status: str = "", highlight: Optional[Iterable[Coord]] = None) -> None:
    clear_screen()

    hl: Set[Coord] = set(highlight) if highlight else set(state.winning_line)
    size = len(state.board)

    print(paint("TIC-TAC-TOE", TITLE))
    if status:
        print(paint(status, STATUS))
    else:
        print()

    nums = "    " + " ".join(str(i + 1) for i in range(size))
    print(paint(nums, MUTED))

    for r, row in enumerate(state.board):
        parts = []
        for col, cell in enumerate(row):
            parts.append(_piece(cell, (r, col) in hl))
        print(paint(f"{r + 1:>2}", MUTED) + " | " + " ".join(parts) + " |")

    print(paint("    " + "—" * (2 * size - 1), MUTED))
    print(paint("    Enter row and column (e.g. 1 3). Enter q to quit.", MUTED))
