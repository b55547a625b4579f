from __future__ import annotations
from typing import Optional

from tictactoe.types import Coord

QUIT_WORDS = {"q", "quit", "exit"}


def parse_move(raw: str, size: int) -> Optional[Coord]:
    """
    "row col" (1-based, space or comma separated) -> 0-based (row, col).
    Returns None when the player wants to quit.
    """
    s = raw.strip().lower()
    if s in QUIT_WORDS:
        return None

    parts = s.replace(",", " ").split()
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError("Invalid input. Enter row and column (e.g. 2 3) or q.")

    row, col = (int(p) - 1 for p in parts)
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Row and column must be between 1 and {size}.")
    return (row, col)


def ask_yes_no(question: str, default: bool = True) -> bool:
    hint = "Y/n" if default else "y/N"
    s = input(f"{question} [{hint}] ").strip().lower()
    if not s:
        return default
    return s in {"y", "yes"}
