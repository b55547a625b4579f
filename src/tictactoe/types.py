# src/tictactoe/types.py

from __future__ import annotations
from typing import Literal, Optional, Tuple

Player = Literal["X", "O"]
Cell = Optional[Player]
Coord = Tuple[int, int]   # (row, col), 0-based
Side = Literal["human", "ai"]

MARKS: Tuple[Player, Player] = ("X", "O")


def other(player: Player) -> Player:
    return "O" if player == "X" else "X"
