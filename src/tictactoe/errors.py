# src/tictactoe/errors.py

from __future__ import annotations


class GameError(ValueError):
    """Base class for every rejected game operation."""


class InvalidConfig(GameError):
    """Board size / win length combination cannot be played."""


class OutOfBounds(GameError):
    """Position lies outside the grid."""


class CellOccupied(GameError):
    """Move targets a cell that already holds a mark."""


class IllegalMove(GameError):
    """Move attempted out of turn, before start, or after the game ended."""


class SearchExhausted(RuntimeError):
    """
    A move was requested on a board with no empty cells.

    Draw detection runs before every AI turn, so reaching this means the
    game state is broken. Not recoverable by the caller.
    """
