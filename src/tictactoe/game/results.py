from __future__ import annotations

from tictactoe.core.board import Board
from tictactoe.core.rules import check_winner_with_line, winning_line
from tictactoe.game.state import ONGOING, Outcome
from tictactoe.types import Player


def outcome(board: Board) -> Outcome:
    w = check_winner_with_line(board)
    if w is not None:
        player, line = w
        return Outcome("win", player, tuple(line))
    if board.is_full():
        return Outcome("draw")
    return ONGOING


def outcome_after(board: Board, mark: Player) -> Outcome:
    """Outcome right after `mark` moved: only that mark can have just won."""
    line = winning_line(board, mark)
    if line is not None:
        return Outcome("win", mark, tuple(line))
    if board.is_full():
        return Outcome("draw")
    return ONGOING
