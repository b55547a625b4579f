from __future__ import annotations

from tictactoe.core.board import Board
from tictactoe.core.rules import line_indices, lines_through
from tictactoe.types import Player, other


def score_line(own: int, opp: int) -> int:
    # mixed line: both players present => no line potential for either
    if own and opp:
        return 0
    if own:
        return 10 ** own
    if opp:
        return -(10 ** opp)
    return 0


def evaluate(board: Board, player: Player) -> int:
    """
    Positional score of a non-terminal board from `player`'s side.

    Every win_length line holding only one side's marks counts
    10**marks for that side; mixed and empty lines count nothing.
    """
    opp = other(player)
    cells = board.cells

    score = 0
    for idx in line_indices(board.size, board.win_length):
        own = 0
        theirs = 0
        for i in idx:
            v = cells[i]
            if v == player:
                own += 1
            elif v == opp:
                theirs += 1
        score += score_line(own, theirs)
    return score


def placement_delta(board: Board, row: int, col: int, player: Player) -> int:
    """
    How much the mark just placed at (row, col) changed evaluate(board, player).
    Only the lines through that cell are rescored.
    """
    i = row * board.size + col
    mover = board.cells[i]
    if mover is None:
        raise ValueError(f"Cell ({row}, {col}) is empty.")
    opp = other(player)
    cells = board.cells

    delta = 0
    for idx in lines_through(board.size, board.win_length)[i]:
        own = 0
        theirs = 0
        for j in idx:
            v = cells[j]
            if v == player:
                own += 1
            elif v == opp:
                theirs += 1
        if mover == player:
            delta += score_line(own, theirs) - score_line(own - 1, theirs)
        else:
            delta += score_line(own, theirs) - score_line(own, theirs - 1)
    return delta


def max_evaluation(board: Board) -> int:
    """Upper bound on |evaluate(board, ...)| for this board geometry."""
    return len(line_indices(board.size, board.win_length)) * 10 ** board.win_length


def terminal_base(board: Board) -> int:
    """
    Score of a win found at ply 0. Kept well above any positional
    evaluation so decided games always outrank undecided ones.
    """
    return 10 * max_evaluation(board) + board.size * board.size
