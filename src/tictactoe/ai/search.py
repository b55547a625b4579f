from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from math import inf
from typing import List, Optional, Tuple

from tictactoe.core.board import Board
from tictactoe.core.geometry import candidates_near_marks, ordered_candidates
from tictactoe.core.rules import wins_through
from tictactoe.core.scoring import evaluate, placement_delta, terminal_base
from tictactoe.errors import SearchExhausted
from tictactoe.types import Coord, Player, other

logger = logging.getLogger(__name__)


class _OutOfBudget(Exception):
    pass


@dataclass(slots=True)
class MinimaxSearch:
    """
    Depth-limited minimax with alpha-beta pruning.

    Scores are from the searching side's view: a win found `ply` moves
    deep is worth base - ply, a loss ply - base, a draw 0. When the depth
    limit is hit first, the positional evaluation is used instead. It is
    kept up to date move by move rather than recomputed at each leaf.

    The board is searched in place. Every probe goes through
    Board.placed, so it is back to its original cells on return.

    Large boards:
      reach        only cells within `reach` of a mark on the root board
                   are searched
      node_budget  deepen one ply at a time and stop once a ply would go
                   past this many nodes; the deepest finished ply decides
    """
    max_depth: Optional[int] = None   # None = search to the end of the game
    rng: Optional[random.Random] = None  # tie-break among equal best moves
    reach: Optional[int] = None
    node_budget: Optional[int] = None

    # Stats
    last_info: dict = field(default_factory=dict)

    _nodes: int = 0
    _cutoffs: int = 0
    _me: Player = "X"
    _base: int = 0
    _limit: int = 0
    _budget: Optional[int] = None
    _window: Tuple[Coord, ...] = ()

    def best_move(
        self,
        board: Board,
        mark: Player,
        opponent: Optional[Player] = None,
        max_depth: Optional[int] = None,
    ) -> Coord:
        if opponent is not None and opponent != other(mark):
            raise ValueError(f"Opponent of {mark} must be {other(mark)}, got {opponent}.")

        if self.reach is None:
            moves = ordered_candidates(board)
        else:
            moves = candidates_near_marks(board, self.reach)
        if not moves:
            raise SearchExhausted("Search requested on a full board.")

        depth = max_depth if max_depth is not None else self.max_depth
        if depth is None:
            depth = len(board.empty_cells())
        depth = max(1, depth)

        self._nodes = 0
        self._cutoffs = 0
        self._me = mark
        self._base = terminal_base(board)
        self._window = tuple(moves)
        ev = evaluate(board, mark)

        start = time.perf_counter()

        if self.node_budget is None:
            done = depth
            best_score, best = self._root(board, moves, depth, ev)
        else:
            # a single ply always completes so there is a move to play
            done = 1
            self._budget = None
            best_score, best = self._root(board, moves, 1, ev)
            self._budget = self.node_budget
            for d in range(2, depth + 1):
                try:
                    best_score, best = self._root(board, moves, d, ev)
                except _OutOfBudget:
                    logger.debug("node budget %d hit at depth %d", self.node_budget, d)
                    break
                done = d
            self._budget = None

        choice = self.rng.choice(best) if (self.rng is not None and len(best) > 1) else best[0]

        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": done,
            "nodes": self._nodes,
            "cutoffs": self._cutoffs,
            "eval": int(best_score),
            "move": choice,
            "ties": len(best),
            "candidates": len(moves),
            "time_ms": max(1, int(elapsed * 1000)),
        }
        logger.debug("minimax %s -> %s %s", mark, choice, self.last_info)
        return choice

    def _root(self, board: Board, moves: List[Coord], depth: int, ev: int) -> Tuple[float, List[Coord]]:
        self._limit = depth
        mark = self._me

        alpha = -inf
        beta = inf
        best_score = -inf
        best: List[Coord] = []

        for (r, c) in moves:
            with board.placed(r, c, mark):
                child_ev = ev + placement_delta(board, r, c, mark)
                score = self._score(board, r, c, mark, 1, alpha, beta, child_ev)

            if score > best_score:
                best_score = score
                best = [(r, c)]
            elif score == best_score:
                best.append((r, c))

            if self.rng is not None:
                # scores are integers: a window starting one below the best
                # keeps later ties exact instead of fail-low bounds
                alpha = max(alpha, best_score - 1)
            else:
                alpha = max(alpha, best_score)

        return best_score, best

    def _score(
        self,
        board: Board,
        row: int,
        col: int,
        moved: Player,
        ply: int,
        alpha: float,
        beta: float,
        ev: int,
    ) -> float:
        """Value of the position right after `moved` played (row, col); `ev` is its evaluation."""
        self._nodes += 1
        if self._budget is not None and self._nodes > self._budget:
            raise _OutOfBudget()

        if wins_through(board, row, col, moved):
            return self._base - ply if moved == self._me else ply - self._base
        if board.is_full():
            return 0
        if ply >= self._limit:
            return ev

        n = board.size
        cells = board.cells
        moves = [(r, c) for (r, c) in self._window if cells[r * n + c] is None]
        if not moves:
            # window used up before the board filled
            return ev

        to_play = other(moved)
        maximizing = to_play == self._me

        v = -inf if maximizing else inf
        for (r, c) in moves:
            with board.placed(r, c, to_play):
                child_ev = ev + placement_delta(board, r, c, self._me)
                s = self._score(board, r, c, to_play, ply + 1, alpha, beta, child_ev)

            if maximizing:
                v = max(v, s)
                alpha = max(alpha, v)
            else:
                v = min(v, s)
                beta = min(beta, v)

            if beta <= alpha:
                self._cutoffs += 1
                break

        return v
