from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from tictactoe.ai.base import Agent
from tictactoe.ai.pick import agent_for
from tictactoe.core.board import Board
from tictactoe.errors import GameError, IllegalMove, OutOfBounds, SearchExhausted
from tictactoe.game.results import outcome_after
from tictactoe.game.state import (
    ONGOING,
    AIMove,
    GameConfig,
    GameSnapshot,
    GameStatus,
    MoveResult,
    Outcome,
)
from tictactoe.types import Coord, Player, Side, other

logger = logging.getLogger(__name__)


class GameStateMachine:
    """
    Owns one game at a time: the board, whose turn it is, and the outcome.

    The UI calls apply_move for human input. On the AI's turn it calls
    compute_ai_move and feeds the position back through
    apply_move(pos, side="ai"), so both sides go through the same checks.
    Rejected moves come back as MoveResult(accepted=False, error=...)
    with the state untouched.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._config: Optional[GameConfig] = None
        self._board: Optional[Board] = None
        self._agent: Optional[Agent] = None
        self._status = GameStatus.NOT_STARTED
        self._turn: Optional[Player] = None
        self._outcome: Outcome = ONGOING

    # ----- queries -----
    @property
    def config(self) -> Optional[GameConfig]:
        return self._config

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def agent(self) -> Optional[Agent]:
        return self._agent

    def current_state(self) -> GameSnapshot:
        cfg = self._config
        board = self._board
        return GameSnapshot(
            status=self._status,
            turn=self._turn,
            outcome=self._outcome,
            board=board.snapshot() if board is not None else (),
            moves=board.move_count() if board is not None else 0,
            human_mark=cfg.human_mark if cfg is not None else None,
            ai_mark=cfg.ai_mark if cfg is not None else None,
        )

    # ----- transitions -----
    def start(self, config: GameConfig) -> GameSnapshot:
        """
        Begin a new game, discarding any previous one.
        Raises InvalidConfig (leaving the current game alone) on a bad config.
        """
        config.validate()
        board = Board(config.board_size, config.win_length)
        agent = agent_for(config.difficulty, config.board_size, self._rng)

        self._config = config
        self._board = board
        self._agent = agent
        self._status = GameStatus.IN_PROGRESS
        self._turn = "X"
        self._outcome = ONGOING

        logger.info(
            "new game %dx%d, %d in a row, human=%s, difficulty=%s (%s)",
            config.board_size, config.board_size, config.win_length,
            config.human_mark, config.difficulty.value, agent.name,
        )
        return self.current_state()

    def apply_move(self, position: Coord, side: Side = "human") -> MoveResult:
        try:
            mark, board = self._check_turn(side)
            row, col = _as_coord(position)
            board.place(row, col, mark)
        except GameError as e:
            logger.debug("rejected %s move %s: %s", side, position, e)
            return MoveResult(False, self.current_state(), move=position, error=e)

        self._outcome = outcome_after(board, mark)
        if self._outcome.kind == "win":
            self._status = GameStatus.WON
            self._turn = None
            logger.info("%s (%s) wins with %s", mark, side, list(self._outcome.line))
        elif self._outcome.kind == "draw":
            self._status = GameStatus.DRAW
            self._turn = None
            logger.info("draw after %d moves", board.move_count())
        else:
            self._turn = other(mark)

        return MoveResult(True, self.current_state(), move=(row, col), mark=mark)

    def compute_ai_move(self) -> AIMove:
        """
        Pick the AI's move without playing it.
        Blocks for the length of the search.
        """
        try:
            mark, board = self._check_turn("ai")
        except GameError as e:
            return AIMove(None, self.current_state(), error=e)

        agent = self._agent
        if agent is None:
            return AIMove(None, self.current_state(), error=IllegalMove("No computer player for this game."))
        try:
            position = agent.choose_move(board, mark)
        except SearchExhausted:
            logger.critical(
                "no move available for %s on an unfinished game; aborting\n%s",
                mark, board,
            )
            self._abort()
            raise

        info = dict(getattr(agent, "last_info", None) or {})
        return AIMove(position, self.current_state(), source=str(info.get("source", "")), info=info)

    def play_ai_turn(self) -> MoveResult:
        """compute_ai_move followed by apply_move(side="ai")."""
        ai = self.compute_ai_move()
        if ai.position is None or ai.error is not None:
            return MoveResult(False, ai.state, error=ai.error)
        return self.apply_move(ai.position, side="ai")

    # ----- internals -----
    def _check_turn(self, side: Side) -> Tuple[Player, Board]:
        """The mark `side` plays and the live board, or IllegalMove."""
        cfg = self._config
        board = self._board
        if self._status is GameStatus.NOT_STARTED or cfg is None or board is None:
            raise IllegalMove("No game in progress. Start a new game first.")
        if self._status is not GameStatus.IN_PROGRESS:
            raise IllegalMove("The game is over. Start a new game to keep playing.")
        mark = cfg.human_mark if side == "human" else cfg.ai_mark
        if mark != self._turn:
            raise IllegalMove(f"It is not the {side}'s turn ({self._turn} to move).")
        return mark, board

    def _abort(self) -> None:
        self._board = None
        self._agent = None
        self._status = GameStatus.NOT_STARTED
        self._turn = None
        self._outcome = ONGOING


def _as_coord(position: object) -> Coord:
    if (
        not isinstance(position, (tuple, list))
        or len(position) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in position)
    ):
        raise OutOfBounds(f"Not a board position: {position!r}. Expected a (row, col) pair of integers.")
    return position[0], position[1]
