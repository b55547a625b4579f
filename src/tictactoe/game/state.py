from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Tuple

from tictactoe.ai.tiers import Difficulty
from tictactoe.config import DEFAULT_BOARD_SIZE, DEFAULT_WIN_LENGTH
from tictactoe.core.board import validate_dimensions
from tictactoe.errors import GameError, InvalidConfig
from tictactoe.types import Cell, Coord, Player


class Seat(Enum):
    FIRST = "first"    # human plays X
    SECOND = "second"  # human plays O


class GameStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class GameConfig:
    board_size: int = DEFAULT_BOARD_SIZE
    win_length: int = DEFAULT_WIN_LENGTH
    human_seat: Seat = Seat.FIRST
    difficulty: Difficulty = Difficulty.MEDIUM

    @property
    def human_mark(self) -> Player:
        return "X" if self.human_seat is Seat.FIRST else "O"

    @property
    def ai_mark(self) -> Player:
        return "O" if self.human_seat is Seat.FIRST else "X"

    def validate(self) -> None:
        validate_dimensions(self.board_size, self.win_length)
        if not isinstance(self.human_seat, Seat):
            raise InvalidConfig(f"human_seat must be a Seat, got {self.human_seat!r}.")
        if not isinstance(self.difficulty, Difficulty):
            raise InvalidConfig(f"difficulty must be a Difficulty, got {self.difficulty!r}.")


@dataclass(frozen=True)
class Outcome:
    kind: Literal["ongoing", "win", "draw"] = "ongoing"
    winner: Optional[Player] = None
    line: Tuple[Coord, ...] = ()

    @property
    def terminal(self) -> bool:
        return self.kind != "ongoing"


ONGOING = Outcome()


@dataclass(frozen=True)
class GameSnapshot:
    """What the UI gets back after every call into the machine."""
    status: GameStatus
    turn: Optional[Player]
    outcome: Outcome
    board: Tuple[Tuple[Cell, ...], ...]
    moves: int = 0
    human_mark: Optional[Player] = None
    ai_mark: Optional[Player] = None

    @property
    def winning_line(self) -> Tuple[Coord, ...]:
        return self.outcome.line


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    state: GameSnapshot
    move: Optional[Coord] = None
    mark: Optional[Player] = None
    error: Optional[GameError] = None


@dataclass(frozen=True)
class AIMove:
    position: Optional[Coord]
    state: GameSnapshot
    source: str = ""
    info: dict = field(default_factory=dict)
    error: Optional[GameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.position is not None
