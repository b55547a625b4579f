# src/tictactoe/core/board.py

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from tictactoe.config import DEFAULT_BOARD_SIZE, DEFAULT_WIN_LENGTH, MAX_BOARD_SIZE
from tictactoe.errors import CellOccupied, InvalidConfig, OutOfBounds
from tictactoe.types import MARKS, Cell, Coord, Player

_EMPTY_CHARS = {".", " ", "_", "-"}


def validate_dimensions(size: int, win_length: int) -> None:
    if size < 1:
        raise InvalidConfig(f"Board size must be at least 1 (got {size}).")
    if size > MAX_BOARD_SIZE:
        raise InvalidConfig(f"Board size must be at most {MAX_BOARD_SIZE} (got {size}).")
    if win_length < 2:
        raise InvalidConfig(f"Win length must be at least 2 (got {win_length}).")
    if win_length > size:
        raise InvalidConfig(f"Win length {win_length} does not fit on a {size}x{size} board.")


@dataclass(slots=True)
class Board:
    size: int = DEFAULT_BOARD_SIZE
    win_length: int = DEFAULT_WIN_LENGTH
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        validate_dimensions(self.size, self.win_length)
        if not self.cells:
            self.cells = [None] * (self.size * self.size)
        elif len(self.cells) != self.size * self.size:
            raise InvalidConfig(f"Expected {self.size * self.size} cells, got {len(self.cells)}.")

    @classmethod
    def from_rows(cls, rows: Sequence[str], win_length: int | None = None) -> "Board":
        """
        Build a board from strings such as ["X.O", ".X.", "O.."].
        Any of ". _-" (or a space) marks an empty cell.
        """
        size = len(rows)
        cells: List[Cell] = []
        for r, row in enumerate(rows):
            if len(row) != size:
                raise InvalidConfig(f"Row {r} has {len(row)} cells, expected {size}.")
            for ch in row:
                if ch in _EMPTY_CHARS:
                    cells.append(None)
                elif ch.upper() in MARKS:
                    cells.append(ch.upper())  # type: ignore[arg-type]
                else:
                    raise ValueError(f"Unknown cell character {ch!r}.")
        return cls(size, win_length if win_length is not None else size, cells)

    # ----- geometry -----
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board.")
        return row * self.size + col

    def coord(self, index: int) -> Coord:
        return divmod(index, self.size)

    # ----- storage -----
    def get(self, row: int, col: int) -> Cell:
        return self.cells[self.index(row, col)]

    def place(self, row: int, col: int, mark: Player) -> None:
        if mark not in MARKS:
            raise ValueError(f"Not a mark: {mark!r}.")
        i = self.index(row, col)
        if self.cells[i] is not None:
            raise CellOccupied(f"Cell ({row}, {col}) is already occupied.")
        self.cells[i] = mark

    def clear(self, row: int, col: int) -> None:
        """
        Reset a cell to empty.
        Only search backtracking calls this; finished moves are never cleared.
        """
        i = self.index(row, col)
        if self.cells[i] is None:
            raise ValueError(f"Cannot clear: cell ({row}, {col}) is empty.")
        self.cells[i] = None

    @contextmanager
    def placed(self, row: int, col: int, mark: Player) -> Iterator["Board"]:
        """
        Hypothetically place `mark`, and take it back when the block exits,
        however it exits (return, break, exception).
        """
        self.place(row, col, mark)
        try:
            yield self
        finally:
            self.clear(row, col)

    def is_full(self) -> bool:
        return None not in self.cells

    def empty_cells(self) -> List[Coord]:
        n = self.size
        return [divmod(i, n) for i, v in enumerate(self.cells) if v is None]

    def move_count(self) -> int:
        return sum(1 for v in self.cells if v is not None)

    def extract_line(self, line) -> List[Cell]:
        """Marks along a `LineSpec` (or any iterable of coordinates), in order."""
        coords = line.coords() if hasattr(line, "coords") else line
        return [self.get(r, c) for (r, c) in coords]

    # ----- copies -----
    def copy(self) -> "Board":
        return Board(self.size, self.win_length, self.cells[:])

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        n = self.size
        return tuple(tuple(self.cells[r * n:(r + 1) * n]) for r in range(n))

    def __str__(self) -> str:
        return "\n".join("".join(v or "." for v in row) for row in self.snapshot())
