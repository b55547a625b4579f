from __future__ import annotations
from dataclasses import dataclass

from tictactoe.game.state import GameSnapshot, GameStatus


@dataclass
class ScoreTally:
    """Session score. Lives in the UI; the engine only reports outcomes."""
    human_wins: int = 0
    ai_wins: int = 0
    ties: int = 0

    def record(self, state: GameSnapshot) -> None:
        if state.status is GameStatus.DRAW:
            self.ties += 1
        elif state.status is GameStatus.WON:
            if state.outcome.winner == state.human_mark:
                self.human_wins += 1
            else:
                self.ai_wins += 1
        else:
            raise ValueError(f"Cannot record a game that is {state.status.value}.")

    @property
    def games(self) -> int:
        return self.human_wins + self.ai_wins + self.ties

    def __str__(self) -> str:
        return f"You {self.human_wins} | AI {self.ai_wins} | Ties {self.ties}"
