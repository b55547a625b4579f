import random

import pytest

from tictactoe.ai.tiers import Difficulty
from tictactoe.errors import CellOccupied, IllegalMove, InvalidConfig, OutOfBounds, SearchExhausted
from tictactoe.game.machine import GameStateMachine
from tictactoe.game.state import GameConfig, GameStatus, Seat


def new_game(**kwargs) -> GameStateMachine:
    m = GameStateMachine(rng=random.Random(7))
    m.start(GameConfig(**kwargs))
    return m


def test_not_started_rejects_moves():
    m = GameStateMachine()
    assert m.current_state().status is GameStatus.NOT_STARTED
    res = m.apply_move((0, 0))
    assert not res.accepted
    assert isinstance(res.error, IllegalMove)
    ai = m.compute_ai_move()
    assert not ai.ok
    assert isinstance(ai.error, IllegalMove)


def test_start_state():
    m = new_game(board_size=5, win_length=4, difficulty=Difficulty.HARD)
    s = m.current_state()
    assert s.status is GameStatus.IN_PROGRESS
    assert s.turn == "X"
    assert s.human_mark == "X" and s.ai_mark == "O"
    assert len(s.board) == 5 and all(len(row) == 5 for row in s.board)
    assert not s.outcome.terminal


@pytest.mark.parametrize("size, win_length", [(3, 4), (0, 2), (4, 1)])
def test_start_rejects_bad_config_and_keeps_current_game(size, win_length):
    m = new_game()
    m.apply_move((0, 0))
    before = m.current_state()
    with pytest.raises(InvalidConfig):
        m.start(GameConfig(board_size=size, win_length=win_length))
    assert m.current_state() == before


def test_human_second_means_ai_opens():
    m = new_game(human_seat=Seat.SECOND, difficulty=Difficulty.MEDIUM)
    res = m.apply_move((0, 0))
    assert not res.accepted
    assert isinstance(res.error, IllegalMove)

    ai = m.compute_ai_move()
    assert ai.ok
    assert ai.position == (1, 1)
    res = m.apply_move(ai.position, side="ai")
    assert res.accepted
    assert res.mark == "X"
    assert res.state.turn == "O"


def test_ai_cannot_move_on_human_turn():
    m = new_game()
    ai = m.compute_ai_move()
    assert isinstance(ai.error, IllegalMove)
    res = m.apply_move((1, 1), side="ai")
    assert isinstance(res.error, IllegalMove)
    assert m.current_state().moves == 0


def test_rejected_moves_leave_state_unchanged():
    m = new_game()
    m.apply_move((1, 1))
    m.apply_move((0, 0), side="ai")
    before = m.current_state()

    res = m.apply_move((0, 0))
    assert isinstance(res.error, CellOccupied)
    assert m.current_state() == before

    res = m.apply_move((3, 0))
    assert isinstance(res.error, OutOfBounds)
    assert m.current_state() == before


def test_hard_ai_answers_corner_with_center():
    for seed in range(3):
        m = GameStateMachine(rng=random.Random(seed))
        m.start(GameConfig(board_size=3, win_length=3, difficulty=Difficulty.HARD))
        assert m.apply_move((0, 0)).accepted
        ai = m.compute_ai_move()
        assert ai.position == (1, 1)
        assert ai.source == "minimax"


def test_ai_takes_immediate_win_and_game_ends():
    m = new_game(difficulty=Difficulty.MEDIUM)
    for pos, side in [((1, 0), "human"), ((0, 0), "ai"), ((2, 2), "human"), ((0, 1), "ai"), ((2, 0), "human")]:
        assert m.apply_move(pos, side=side).accepted

    ai = m.compute_ai_move()
    assert ai.position == (0, 2)
    assert ai.source == "win"

    res = m.play_ai_turn()
    assert res.accepted
    s = res.state
    assert s.status is GameStatus.WON
    assert s.outcome.winner == "O"
    assert s.winning_line == ((0, 0), (0, 1), (0, 2))
    assert s.turn is None


def test_medium_blocks():
    m = new_game(difficulty=Difficulty.MEDIUM)
    m.apply_move((0, 0))
    m.apply_move((1, 1), side="ai")
    m.apply_move((0, 1))
    ai = m.compute_ai_move()
    assert ai.position == (0, 2)
    assert ai.source == "block"


def test_easy_is_random_without_lookahead():
    m = new_game(difficulty=Difficulty.EASY)
    m.apply_move((0, 0))
    ai = m.compute_ai_move()
    assert ai.ok
    assert ai.source == "random"
    assert ai.position != (0, 0)
    assert m.apply_move(ai.position, side="ai").accepted


def test_draw_then_terminal_is_idempotent():
    m = new_game(difficulty=Difficulty.MEDIUM)
    sequence = [
        ((0, 0), "human"), ((0, 1), "ai"), ((0, 2), "human"), ((1, 2), "ai"),
        ((1, 0), "human"), ((2, 0), "ai"), ((1, 1), "human"), ((2, 2), "ai"),
        ((2, 1), "human"),
    ]
    for pos, side in sequence:
        res = m.apply_move(pos, side=side)
        assert res.accepted, res.error

    final = m.current_state()
    assert final.status is GameStatus.DRAW
    assert final.outcome.kind == "draw"
    assert final.board == (("X", "O", "X"), ("X", "X", "O"), ("O", "X", "O"))

    for _ in range(3):
        for side in ("human", "ai"):
            res = m.apply_move((0, 0), side=side)
            assert not res.accepted
            assert isinstance(res.error, IllegalMove)
            assert m.current_state() == final
    assert isinstance(m.compute_ai_move().error, IllegalMove)


def test_won_game_rejects_everything_until_restart():
    m = new_game()
    for pos, side in [((0, 0), "human"), ((1, 0), "ai"), ((0, 1), "human"), ((1, 1), "ai"), ((0, 2), "human")]:
        m.apply_move(pos, side=side)
    won = m.current_state()
    assert won.status is GameStatus.WON
    assert won.outcome.winner == "X"

    assert isinstance(m.apply_move((2, 2)).error, IllegalMove)
    assert m.current_state() == won

    m.start(GameConfig())
    assert m.current_state().status is GameStatus.IN_PROGRESS
    assert m.current_state().moves == 0


def test_ai_vs_ai_through_the_machine_finishes():
    m = GameStateMachine(rng=random.Random(3))
    m.start(GameConfig(board_size=5, win_length=4, difficulty=Difficulty.HARD))
    rng = random.Random(3)
    while m.current_state().status is GameStatus.IN_PROGRESS:
        s = m.current_state()
        if s.turn == s.human_mark:
            empties = [(r, c) for r, row in enumerate(s.board) for c, v in enumerate(row) if v is None]
            assert m.apply_move(rng.choice(empties)).accepted
        else:
            assert m.play_ai_turn().accepted
    assert m.current_state().status in (GameStatus.WON, GameStatus.DRAW)


class _BrokenAgent:
    name = "broken"
    last_info: dict = {}

    def choose_move(self, board, mark):
        raise SearchExhausted("no cells")


def test_search_exhausted_aborts_game(monkeypatch):
    monkeypatch.setattr("tictactoe.game.machine.agent_for", lambda *a, **k: _BrokenAgent())
    m = GameStateMachine()
    m.start(GameConfig(human_seat=Seat.SECOND))
    with pytest.raises(SearchExhausted):
        m.compute_ai_move()
    assert m.status is GameStatus.NOT_STARTED
    assert isinstance(m.apply_move((0, 0), side="ai").error, IllegalMove)


@pytest.mark.parametrize("position", [(1,), (1, 1, 1), None, (1.0, 1), ("1", "1"), (True, 0), "11", 4])
def test_malformed_positions_are_rejected_not_raised(position):
    m = new_game()
    before = m.current_state()
    res = m.apply_move(position)
    assert not res.accepted
    assert isinstance(res.error, OutOfBounds)
    assert m.current_state() == before


def test_list_position_is_accepted():
    m = new_game()
    res = m.apply_move([2, 1])
    assert res.accepted
    assert res.move == (2, 1)
