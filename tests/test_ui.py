import random

import pytest

from tictactoe.ai.tiers import Difficulty
from tictactoe.game.controller import run_game
from tictactoe.game.machine import GameStateMachine
from tictactoe.game.state import GameConfig, GameStatus
from tictactoe.ui.colors import O_MARK, WIN_LINE, X_MARK
from tictactoe.ui.prompts import ask_yes_no, parse_move
from tictactoe.ui.render import render
from tictactoe.ui.score import ScoreTally


@pytest.mark.parametrize(
    "raw, expected",
    [("1 1", (0, 0)), ("2,3", (1, 2)), ("  3 , 1 ", (2, 0)), ("q", None), ("QUIT", None), ("exit", None)],
)
def test_parse_move(raw, expected):
    assert parse_move(raw, 3) == expected


@pytest.mark.parametrize("raw", ["", "1", "a b", "1 2 3", "0 1", "4 1", "-1 2"])
def test_parse_move_rejects(raw):
    with pytest.raises(ValueError):
        parse_move(raw, 3)


def test_ask_yes_no(monkeypatch):
    answers = iter(["", "n", "YES", "maybe"])
    monkeypatch.setattr("builtins.input", lambda _: next(answers))
    assert ask_yes_no("again?") is True
    assert ask_yes_no("again?") is False
    assert ask_yes_no("again?") is True
    assert ask_yes_no("again?") is False


def _finished(moves):
    m = GameStateMachine(rng=random.Random(0))
    m.start(GameConfig())
    for pos, side in moves:
        m.apply_move(pos, side=side)
    return m.current_state()


def test_score_tally_records_outcomes():
    tally = ScoreTally()
    human_win = _finished([((0, 0), "human"), ((1, 0), "ai"), ((0, 1), "human"), ((1, 1), "ai"), ((0, 2), "human")])
    ai_win = _finished([((0, 0), "human"), ((1, 0), "ai"), ((0, 1), "human"), ((1, 1), "ai"), ((2, 2), "human"), ((1, 2), "ai")])
    draw = _finished([
        ((0, 0), "human"), ((0, 1), "ai"), ((0, 2), "human"), ((1, 2), "ai"), ((1, 0), "human"),
        ((2, 0), "ai"), ((1, 1), "human"), ((2, 2), "ai"), ((2, 1), "human"),
    ])
    for s in (human_win, ai_win, draw, draw):
        tally.record(s)

    assert (tally.human_wins, tally.ai_wins, tally.ties) == (1, 1, 2)
    assert tally.games == 4
    assert str(tally) == "You 1 | AI 1 | Ties 2"


def test_score_tally_rejects_unfinished_game():
    m = GameStateMachine()
    m.start(GameConfig())
    with pytest.raises(ValueError):
        ScoreTally().record(m.current_state())


def test_render_shows_board_and_status(monkeypatch, capsys):
    monkeypatch.setattr("tictactoe.ui.render.CLEAR_SCREEN", False)
    monkeypatch.setattr("tictactoe.ui.colors.USE_COLOR", False)
    state = _finished([((0, 0), "human"), ((1, 0), "ai"), ((0, 1), "human"), ((1, 1), "ai"), ((0, 2), "human")])
    render(state, "hello there")
    out = capsys.readouterr().out
    assert "TIC-TAC-TOE" in out
    assert "hello there" in out
    assert out.count("X") >= 3
    assert "1 2 3" in out


def test_run_game_quit_returns_none(monkeypatch, capsys):
    monkeypatch.setattr("tictactoe.ui.render.CLEAR_SCREEN", False)
    monkeypatch.setattr("builtins.input", lambda _: "q")
    tally = ScoreTally()
    assert run_game(GameStateMachine(), GameConfig(), tally, show_thinking=False) is None
    assert tally.games == 0
    assert "Game quit." in capsys.readouterr().out


def test_run_game_plays_to_the_end(monkeypatch, capsys):
    monkeypatch.setattr("tictactoe.ui.render.CLEAR_SCREEN", False)
    # bad input first, then walk the cells; occupied cells are rejected and skipped
    inputs = iter(["nonsense", "9 9"] + [f"{r} {c}" for r in range(1, 4) for c in range(1, 4)])
    monkeypatch.setattr("builtins.input", lambda _: next(inputs))

    tally = ScoreTally()
    machine = GameStateMachine(rng=random.Random(1))
    final = run_game(machine, GameConfig(difficulty=Difficulty.HARD), tally, show_thinking=False)

    assert final is not None
    assert final.status in (GameStatus.WON, GameStatus.DRAW)
    assert tally.games == 1
    # perfect play never loses
    assert tally.human_wins == 0
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "between 1 and 3" in out


def test_render_highlights_winning_line_in_reverse_video(monkeypatch, capsys):
    monkeypatch.setattr("tictactoe.ui.render.CLEAR_SCREEN", False)
    monkeypatch.setattr("tictactoe.ui.colors.USE_COLOR", True)
    state = _finished([((0, 0), "human"), ((1, 0), "ai"), ((0, 1), "human"), ((1, 1), "ai"), ((0, 2), "human")])
    render(state)
    out = capsys.readouterr().out
    assert out.count(WIN_LINE + X_MARK + "X") == 3
    assert WIN_LINE + O_MARK not in out
    assert out.count(O_MARK + "O") == 2
