from __future__ import annotations

import logging
from typing import Optional

from tictactoe.game.machine import GameStateMachine
from tictactoe.game.state import GameConfig, GameSnapshot, GameStatus
from tictactoe.ui.effects import ai_thinking
from tictactoe.ui.prompts import ask_yes_no, parse_move
from tictactoe.ui.render import render
from tictactoe.ui.score import ScoreTally

logger = logging.getLogger(__name__)


def _header(machine: GameStateMachine, tally: ScoreTally) -> str:
    cfg = machine.config
    agent = machine.agent
    if cfg is None:
        return str(tally)
    ai_name = agent.name if agent is not None else "AI"
    return (
        f"{cfg.board_size}x{cfg.board_size}, {cfg.win_length} in a row | "
        f"You: {cfg.human_mark} | AI: {cfg.ai_mark} ({ai_name}) | {tally}"
    )


def _status_with_header(status: str, machine: GameStateMachine, tally: ScoreTally) -> str:
    header = _header(machine, tally)
    if status:
        return f"{header}\n{status}"
    return header


def _final_status(state: GameSnapshot) -> str:
    if state.status is GameStatus.DRAW:
        return "It's a tie!"
    if state.outcome.winner == state.human_mark:
        return "Congratulations, you won!"
    return "Computer wins!"


def run_game(machine: GameStateMachine, config: GameConfig, tally: ScoreTally, show_thinking: bool = True) -> Optional[GameSnapshot]:
    """
    Play one human-vs-AI game in the terminal.
    Returns the final snapshot, or None if the player quit.
    """
    state = machine.start(config)
    status = "You move first." if config.human_mark == "X" else "The computer moves first."

    while True:
        render(state, _status_with_header(status, machine, tally))

        if state.status is not GameStatus.IN_PROGRESS:
            tally.record(state)
            render(state, _status_with_header(_final_status(state), machine, tally))
            return state

        if state.turn == config.ai_mark:
            if show_thinking:
                ai_thinking(machine.agent.name if machine.agent is not None else "AI")
            ai = machine.compute_ai_move()
            result = machine.apply_move(ai.position, side="ai") if ai.ok else None
            if result is None or not result.accepted:
                # the machine only hands out moves it will accept
                raise RuntimeError(f"AI move rejected: {ai.error or result.error}")

            row, col = result.move
            status = f"Computer played {row + 1} {col + 1} ({ai.source}). Your turn."
            info = ai.info
            if info.get("source") == "minimax":
                status += (
                    f" | d={info.get('depth')} nodes={info.get('nodes')} "
                    f"cut={info.get('cutoffs')} eval={info.get('eval')} {info.get('time_ms')}ms"
                )
            state = result.state
            continue

        try:
            move = parse_move(input(f"Player {config.human_mark} move: "), config.board_size)
        except ValueError as e:
            status = str(e)
            continue

        if move is None:
            render(state, _status_with_header("Game quit.", machine, tally))
            return None

        result = machine.apply_move(move)
        if not result.accepted:
            status = str(result.error)
            continue

        state = result.state
        status = ""


def run_session(config: GameConfig, show_thinking: bool = True) -> ScoreTally:
    """Keep offering rematches until the player quits or declines."""
    machine = GameStateMachine()
    tally = ScoreTally()

    while True:
        final = run_game(machine, config, tally, show_thinking=show_thinking)
        if final is None:
            break
        logger.info("game over: %s (%s)", final.status.value, tally)
        if not ask_yes_no("Play again?"):
            break

    print(f"\nFinal score: {tally}")
    return tally
