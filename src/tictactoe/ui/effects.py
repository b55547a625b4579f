from __future__ import annotations
import itertools
import sys
import time

from tictactoe.config import AI_THINKING_SPINNER, AI_THINK_DELAY_SEC

_FRAMES = "|/-\\"


def ai_thinking(name: str, delay: float = AI_THINK_DELAY_SEC) -> None:
    """Hold the screen for `delay` seconds so the computer's reply does not appear instantly."""
    if delay <= 0:
        return
    if not AI_THINKING_SPINNER:
        time.sleep(delay)
        return

    label = f"{name} is thinking"
    deadline = time.perf_counter() + delay
    for frame in itertools.cycle(_FRAMES):
        if time.perf_counter() >= deadline:
            break
        sys.stdout.write(f"\r{label}... {frame}")
        sys.stdout.flush()
        time.sleep(0.08)

    # wipe the spinner line
    sys.stdout.write("\r" + " " * (len(label) + 6) + "\r")
    sys.stdout.flush()
