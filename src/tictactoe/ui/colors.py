from __future__ import annotations
from tictactoe.config import USE_COLOR

_RESET = "\033[0m"

# board palette
X_MARK = "\033[1;31m"      # bold red
O_MARK = "\033[1;33m"      # bold yellow
EMPTY = "\033[90m"         # gray dot
WIN_LINE = "\033[7m"       # reverse video over the piece's own color

# text
TITLE = "\033[1m"
STATUS = "\033[36m"
MUTED = "\033[2m"


def paint(text: str, style: str) -> str:
    """Wrap text in an ANSI style; plain text when colors are off."""
    if not USE_COLOR:
        return text
    return f"{style}{text}{_RESET}"


def mark_style(mark: str) -> str:
    return X_MARK if mark == "X" else O_MARK
