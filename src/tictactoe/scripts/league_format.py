from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from typing import Iterable, List, Sequence


class _Ansi:
    def __init__(self) -> None:
        self.enabled = (
            os.environ.get("NO_COLOR") is None
            and os.environ.get("TERM") not in (None, "", "dumb")
        )

    def _wrap(self, s: str, code: str) -> str:
        if not self.enabled:
            return s
        return f"\x1b[{code}m{s}\x1b[0m"

    def bold(self, s: str) -> str: return self._wrap(s, "1")
    def dim(self, s: str) -> str: return self._wrap(s, "2")
    def cyan(self, s: str) -> str: return self._wrap(s, "36")


A = _Ansi()


def term_width(default: int = 100) -> int:
    return shutil.get_terminal_size(fallback=(default, 24)).columns


def hr(char: str = "─", width: int | None = None) -> str:
    return char * max(10, width or term_width())


def clamp(s: str, width: int) -> str:
    if len(s) <= width:
        return s
    if width <= 1:
        return s[:max(0, width)]
    return s[: width - 1] + "…"


@dataclass(frozen=True)
class Col:
    title: str
    width: int
    align: str = "left"  # "left" | "right"


def fmt_row(values: Sequence[str], cols: Sequence[Col]) -> str:
    out: List[str] = []
    for v, col in zip(values, cols):
        s = clamp(str(v), col.width)
        out.append(s.rjust(col.width) if col.align == "right" else s.ljust(col.width))
    return "  ".join(out)


def print_table(title: str, cols: Sequence[Col], rows: Iterable[Sequence[str]]) -> None:
    width = sum(col.width for col in cols) + 2 * (len(cols) - 1)
    print(A.cyan(A.bold(title)))
    print(A.dim(fmt_row([col.title for col in cols], cols)))
    print(A.dim(hr("─", width)))
    for r in rows:
        print(fmt_row(r, cols))
    print(A.dim(hr("─", width)))
