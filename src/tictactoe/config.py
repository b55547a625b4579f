# src/tictactoe/config.py

from __future__ import annotations

DEFAULT_BOARD_SIZE = 3
DEFAULT_WIN_LENGTH = 3
MAX_BOARD_SIZE = 15

# UI toggles
USE_COLOR = True
CLEAR_SCREEN = True

# “AI thinking” effect
AI_THINKING_SPINNER = True
AI_THINK_DELAY_SEC = 0.6

# Boards with at most this many cells are searched to full depth.
FULL_DEPTH_MAX_CELLS = 9

# Depth limits for larger boards, keyed by difficulty value.
SEARCH_DEPTHS = {
    "hard": 2,
    "expert": 3,
}

# Search limits on boards above FULL_DEPTH_MAX_CELLS: only cells within
# SEARCH_REACH of a mark are searched, and the search deepens one ply at a
# time until the next ply would go past SEARCH_NODE_BUDGET nodes.
SEARCH_REACH = 2
SEARCH_NODE_BUDGET = 20_000

# League defaults
LEAGUE_RESULTS_DIR = "data/results"
