from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tictactoe.ai.tiers import Difficulty
from tictactoe.config import DEFAULT_BOARD_SIZE, DEFAULT_WIN_LENGTH, LEAGUE_RESULTS_DIR
from tictactoe.errors import InvalidConfig
from tictactoe.game.state import GameConfig, Seat


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tictactoe", description="m,n,k Tic-Tac-Toe against a minimax computer opponent.")
    ap.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = ap.add_subparsers(dest="cmd")

    play = sub.add_parser("play", help="Play against the computer (default).")
    play.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE, help="Board size N (N x N)")
    play.add_argument("--win-length", type=int, default=None, help="Marks in a row needed to win (default: N, capped at 5)")
    play.add_argument(
        "--difficulty",
        type=str,
        default=Difficulty.MEDIUM.value,
        choices=[d.value for d in Difficulty],
        help="Computer strength",
    )
    play.add_argument("--second", action="store_true", help="Let the computer move first (you play O)")
    play.add_argument("--no-thinking", action="store_true", help="Skip the AI thinking delay")

    league = sub.add_parser("league", help="Pit the difficulty tiers against each other.")
    league.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE)
    league.add_argument("--win-length", type=int, default=None)
    league.add_argument("--games", type=int, default=4, help="Games per pairing (first move alternates)")
    league.add_argument("--opening-plies", type=int, default=1, help="Random opening moves per game")
    league.add_argument("--seeds", type=int, default=1, help="Teams per tier, each with its own seed")
    league.add_argument("--seed", type=int, default=1234)
    league.add_argument("--workers", type=int, default=1, help="Worker processes (1 = run inline)")
    league.add_argument("--results-dir", type=str, default=LEAGUE_RESULTS_DIR, help="Where to write league_results_*.csv")
    league.add_argument("--no-csv", action="store_true", help="Do not export a CSV")

    return ap


def _win_length(size: int, win_length: int | None) -> int:
    if win_length is not None:
        return win_length
    return DEFAULT_WIN_LENGTH if size == DEFAULT_BOARD_SIZE else min(size, 5)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "league":
        from tictactoe.scripts.league import main as league_main
        from tictactoe.scripts.league_types import LeagueSettings

        settings = LeagueSettings(
            board_size=args.size,
            win_length=_win_length(args.size, args.win_length),
            games_per_pair=args.games,
            opening_plies=args.opening_plies,
            seed=args.seed,
            max_workers=args.workers,
        )
        try:
            league_main(
                settings,
                seeds=range(args.seeds),
                out_dir=None if args.no_csv else Path(args.results_dir),
            )
        except InvalidConfig as e:
            print(f"Invalid board: {e}", file=sys.stderr)
            return 2
        return 0

    from tictactoe.game.controller import run_session

    if args.cmd is None:
        # only top-level options were given: play with defaults
        args = ap.parse_args(list(sys.argv[1:] if argv is None else argv) + ["play"])

    config = GameConfig(
        board_size=args.size,
        win_length=_win_length(args.size, args.win_length),
        human_seat=Seat.SECOND if args.second else Seat.FIRST,
        difficulty=Difficulty(args.difficulty),
    )
    try:
        config.validate()
    except InvalidConfig as e:
        print(f"Invalid board: {e}", file=sys.stderr)
        return 2

    try:
        run_session(config, show_thinking=not args.no_thinking)
    except (KeyboardInterrupt, EOFError):
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
