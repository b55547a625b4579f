import csv
import random

import pytest

from tictactoe.ai.minimax_agent import MinimaxAgent
from tictactoe.ai.random_agent import RandomAgent
from tictactoe.ai.tiers import Difficulty
from tictactoe.scripts.league import CSV_COLUMNS, build_roster, export_csv, result_rows, run_league, schedule
from tictactoe.scripts.league_play import add_result, play_headless, run_pairing
from tictactoe.scripts.league_scoring import compute_factor, ppg, wilson_lcb
from tictactoe.scripts.league_types import Agg, LeagueSettings


def test_perfect_play_is_a_draw():
    outcome, stats = play_headless(
        MinimaxAgent(rng=random.Random(1)),
        MinimaxAgent(rng=random.Random(2)),
        board_size=3,
        win_length=3,
    )
    assert outcome == "D"
    assert stats["X"]["moves"] == 5
    assert stats["O"]["moves"] == 4
    assert stats["X"]["nodes"] > 0


@pytest.mark.parametrize("seed", range(6))
def test_expert_never_loses_to_random(seed):
    expert_x = seed % 2 == 0
    expert = MinimaxAgent(rng=random.Random(seed))
    rand = RandomAgent(rng=random.Random(seed))
    ax, ao = (expert, rand) if expert_x else (rand, expert)
    outcome, _ = play_headless(ax, ao, board_size=3, win_length=3, opening_plies=1, seed_base=seed)
    assert outcome in ("D", "X" if expert_x else "O")


def test_headless_opening_plies_count_no_stats():
    outcome, stats = play_headless(
        RandomAgent(rng=random.Random(0)),
        RandomAgent(rng=random.Random(1)),
        board_size=4,
        win_length=3,
        opening_plies=16,
        seed_base=9,
    )
    assert outcome in ("X", "O", "D")
    assert stats["X"]["moves"] == 0 and stats["O"]["moves"] == 0


def test_add_result():
    a, b = Agg(), Agg()
    add_result(a, b, "X", a_is_x=True)
    add_result(a, b, "X", a_is_x=False)
    add_result(a, b, "D", a_is_x=True)
    assert (a.wins, a.draws, a.losses, a.games, a.points) == (1, 1, 1, 3, 1.5)
    assert (b.wins, b.draws, b.losses, b.games, b.points) == (1, 1, 1, 3, 1.5)
    assert ppg(a) == pytest.approx(0.5)


def test_wilson_bounds():
    assert wilson_lcb(0.5, 0, 1.28) == 0.0
    assert 0.0 <= wilson_lcb(0.0, 10, 1.28) < 0.05
    assert wilson_lcb(1.0, 10, 1.28) < 1.0
    # more games, tighter bound
    assert wilson_lcb(0.75, 100, 1.28) > wilson_lcb(0.75, 8, 1.28)


def test_compute_factor_floor():
    assert compute_factor(1e9, ms_target=50.0, alpha=0.35, min_factor=0.75) == 0.75
    assert compute_factor(0.0, ms_target=50.0, alpha=0.35, min_factor=0.75) == pytest.approx(1.0, abs=1e-3)


def test_roster_and_schedule():
    teams = build_roster(3)
    assert [t.name for t in teams] == [d.value for d in Difficulty]

    seeded = build_roster(3, tiers=(Difficulty.HARD,), seeds=(0, 1))
    assert [t.name for t in seeded] == ["hard seed0", "hard seed1"]

    items = schedule(teams, LeagueSettings())
    assert len(items) == 6
    assert len({item[4] for item in items}) == 6


def test_run_pairing_alternates_first_player():
    teams = build_roster(3, tiers=(Difficulty.EASY, Difficulty.HARD))
    item = schedule(teams, LeagueSettings(games_per_pair=4))[0]
    results = run_pairing(item)
    assert [r[2] for r in results] == [True, False, True, False]
    # easy never beats perfect play
    for a_name, b_name, a_is_x, outcome, _ in results:
        assert (a_name, b_name) == ("easy", "hard")
        assert outcome != ("X" if a_is_x else "O")


def test_run_league_and_export(tmp_path):
    settings = LeagueSettings(games_per_pair=2, opening_plies=1, seed=7)
    teams = build_roster(3, tiers=(Difficulty.EASY, Difficulty.MEDIUM, Difficulty.EXPERT))
    agg = run_league(teams, settings)

    assert set(agg) == {"easy", "medium", "expert"}
    assert all(a.games == 4 for a in agg.values())
    assert sum(a.wins for a in agg.values()) == sum(a.losses for a in agg.values())
    assert agg["expert"].losses == 0

    rows = result_rows(agg, settings)
    assert all(len(r) == len(CSV_COLUMNS) for r in rows)

    path = export_csv(agg, settings, tmp_path / "results")
    assert path.name.startswith("league_results_") and path.suffix == ".csv"
    with open(path, newline="") as f:
        read = list(csv.reader(f))
    assert read[0] == CSV_COLUMNS
    assert {r[0] for r in read[1:]} == {"easy", "medium", "expert"}
