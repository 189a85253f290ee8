import logging
import random
from dataclasses import replace

from sumstack.components.game_state import GameMode
from sumstack.constants import GRID_COLS, GRID_ROWS, INITIAL_ROWS
from sumstack.systems.grid_ops import find_block, iter_blocks
from sumstack.systems.rules import (
    SelectionResult,
    get_target_sum,
    init_game,
    level_for_score,
    resolve_selection,
    round_time,
    select_toggle,
    selected_sum,
    time_fraction,
)
from tests.helpers import FixedRandom, block_ids, full_column, make_state, merge_rows

BOTTOM = {9: [4, 6, 5, 3, 2, 1]}


def test_init_classic_fills_bottom_rows():
    state = init_game(GameMode.CLASSIC, rng=random.Random(0))
    assert len(state.grid) == GRID_ROWS
    assert all(len(row) == GRID_COLS for row in state.grid)
    for row_index in range(GRID_ROWS - INITIAL_ROWS):
        assert all(cell is None for cell in state.grid[row_index])
    for row_index in range(GRID_ROWS - INITIAL_ROWS, GRID_ROWS):
        assert all(cell is not None and cell.row == row_index for cell in state.grid[row_index])
    assert len(list(iter_blocks(state.grid))) == 24
    assert state.score == 0
    assert state.level == 1
    assert state.combo == 0
    assert state.selected_ids == ()
    assert not state.is_game_over
    assert state.time_left is None and state.max_time is None
    assert state.target_sum == 10


def test_init_time_mode_sets_clock_and_high_score():
    state = init_game(GameMode.TIME, high_score=450)
    assert state.mode is GameMode.TIME
    assert state.time_left == 10.0
    assert state.max_time == 10.0
    assert state.high_score == 450
    assert init_game(GameMode.CLASSIC, high_score=None).high_score == 0


def test_target_sum_variance_scales_with_level_and_caps():
    assert get_target_sum(1, rng=FixedRandom(0.99)) == 10
    assert get_target_sum(5, rng=FixedRandom(0.99)) == 14
    assert get_target_sum(5, rng=FixedRandom(0.0)) == 10
    assert get_target_sum(50, rng=FixedRandom(0.99)) == 19
    rng = random.Random(4)
    assert all(10 <= get_target_sum(7, rng=rng) <= 16 for _ in range(200))


def test_round_time_and_level_formulas():
    assert round_time(1) == 10.0
    assert round_time(2) == 9.0
    assert round_time(9) == 6.0
    assert round_time(10) == 5.0
    assert round_time(30) == 5.0
    assert level_for_score(0) == 1
    assert level_for_score(999) == 1
    assert level_for_score(1000) == 2
    assert level_for_score(4321) == 5


def test_partial_selection_only_changes_selection():
    state = make_state(BOTTOM)
    after = select_toggle(state, "r9c0")
    assert after.selected_ids == ("r9c0",)
    assert after.grid == state.grid
    assert after.score == 0
    assert selected_sum(after) == 4


def test_clicking_a_selected_block_deselects_it():
    state = make_state(BOTTOM)
    after = select_toggle(select_toggle(state, "r9c2"), "r9c2")
    assert after.selected_ids == ()


def test_exact_match_scores_target_times_count():
    state = make_state(BOTTOM, target_sum=10)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1", rng=random.Random(2))
    assert outcome.result is SelectionResult.MATCHED
    assert outcome.points == 20
    new = outcome.state
    assert new.score == 20
    assert new.combo == 1
    assert new.selected_ids == ()
    assert find_block(new.grid, "r9c0") is None
    assert find_block(new.grid, "r9c1") is None
    assert {block.id for block in outcome.cleared} == {"r9c0", "r9c1"}


def test_combo_multiplies_points():
    state = make_state(BOTTOM, target_sum=10, combo=2)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1")
    assert outcome.points == 10 * 2 * 3
    assert outcome.state.combo == 3


def test_overflow_discards_selection_and_combo():
    state = make_state(BOTTOM, target_sum=10, combo=3)
    state = select_toggle(state, "r9c1")
    outcome = resolve_selection(state, "r9c2")
    assert outcome.result is SelectionResult.OVERFLOW
    assert outcome.state.selected_ids == ()
    assert outcome.state.combo == 0
    assert outcome.state.grid == state.grid
    assert outcome.state.score == 0


def test_classic_match_pushes_new_row():
    state = make_state(merge_rows({8: [1, 1, 1, 1, 1, 1]}, BOTTOM), target_sum=10)
    original_ids = block_ids(state.grid)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1", rng=random.Random(9))
    assert outcome.row_forced
    grid = outcome.state.grid
    bottom_ids = {cell.id for cell in grid[GRID_ROWS - 1]}
    assert all(cell is not None for cell in grid[GRID_ROWS - 1])
    assert not bottom_ids & original_ids
    # Blocks from row 8 fell into the gaps in columns 0 and 1, then rose with the shift.
    assert find_block(grid, "r8c0").row == GRID_ROWS - 2
    assert find_block(grid, "r8c2").row == GRID_ROWS - 3
    assert not outcome.state.is_game_over


def test_classic_match_skips_row_when_board_already_full():
    rows = merge_rows(full_column(5), {9: [4, 6, None, None, None, None]})
    state = make_state(rows, target_sum=10)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1")
    assert outcome.state.is_game_over
    assert not outcome.row_forced
    assert block_ids(outcome.state.grid) == block_ids(state.grid) - {"r9c0", "r9c1"}
    assert outcome.state.score == 20


def test_classic_match_can_overflow_through_shift():
    rows = merge_rows(full_column(5, start_row=1), {9: [4, 6, None, None, None, None]})
    state = make_state(rows, target_sum=10)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1")
    assert outcome.row_forced
    assert outcome.state.is_game_over
    assert outcome.state.grid[0][5] is not None


def test_time_mode_match_resets_clock_without_new_row():
    state = make_state(BOTTOM, target_sum=10, mode=GameMode.TIME, level=4, score=3100, time_left=2.3)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1")
    assert not outcome.row_forced
    assert outcome.state.time_left == 8.0
    assert outcome.state.max_time == 8.0
    assert len(list(iter_blocks(outcome.state.grid))) == 4


def test_next_target_uses_level_before_the_match():
    state = make_state(BOTTOM, target_sum=10, score=990, level=1)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1", rng=FixedRandom(0.99))
    assert outcome.state.score == 1010
    assert outcome.state.level == 2
    # Level 1 allows no variance; level 2 would have produced 11.
    assert outcome.state.target_sum == 10


def test_high_score_tracks_best_score():
    state = make_state(BOTTOM, target_sum=10, high_score=15)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1")
    assert outcome.new_high_score
    assert outcome.state.high_score == 20

    state = make_state(BOTTOM, target_sum=10, high_score=500)
    state = select_toggle(state, "r9c0")
    outcome = resolve_selection(state, "r9c1")
    assert not outcome.new_high_score
    assert outcome.state.high_score == 500


def test_clicks_ignored_when_paused_or_over():
    state = make_state(BOTTOM)
    assert select_toggle(state, "r9c0", paused=True) is state
    over = replace(state, is_game_over=True)
    outcome = resolve_selection(over, "r9c0")
    assert outcome.result is SelectionResult.IGNORED
    assert outcome.state is over


def test_click_on_unknown_block_is_ignored(caplog):
    state = make_state(BOTTOM)
    with caplog.at_level(logging.WARNING, logger="sumstack.systems.rules"):
        outcome = resolve_selection(state, "nope")
    assert outcome.result is SelectionResult.IGNORED
    assert outcome.state is state
    assert "nope" in caplog.text


def test_stale_selected_id_counts_as_zero_and_is_dropped(caplog):
    state = make_state(BOTTOM, selected_ids=("ghost",))
    with caplog.at_level(logging.WARNING, logger="sumstack.systems.rules"):
        assert selected_sum(state) == 0
        after = select_toggle(state, "r9c0")
    assert after.selected_ids == ("r9c0",)
    assert "ghost" in caplog.text


def test_time_fraction():
    assert time_fraction(make_state(BOTTOM)) == 0.0
    state = make_state(BOTTOM, mode=GameMode.TIME, time_left=2.5, max_time=10.0)
    assert time_fraction(state) == 0.25
