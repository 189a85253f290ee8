"""Pure state transitions for a SumStack game.

Every function takes a ``GameState`` and returns a new one; nothing here
touches the ECS world or the event bus. ``SelectionSystem`` and
``TimerSystem`` feed events in and publish the outcomes.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import List, Tuple

from sumstack.components.block import Block
from sumstack.components.game_state import GameMode, GameState
from sumstack.constants import (
    GRID_ROWS,
    INITIAL_ROWS,
    LEVEL_SCORE_STEP,
    ROUND_TIME_BASE,
    ROUND_TIME_MIN,
    TARGET_BASE,
    TARGET_VARIANCE_CAP,
    TICK_INTERVAL,
)
from sumstack.systems.grid_ops import (
    apply_gravity,
    check_game_over,
    create_empty_grid,
    find_block,
    generate_row,
    place_row,
    remove_blocks,
    shift_up,
)

logger = logging.getLogger(__name__)


class SelectionResult(Enum):
    IGNORED = auto()
    PENDING = auto()
    MATCHED = auto()
    OVERFLOW = auto()


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    state: GameState
    result: SelectionResult
    points: int = 0
    cleared: Tuple[Block, ...] = ()
    row_forced: bool = False
    new_high_score: bool = False


@dataclass(frozen=True, slots=True)
class TickOutcome:
    state: GameState
    row_forced: bool = False
    game_over: bool = False


def level_for_score(score: int) -> int:
    return score // LEVEL_SCORE_STEP + 1


def round_time(level: int) -> float:
    """Countdown length after a match or a forced row, shrinking every two levels."""
    return float(max(ROUND_TIME_MIN, ROUND_TIME_BASE - level // 2))


def get_target_sum(level: int, *, rng: random.Random | None = None) -> int:
    variance = min(level, TARGET_VARIANCE_CAP)
    return TARGET_BASE + math.floor((rng or random).random() * variance)


def init_game(mode: GameMode, *, high_score: int | None = None, rng: random.Random | None = None) -> GameState:
    grid = create_empty_grid()
    for offset in range(INITIAL_ROWS):
        row_index = GRID_ROWS - 1 - offset
        grid = place_row(grid, row_index, generate_row(row_index, rng=rng))
    timed = mode is GameMode.TIME
    return GameState(
        grid=grid,
        target_sum=get_target_sum(1, rng=rng),
        mode=mode,
        high_score=high_score or 0,
        time_left=float(ROUND_TIME_BASE) if timed else None,
        max_time=float(ROUND_TIME_BASE) if timed else None,
    )


def selected_blocks(state: GameState) -> List[Block]:
    """Resolve the selection in click order, skipping ids no longer on the grid."""
    blocks: List[Block] = []
    for block_id in state.selected_ids:
        block = find_block(state.grid, block_id)
        if block is None:
            logger.warning("Selected block %s is not on the grid", block_id)
            continue
        blocks.append(block)
    return blocks


def selected_sum(state: GameState) -> int:
    return sum(block.value for block in selected_blocks(state))


def time_fraction(state: GameState) -> float:
    """Share of the countdown left, for the time bar; 0.0 outside time mode."""
    if state.time_left is None or not state.max_time:
        return 0.0
    return min(1.0, max(0.0, state.time_left / state.max_time))


def resolve_selection(
    state: GameState,
    block_id: str,
    *,
    paused: bool = False,
    rng: random.Random | None = None,
) -> SelectionOutcome:
    """Toggle ``block_id`` and resolve the selection against the target sum."""
    if state.is_game_over or paused:
        return SelectionOutcome(state, SelectionResult.IGNORED)
    if find_block(state.grid, block_id) is None:
        logger.warning("Ignoring click on block %s, which is not on the grid", block_id)
        return SelectionOutcome(state, SelectionResult.IGNORED)

    if block_id in state.selected_ids:
        toggled = tuple(i for i in state.selected_ids if i != block_id)
    else:
        toggled = state.selected_ids + (block_id,)
    candidate = replace(state, selected_ids=toggled)
    blocks = selected_blocks(candidate)
    current_sum = sum(block.value for block in blocks)

    if current_sum > state.target_sum:
        return SelectionOutcome(
            replace(state, selected_ids=(), combo=0),
            SelectionResult.OVERFLOW,
        )
    if current_sum < state.target_sum:
        # Stale ids were already reported by selected_blocks; keep only live ones.
        live = tuple(block.id for block in blocks)
        return SelectionOutcome(replace(state, selected_ids=live), SelectionResult.PENDING)
    return _apply_match(state, blocks, rng=rng)


def _apply_match(state: GameState, blocks: List[Block], *, rng: random.Random | None) -> SelectionOutcome:
    grid = apply_gravity(remove_blocks(state.grid, [block.id for block in blocks]))
    game_over = False
    row_forced = False
    if state.mode is GameMode.CLASSIC:
        if check_game_over(grid):
            game_over = True
        else:
            grid = shift_up(grid, rng=rng)
            row_forced = True
            game_over = check_game_over(grid)

    points = state.target_sum * len(blocks) * (state.combo + 1)
    score = state.score + points
    high_score = max(state.high_score, score)
    timed = state.mode is GameMode.TIME
    # Target variance follows the level the match was played at; the new
    # level only applies from the next round on.
    next_time = round_time(state.level) if timed else None
    new_state = replace(
        state,
        grid=grid,
        selected_ids=(),
        target_sum=get_target_sum(state.level, rng=rng),
        score=score,
        high_score=high_score,
        is_game_over=game_over,
        combo=state.combo + 1,
        level=level_for_score(score),
        time_left=next_time,
        max_time=next_time,
    )
    logger.debug("Matched %d blocks for %d points (score %d)", len(blocks), points, score)
    return SelectionOutcome(
        new_state,
        SelectionResult.MATCHED,
        points=points,
        cleared=tuple(blocks),
        row_forced=row_forced,
        new_high_score=high_score > state.high_score,
    )


def select_toggle(
    state: GameState,
    block_id: str,
    *,
    paused: bool = False,
    rng: random.Random | None = None,
) -> GameState:
    return resolve_selection(state, block_id, paused=paused, rng=rng).state


def advance_timer(state: GameState, *, paused: bool = False, rng: random.Random | None = None) -> TickOutcome:
    """Run one countdown step; when time runs out a row is forced in."""
    if paused or state.is_game_over or state.mode is not GameMode.TIME or state.time_left is None:
        return TickOutcome(state)
    # Rounding keeps 100 steps of 0.1 landing exactly on zero.
    remaining = round(state.time_left - TICK_INTERVAL, 1)
    if remaining > 0:
        return TickOutcome(replace(state, time_left=remaining))

    if check_game_over(state.grid):
        return TickOutcome(replace(state, time_left=0.0, is_game_over=True), game_over=True)
    grid = shift_up(state.grid, rng=rng)
    game_over = check_game_over(grid)
    next_time = round_time(state.level)
    new_state = replace(
        state,
        grid=grid,
        time_left=next_time,
        max_time=next_time,
        is_game_over=game_over,
        combo=0,
        selected_ids=(),
    )
    return TickOutcome(new_state, row_forced=True, game_over=game_over)


def tick(state: GameState, *, paused: bool = False, rng: random.Random | None = None) -> GameState:
    return advance_timer(state, paused=paused, rng=rng).state
