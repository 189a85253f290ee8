from __future__ import annotations

import random
from dataclasses import replace
from typing import Mapping, Sequence

from sumstack.components.block import Block, Grid
from sumstack.components.game_state import GameMode, GameState
from sumstack.constants import GRID_COLS, GRID_ROWS
from sumstack.systems.grid_ops import create_empty_grid


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def grid_from_rows(rows: Mapping[int, Sequence[int | None]]) -> Grid:
    """Build a grid from {row_index: [value or None per column]}.

    Block ids are ``r<row>c<col>`` so tests can refer to them directly.
    """
    cells = [list(row) for row in create_empty_grid()]
    for row_index, values in rows.items():
        assert len(values) == GRID_COLS, f"row {row_index} needs {GRID_COLS} cells"
        for col, value in enumerate(values):
            if value is not None:
                cells[row_index][col] = Block(id=f"r{row_index}c{col}", value=value, row=row_index, col=col)
    return tuple(tuple(row) for row in cells)


def full_column(col: int, value: int = 9, *, start_row: int = 0) -> dict[int, list[int | None]]:
    """Rows dict filling ``col`` from ``start_row`` down to the bottom."""
    rows: dict[int, list[int | None]] = {}
    for row in range(start_row, GRID_ROWS):
        values: list[int | None] = [None] * GRID_COLS
        values[col] = value
        rows[row] = values
    return rows


def merge_rows(*parts: Mapping[int, Sequence[int | None]]) -> dict[int, list[int | None]]:
    merged: dict[int, list[int | None]] = {}
    for part in parts:
        for row_index, values in part.items():
            current = merged.setdefault(row_index, [None] * GRID_COLS)
            for col, value in enumerate(values):
                if value is not None:
                    current[col] = value
    return merged


def make_state(
    rows: Mapping[int, Sequence[int | None]] | None = None,
    *,
    target_sum: int = 10,
    mode: GameMode = GameMode.CLASSIC,
    **overrides,
) -> GameState:
    timed = mode is GameMode.TIME
    state = GameState(
        grid=grid_from_rows(rows or {}),
        target_sum=target_sum,
        mode=mode,
        time_left=10.0 if timed else None,
        max_time=10.0 if timed else None,
    )
    return replace(state, **overrides) if overrides else state


def block_ids(grid: Grid) -> set[str]:
    return {cell.id for row in grid for cell in row if cell is not None}
