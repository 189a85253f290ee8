from __future__ import annotations

import itertools
import random
from dataclasses import replace
from typing import Collection, Iterator, List, Sequence, Tuple

from sumstack.components.block import Block, Cell, Grid
from sumstack.constants import GRID_COLS, GRID_ROWS, MAX_VALUE, MIN_VALUE

Position = Tuple[int, int]

_block_ids = itertools.count(1)


class GridShapeError(RuntimeError):
    """Raised when a grid stops being GRID_ROWS x GRID_COLS."""


def next_block_id() -> str:
    """Return a block id that is unique for the lifetime of the process."""
    return f"b{next(_block_ids)}"


def create_block(row: int, col: int, value: int | None = None, *, rng: random.Random | None = None) -> Block:
    if value is None:
        value = (rng or random).randint(MIN_VALUE, MAX_VALUE)
    return Block(id=next_block_id(), value=value, row=row, col=col)


def create_empty_grid() -> Grid:
    return tuple((None,) * GRID_COLS for _ in range(GRID_ROWS))


def generate_row(row_index: int, *, rng: random.Random | None = None) -> List[Block]:
    return [create_block(row_index, col, rng=rng) for col in range(GRID_COLS)]


def ensure_grid_shape(grid: Grid) -> Grid:
    if len(grid) != GRID_ROWS or any(len(row) != GRID_COLS for row in grid):
        shape = (len(grid), sorted({len(row) for row in grid}))
        raise GridShapeError(f"grid must be {GRID_ROWS}x{GRID_COLS}, got {shape}")
    return grid


def place_row(grid: Grid, row_index: int, blocks: Sequence[Cell]) -> Grid:
    """Return a copy of grid with row ``row_index`` replaced by ``blocks``."""
    if len(blocks) != GRID_COLS:
        raise GridShapeError(f"row must hold {GRID_COLS} cells, got {len(blocks)}")
    rows = list(grid)
    rows[row_index] = tuple(
        None if block is None else replace(block, row=row_index, col=col)
        for col, block in enumerate(blocks)
    )
    return ensure_grid_shape(tuple(rows))


def iter_blocks(grid: Grid) -> Iterator[Block]:
    """Yield every block top-to-bottom, left-to-right."""
    for row in grid:
        for cell in row:
            if cell is not None:
                yield cell


def find_block(grid: Grid, block_id: str) -> Block | None:
    for block in iter_blocks(grid):
        if block.id == block_id:
            return block
    return None


def remove_blocks(grid: Grid, block_ids: Collection[str]) -> Grid:
    """Empty every cell whose block id is in ``block_ids``."""
    ids = set(block_ids)
    return ensure_grid_shape(tuple(
        tuple(None if cell is not None and cell.id in ids else cell for cell in row)
        for row in grid
    ))


def check_game_over(grid: Grid) -> bool:
    """A block in the top row means the board has overflowed."""
    return any(cell is not None for cell in grid[0])


def apply_gravity(grid: Grid) -> Grid:
    """Compact every column downwards, keeping the blocks' top-to-bottom order."""
    cells: List[List[Cell]] = [[None] * GRID_COLS for _ in range(GRID_ROWS)]
    for col in range(GRID_COLS):
        target_row = GRID_ROWS - 1
        for row in range(GRID_ROWS - 1, -1, -1):
            block = grid[row][col]
            if block is None:
                continue
            cells[target_row][col] = replace(block, row=target_row, col=col)
            target_row -= 1
    return ensure_grid_shape(tuple(tuple(row) for row in cells))


def shift_up(grid: Grid, *, rng: random.Random | None = None) -> Grid:
    """Push every row up by one and insert a fresh row at the bottom.

    Blocks in row 0 fall off the board, so callers must run
    ``check_game_over`` before shifting.
    """
    cells: List[List[Cell]] = [[None] * GRID_COLS for _ in range(GRID_ROWS)]
    for row in range(1, GRID_ROWS):
        for col in range(GRID_COLS):
            block = grid[row][col]
            if block is not None:
                cells[row - 1][col] = replace(block, row=row - 1, col=col)
    cells[GRID_ROWS - 1] = list(generate_row(GRID_ROWS - 1, rng=rng))
    return ensure_grid_shape(tuple(tuple(row) for row in cells))
