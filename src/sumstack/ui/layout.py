from typing import Optional, Tuple

from sumstack.constants import (
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    GRID_COLS,
    GRID_ROWS,
    HUD_HEIGHT,
)

Rect = Tuple[float, float, float, float]  # left, bottom, width, height


def compute_board_geometry(window_width: int, window_height: int):
    """Return (tile_size, start_x, start_y) for the board.

    ``start_x``/``start_y`` are the bottom-left corner of the bottom row; row 0
    is drawn at the top, just under the HUD. Shared by rendering and input so
    clicks always map to the cell that was drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = window_height - BOTTOM_MARGIN - HUD_HEIGHT
    tile_size = int(min(max_board_w / GRID_COLS, max_board_h / GRID_ROWS))
    if tile_size < 20:
        tile_size = 20
    total_width = GRID_COLS * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_rect(row: int, col: int, window_width: int, window_height: int) -> Rect:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height)
    left = start_x + col * tile_size
    bottom = start_y + (GRID_ROWS - 1 - row) * tile_size
    return left, bottom, tile_size, tile_size


def cell_at_point(x: float, y: float, window_width: int, window_height: int) -> Optional[Tuple[int, int]]:
    """Map a window point to (row, col), or None when it misses the board."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height)
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if not (0 <= col < GRID_COLS and 0 <= row_from_bottom < GRID_ROWS):
        return None
    return GRID_ROWS - 1 - row_from_bottom, col
