"""Draws the board, HUD and overlays for a running game."""
import arcade
from esper import World

from sumstack.components.game_state import GameMode, GameState
from sumstack.components.session import Screen
from sumstack.constants import (
    BLOCK_COLOR,
    DANGER_COLOR,
    GRID_COLS,
    GRID_ROWS,
    HUD_HEIGHT,
    INK_COLOR,
    OVERLAY_COLOR,
    SELECTED_COLOR,
    TILE_GAP,
)
from sumstack.systems.rules import selected_blocks, time_fraction
from sumstack.ui.layout import cell_rect, compute_board_geometry
from sumstack.utils.session import get_session


class RenderSystem:
    def __init__(self, world: World, window):
        self.world = world
        self.window = window

    def process(self) -> None:
        session = get_session(self.world)
        if session.screen is not Screen.PLAYING or session.game is None:
            return
        game = session.game
        self._draw_board(game)
        self._draw_hud(game)
        if game.is_game_over:
            self._draw_overlay("GAME OVER", f"Score {game.score}   Best {game.high_score}", "R: play again   Esc: menu")
        elif session.paused:
            self._draw_overlay("PAUSED", "", "Click or press P to resume")

    def _draw_board(self, game: GameState) -> None:
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height)
        arcade.draw_lbwh_rectangle_outline(
            start_x, start_y, GRID_COLS * tile_size, GRID_ROWS * tile_size, INK_COLOR, border_width=2
        )
        # Danger line under the overflow row.
        danger_y = start_y + (GRID_ROWS - 1) * tile_size
        arcade.draw_line(start_x, danger_y, start_x + GRID_COLS * tile_size, danger_y, DANGER_COLOR, 2)
        selected = set(game.selected_ids)
        for row in game.grid:
            for block in row:
                if block is None:
                    continue
                left, bottom, width, height = cell_rect(block.row, block.col, self.window.width, self.window.height)
                is_selected = block.id in selected
                fill = SELECTED_COLOR if is_selected else BLOCK_COLOR
                text_color = BLOCK_COLOR if is_selected else INK_COLOR
                arcade.draw_lbwh_rectangle_filled(
                    left + TILE_GAP / 2, bottom + TILE_GAP / 2, width - TILE_GAP, height - TILE_GAP, fill
                )
                arcade.draw_lbwh_rectangle_outline(
                    left + TILE_GAP / 2, bottom + TILE_GAP / 2, width - TILE_GAP, height - TILE_GAP, INK_COLOR,
                    border_width=2,
                )
                arcade.draw_text(
                    str(block.value),
                    left + width / 2,
                    bottom + height / 2,
                    text_color,
                    int(tile_size * 0.4),
                    anchor_x="center",
                    anchor_y="center",
                    bold=True,
                )

    def _draw_hud(self, game: GameState) -> None:
        width = self.window.width
        top = self.window.height
        hud_bottom = top - HUD_HEIGHT
        arcade.draw_text("TARGET", width / 2, top - 24, INK_COLOR, 12, anchor_x="center", anchor_y="center")
        arcade.draw_text(
            str(game.target_sum), width / 2, top - 64, INK_COLOR, 40,
            anchor_x="center", anchor_y="center", bold=True,
        )
        arcade.draw_text(f"Score {game.score}", 16, top - 24, INK_COLOR, 14, anchor_y="center")
        arcade.draw_text(f"Best {game.high_score}", 16, top - 46, INK_COLOR, 12, anchor_y="center")
        arcade.draw_text(f"Level {game.level}", width - 16, top - 24, INK_COLOR, 14, anchor_x="right", anchor_y="center")
        if game.combo > 1:
            arcade.draw_text(
                f"Combo x{game.combo}", width - 16, top - 46, DANGER_COLOR, 12,
                anchor_x="right", anchor_y="center", bold=True,
            )

        blocks = selected_blocks(game)
        if blocks:
            expression = " + ".join(str(block.value) for block in blocks)
            total = sum(block.value for block in blocks)
            arcade.draw_text(
                f"{expression} = {total}", width / 2, hud_bottom + 40, INK_COLOR, 14,
                anchor_x="center", anchor_y="center",
            )

        if game.mode is GameMode.TIME:
            bar_width = width - 32
            fraction = time_fraction(game)
            arcade.draw_lbwh_rectangle_outline(16, hud_bottom + 12, bar_width, 10, INK_COLOR, border_width=1)
            color = DANGER_COLOR if fraction < 0.3 else INK_COLOR
            if fraction > 0:
                arcade.draw_lbwh_rectangle_filled(16, hud_bottom + 12, bar_width * fraction, 10, color)

    def _draw_overlay(self, title: str, subtitle: str, hint: str) -> None:
        width = self.window.width
        height = self.window.height
        arcade.draw_lrbt_rectangle_filled(0, width, 0, height, OVERLAY_COLOR)
        arcade.draw_text(title, width / 2, height / 2 + 40, BLOCK_COLOR, 36, anchor_x="center", anchor_y="center", bold=True)
        if subtitle:
            arcade.draw_text(subtitle, width / 2, height / 2, BLOCK_COLOR, 16, anchor_x="center", anchor_y="center")
        arcade.draw_text(hint, width / 2, height / 2 - 40, BLOCK_COLOR, 12, anchor_x="center", anchor_y="center")
