"""Rendering system responsible for drawing the mode-select menu."""
import arcade
from esper import World

from sumstack.components.session import Screen
from sumstack.constants import BLOCK_COLOR, INK_COLOR, WINDOW_TITLE
from sumstack.events.bus import EVENT_HIGH_SCORE_CHANGED, EventBus
from sumstack.menu.components import MenuButton
from sumstack.utils.session import get_session


class MenuRenderSystem:
    """Renders menu entities while the menu screen is active."""

    def __init__(self, world: World, window, event_bus: EventBus, *, best_score: int = 0) -> None:
        self.world = world
        self.window = window
        self.best_score = best_score
        event_bus.subscribe(EVENT_HIGH_SCORE_CHANGED, self._on_high_score_changed)

    def process(self) -> None:
        if get_session(self.world).screen is not Screen.MENU:
            return

        arcade.draw_text(
            WINDOW_TITLE.upper(),
            self.window.width / 2,
            self.window.height * 0.75,
            INK_COLOR,
            40,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        if self.best_score:
            arcade.draw_text(
                f"Best {self.best_score}",
                self.window.width / 2,
                self.window.height * 0.75 - 48,
                INK_COLOR,
                14,
                anchor_x="center",
                anchor_y="center",
            )

        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, INK_COLOR)
            arcade.draw_lbwh_rectangle_outline(
                left,
                bottom,
                button.width,
                button.height,
                INK_COLOR,
                border_width=2,
            )
            arcade.draw_text(
                button.label,
                button.x,
                button.y + 8,
                BLOCK_COLOR,
                20,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )
            arcade.draw_text(
                button.hint,
                button.x,
                button.y - 16,
                BLOCK_COLOR,
                10,
                anchor_x="center",
                anchor_y="center",
            )

    def _on_high_score_changed(self, sender, **payload) -> None:
        value = payload.get("value")
        if value is not None:
            self.best_score = max(self.best_score, int(value))
