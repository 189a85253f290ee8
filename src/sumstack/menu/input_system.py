"""Input handling for the mode-select menu."""
from typing import Callable, Tuple

from esper import World

from sumstack.components.session import Screen
from sumstack.events.bus import (
    EVENT_GAME_STARTED,
    EVENT_MODE_SELECTED,
    EVENT_RETURNED_TO_MENU,
    EventBus,
)
from sumstack.menu.components import MenuAction, MenuButton
from sumstack.menu.factory import clear_main_menu, spawn_main_menu
from sumstack.ui.keys import KEY_1, KEY_2, KEY_C, KEY_ENTER, KEY_NUM_1, KEY_NUM_2, KEY_T
from sumstack.utils.session import get_session

_KEY_ACTIONS = {
    KEY_1: MenuAction.CLASSIC,
    KEY_NUM_1: MenuAction.CLASSIC,
    KEY_C: MenuAction.CLASSIC,
    KEY_ENTER: MenuAction.CLASSIC,
    KEY_2: MenuAction.TIME,
    KEY_NUM_2: MenuAction.TIME,
    KEY_T: MenuAction.TIME,
}


class MenuInputSystem:
    """Processes input while the menu is on screen and keeps its buttons spawned."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        menu_size_provider: Callable[[], Tuple[int, int]],
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._menu_size_provider = menu_size_provider
        event_bus.subscribe(EVENT_GAME_STARTED, self._on_game_started)
        event_bus.subscribe(EVENT_RETURNED_TO_MENU, self._on_returned_to_menu)
        if get_session(world).screen is Screen.MENU:
            self.spawn_menu()

    def spawn_menu(self) -> None:
        width, height = self._menu_size_provider()
        spawn_main_menu(self.world, width, height)

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        """Start the mode whose button was clicked."""
        if not self._menu_active():
            return
        buttons = [entry for _, entry in self.world.get_component(MenuButton)]
        for menu_button in buttons:
            if self._point_inside_button(float(x), float(y), menu_button):
                self._activate_action(menu_button.action)
                return

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        if not self._menu_active():
            return
        action = _KEY_ACTIONS.get(symbol)
        if action is not None:
            self._activate_action(action)

    def _menu_active(self) -> bool:
        return get_session(self.world).screen is Screen.MENU

    def _activate_action(self, action: MenuAction) -> None:
        self.event_bus.emit(EVENT_MODE_SELECTED, mode=action.mode)

    def _on_game_started(self, sender, **payload) -> None:
        clear_main_menu(self.world)

    def _on_returned_to_menu(self, sender, **payload) -> None:
        self.spawn_menu()

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
