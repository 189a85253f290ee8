"""Entry point for the SumStack number puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color

from sumstack.components.session import Screen
from sumstack.constants import BACKGROUND_COLOR, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from sumstack.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EVENT_TICK, EventBus
from sumstack.menu.input_system import MenuInputSystem
from sumstack.menu.render_system import MenuRenderSystem
from sumstack.systems.game_flow_system import GameFlowSystem
from sumstack.systems.high_score_system import HighScoreSystem
from sumstack.systems.input import InputSystem
from sumstack.systems.render import RenderSystem
from sumstack.systems.selection_system import SelectionSystem
from sumstack.systems.timer_system import TimerSystem
from sumstack.utils.logging import setup_logger
from sumstack.utils.session import get_session
from sumstack.world import create_world


class SumStackWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world()

        # Persistence
        self.high_score_system = HighScoreSystem(self.event_bus)

        # Game flow and rules
        self.game_flow_system = GameFlowSystem(
            self.world,
            self.event_bus,
            load_high_score=self.high_score_system.load_high_score,
        )
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.timer_system = TimerSystem(self.world, self.event_bus)

        # Menu systems
        self.menu_input_system = MenuInputSystem(
            self.world,
            self.event_bus,
            menu_size_provider=lambda: (self.width, self.height),
        )
        self.menu_render_system = MenuRenderSystem(
            self.world,
            self,
            self.event_bus,
            best_score=self.high_score_system.load_high_score() or 0,
        )

        # Interface systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self)

        set_background_color(BACKGROUND_COLOR)

    def on_draw(self):
        self.clear()
        if get_session(self.world).screen is Screen.MENU:
            self.menu_render_system.process()
            return
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if get_session(self.world).screen is Screen.MENU:
            self.menu_input_system.handle_mouse_press(x, y, button)
            return
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if get_session(self.world).screen is Screen.MENU:
            self.menu_input_system.handle_key_press(symbol, modifiers)
            return
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    setup_logger(name="sumstack")
    SumStackWindow()
    run()


if __name__ == "__main__":
    main()
