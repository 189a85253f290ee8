from esper import World

from sumstack.components.session import Screen
from sumstack.events.bus import (
    EventBus,
    EVENT_BLOCK_CLICKED,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_PAUSE_TOGGLED,
    EVENT_RESTART_REQUESTED,
    EVENT_RETURN_TO_MENU,
)
from sumstack.ui.keys import KEY_ESCAPE, KEY_P, KEY_R, KEY_SPACE, MOUSE_BUTTON_LEFT
from sumstack.ui.layout import cell_at_point
from sumstack.utils.session import accepts_input, get_session

_KEY_EVENTS = {
    KEY_P: EVENT_PAUSE_TOGGLED,
    KEY_SPACE: EVENT_PAUSE_TOGGLED,
    KEY_R: EVENT_RESTART_REQUESTED,
    KEY_ESCAPE: EVENT_RETURN_TO_MENU,
}

class InputSystem:
    """Translates in-game mouse and keyboard input into game events."""

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        session = get_session(self.world)
        if session.screen is not Screen.PLAYING or session.game is None:
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        # Clicking anywhere on the pause overlay resumes the game.
        if session.paused and not session.game.is_game_over:
            self.event_bus.emit(EVENT_PAUSE_TOGGLED)
            return
        if not accepts_input(session):
            return
        cell = cell_at_point(x, y, self.window.width, self.window.height)
        if cell is None:
            return
        row, col = cell
        block = session.game.grid[row][col]
        if block is None:
            return
        self.event_bus.emit(EVENT_BLOCK_CLICKED, block_id=block.id)

    def on_key_press(self, sender, **kwargs):
        session = get_session(self.world)
        if session.screen is not Screen.PLAYING:
            return
        name = _KEY_EVENTS.get(kwargs.get('symbol'))
        if name is not None:
            self.event_bus.emit(name)
