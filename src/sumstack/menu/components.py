"""Components used by the mode-select menu."""
from dataclasses import dataclass
from enum import Enum

from sumstack.components.game_state import GameMode
from sumstack.constants import MENU_BUTTON_HEIGHT, MENU_BUTTON_WIDTH


class MenuAction(Enum):
    """Actions that a menu button can trigger; values are the game modes they start."""
    CLASSIC = GameMode.CLASSIC.value
    TIME = GameMode.TIME.value

    @property
    def mode(self) -> GameMode:
        return GameMode(self.value)


@dataclass
class MenuButton:
    """Interactive button displayed on the menu screen."""
    label: str
    action: MenuAction
    x: float
    y: float
    width: float = MENU_BUTTON_WIDTH
    height: float = MENU_BUTTON_HEIGHT
    hint: str = ""


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
