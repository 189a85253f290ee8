"""Session resource tracking the active screen and the current game."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from sumstack.components.game_state import GameState


class Screen(Enum):
    """Top-level screens that decide which input and rendering apply."""
    MENU = auto()
    PLAYING = auto()


@dataclass
class Session:
    """Singleton component holding the only live reference to the game state."""
    screen: Screen = Screen.MENU
    game: Optional[GameState] = None
    paused: bool = False
