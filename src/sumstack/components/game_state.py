"""Game state value describing one running game."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from sumstack.components.block import Grid


class GameMode(Enum):
    """Rule set fixed for the lifetime of one game."""
    CLASSIC = "classic"
    TIME = "time"


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of a game; every transition returns a new one."""
    grid: Grid
    target_sum: int
    mode: GameMode
    selected_ids: Tuple[str, ...] = ()
    score: int = 0
    high_score: int = 0
    is_game_over: bool = False
    level: int = 1
    combo: int = 0
    time_left: Optional[float] = None
    max_time: Optional[float] = None
