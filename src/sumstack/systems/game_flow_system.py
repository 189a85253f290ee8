"""High-level coordinator for starting, pausing and leaving games."""
from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from esper import World

from sumstack.components.game_state import GameMode
from sumstack.components.session import Screen
from sumstack.events.bus import (
    EVENT_GAME_STARTED,
    EVENT_MODE_SELECTED,
    EVENT_PAUSE_CHANGED,
    EVENT_PAUSE_TOGGLED,
    EVENT_RESTART_REQUESTED,
    EVENT_RETURN_TO_MENU,
    EVENT_RETURNED_TO_MENU,
    EventBus,
)
from sumstack.systems.rules import init_game
from sumstack.utils.session import get_session

logger = logging.getLogger(__name__)

HighScoreLoader = Callable[[], Optional[int]]


class GameFlowSystem:
    """Owns the Playing / Paused / menu transitions of the session."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        load_high_score: HighScoreLoader | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._load_high_score = load_high_score
        self._rng = rng or getattr(world, "random", None) or random.Random()

        self.event_bus.subscribe(EVENT_MODE_SELECTED, self._on_mode_selected)
        self.event_bus.subscribe(EVENT_RESTART_REQUESTED, self._on_restart_requested)
        self.event_bus.subscribe(EVENT_RETURN_TO_MENU, self._on_return_to_menu)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLED, self._on_pause_toggled)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_game(self, mode: GameMode) -> None:
        session = get_session(self.world)
        stored = self._load_high_score() if self._load_high_score is not None else None
        # Never drop below the best already reached in this session.
        best = max(stored or 0, session.game.high_score if session.game else 0)
        session.game = init_game(mode, high_score=best, rng=self._rng)
        session.paused = False
        session.screen = Screen.PLAYING
        logger.info("Started %s game (best %d)", mode.value, best)
        self.event_bus.emit(EVENT_GAME_STARTED, mode=mode, high_score=best)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_mode_selected(self, sender, **payload) -> None:
        mode = payload.get("mode")
        if mode is None:
            return
        self.start_game(GameMode(mode))

    def _on_restart_requested(self, sender, **payload) -> None:
        session = get_session(self.world)
        if session.game is None:
            return
        self.start_game(session.game.mode)

    def _on_return_to_menu(self, sender, **payload) -> None:
        session = get_session(self.world)
        if session.screen is Screen.MENU:
            return
        session.screen = Screen.MENU
        session.paused = False
        session.game = None
        self.event_bus.emit(EVENT_RETURNED_TO_MENU)

    def _on_pause_toggled(self, sender, **payload) -> None:
        session = get_session(self.world)
        if session.screen is not Screen.PLAYING or session.game is None:
            return
        if session.game.is_game_over:
            return
        session.paused = not session.paused
        self.event_bus.emit(EVENT_PAUSE_CHANGED, paused=session.paused)
