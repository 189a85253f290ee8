from __future__ import annotations

import logging
import random

from esper import World

from sumstack.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_PAUSE_CHANGED,
    EVENT_RETURNED_TO_MENU,
    EVENT_ROW_FORCED,
    EVENT_SELECTION_CHANGED,
    EVENT_TICK,
    EVENT_TIMER_STEP,
    EventBus,
)
from sumstack.systems.rules import advance_timer
from sumstack.utils.session import get_session, timer_should_run
from sumstack.utils.tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)


class TimerSystem:
    """Drives the time-mode countdown from frame ticks.

    Frame ``tick`` events feed a ``TickScheduler``; every whole step it reports
    is published as ``timer_step`` and applied to the game on the same
    thread. The scheduler is started and stopped whenever the session changes
    so no step lands on a paused, finished or discarded game.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        scheduler: TickScheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._scheduler = scheduler or TickScheduler()
        self._rng = rng or getattr(world, "random", None) or random.Random()

        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_TIMER_STEP, self._on_timer_step)
        for name in (EVENT_GAME_STARTED, EVENT_PAUSE_CHANGED, EVENT_GAME_OVER, EVENT_RETURNED_TO_MENU):
            self.event_bus.subscribe(name, self._on_session_changed)

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    def sync(self) -> None:
        """Start or stop the scheduler to match the current session."""
        if timer_should_run(get_session(self.world)):
            self._scheduler.start()
        else:
            self._scheduler.stop()

    # Event handlers -----------------------------------------------------

    def _on_session_changed(self, sender, **payload) -> None:
        self.sync()

    def _on_tick(self, sender, **payload) -> None:
        dt = payload.get("dt")
        if dt is None:
            return
        for _ in range(self._scheduler.advance(float(dt))):
            if not self._scheduler.running:
                break
            self.event_bus.emit(EVENT_TIMER_STEP)

    def _on_timer_step(self, sender, **payload) -> None:
        session = get_session(self.world)
        if not timer_should_run(session):
            return
        outcome = advance_timer(session.game, paused=session.paused, rng=self._rng)
        session.game = outcome.state
        if outcome.row_forced:
            logger.debug("Time ran out, forcing a new row")
            self.event_bus.emit(EVENT_ROW_FORCED, reason="timer")
            self.event_bus.emit(EVENT_SELECTION_CHANGED, selected_ids=(), current_sum=0)
        if outcome.state.is_game_over:
            logger.info("Game over with score %d", outcome.state.score)
            self.event_bus.emit(
                EVENT_GAME_OVER,
                score=outcome.state.score,
                high_score=outcome.state.high_score,
                reason="timer",
            )
