from __future__ import annotations

import logging
import random
from dataclasses import replace

from esper import World

from sumstack.events.bus import (
    EVENT_BLOCK_CLICKED,
    EVENT_GAME_OVER,
    EVENT_HIGH_SCORE_CHANGED,
    EVENT_MATCH_CLEARED,
    EVENT_ROW_FORCED,
    EVENT_SELECTION_CHANGED,
    EVENT_SELECTION_OVERFLOW,
    EventBus,
)
from sumstack.systems.rules import SelectionResult, resolve_selection, selected_sum
from sumstack.utils.session import accepts_input, get_session

logger = logging.getLogger(__name__)


class SelectionSystem:
    """Applies block clicks to the current game and publishes what happened."""

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_BLOCK_CLICKED, self.on_block_clicked)

    def on_block_clicked(self, sender, **kwargs):
        block_id = kwargs.get('block_id')
        if block_id is None:
            return
        session = get_session(self.world)
        # Input should already be suppressed here; guard again so a stray click
        # can never reach a paused or finished game.
        if not accepts_input(session):
            return
        previous = session.game
        outcome = resolve_selection(previous, str(block_id), paused=session.paused, rng=self._rng)
        if outcome.result is SelectionResult.IGNORED:
            return
        session.game = outcome.state
        state = outcome.state

        if outcome.result is SelectionResult.OVERFLOW:
            attempted = previous.selected_ids + (str(block_id),)
            self.event_bus.emit(
                EVENT_SELECTION_OVERFLOW,
                attempted_ids=attempted,
                current_sum=selected_sum(replace(previous, selected_ids=attempted)),
                target_sum=previous.target_sum,
            )
        elif outcome.result is SelectionResult.MATCHED:
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                block_ids=tuple(block.id for block in outcome.cleared),
                points=outcome.points,
                combo=state.combo,
                score=state.score,
            )
            if outcome.row_forced:
                self.event_bus.emit(EVENT_ROW_FORCED, reason="match")
            if outcome.new_high_score:
                self.event_bus.emit(
                    EVENT_HIGH_SCORE_CHANGED,
                    value=state.high_score,
                    previous=previous.high_score,
                )
        self.event_bus.emit(
            EVENT_SELECTION_CHANGED,
            selected_ids=state.selected_ids,
            current_sum=selected_sum(state),
        )
        if state.is_game_over:
            logger.info("Game over with score %d", state.score)
            self.event_bus.emit(
                EVENT_GAME_OVER,
                score=state.score,
                high_score=state.high_score,
                reason="match",
            )

