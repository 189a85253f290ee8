from blinker import Signal
from typing import Dict

class EventBus:
    """Synchronous event bus over blinker signals.

    Handlers run to completion inside ``emit``, so events are processed one at
    a time on the caller's thread.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references keep systems alive even when the caller drops them.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float (frame delta, seconds)
EVENT_TIMER_STEP = "timer_step"            # payload: None (one TICK_INTERVAL countdown step)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_KEY_PRESS = "key_press"              # payload: symbol, modifiers
EVENT_BLOCK_CLICKED = "block_clicked"      # payload: block_id=str


# ============================================================================
# BOARD & SCORING
# ============================================================================
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: selected_ids=tuple[str,...], current_sum=int
EVENT_SELECTION_OVERFLOW = "selection_overflow"    # payload: attempted_ids=tuple[str,...], current_sum=int, target_sum=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: block_ids=tuple[str,...], points=int, combo=int, score=int
EVENT_ROW_FORCED = "row_forced"                    # payload: reason=str ("match" | "timer")
EVENT_HIGH_SCORE_CHANGED = "high_score_changed"    # payload: value=int, previous=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_MODE_SELECTED = "mode_selected"          # payload: mode=GameMode
EVENT_RESTART_REQUESTED = "restart_requested"  # payload: None
EVENT_RETURN_TO_MENU = "return_to_menu"        # payload: None
EVENT_PAUSE_TOGGLED = "pause_toggled"          # payload: None
EVENT_GAME_STARTED = "game_started"            # payload: mode=GameMode, high_score=int
EVENT_PAUSE_CHANGED = "pause_changed"          # payload: paused=bool
EVENT_GAME_OVER = "game_over"                  # payload: score=int, high_score=int, reason=str
EVENT_RETURNED_TO_MENU = "returned_to_menu"    # payload: None
