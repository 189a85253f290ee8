from __future__ import annotations

import json
import logging
from pathlib import Path

from sumstack.constants import HIGH_SCORE_FILE
from sumstack.events.bus import EVENT_HIGH_SCORE_CHANGED, EventBus

logger = logging.getLogger(__name__)


class HighScoreSystem:
    """Loads and persists the best score between games."""

    def __init__(self, event_bus: EventBus, *, save_path: Path | None = None) -> None:
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self.event_bus.subscribe(EVENT_HIGH_SCORE_CHANGED, self._on_high_score_changed)

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / HIGH_SCORE_FILE

    @property
    def save_path(self) -> Path:
        return self._save_path

    def load_high_score(self) -> int | None:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable high score file %s", self._save_path)
            return None
        try:
            value = int(payload.get("high_score"))
        except (AttributeError, TypeError, ValueError):
            logger.warning("Ignoring malformed high score in %s", self._save_path)
            return None
        return value if value >= 0 else None

    def save_high_score(self, value: int) -> None:
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump({"high_score": int(value)}, handle, indent=2)
        logger.info("Saved new high score %d", value)

    # Event handlers -----------------------------------------------------

    def _on_high_score_changed(self, sender, **payload) -> None:
        value = payload.get("value")
        if value is None:
            return
        self.save_high_score(int(value))
