from __future__ import annotations

import json
import logging
import math
from pathlib import Path

from esper import World

from bubbleshot.events.bus import EVENT_HIGH_SCORE_CHANGED, EVENT_SCORE_CHANGED, EventBus
from bubbleshot.utils.game_state import get_score

logger = logging.getLogger(__name__)


class HighScoreSystem:
    """Persists the best score to a JSON file and mirrors it into the Score component.

    Every failure is logged and swallowed here: the session score is computed
    locally and never depends on the store answering.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()

        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self._on_score_changed)

        self.refresh()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "high_score.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    def fetch_high_score(self) -> int:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return 0
        except json.JSONDecodeError:
            logger.warning("High score file %s is corrupt; treating as 0", self._save_path)
            return 0
        if not isinstance(payload, dict):
            return 0
        value = payload.get("high_score", 0)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            logger.warning("High score file %s holds %r; treating as 0", self._save_path, value)
            return 0
        return max(0, int(value))

    def submit_score(self, score: int) -> None:
        best = max(self.fetch_high_score(), int(score))
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        # Written beside the target and swapped in, so a failed write leaves the old best.
        pending = self._save_path.with_name(self._save_path.name + ".tmp")
        try:
            with pending.open("w", encoding="utf-8") as handle:
                json.dump({"high_score": best}, handle, indent=2)
            pending.replace(self._save_path)
        except OSError:
            pending.unlink(missing_ok=True)
            raise

    def refresh(self) -> int | None:
        """Reload the stored best into the Score component; None when the read failed."""
        try:
            high_score = self.fetch_high_score()
        except (OSError, ValueError, TypeError):
            logger.exception("Error loading high score from %s", self._save_path)
            return None
        score = get_score(self.world)
        if score is not None:
            score.high_score = high_score
        self.event_bus.emit(EVENT_HIGH_SCORE_CHANGED, high_score=high_score)
        return high_score

    # Event handlers -----------------------------------------------------

    def _on_score_changed(self, sender, **payload) -> None:
        if payload.get("reason") != "match":
            return
        value = payload.get("score")
        if value is None:
            return
        try:
            self.submit_score(value)
        except (OSError, ValueError, TypeError):
            logger.exception("Error updating high score at %s", self._save_path)
            return
        self.refresh()
