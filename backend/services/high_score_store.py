"""
Best-score persistence.

The only thing kept across sessions is one integer, stored as a tiny JSON
document so it can be inspected and edited by hand.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_HIGH_SCORE_FILE = "high_score.json"


class HighScoreStore:
    """Persists the best score to a JSON file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        if path is None:
            path = os.getenv("HIGH_SCORE_PATH", DEFAULT_HIGH_SCORE_FILE)
        self.path = Path(path)

    def get(self) -> int:
        """Return the stored best score, or 0 when nothing usable is stored."""
        if not self.path.exists():
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            score = int(data.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0

        return max(score, 0)

    def set(self, score: int) -> None:
        """Overwrite the stored best score."""
        if score < 0:
            raise ValueError(f"High score cannot be negative, got {score}.")

        if self.path.parent and not self.path.parent.exists():
            os.makedirs(self.path.parent, exist_ok=True)

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump({"high_score": int(score)}, f)
        os.replace(tmp_path, self.path)

    def record(self, score: int) -> int:
        """Store score if it beats the current best and return the best."""
        best = self.get()
        if score > best:
            self.set(score)
            logger.info("New high score %s (previous %s)", score, best)
            return score
        return best


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the best score in memory only."""

    def __init__(self, initial: int = 0):
        self._score = initial

    def get(self) -> int:
        return self._score

    def set(self, score: int) -> None:
        if score < 0:
            raise ValueError(f"High score cannot be negative, got {score}.")
        self._score = int(score)
