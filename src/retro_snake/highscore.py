"""High-score bookkeeping keyed by game identity."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "retro-snake"


class HighScoreStore:
    """Best score per game key, optionally backed by a JSON file.

    Without a path the store lives only in memory. With a path, every new
    record is written back immediately.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._scores: dict[str, int] = {}
        self._load_existing()

    def _load_existing(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.warning(
                "Ignoring unreadable high-score file %s.", self._path,
            )
            return
        if not isinstance(raw, dict):
            logger.warning(
                "Ignoring malformed high-score file %s.", self._path,
            )
            return
        self._scores = {
            str(k): int(v) for k, v in raw.items()
            if isinstance(v, int) and not isinstance(v, bool) and v >= 0
        }
        logger.info(
            "Loaded %d high scores from %s.", len(self._scores), self._path,
        )

    def _save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._scores, indent=2))

    def get(self, key: str = DEFAULT_KEY) -> int:
        """Return the best score for *key*, or 0 if none was recorded."""
        return self._scores.get(key, 0)

    def submit(self, score: int, key: str = DEFAULT_KEY) -> bool:
        """Record *score* if it beats the stored best. Returns True on a record."""
        if score <= self.get(key):
            return False
        self._scores[key] = score
        self._save()
        logger.info("New high score for %s: %d.", key, score)
        return True

    def to_dict(self) -> dict:
        return dict(self._scores)
