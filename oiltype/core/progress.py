from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

from oiltype.core.stats import StatsSummary
from oiltype.core.words import WordRecord, clean_romaji

logger = logging.getLogger(__name__)


@dataclass
class ModeProgress:
    sessions: int = 0
    best_wpm: float = 0.0
    best_accuracy: float = 0.0


class ProgressStore:
    """Best results per mode plus the user's custom word list.
    File: ~/.oiltype/progress.json."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".oiltype" / "progress.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._progress, self._custom_words = self._load()

    def get_mode_progress(self, mode: str) -> ModeProgress:
        return self._progress.get(mode, ModeProgress())

    def record_result(self, mode: str, summary: StatsSummary) -> ModeProgress:
        """Fold a finished session into the per-mode bests and persist."""
        current = self._progress.get(mode, ModeProgress())
        current.sessions += 1
        current.best_wpm = max(current.best_wpm, summary.wpm)
        current.best_accuracy = max(current.best_accuracy, summary.accuracy)
        self._progress[mode] = current
        self._save()
        return current

    def load_custom_words(self) -> List[WordRecord]:
        return list(self._custom_words)

    def save_custom_words(self, words: List[WordRecord]) -> None:
        self._custom_words = list(words)
        self._save()

    def reset(self) -> None:
        """Clear all results and the custom word list."""
        self._progress = {}
        self._custom_words = []
        self._save()

    def _load(self) -> tuple[Dict[str, ModeProgress], List[WordRecord]]:
        progress: Dict[str, ModeProgress] = {}
        words: List[WordRecord] = []
        if not self._file_path.exists():
            return progress, words
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return progress, words

        for key, value in payload.get("modes", {}).items():
            progress[key] = ModeProgress(
                sessions=int(value.get("sessions", 0)),
                best_wpm=float(value.get("best_wpm", 0.0)),
                best_accuracy=float(value.get("best_accuracy", 0.0)),
            )
        for i, item in enumerate(payload.get("custom_words", [])):
            if not isinstance(item, dict) or not item.get("display") or not clean_romaji(str(item.get("romaji", ""))):
                logger.warning("Skipping malformed custom word #%d in %s", i, self._file_path)
                continue
            words.append(
                WordRecord(
                    id=str(item.get("id") or f"custom-{i}"),
                    display=str(item["display"]),
                    romaji=clean_romaji(str(item["romaji"])),
                )
            )
        return progress, words

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "modes": {key: asdict(value) for key, value in self._progress.items()},
            "custom_words": [asdict(word) for word in self._custom_words],
        }
        try:
            self._file_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
