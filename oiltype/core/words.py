from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import yaml


@dataclass(frozen=True)
class WordRecord:
    id: str
    display: str
    romaji: str


@dataclass(frozen=True)
class WordList:
    key: str
    title: str
    words: List[WordRecord]


_DISPLAY_NOISE = re.compile(r"[a-zA-Z0-9'\"“”‘’、。！？!?,.・()（）\s]")
_NON_ROMAJI = re.compile(r"[^a-z]")


def clean_display(text: str) -> str:
    """Strip latin letters, digits, quotes and punctuation from display text."""
    return _DISPLAY_NOISE.sub("", text or "")


def clean_romaji(text: str) -> str:
    """Lowercase and keep only ascii letters."""
    return _NON_ROMAJI.sub("", (text or "").lower())


def make_word(display: str, romaji: str, word_id: Optional[str] = None) -> WordRecord:
    """Build a WordRecord, generating an id when none is given."""
    return WordRecord(
        id=word_id or f"word-{uuid.uuid4().hex[:12]}",
        display=display.strip(),
        romaji=clean_romaji(romaji),
    )


def build_custom_words(rows: Iterable[Tuple[str, str]]) -> List[WordRecord]:
    """Turn editor rows of ``(display, romaji)`` into a custom word list.

    Rows whose display text cleans to nothing are dropped.  Raises
    ValueError when no word is left or a kept row has no usable romaji.
    """
    words: List[WordRecord] = []
    for display, romaji in rows:
        display = clean_display(display)
        if not display:
            continue
        if not clean_romaji(romaji):
            raise ValueError(f"すべての単語にローマ字を入力してください。({display})")
        words.append(make_word(display, romaji, word_id=f"custom-{len(words)}-{uuid.uuid4().hex[:8]}"))
    if not words:
        raise ValueError("少なくとも1つの単語を入力してください。")
    return words


DEFAULT_WORDS: List[WordRecord] = [
    WordRecord(id="1", display="こんにちは", romaji="konnichiwa"),
    WordRecord(id="2", display="ありがとう", romaji="arigatou"),
    WordRecord(id="3", display="油", romaji="abura"),
]


def _parse_entry(entry: object, source: str, index: int) -> WordRecord:
    if isinstance(entry, dict):
        display = entry.get("display")
        romaji = entry.get("romaji")
    elif isinstance(entry, str) and "|" in entry:
        display, romaji = entry.split("|", 1)
    else:
        raise ValueError(f"{source}: word #{index} must be a mapping or 'display|romaji'")
    if not display or not str(display).strip():
        raise ValueError(f"{source}: word #{index} has no 'display'")
    if not romaji or not clean_romaji(str(romaji)):
        raise ValueError(f"{source}: word #{index} has no usable 'romaji'")
    return make_word(str(display), str(romaji), word_id=f"{Path(source).stem}-{index}")


class WordListRepository:
    """Word lists bundled as YAML files under ``data/words``."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "words"
        self._lists = self._load_lists()

    def all(self) -> List[WordList]:
        return list(self._lists.values())

    def get(self, key: str) -> WordList:
        return self._lists[key]

    def _load_lists(self) -> Dict[str, WordList]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Word list directory not found: {self._base_dir}")

        lists: Dict[str, WordList] = {}
        for path in sorted(self._base_dir.glob("*.yaml")):
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'title' and 'words'")
            title = raw.get("title")
            entries = raw.get("words")
            if not title or not isinstance(title, str):
                raise ValueError(f"{path.name}: missing or invalid 'title'")
            if not isinstance(entries, list) or not entries:
                raise ValueError(f"{path.name}: 'words' must be a non-empty list")
            words = [_parse_entry(entry, path.name, i) for i, entry in enumerate(entries)]
            lists[path.stem] = WordList(key=path.stem, title=title.strip(), words=words)

        if not lists:
            raise ValueError(f"No word list files (*.yaml) found in {self._base_dir}")
        return lists
