"""Keystroke normalization.

Raw input fragments can arrive as full-width ascii or as kana when the
operating system's input method is still on.  Everything is folded to
lowercase half-width ascii before matching.
"""

from __future__ import annotations

import re
from typing import Dict

FULL_WIDTH_OFFSET = 0xFEE0

_FULL_WIDTH_ALNUM = re.compile(r"[Ａ-Ｚａ-ｚ０-９]")
_COMPOSITION_CHARS = re.compile(r"[ぁ-んァ-ン一-龠]")

HIRAGANA_ROMAJI: Dict[str, str] = {
    "あ": "a", "い": "i", "う": "u", "え": "e", "お": "o",
    "か": "ka", "き": "ki", "く": "ku", "け": "ke", "こ": "ko",
    "さ": "sa", "し": "shi", "す": "su", "せ": "se", "そ": "so",
    "た": "ta", "ち": "chi", "つ": "tsu", "て": "te", "と": "to",
    "な": "na", "に": "ni", "ぬ": "nu", "ね": "ne", "の": "no",
    "は": "ha", "ひ": "hi", "ふ": "fu", "へ": "he", "ほ": "ho",
    "ま": "ma", "み": "mi", "む": "mu", "め": "me", "も": "mo",
    "や": "ya", "ゆ": "yu", "よ": "yo",
    "ら": "ra", "り": "ri", "る": "ru", "れ": "re", "ろ": "ro",
    "わ": "wa", "を": "wo", "ん": "n",
    # voiced / semi-voiced
    "が": "ga", "ぎ": "gi", "ぐ": "gu", "げ": "ge", "ご": "go",
    "ざ": "za", "じ": "ji", "ず": "zu", "ぜ": "ze", "ぞ": "zo",
    "だ": "da", "ぢ": "ji", "づ": "zu", "で": "de", "ど": "do",
    "ば": "ba", "び": "bi", "ぶ": "bu", "べ": "be", "ぼ": "bo",
    "ぱ": "pa", "ぴ": "pi", "ぷ": "pu", "ぺ": "pe", "ぽ": "po",
}

# Katakana sits 0x60 code points above hiragana.
KANA_ROMAJI: Dict[str, str] = {
    **HIRAGANA_ROMAJI,
    **{chr(ord(kana) + 0x60): romaji for kana, romaji in HIRAGANA_ROMAJI.items()},
    "ー": "-",
}


def to_half_width(text: str) -> str:
    """Map full-width ascii letters and digits to their half-width forms."""
    return _FULL_WIDTH_ALNUM.sub(lambda m: chr(ord(m.group(0)) - FULL_WIDTH_OFFSET), text)


def romanize_kana(text: str) -> str:
    """Replace each mapped kana with its romaji; other characters pass through."""
    return "".join(KANA_ROMAJI.get(ch, ch) for ch in text)


def normalize_keystroke(fragment: str) -> str:
    """Fold one raw input fragment to lowercase half-width ascii."""
    if not fragment:
        return ""
    return romanize_kana(to_half_width(fragment)).lower()


def is_composition_active(fragment: str) -> bool:
    """True when ``fragment`` still contains kana or kanji from the input method."""
    return bool(fragment) and _COMPOSITION_CHARS.search(fragment) is not None
