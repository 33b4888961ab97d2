"""Romaji variation expansion.

Hepburn romanization is not the only way people key Japanese: ``shi`` is
commonly typed ``si``, ``chi`` as ``ti``, the moraic nasal may be doubled, and
so on.  :func:`expand_romaji` turns one canonical spelling into every spelling
the trainer accepts as fully correct.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Upper bound on the number of spellings kept for any suffix of a word.
MAX_VARIATIONS = 4096

# Only this many leading characters are expanded; the rest of a longer word is
# accepted exactly as written.
MAX_EXPANDED_LENGTH = 64

# (source, alternate) pairs.  Every rule whose source matches at a position
# contributes both spellings.
SUBSTITUTIONS: Tuple[Tuple[str, str], ...] = (
    ("shi", "si"),
    ("chi", "ti"),
    ("tsu", "tu"),
    ("fu", "hu"),
    ("sha", "sya"),
    ("shu", "syu"),
    ("sho", "syo"),
    ("cha", "tya"),
    ("chu", "tyu"),
    ("cho", "tyo"),
    ("ja", "zya"),
    ("ju", "zyu"),
    ("jo", "zyo"),
    ("ji", "zi"),
    ("ka", "ca"),
    ("n", "nn"),
)

_LONGEST_SOURCE = max(len(source) for source, _ in SUBSTITUTIONS)

_WHITESPACE = re.compile(r"\s+")

VariationSet = Tuple[str, ...]


def canonicalize_romaji(text: str) -> str:
    """Lowercase ``text`` and strip all whitespace."""
    return _WHITESPACE.sub("", text or "").lower()


def _add(bucket: Dict[str, None], spelling: str) -> bool:
    """Insert into an ordered set; return False once the bucket is full."""
    if len(bucket) >= MAX_VARIATIONS:
        return False
    bucket.setdefault(spelling, None)
    return True


def _expand(text: str) -> Tuple[VariationSet, bool]:
    # Only the head of an overlong word is expanded; the tail is kept verbatim.
    head, tail = text[:MAX_EXPANDED_LENGTH], text[MAX_EXPANDED_LENGTH:]
    n = len(head)
    # suffixes[i] holds the expansions of head[i:], built right to left.  Only
    # the buckets a rule can still reach are kept alive.
    suffixes: Dict[int, Dict[str, None]] = {n: {"": None}}
    truncated = any(source in tail for source, _ in SUBSTITUTIONS)

    for i in range(n - 1, -1, -1):
        bucket: Dict[str, None] = {}
        matched = False
        for source, alternate in SUBSTITUTIONS:
            if not head.startswith(source, i):
                continue
            matched = True
            for rest in suffixes[i + len(source)]:
                if not (_add(bucket, source + rest) and _add(bucket, alternate + rest)):
                    truncated = True
                    break
        if not matched:
            char = head[i]
            for rest in suffixes[i + 1]:
                if not _add(bucket, char + rest):
                    truncated = True
                    break
        suffixes[i] = bucket
        suffixes.pop(i + _LONGEST_SOURCE, None)

    return tuple(spelling + tail for spelling in suffixes[0]), truncated


@lru_cache(maxsize=1024)
def expand_romaji(text: str) -> VariationSet:
    """Return every accepted spelling of ``text``, canonical spelling first.

    The result is deduplicated and capped at :data:`MAX_VARIATIONS`, and only
    the first :data:`MAX_EXPANDED_LENGTH` characters are varied.  An
    overflowing word is truncated with a warning instead of raising.
    """
    canonical = canonicalize_romaji(text)
    if not canonical:
        return ("",)
    variations, truncated = _expand(canonical)
    if truncated:
        logger.warning(
            "Variation set for %r truncated at %d spellings", canonical, MAX_VARIATIONS
        )
    return variations
