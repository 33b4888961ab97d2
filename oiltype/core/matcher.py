"""Incremental prefix matching against a word's accepted spellings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from oiltype.core.romaji import VariationSet, canonicalize_romaji, expand_romaji


class MatchOutcome(str, Enum):
    EMPTY = "empty"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    COMPLETE = "complete"


@dataclass(frozen=True)
class MatchResult:
    outcome: MatchOutcome
    consumed: int = 0


class MatchEngine:
    """Tracks the typed prefix of one target word.

    The active ``target`` starts as the canonical spelling and switches to
    whichever variation the typed prefix commits to.  ``typed_prefix`` is
    always a strict prefix of ``target``.
    """

    def __init__(self, romaji: str) -> None:
        self._canonical = canonicalize_romaji(romaji)
        self._variations = expand_romaji(self._canonical)
        self._target = self._canonical
        self._typed_prefix = ""

    @property
    def canonical(self) -> str:
        return self._canonical

    @property
    def variations(self) -> VariationSet:
        return self._variations

    @property
    def target(self) -> str:
        """The variation currently being typed."""
        return self._target

    @property
    def typed_prefix(self) -> str:
        return self._typed_prefix

    @property
    def remaining(self) -> str:
        """Untyped suffix of the active target, for display."""
        return self._target[len(self._typed_prefix):]

    def _find(self, candidate: str) -> Optional[str]:
        if self._canonical.startswith(candidate):
            return self._canonical
        if self._target.startswith(candidate):
            return self._target
        for variation in self._variations:
            if variation.startswith(candidate):
                return variation
        return None

    def resolve(self, normalized: str) -> MatchResult:
        """Apply one normalized fragment to the typed prefix.

        Completion is eager: the word completes as soon as the typed text
        equals any accepted spelling.  A spelling that extends another one,
        such as ``honn`` after ``hon``, can therefore never be typed through;
        the extra keys land on the next word.
        """
        if not normalized:
            return MatchResult(MatchOutcome.EMPTY)

        candidate = self._typed_prefix + normalized
        matched = self._find(candidate)
        if matched is None:
            return MatchResult(MatchOutcome.INCORRECT)

        self._target = matched
        if candidate == matched:
            self._typed_prefix = ""
            return MatchResult(MatchOutcome.COMPLETE, len(normalized))
        self._typed_prefix = candidate
        return MatchResult(MatchOutcome.CORRECT, len(normalized))
