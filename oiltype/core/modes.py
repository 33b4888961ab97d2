"""Game mode catalog.

Each mode is one :class:`ModeConfig` record in :data:`MODES`; the session
reads its clock, completion bonus and termination rules from the record
instead of branching on the mode name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

from oiltype.core.words import WordRecord

logger = logging.getLogger(__name__)

TIME_ATTACK_SECONDS = 60.0
SURVIVAL_START_SECONDS = 7.0
SURVIVAL_RECOVERY_PER_CHAR = 0.1
SURVIVAL_CAP_SECONDS = 999.0
FIXED_COUNT_TARGET = 30


class GameMode(str, Enum):
    FREE = "free"
    TIME_ATTACK = "time-attack"
    SURVIVAL = "survival"
    SUDDEN_DEATH = "sudden-death"
    FIXED_COUNT = "fixed-count"
    COMPETITIVE = "competitive"


# Names used by earlier releases and saved settings.
MODE_ALIASES: Dict[str, GameMode] = {
    "water": GameMode.FREE,
    "onion": GameMode.TIME_ATTACK,
    "carrot": GameMode.SURVIVAL,
    "grape": GameMode.SUDDEN_DEATH,
    "tomato": GameMode.FIXED_COUNT,
    "pro": GameMode.COMPETITIVE,
}


def _no_bonus(word: WordRecord) -> float:
    return 0.0


def _survival_recovery(word: WordRecord) -> float:
    # Canonical length, not the length of the variation actually typed.
    return len(word.romaji) * SURVIVAL_RECOVERY_PER_CHAR


@dataclass(frozen=True)
class ModeConfig:
    mode: GameMode
    clock_seconds: Optional[float] = None
    clock_cap: Optional[float] = None
    completion_bonus: Callable[[WordRecord], float] = _no_bonus
    ends_on_mismatch: bool = False
    target_words: Optional[int] = None
    refreshes_words_on_retry: bool = False

    @property
    def has_clock(self) -> bool:
        return self.clock_seconds is not None

    def is_target_reached(self, total_completed: int) -> bool:
        return self.target_words is not None and total_completed >= self.target_words


MODES: Dict[GameMode, ModeConfig] = {
    GameMode.FREE: ModeConfig(GameMode.FREE),
    GameMode.TIME_ATTACK: ModeConfig(GameMode.TIME_ATTACK, clock_seconds=TIME_ATTACK_SECONDS),
    GameMode.SURVIVAL: ModeConfig(
        GameMode.SURVIVAL,
        clock_seconds=SURVIVAL_START_SECONDS,
        clock_cap=SURVIVAL_CAP_SECONDS,
        completion_bonus=_survival_recovery,
    ),
    GameMode.SUDDEN_DEATH: ModeConfig(GameMode.SUDDEN_DEATH, ends_on_mismatch=True),
    GameMode.FIXED_COUNT: ModeConfig(GameMode.FIXED_COUNT, target_words=FIXED_COUNT_TARGET),
    GameMode.COMPETITIVE: ModeConfig(
        GameMode.COMPETITIVE,
        clock_seconds=TIME_ATTACK_SECONDS,
        refreshes_words_on_retry=True,
    ),
}


def parse_mode(value: Union[GameMode, str, None]) -> GameMode:
    """Resolve a mode value or legacy alias; anything unknown plays as free."""
    if isinstance(value, GameMode):
        return value
    key = str(value or "").strip().lower()
    try:
        return GameMode(key)
    except ValueError:
        pass
    if key in MODE_ALIASES:
        return MODE_ALIASES[key]
    logger.warning("Unknown game mode %r, falling back to %s", value, GameMode.FREE.value)
    return GameMode.FREE


def get_mode_config(value: Union[GameMode, str, None]) -> ModeConfig:
    return MODES[parse_mode(value)]
