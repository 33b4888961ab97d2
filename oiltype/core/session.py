from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple, Union

from oiltype.core.clock import TICK_INTERVAL, TICK_STEP, CountdownClock, ManualScheduler, ScheduledTask, Scheduler
from oiltype.core.matcher import MatchEngine, MatchOutcome
from oiltype.core.modes import GameMode, ModeConfig, get_mode_config
from oiltype.core.normalizer import is_composition_active, normalize_keystroke
from oiltype.core.stats import StatSample, StatsRecorder, StatsSummary
from oiltype.core.words import WordRecord

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"


class KeystrokeOutcome(str, Enum):
    IGNORED = "ignored"
    EMPTY = "empty"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    COMPLETE = "complete"


class SessionEvent(str, Enum):
    STARTED = "started"
    MISMATCH = "mismatch"
    WORD_COMPLETED = "word_completed"
    TICK = "tick"
    FINISHED = "finished"
    RESET = "reset"


@dataclass(frozen=True)
class KeystrokeResult:
    """What a single submitted fragment did."""

    outcome: KeystrokeOutcome
    normalized: str
    composition_active: bool
    state: SessionState

    @property
    def mismatch(self) -> bool:
        return self.outcome is KeystrokeOutcome.INCORRECT


Listener = Callable[[SessionEvent, "TypingSession"], None]


class TypingSession:
    """One play session over an ordered word queue under a single mode.

    Input arrives through :meth:`submit`, one raw fragment at a time.  The
    countdown (for modes that have one) runs as a repeating task obtained
    from ``scheduler`` while the session is ``playing``; it is cancelled on
    every exit from that state, and ticks from an earlier run are dropped.

    An empty word list is accepted: the session stays ``idle`` and ignores
    input until words are supplied through :meth:`reset`.
    """

    def __init__(
        self,
        words: Sequence[WordRecord],
        mode: Union[GameMode, str] = GameMode.FREE,
        scheduler: Optional[Scheduler] = None,
        now: Callable[[], float] = time.time,
        word_source: Optional[Callable[[], Sequence[WordRecord]]] = None,
    ) -> None:
        self._word_source = word_source
        self._scheduler: Scheduler = scheduler or ManualScheduler()
        self._stats = StatsRecorder(now)
        self._listeners: List[Listener] = []
        self._task: Optional[ScheduledTask] = None
        self._generation = 0
        self._words: List[WordRecord] = list(words)
        self._mode_config: ModeConfig = get_mode_config(mode)
        self._initialize()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> GameMode:
        return self._mode_config.mode

    @property
    def mode_config(self) -> ModeConfig:
        return self._mode_config

    @property
    def words(self) -> Tuple[WordRecord, ...]:
        return tuple(self._words)

    @property
    def current_word_index(self) -> int:
        return self._index

    @property
    def current_word(self) -> Optional[WordRecord]:
        if not self._words:
            return None
        return self._words[self._index]

    @property
    def typed_prefix(self) -> str:
        return self._matcher.typed_prefix if self._matcher else ""

    @property
    def target_romaji(self) -> str:
        """The spelling currently being typed (canonical until a variation is chosen)."""
        return self._matcher.target if self._matcher else ""

    @property
    def remaining_romaji(self) -> str:
        return self._matcher.remaining if self._matcher else ""

    @property
    def time_left(self) -> Optional[float]:
        return self._clock.remaining if self._clock else None

    @property
    def total_words_completed(self) -> int:
        return self._total_completed

    @property
    def correct_keystrokes(self) -> int:
        return self._stats.correct

    @property
    def incorrect_keystrokes(self) -> int:
        return self._stats.incorrect

    @property
    def composition_active(self) -> bool:
        return self._composition_active

    @property
    def mismatch_count(self) -> int:
        """Number of rejected fragments; hosts watch it for shake feedback."""
        return self._mismatch_count

    @property
    def samples(self) -> Tuple[StatSample, ...]:
        return self._stats.samples

    @property
    def elapsed_seconds(self) -> float:
        return self._stats.elapsed_seconds()

    @property
    def clock_running(self) -> bool:
        return self._task is not None and self._task.active

    def summary(self) -> Optional[StatsSummary]:
        """Final stats, available once the session has finished."""
        if self._state is not SessionState.FINISHED:
            return None
        return self._stats.summary()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Host commands
    # ------------------------------------------------------------------

    def submit(self, fragment: str) -> KeystrokeResult:
        """Feed one raw input fragment to the session."""
        if not fragment:
            return self._result(KeystrokeOutcome.EMPTY, "")

        self._composition_active = is_composition_active(fragment)
        normalized = normalize_keystroke(fragment)
        if self._state is SessionState.FINISHED or self._matcher is None:
            return self._result(KeystrokeOutcome.IGNORED, normalized)
        if not normalized:
            return self._result(KeystrokeOutcome.EMPTY, normalized)

        if self._state is SessionState.IDLE:
            self._start()

        match = self._matcher.resolve(normalized)
        if match.outcome is MatchOutcome.INCORRECT:
            self._stats.record_incorrect()
            self._mismatch_count += 1
            self._emit(SessionEvent.MISMATCH)
            if self._mode_config.ends_on_mismatch:
                self._finish("mismatch")
            return self._result(KeystrokeOutcome.INCORRECT, normalized)

        self._stats.record_correct(match.consumed)
        if match.outcome is MatchOutcome.COMPLETE:
            self._complete_word()
            return self._result(KeystrokeOutcome.COMPLETE, normalized)
        return self._result(KeystrokeOutcome.CORRECT, normalized)

    def tick(self) -> None:
        """Advance the countdown by one step."""
        if self._state is not SessionState.PLAYING or self._clock is None:
            return
        expired = self._clock.tick(TICK_STEP)
        self._emit(SessionEvent.TICK)
        if expired:
            self._finish("time up")

    def exit(self) -> None:
        """Host-initiated end of play; the half-typed word is discarded."""
        if self._state is SessionState.FINISHED:
            return
        self._stop_clock()
        if self._matcher is not None:
            self._matcher = MatchEngine(self._words[self._index].romaji)
        self._finish("exit")

    def reset(self, words: Optional[Sequence[WordRecord]] = None) -> None:
        """Re-initialize counters, progress and history, optionally with new words."""
        if words is not None:
            self._words = list(words)
        self._initialize()

    def retry(self, words: Optional[Sequence[WordRecord]] = None) -> None:
        """Start over; modes that refresh on retry pull words from ``word_source``."""
        if words is None and self._mode_config.refreshes_words_on_retry and self._word_source is not None:
            words = self._word_source()
            logger.debug("Refreshed %d words for %s", len(words), self.mode.value)
        self.reset(words)

    def set_mode(self, mode: Union[GameMode, str]) -> None:
        self._stop_clock()
        self._mode_config = get_mode_config(mode)
        self._initialize()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _initialize(self) -> None:
        self._stop_clock()
        self._generation += 1
        self._stats.reset()
        self._state = SessionState.IDLE
        self._index = 0
        self._total_completed = 0
        self._mismatch_count = 0
        self._composition_active = False
        config = self._mode_config
        self._clock: Optional[CountdownClock] = (
            CountdownClock(config.clock_seconds, config.clock_cap) if config.has_clock else None
        )
        self._matcher: Optional[MatchEngine] = MatchEngine(self._words[0].romaji) if self._words else None
        logger.debug("Session initialized: mode=%s words=%d", config.mode.value, len(self._words))
        self._emit(SessionEvent.RESET)

    def _start(self) -> None:
        self._state = SessionState.PLAYING
        self._stats.start()
        if self._clock is not None:
            self._task = self._scheduler.call_every(TICK_INTERVAL, partial(self._on_tick, self._generation))
        logger.debug("Session started: mode=%s", self.mode.value)
        self._emit(SessionEvent.STARTED)

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.tick()

    def _complete_word(self) -> None:
        word = self._words[self._index]
        self._stats.record_completion()
        if self._clock is not None:
            self._clock.add(self._mode_config.completion_bonus(word))
        self._total_completed += 1
        self._emit(SessionEvent.WORD_COMPLETED)
        if self._mode_config.is_target_reached(self._total_completed):
            self._finish("target reached")
            return
        self._index = (self._index + 1) % len(self._words)
        self._matcher = MatchEngine(self._words[self._index].romaji)

    def _finish(self, reason: str) -> None:
        if self._state is SessionState.FINISHED:
            return
        self._stop_clock()
        self._stats.finish()
        self._state = SessionState.FINISHED
        summary = self._stats.summary()
        logger.info(
            "Session finished (%s): mode=%s words=%d wpm=%.1f accuracy=%.1f%%",
            reason,
            self.mode.value,
            self._total_completed,
            summary.wpm,
            summary.accuracy,
        )
        self._emit(SessionEvent.FINISHED)

    def _stop_clock(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    def _result(self, outcome: KeystrokeOutcome, normalized: str) -> KeystrokeResult:
        return KeystrokeResult(
            outcome=outcome,
            normalized=normalized,
            composition_active=self._composition_active,
            state=self._state,
        )
