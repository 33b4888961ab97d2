from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

# Elapsed-time floor so speed never divides by zero.
MIN_ELAPSED_MINUTES = 1e-4


@dataclass(frozen=True)
class StatSample:
    timestamp: float
    wpm: float


@dataclass(frozen=True)
class StatsSummary:
    """Final numbers for a finished session."""

    wpm: float
    accuracy: float
    correct_keystrokes: int
    incorrect_keystrokes: int
    elapsed_seconds: float
    samples: Tuple[StatSample, ...] = field(default_factory=tuple)


def words_per_minute(correct: int, elapsed_seconds: float) -> float:
    """Standard WPM: five keystrokes per word."""
    minutes = max(elapsed_seconds / 60.0, MIN_ELAPSED_MINUTES)
    return (correct / 5.0) / minutes


def accuracy_percent(correct: int, incorrect: int) -> float:
    total = correct + incorrect
    if total == 0:
        return 100.0
    return (correct / total) * 100.0


class StatsRecorder:
    """Running keystroke counters and the per-word speed history."""

    def __init__(self, now: Callable[[], float] = time.time) -> None:
        self._now = now
        self.reset()

    def reset(self) -> None:
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None
        self._correct = 0
        self._incorrect = 0
        self._samples: List[StatSample] = []

    @property
    def start_time(self) -> Optional[float]:
        return self._start_time

    @property
    def end_time(self) -> Optional[float]:
        return self._end_time

    @property
    def correct(self) -> int:
        return self._correct

    @property
    def incorrect(self) -> int:
        return self._incorrect

    @property
    def samples(self) -> Tuple[StatSample, ...]:
        return tuple(self._samples)

    def start(self) -> None:
        if self._start_time is None:
            self._start_time = self._now()

    def record_correct(self, keystrokes: int) -> None:
        self._correct += keystrokes

    def record_incorrect(self) -> None:
        self._incorrect += 1

    def record_completion(self) -> Optional[StatSample]:
        if self._start_time is None:
            return None
        now = self._now()
        sample = StatSample(timestamp=now, wpm=words_per_minute(self._correct, now - self._start_time))
        self._samples.append(sample)
        return sample

    def finish(self) -> None:
        if self._end_time is None:
            self._end_time = self._now()

    def elapsed_seconds(self) -> float:
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else self._now()
        return max(0.0, end - self._start_time)

    def summary(self) -> StatsSummary:
        elapsed = self.elapsed_seconds()
        return StatsSummary(
            wpm=words_per_minute(self._correct, elapsed),
            accuracy=accuracy_percent(self._correct, self._incorrect),
            correct_keystrokes=self._correct,
            incorrect_keystrokes=self._incorrect,
            elapsed_seconds=elapsed,
            samples=self.samples,
        )
