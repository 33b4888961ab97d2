"""Tests for oiltype.core.stats – counters, samples and summary."""

from __future__ import annotations

import pytest

from oiltype.core.stats import (
    MIN_ELAPSED_MINUTES,
    StatsRecorder,
    accuracy_percent,
    words_per_minute,
)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def recorder(clock: FakeClock) -> StatsRecorder:
    return StatsRecorder(now=clock)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_wpm(self):
        assert words_per_minute(50, 30.0) == pytest.approx(20.0)

    def test_wpm_zero_elapsed_is_floored(self):
        assert words_per_minute(5, 0.0) == pytest.approx(1.0 / MIN_ELAPSED_MINUTES)

    def test_accuracy(self):
        assert accuracy_percent(50, 10) == pytest.approx(83.333, rel=1e-3)

    def test_accuracy_without_keystrokes(self):
        assert accuracy_percent(0, 0) == 100.0


# ---------------------------------------------------------------------------
# StatsRecorder
# ---------------------------------------------------------------------------

class TestStatsRecorder:
    def test_initial_counters(self, recorder: StatsRecorder):
        assert recorder.correct == 0
        assert recorder.incorrect == 0
        assert recorder.samples == ()

    def test_completion_before_start_records_nothing(self, recorder: StatsRecorder):
        assert recorder.record_completion() is None
        assert recorder.samples == ()

    def test_sample_uses_cumulative_correct(self, recorder: StatsRecorder, clock: FakeClock):
        recorder.start()
        recorder.record_correct(10)
        clock.value += 60.0
        sample = recorder.record_completion()
        assert sample is not None
        assert sample.wpm == pytest.approx(2.0)
        assert sample.timestamp == clock.value

    def test_samples_time_ordered(self, recorder: StatsRecorder, clock: FakeClock):
        recorder.start()
        for _ in range(3):
            clock.value += 1.0
            recorder.record_correct(5)
            recorder.record_completion()
        stamps = [s.timestamp for s in recorder.samples]
        assert stamps == sorted(stamps)

    def test_summary_values(self, recorder: StatsRecorder, clock: FakeClock):
        recorder.start()
        recorder.record_correct(50)
        for _ in range(10):
            recorder.record_incorrect()
        clock.value += 30.0
        recorder.finish()
        summary = recorder.summary()
        assert summary.accuracy == pytest.approx(83.3, abs=0.05)
        assert summary.wpm == pytest.approx(20.0)
        assert summary.correct_keystrokes == 50
        assert summary.incorrect_keystrokes == 10
        assert summary.elapsed_seconds == pytest.approx(30.0)

    def test_summary_frozen_after_finish(self, recorder: StatsRecorder, clock: FakeClock):
        recorder.start()
        clock.value += 10.0
        recorder.finish()
        clock.value += 100.0
        assert recorder.summary().elapsed_seconds == pytest.approx(10.0)

    def test_summary_without_start(self, recorder: StatsRecorder):
        summary = recorder.summary()
        assert summary.elapsed_seconds == 0.0
        assert summary.accuracy == 100.0

    def test_reset(self, recorder: StatsRecorder):
        recorder.start()
        recorder.record_correct(3)
        recorder.record_incorrect()
        recorder.record_completion()
        recorder.reset()
        assert recorder.correct == 0
        assert recorder.incorrect == 0
        assert recorder.samples == ()
        assert recorder.start_time is None
