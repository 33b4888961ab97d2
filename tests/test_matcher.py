"""Tests for oiltype.core.matcher – incremental prefix matching."""

from __future__ import annotations

from oiltype.core.matcher import MatchEngine, MatchOutcome, MatchResult


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------

class TestInitialState:
    def test_target_is_canonical(self):
        engine = MatchEngine("sushi")
        assert engine.target == "sushi"
        assert engine.typed_prefix == ""
        assert engine.remaining == "sushi"

    def test_canonicalizes_input(self):
        engine = MatchEngine(" Su Shi ")
        assert engine.canonical == "sushi"

    def test_variations_include_canonical(self):
        assert "sushi" in MatchEngine("sushi").variations


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------

class TestResolve:
    def test_empty_fragment(self):
        engine = MatchEngine("sushi")
        assert engine.resolve("") == MatchResult(MatchOutcome.EMPTY)
        assert engine.typed_prefix == ""

    def test_correct_prefix(self):
        engine = MatchEngine("sushi")
        result = engine.resolve("su")
        assert result == MatchResult(MatchOutcome.CORRECT, 2)
        assert engine.typed_prefix == "su"
        assert engine.remaining == "shi"

    def test_incorrect_leaves_prefix(self):
        engine = MatchEngine("sushi")
        engine.resolve("su")
        assert engine.resolve("x").outcome is MatchOutcome.INCORRECT
        assert engine.typed_prefix == "su"

    def test_complete(self):
        engine = MatchEngine("sushi")
        engine.resolve("sush")
        result = engine.resolve("i")
        assert result == MatchResult(MatchOutcome.COMPLETE, 1)
        assert engine.typed_prefix == ""

    def test_switches_to_variation(self):
        engine = MatchEngine("sushi")
        engine.resolve("sus")
        engine.resolve("i")
        assert engine.target == "susi"

    def test_variation_completes(self):
        engine = MatchEngine("sushi")
        assert engine.resolve("sus").outcome is MatchOutcome.CORRECT
        assert engine.resolve("i").outcome is MatchOutcome.COMPLETE

    def test_remaining_follows_variation(self):
        engine = MatchEngine("chikatetsu")
        engine.resolve("t")
        assert engine.target.startswith("ti")
        assert engine.remaining == engine.target[1:]

    def test_canonical_preferred_on_tie(self):
        engine = MatchEngine("konnichiwa")
        engine.resolve("kon")
        assert engine.target == "konnichiwa"

    def test_unmatchable_empty_word(self):
        engine = MatchEngine("")
        assert engine.resolve("a").outcome is MatchOutcome.INCORRECT
        assert engine.resolve("b").outcome is MatchOutcome.INCORRECT
        assert engine.typed_prefix == ""

    def test_trailing_n_completes_before_doubled_spelling(self):
        engine = MatchEngine("hon")
        assert "honn" in engine.variations
        assert engine.resolve("ho").outcome is MatchOutcome.CORRECT
        assert engine.resolve("n") == MatchResult(MatchOutcome.COMPLETE, 1)
        assert engine.typed_prefix == ""
        assert engine.resolve("n").outcome is MatchOutcome.INCORRECT
