"""Tests for oiltype.core.words – word records, sanitizing and YAML loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from oiltype.core.words import (
    DEFAULT_WORDS,
    WordListRepository,
    WordRecord,
    build_custom_words,
    clean_display,
    clean_romaji,
    make_word,
)


@pytest.fixture()
def words_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data" / "words"
    d.mkdir(parents=True)
    return d


def _write(d: Path, name: str, body: str) -> None:
    (d / name).write_text(textwrap.dedent(body), encoding="utf-8")


# ---------------------------------------------------------------------------
# WordRecord / helpers
# ---------------------------------------------------------------------------

class TestWordRecord:
    def test_frozen(self):
        w = WordRecord(id="1", display="油", romaji="abura")
        with pytest.raises(AttributeError):
            w.romaji = "x"  # type: ignore[misc]

    def test_defaults_present(self):
        assert [w.romaji for w in DEFAULT_WORDS] == ["konnichiwa", "arigatou", "abura"]


class TestSanitizers:
    def test_clean_romaji(self):
        assert clean_romaji(" Kon-Nichi wa! ") == "konnichiwa"

    def test_clean_romaji_none(self):
        assert clean_romaji(None) == ""

    def test_clean_display(self):
        assert clean_display("「寿司」 (sushi)、。") == "「寿司」"

    def test_make_word_generates_id(self):
        a = make_word("油", "ABURA")
        b = make_word("油", "abura")
        assert a.romaji == "abura"
        assert a.id != b.id

    def test_make_word_keeps_given_id(self):
        assert make_word(" 油 ", "abura", word_id="x").id == "x"
        assert make_word(" 油 ", "abura").display == "油"


class TestBuildCustomWords:
    def test_cleans_rows(self):
        words = build_custom_words([(" 寿司 (sushi)", "Su Shi"), ("油", "abura")])
        assert [(w.display, w.romaji) for w in words] == [("寿司", "sushi"), ("油", "abura")]

    def test_blank_rows_dropped(self):
        words = build_custom_words([("", ""), ("  ", "x"), ("油", "abura")])
        assert [w.romaji for w in words] == ["abura"]

    def test_ids_unique(self):
        words = build_custom_words([("油", "abura"), ("油", "abura")])
        assert words[0].id != words[1].id

    def test_missing_romaji(self):
        with pytest.raises(ValueError, match="ローマ字"):
            build_custom_words([("油", "abura"), ("寿司", " 1 ")])

    def test_nothing_left(self):
        with pytest.raises(ValueError, match="少なくとも"):
            build_custom_words([("", "abura")])


# ---------------------------------------------------------------------------
# WordListRepository
# ---------------------------------------------------------------------------

class TestRepository:
    def test_bundled_lists_load(self):
        repo = WordListRepository()
        keys = {wl.key for wl in repo.all()}
        assert {"basic", "food"} <= keys
        assert all(w.romaji for wl in repo.all() for w in wl.words)

    def test_mapping_entries(self, words_dir: Path):
        _write(
            words_dir,
            "greetings.yaml",
            """\
            title: Greetings
            words:
              - {display: こんにちは, romaji: Konnichiwa}
            """,
        )
        repo = WordListRepository(words_dir)
        wl = repo.get("greetings")
        assert wl.title == "Greetings"
        assert wl.words == [WordRecord(id="greetings-0", display="こんにちは", romaji="konnichiwa")]

    def test_pipe_entries(self, words_dir: Path):
        _write(words_dir, "food.yaml", "title: Food\nwords:\n  - 油|abura\n  - 寿司|su shi\n")
        words = WordListRepository(words_dir).get("food").words
        assert [w.romaji for w in words] == ["abura", "sushi"]

    def test_sorted_by_name(self, words_dir: Path):
        _write(words_dir, "b.yaml", "title: B\nwords: ['油|abura']\n")
        _write(words_dir, "a.yaml", "title: A\nwords: ['油|abura']\n")
        assert [wl.key for wl in WordListRepository(words_dir).all()] == ["a", "b"]

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            WordListRepository(tmp_path / "nope")

    def test_empty_directory(self, words_dir: Path):
        with pytest.raises(ValueError, match="No word list"):
            WordListRepository(words_dir)

    def test_missing_title(self, words_dir: Path):
        _write(words_dir, "x.yaml", "words: ['油|abura']\n")
        with pytest.raises(ValueError, match="x.yaml: missing or invalid 'title'"):
            WordListRepository(words_dir)

    def test_empty_words(self, words_dir: Path):
        _write(words_dir, "x.yaml", "title: X\nwords: []\n")
        with pytest.raises(ValueError, match="non-empty list"):
            WordListRepository(words_dir)

    def test_bad_entry(self, words_dir: Path):
        _write(words_dir, "x.yaml", "title: X\nwords: [42]\n")
        with pytest.raises(ValueError, match="word #0"):
            WordListRepository(words_dir)

    def test_entry_without_romaji(self, words_dir: Path):
        _write(words_dir, "x.yaml", "title: X\nwords:\n  - {display: 油, romaji: '!!'}\n")
        with pytest.raises(ValueError, match="romaji"):
            WordListRepository(words_dir)

    def test_not_a_mapping(self, words_dir: Path):
        _write(words_dir, "x.yaml", "- just\n- a list\n")
        with pytest.raises(ValueError, match="expected YAML"):
            WordListRepository(words_dir)

    def test_get_unknown_raises(self, words_dir: Path):
        _write(words_dir, "a.yaml", "title: A\nwords: ['油|abura']\n")
        with pytest.raises(KeyError):
            WordListRepository(words_dir).get("zzz")
