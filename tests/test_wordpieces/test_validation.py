"""Tests for vocabulary validation checks."""

from __future__ import annotations

import inspect

from wordpieces.constants import CONTINUATION_MARKER
from wordpieces.matcher import build_matcher
from wordpieces.pieces import WordPieces
from wordpieces.validation import (
    ValidationReport,
    check_backend_agreement,
    check_roundtrip,
    count_fully_split,
    find_index_gaps,
    validate_word_pieces,
)
from wordpieces.vocab import VocabularyBuilder

LINES = ["voor", "##tie", "coördina", "##kom", "##en"]


class TestChecks:
    def test_roundtrip_ok(self) -> None:
        word_pieces = VocabularyBuilder.from_line_source(LINES)
        ok, failures = check_roundtrip(word_pieces, LINES)
        assert ok
        assert failures == []

    def test_roundtrip_detects_duplicates(self) -> None:
        lines = ["a", "b", "a"]
        word_pieces = VocabularyBuilder.from_line_source(lines)
        ok, failures = check_roundtrip(word_pieces, lines)
        assert not ok
        assert any("MISMATCH at 0" in f for f in failures)

    def test_index_gaps(self) -> None:
        word_pieces = WordPieces(
            build_matcher({"a": 0, "d": 4}),
            build_matcher({"b": 2}),
        )
        assert find_index_gaps(word_pieces) == [1, 3]

    def test_no_gaps(self) -> None:
        word_pieces = VocabularyBuilder.from_line_source(LINES)
        assert find_index_gaps(word_pieces) == []

    def test_backends_agree(self) -> None:
        ok, failures = check_backend_agreement(
            LINES, ["voorkomen", "coördinatie", "voorman", "x"]
        )
        assert ok, failures

    def test_default_marker_is_package_marker(self) -> None:
        marker = inspect.signature(check_backend_agreement).parameters["marker"]
        assert marker.default == CONTINUATION_MARKER

    def test_backends_agree_custom_marker(self) -> None:
        ok, failures = check_backend_agreement(
            ["voor", "@@kom", "@@en"], ["voorkomen"], marker="@@"
        )
        assert ok, failures

    def test_count_fully_split(self) -> None:
        word_pieces = VocabularyBuilder.from_line_source(LINES)
        checked, fully = count_fully_split(
            word_pieces, ["voorkomen", "voorman", "", "unknown", "voor"]
        )
        assert checked == 4
        assert fully == 2


class TestValidateWordPieces:
    def test_full_report(self) -> None:
        word_pieces = VocabularyBuilder.from_line_source(LINES)
        report = validate_word_pieces(
            word_pieces, LINES, sample_words=["voorkomen", "voorman"]
        )
        assert report.ok
        assert report.backend == "fst"
        assert report.num_pieces == 5
        assert report.num_initial == 2
        assert report.num_continuation == 3
        assert report.words_checked == 2
        assert report.words_fully_split == 1
        assert report.coverage == 0.5

    def test_summary_is_string(self) -> None:
        word_pieces = VocabularyBuilder.from_line_source(LINES)
        s = validate_word_pieces(word_pieces, LINES, sample_words=["voorman"]).summary()
        assert isinstance(s, str)
        assert "Roundtrip fidelity: True" in s
        assert "Coverage: 0/1" in s

    def test_coverage_without_words(self) -> None:
        assert ValidationReport().coverage == 0.0
