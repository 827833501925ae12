"""Tests for the minimal byte transducer."""

from __future__ import annotations

import pytest

from wordpieces.fst import FstMatcher, _FstBuilder


class TestMinimisation:
    def test_shared_suffix_states(self) -> None:
        fst = FstMatcher.build({"ation": 5, "otion": 7})
        # root, then one shared chain for "tion" (5 states incl. final)
        assert fst.num_states == 6
        assert fst.get("ation") == 5
        assert fst.get("otion") == 7

    def test_trie_without_shared_suffixes(self) -> None:
        fst = FstMatcher.build({"ab": 0, "cd": 1})
        # Both keys end in different bytes: root, two middle states, one
        # shared final state.
        assert fst.num_states == 4
        assert fst.num_transitions == 4

    def test_single_key(self) -> None:
        fst = FstMatcher.build({"abc": 3})
        assert fst.num_states == 4
        assert fst.longest_prefix(b"abcd") == (3, 3)

    def test_empty(self) -> None:
        fst = FstMatcher.build({})
        assert len(fst) == 0
        assert fst.num_states == 1
        assert fst.longest_prefix(b"abc") == (0, 0)
        assert list(fst.items()) == []


class TestOutputs:
    def test_prefix_key_with_larger_output(self) -> None:
        fst = FstMatcher.build({"a": 5, "ab": 3, "abc": 9})
        assert fst.get("a") == 5
        assert fst.get("ab") == 3
        assert fst.get("abc") == 9
        assert fst.longest_prefix(b"ab") == (2, 3)
        assert fst.longest_prefix(b"abx") == (2, 3)

    def test_shared_prefix_outputs(self) -> None:
        pieces = {"foo": 0, "fo": 2, "for": 4, "fort": 1, "fox": 8}
        fst = FstMatcher.build(pieces)
        assert dict(fst.items()) == pieces

    def test_empty_key(self) -> None:
        fst = FstMatcher.build({"": 4, "a": 1})
        assert fst.get("") == 4
        assert fst.get("a") == 1
        # An empty match is no match.
        assert fst.longest_prefix(b"b") == (0, 0)

    def test_large_indices(self) -> None:
        pieces = {f"piece{i}": 1_000_000 - i for i in range(100)}
        fst = FstMatcher.build(pieces)
        assert dict(fst.items()) == pieces


class TestBuilder:
    def test_rejects_unsorted_keys(self) -> None:
        builder = _FstBuilder()
        builder.add(b"b", 0)
        with pytest.raises(ValueError, match="increasing order"):
            builder.add(b"a", 1)

    def test_rejects_duplicate_keys(self) -> None:
        builder = _FstBuilder()
        builder.add(b"a", 0)
        with pytest.raises(ValueError, match="increasing order"):
            builder.add(b"a", 1)

    def test_repr(self) -> None:
        assert repr(FstMatcher.build({"a": 0})) == "FstMatcher(pieces=1, states=2)"
