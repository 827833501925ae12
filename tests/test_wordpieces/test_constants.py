"""Tests for package-wide constants."""

from __future__ import annotations

import wordpieces
from wordpieces.constants import (
    BACKEND_FST,
    BACKEND_SORTED,
    BACKENDS,
    CONTINUATION_MARKER,
    DEFAULT_BACKEND,
)


class TestConstants:
    def test_marker(self) -> None:
        assert CONTINUATION_MARKER == "##"

    def test_default_backend_is_known(self) -> None:
        assert DEFAULT_BACKEND in BACKENDS
        assert set(BACKENDS) == {BACKEND_FST, BACKEND_SORTED}

    def test_backend_names_match_matchers(self) -> None:
        assert wordpieces.FstMatcher.backend == BACKEND_FST
        assert wordpieces.SortedStringsMatcher.backend == BACKEND_SORTED


class TestPublicApi:
    def test_all_exports_resolve(self) -> None:
        for name in wordpieces.__all__:
            assert hasattr(wordpieces, name), name

    def test_version(self) -> None:
        assert isinstance(wordpieces.__version__, str)
