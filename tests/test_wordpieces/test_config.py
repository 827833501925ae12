"""Tests for SplitterConfig validation and YAML persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from wordpieces.config import SplitterConfig
from wordpieces.constants import (
    BACKENDS,
    CONTINUATION_MARKER,
    DEFAULT_BACKEND,
    DEFAULT_UNK_TOKEN,
)


class TestSplitterConfig:
    def test_defaults(self) -> None:
        config = SplitterConfig()
        assert config.backend == DEFAULT_BACKEND == "fst"
        assert config.continuation_marker == CONTINUATION_MARKER == "##"
        assert config.unk_token == DEFAULT_UNK_TOKEN
        assert config.show_progress is False

    def test_all_backends_accepted(self) -> None:
        for backend in BACKENDS:
            assert SplitterConfig(backend=backend).backend == backend

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="backend must be one of"):
            SplitterConfig(backend="trie")

    def test_empty_marker(self) -> None:
        with pytest.raises(ValueError, match="continuation_marker"):
            SplitterConfig(continuation_marker="")

    def test_empty_unk_token(self) -> None:
        with pytest.raises(ValueError, match="unk_token"):
            SplitterConfig(unk_token="")

    def test_max_input_chars(self) -> None:
        with pytest.raises(ValueError, match="max_input_chars_per_word"):
            SplitterConfig(max_input_chars_per_word=0)


class TestYaml:
    def test_roundtrip(self, tmp_path: Path) -> None:
        config = SplitterConfig(backend="sorted", continuation_marker="@@", unk_token="<unk>")
        path = tmp_path / "config.yaml"
        config.to_yaml(path)
        assert SplitterConfig.from_yaml(path) == config

    def test_partial_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("backend: sorted\n", encoding="utf-8")
        config = SplitterConfig.from_yaml(path)
        assert config.backend == "sorted"
        assert config.continuation_marker == "##"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert SplitterConfig.from_yaml(path) == SplitterConfig()

    def test_invalid_value_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("backend: trie\n", encoding="utf-8")
        with pytest.raises(ValueError, match="backend must be one of"):
            SplitterConfig.from_yaml(path)

    def test_unknown_key_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("backend: sorted\nmarker: '@@'\nlowercase: true\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Unknown config keys .*: lowercase, marker"):
            SplitterConfig.from_yaml(path)
