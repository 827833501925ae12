"""SplitterConfig dataclass with YAML persistence."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from .constants import (
    BACKENDS,
    CONTINUATION_MARKER,
    DEFAULT_BACKEND,
    DEFAULT_UNK_TOKEN,
    MAX_INPUT_CHARS_PER_WORD,
)


@dataclass
class SplitterConfig:
    """Configuration for loading a vocabulary and splitting words.

    Validates fields in ``__post_init__`` so that misconfigurations
    are caught before a large vocabulary is read.
    """

    # ── Index ──────────────────────────────────────────────────────
    backend: str = DEFAULT_BACKEND
    continuation_marker: str = CONTINUATION_MARKER

    # ── Vocabulary file ────────────────────────────────────────────
    encoding: str = "utf-8"
    show_progress: bool = False

    # ── Hugging Face export ────────────────────────────────────────
    unk_token: str = DEFAULT_UNK_TOKEN
    max_input_chars_per_word: int = MAX_INPUT_CHARS_PER_WORD

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(
                f"backend must be one of {', '.join(BACKENDS)}, "
                f"got {self.backend!r}"
            )
        if not self.continuation_marker:
            raise ValueError("continuation_marker must be a non-empty string")
        if not self.unk_token:
            raise ValueError("unk_token must be a non-empty string")
        if self.max_input_chars_per_word < 1:
            raise ValueError(
                f"max_input_chars_per_word must be positive, "
                f"got {self.max_input_chars_per_word}"
            )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SplitterConfig":
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        unknown = sorted(set(data) - {fld.name for fld in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, allow_unicode=True)
