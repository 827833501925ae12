"""Build word piece indices from a vocabulary listing.

A vocabulary is a sequence of lines, one piece per line.  The 0-based
line number is the piece's index.  Lines that start with the
continuation marker (``##``) are continuation pieces and are stored
without the marker; every other line is a word-initial piece.  Lines are
used verbatim: nothing is trimmed and blank lines are pieces too.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from tqdm import tqdm

from .config import SplitterConfig
from .constants import BACKENDS, CONTINUATION_MARKER, DEFAULT_BACKEND
from .errors import EncodingError
from .matcher import build_matcher
from .pieces import WordPieces

logger = logging.getLogger(__name__)


class VocabularyBuilder:
    """Accumulates pieces and builds a :class:`WordPieces` instance.

    Pieces may be inserted in any order; the indices are sorted while
    building.  Inserting a piece that is already present in the same
    class replaces its index.
    """

    def __init__(
        self,
        marker: str = CONTINUATION_MARKER,
        backend: str = DEFAULT_BACKEND,
    ) -> None:
        if not marker:
            raise ValueError("Continuation marker must be a non-empty string")
        if backend not in BACKENDS:
            raise ValueError(
                f"Unknown matcher backend {backend!r}.  "
                f"Expected one of: {', '.join(BACKENDS)}"
            )
        self.marker = marker
        self.backend = backend
        self._word_initial: dict[str, int] = {}
        self._continuation: dict[str, int] = {}
        self._failed = False

    @classmethod
    def from_config(cls, config: SplitterConfig) -> "VocabularyBuilder":
        return cls(marker=config.continuation_marker, backend=config.backend)

    def __len__(self) -> int:
        return len(self._word_initial) + len(self._continuation)

    def insert(self, piece: str, idx: int) -> None:
        """Add *piece* with vocabulary index *idx*."""
        self._check_usable()
        if idx < 0:
            raise ValueError(f"Piece index must be non-negative, got {idx}")
        if piece.startswith(self.marker):
            self._continuation[piece[len(self.marker):]] = idx
        else:
            self._word_initial[piece] = idx

    def build(self) -> WordPieces:
        """Construct the word-initial and continuation indices.

        Raises
        ------
        EncodingError
            If a piece is not valid UTF-8 text.  The builder cannot be
            used afterwards.
        """
        self._check_usable()
        try:
            word_initial = build_matcher(self._word_initial, self.backend)
            continuation = build_matcher(self._continuation, self.backend)
        except EncodingError:
            self._failed = True
            raise
        logger.info(
            "Built %s word pieces: %d initial, %d continuation",
            self.backend,
            len(word_initial),
            len(continuation),
        )
        return WordPieces(word_initial, continuation, marker=self.marker)

    @classmethod
    def from_line_source(
        cls,
        lines: Iterable[str],
        *,
        marker: str = CONTINUATION_MARKER,
        backend: str = DEFAULT_BACKEND,
    ) -> WordPieces:
        """Build word pieces from vocabulary *lines*, indexed by position.

        Errors raised while iterating *lines* (e.g. ``OSError`` from a
        file) propagate unchanged.
        """
        builder = cls(marker=marker, backend=backend)
        for idx, line in enumerate(lines):
            builder.insert(line, idx)
        return builder.build()

    def _check_usable(self) -> None:
        if self._failed:
            raise RuntimeError(
                "This builder failed to build an index and must be discarded.  "
                "Create a new VocabularyBuilder."
            )


def read_vocab_lines(path: str | Path, encoding: str = "utf-8") -> Iterator[str]:
    """Yield the lines of a vocabulary file without their line terminator.

    Only ``\\n`` (optionally preceded by ``\\r``) ends a line; other
    whitespace is kept.  A final line terminator does not produce an
    extra empty line.
    """
    with open(path, encoding=encoding, newline="\n") as f:
        for line in f:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def load_word_pieces(
    path: str | Path,
    config: SplitterConfig | None = None,
) -> WordPieces:
    """Read a vocabulary file and build word pieces from it.

    Parameters
    ----------
    path
        Vocabulary file, one piece per line.
    config
        Backend, marker, encoding and progress settings.  Defaults to
        :class:`SplitterConfig` defaults.
    """
    config = config or SplitterConfig()
    lines: Iterable[str] = read_vocab_lines(path, encoding=config.encoding)
    if config.show_progress:
        lines = tqdm(lines, desc="Reading vocabulary", unit=" pieces")
    logger.info("Loading vocabulary from %s", path)
    return VocabularyBuilder.from_line_source(
        lines,
        marker=config.continuation_marker,
        backend=config.backend,
    )
