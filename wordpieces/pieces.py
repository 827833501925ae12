"""Split words into word pieces.

A word is split greedily: the longest word-initial piece that is a prefix
of the word is taken first, then the longest continuation piece of the
remainder, and so on.  Chosen boundaries are never revisited, so a word
that could be covered by a different split may still end in
:data:`MISSING`.  Pieces found before the failure are kept::

    pieces = VocabularyBuilder.from_line_source(["voor", "##kom", "##en"])
    [p.piece for p in pieces.split("voorkomen")]  # ['voor', 'kom', 'en']
    [p.piece for p in pieces.split("voorman")]    # ['voor', None]
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .constants import CONTINUATION_MARKER
from .matcher import PrefixMatcher


@dataclass(frozen=True)
class WordPiece:
    """One result of a split.

    A found piece carries its text and vocabulary index.  The
    :data:`MISSING` result has both set to ``None``: no piece matches the
    (remaining part of the) word.
    """

    piece: str | None
    idx: int | None

    @classmethod
    def found(cls, piece: str, idx: int) -> "WordPiece":
        return cls(piece, idx)

    @property
    def is_missing(self) -> bool:
        return self.piece is None

    def __repr__(self) -> str:
        if self.piece is None:
            return "WordPiece.MISSING"
        return f"WordPiece.found({self.piece!r}, {self.idx})"


MISSING = WordPiece(None, None)


class WordPieceIter(Iterator[WordPiece]):
    """Iterator over the pieces of a single word.

    Holds the UTF-8 bytes of the word and an offset to the unconsumed
    remainder.  Once the remainder is empty, or a piece is missing,
    iteration ends.
    """

    __slots__ = ("_word_pieces", "_data", "_offset", "_initial")

    def __init__(self, word_pieces: "WordPieces", word: str) -> None:
        self._word_pieces = word_pieces
        self._data = memoryview(word.encode("utf-8"))
        self._offset = 0
        self._initial = True

    @property
    def remaining(self) -> str:
        """The part of the word not yet consumed."""
        return bytes(self._data[self._offset:]).decode("utf-8")

    def __iter__(self) -> "WordPieceIter":
        return self

    def __next__(self) -> WordPiece:
        if self._offset >= len(self._data):
            raise StopIteration

        if self._initial:
            self._initial = False
            matcher = self._word_pieces.word_initial
        else:
            matcher = self._word_pieces.continuation

        length, idx = matcher.longest_prefix(self._data[self._offset:])
        if length == 0:
            # Abandon the rest of the word.
            self._offset = len(self._data)
            return MISSING

        start = self._offset
        self._offset += length
        return WordPiece(bytes(self._data[start:self._offset]).decode("utf-8"), idx)


class WordPieces:
    """A set of word-initial and continuation pieces.

    Immutable once constructed; one instance can split any number of
    words, from any number of threads.

    Parameters
    ----------
    word_initial
        Index over pieces that may start a word.
    continuation
        Index over pieces that may only follow another piece.  The pieces
        are stored without their continuation marker.
    marker
        Marker re-attached to continuation pieces by
        :meth:`pieces_by_index`.
    """

    def __init__(
        self,
        word_initial: PrefixMatcher,
        continuation: PrefixMatcher,
        *,
        marker: str = CONTINUATION_MARKER,
    ) -> None:
        self._word_initial = word_initial
        self._continuation = continuation
        self._marker = marker

    # ── Indices ────────────────────────────────────────────────────

    @property
    def word_initial(self) -> PrefixMatcher:
        return self._word_initial

    @property
    def continuation(self) -> PrefixMatcher:
        return self._continuation

    @property
    def marker(self) -> str:
        return self._marker

    @property
    def backend(self) -> str:
        return self._word_initial.backend

    @property
    def num_initial(self) -> int:
        return len(self._word_initial)

    @property
    def num_continuation(self) -> int:
        return len(self._continuation)

    def __len__(self) -> int:
        return len(self._word_initial) + len(self._continuation)

    # ── Lookup ─────────────────────────────────────────────────────

    def get_initial(self, piece: str) -> int | None:
        """Look up the index of a word-initial piece."""
        return self._word_initial.get(piece)

    def get_continuation(self, piece: str) -> int | None:
        """Look up the index of a continuation piece (without marker)."""
        return self._continuation.get(piece)

    # ── Splitting ──────────────────────────────────────────────────

    def split(self, word: str) -> WordPieceIter:
        """Split *word* into word pieces, lazily.

        Raises
        ------
        ValueError
            If *word* is empty.  An empty word has no split; filter it
            out before calling.
        """
        if not word:
            raise ValueError("Cannot break an empty string into word pieces")
        return WordPieceIter(self, word)

    def split_pieces(self, word: str) -> list[str | None]:
        """Return the piece texts of *word*, ``None`` for a missing piece."""
        return [p.piece for p in self.split(word)]

    def split_ids(self, word: str) -> list[int | None]:
        """Return the piece indices of *word*, ``None`` for a missing piece."""
        return [p.idx for p in self.split(word)]

    # ── Reconstruction ─────────────────────────────────────────────

    def pieces_by_index(self, placeholder: str = "") -> list[str]:
        """Rebuild the vocabulary listing, ordered by index.

        Continuation pieces get their marker back.  Indices that no piece
        uses are filled with *placeholder*.  If an initial and a
        continuation piece share an index, the continuation piece wins.
        """
        entries: dict[int, str] = {}
        for piece, idx in self._word_initial.items():
            entries[idx] = piece
        for piece, idx in self._continuation.items():
            entries[idx] = self._marker + piece

        if not entries:
            return []
        listing = [placeholder] * (max(entries) + 1)
        for idx, piece in entries.items():
            listing[idx] = piece
        return listing

    def __repr__(self) -> str:
        return (
            f"WordPieces(backend={self.backend!r}, "
            f"initial={self.num_initial}, continuation={self.num_continuation})"
        )
