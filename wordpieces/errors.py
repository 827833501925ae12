"""Errors raised while building word piece indices.

Failing to match a word is not an error: it is reported as
:data:`wordpieces.pieces.MISSING` in the split results.  I/O errors raised
while reading a vocabulary are never wrapped and reach the caller as-is.
"""

from __future__ import annotations


class WordPiecesError(Exception):
    """Base class for errors raised by this package."""


class EncodingError(WordPiecesError, ValueError):
    """A vocabulary piece cannot be encoded as UTF-8.

    Raised when an index is built from text containing lone surrogates
    (e.g. lines decoded with ``errors="surrogateescape"``).  The builder
    that raised it must be discarded.
    """

    def __init__(self, piece: str, idx: int | None = None) -> None:
        self.piece = piece
        self.idx = idx
        where = f" at index {idx}" if idx is not None else ""
        super().__init__(f"Piece {piece!r}{where} is not valid UTF-8 text")
