"""Longest-prefix index over one class of word pieces.

A matcher answers a single question: *what is the longest piece in the
index that is a prefix of this word?*  Two interchangeable backends are
provided and selected by name at construction time:

``"fst"``
    :class:`~wordpieces.fst.FstMatcher`, a minimal acyclic finite-state
    transducer over UTF-8 bytes.  Lookup cost is linear in the number of
    bytes consumed and independent of the vocabulary size.
``"sorted"``
    :class:`~wordpieces.sorted_strings.SortedStringsMatcher`, a sorted
    array of byte strings whose candidate range is narrowed with binary
    search for every code point of the word.

Both operate on the UTF-8 encoding of the word and only report matches
that end on a code-point boundary.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Protocol, runtime_checkable

from .constants import BACKEND_FST, BACKEND_SORTED, BACKENDS, DEFAULT_BACKEND
from .errors import EncodingError

ByteString = bytes | bytearray | memoryview


@runtime_checkable
class PrefixMatcher(Protocol):
    """Capability shared by every index backend."""

    backend: str

    def longest_prefix(self, word: ByteString) -> tuple[int, int]:
        """Return ``(matched_byte_length, idx)`` for the UTF-8 *word*.

        A length of 0 means no piece matches; ``idx`` is then 0 and
        must not be consulted.
        """
        ...

    def get(self, piece: str) -> int | None:
        """Return the index stored for exactly *piece*, if any."""
        ...

    def items(self) -> Iterator[tuple[str, int]]:
        """Yield ``(piece, idx)`` pairs in UTF-8 byte order."""
        ...

    def __len__(self) -> int: ...

    def __contains__(self, piece: object) -> bool: ...


# ── UTF-8 helpers shared by the backends ───────────────────────────


def is_char_boundary(data: ByteString, pos: int) -> bool:
    """True if *pos* does not fall inside a multi-byte code point."""
    return pos >= len(data) or (data[pos] & 0xC0) != 0x80


def next_char_boundary(data: ByteString, pos: int) -> int:
    """Return the offset just past the code point starting at *pos*."""
    end = pos + 1
    while end < len(data) and (data[end] & 0xC0) == 0x80:
        end += 1
    return end


def encode_pieces(pieces: Mapping[str, int]) -> list[tuple[bytes, int]]:
    """Encode *pieces* to UTF-8 and sort them by their bytes.

    UTF-8 byte order equals code-point order, so the result is also
    sorted by text.

    Raises
    ------
    EncodingError
        If a piece cannot be encoded (lone surrogates).
    ValueError
        If an index is negative.
    """
    encoded: list[tuple[bytes, int]] = []
    for piece, idx in pieces.items():
        if idx < 0:
            raise ValueError(f"Piece index must be non-negative, got {idx} for {piece!r}")
        try:
            encoded.append((piece.encode("utf-8"), idx))
        except UnicodeEncodeError as err:
            raise EncodingError(piece, idx) from err
    encoded.sort(key=lambda kv: kv[0])
    return encoded


def build_matcher(
    pieces: Mapping[str, int],
    backend: str = DEFAULT_BACKEND,
) -> PrefixMatcher:
    """Build an immutable matcher over *pieces* with the named *backend*.

    Parameters
    ----------
    pieces
        Mapping of piece text (without continuation marker) to its
        vocabulary index.  Need not be sorted.
    backend
        ``"fst"`` (default) or ``"sorted"``.

    Raises
    ------
    EncodingError
        If a piece is not valid UTF-8 text.
    ValueError
        If *backend* is unknown.
    """
    # Imported here: the backends depend on the helpers above.
    from .fst import FstMatcher
    from .sorted_strings import SortedStringsMatcher

    if backend == BACKEND_FST:
        return FstMatcher.build(pieces)
    if backend == BACKEND_SORTED:
        return SortedStringsMatcher.build(pieces)
    raise ValueError(
        f"Unknown matcher backend {backend!r}.  Expected one of: {', '.join(BACKENDS)}"
    )
