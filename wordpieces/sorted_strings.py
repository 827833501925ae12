"""Longest-prefix index backed by a sorted array of byte strings."""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from collections.abc import Iterator, Mapping

from .constants import BACKEND_SORTED
from .matcher import ByteString, encode_pieces, next_char_boundary

logger = logging.getLogger(__name__)


class SortedStringsMatcher:
    """Pieces kept sorted by their UTF-8 bytes.

    The longest prefix is found by walking the word one code point at a
    time.  For each code point the candidate range is narrowed to the
    pieces that agree with the word up to the end of that code point,
    searching only inside the previous range.  At most N log K steps are
    taken for a word of N bytes and K pieces, and K shrinks quickly in
    practice.
    """

    backend = BACKEND_SORTED

    __slots__ = ("_keys", "_values")

    def __init__(self, keys: list[bytes], values: list[int]) -> None:
        if len(keys) != len(values):
            raise ValueError(
                f"Got {len(keys)} keys but {len(values)} values"
            )
        self._keys = keys
        self._values = values

    @classmethod
    def build(cls, pieces: Mapping[str, int]) -> "SortedStringsMatcher":
        """Sort *pieces* and build the index.

        Raises
        ------
        EncodingError
            If a piece cannot be encoded as UTF-8.
        """
        encoded = encode_pieces(pieces)
        logger.debug("Built sorted index: %d keys", len(encoded))
        return cls([k for k, _ in encoded], [v for _, v in encoded])

    def longest_prefix(self, word: ByteString) -> tuple[int, int]:
        keys = self._keys
        lo, hi = 0, len(keys)
        best_len, best_idx = 0, 0
        pos = 0
        while pos < len(word):
            end = next_char_boundary(word, pos)
            affix = bytes(word[pos:end])

            # Every key in [lo, hi) starts with word[:pos], so comparing
            # the slice [pos:end] keeps the keys ordered.
            new_lo = bisect_left(keys, affix, lo, hi, key=lambda k: k[pos:end])
            new_hi = bisect_right(keys, affix, new_lo, hi, key=lambda k: k[pos:end])
            if new_lo == new_hi:
                break

            lo, hi = new_lo, new_hi
            pos = end
            # An exact piece sorts before its extensions.
            if len(keys[lo]) == pos:
                best_len, best_idx = pos, self._values[lo]
        return best_len, best_idx

    def get(self, piece: str) -> int | None:
        try:
            data = piece.encode("utf-8")
        except UnicodeEncodeError:
            return None
        i = bisect_left(self._keys, data)
        if i < len(self._keys) and self._keys[i] == data:
            return self._values[i]
        return None

    def items(self) -> Iterator[tuple[str, int]]:
        for key, value in zip(self._keys, self._values):
            yield key.decode("utf-8"), value

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, piece: object) -> bool:
        return isinstance(piece, str) and self.get(piece) is not None

    def __repr__(self) -> str:
        return f"SortedStringsMatcher(pieces={len(self._keys)})"
