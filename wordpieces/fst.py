"""Minimal acyclic finite-state transducer keyed by UTF-8 bytes.

The transducer maps every piece to its vocabulary index.  It is built in
one pass over the sorted keys with incremental minimisation: once the
path of the previous key can no longer change, its states are frozen and
replaced by an already-registered equivalent state where one exists, so
pieces that end alike (``-tion``, ``-ing``) share their suffix states.

Outputs live on transitions.  While inserting a key, the part of its
output shared with the existing path is pushed towards the root (the
shared part of two non-negative integers is their minimum) and the rest
is moved one step down.  Summing the outputs along an accepted path plus
the final output of the last state yields the stored index.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from .constants import BACKEND_FST
from .matcher import ByteString, encode_pieces, is_char_boundary

logger = logging.getLogger(__name__)

# Frozen state: (is_final, final_output, ((byte, output, target), ...))
_StateKey = tuple[bool, int, tuple[tuple[int, int, int], ...]]


class _UnfinishedNode:
    """A state on the path of the most recently added key."""

    __slots__ = ("is_final", "final_output", "trans", "last")

    def __init__(self, is_final: bool = False) -> None:
        self.is_final = is_final
        self.final_output = 0
        self.trans: list[tuple[int, int, int]] = []
        # [byte, output] of the transition whose target is still unfinished
        self.last: list[int] | None = None

    def add_output_prefix(self, prefix: int) -> None:
        if self.is_final:
            self.final_output += prefix
        self.trans = [(b, out + prefix, t) for b, out, t in self.trans]
        if self.last is not None:
            self.last[1] += prefix

    def freeze_last(self, target: int) -> None:
        if self.last is not None:
            byte, out = self.last
            self.trans.append((byte, out, target))
            self.last = None

    def key(self) -> _StateKey:
        return (self.is_final, self.final_output, tuple(self.trans))


class _FstBuilder:
    """Builds the compiled state tables from keys added in sorted order."""

    def __init__(self) -> None:
        self.finals: list[bool] = []
        self.final_outputs: list[int] = []
        self.transitions: list[dict[int, tuple[int, int]]] = []
        self._registry: dict[_StateKey, int] = {}
        self._stack: list[_UnfinishedNode] = [_UnfinishedNode()]
        self._previous: bytes | None = None

    def add(self, key: bytes, output: int) -> None:
        if self._previous is not None and key <= self._previous:
            raise ValueError(
                f"Keys must be added in strictly increasing order: "
                f"{key!r} after {self._previous!r}"
            )
        self._previous = key

        if not key:
            # Only the first key can be empty.
            root = self._stack[0]
            root.is_final = True
            root.final_output = output
            return

        prefix_len, output = self._common_prefix_and_set_output(key, output)
        self._compile_from(prefix_len)
        self._add_suffix(key[prefix_len:], output)

    def finish(self) -> int:
        """Freeze all remaining states and return the root state id."""
        self._compile_from(0)
        root = self._stack.pop()
        return self._compile(root)

    def _common_prefix_and_set_output(self, key: bytes, output: int) -> tuple[int, int]:
        i = 0
        while i < len(key):
            last = self._stack[i].last
            if last is None or last[0] != key[i]:
                break
            i += 1
            common = min(last[1], output)
            add_prefix = last[1] - common
            output -= common
            last[1] = common
            if add_prefix:
                self._stack[i].add_output_prefix(add_prefix)
        return i, output

    def _compile_from(self, depth: int) -> None:
        target = -1
        while depth + 1 < len(self._stack):
            node = self._stack.pop()
            if target >= 0:
                node.freeze_last(target)
            target = self._compile(node)
        if target >= 0:
            self._stack[-1].freeze_last(target)

    def _add_suffix(self, suffix: bytes, output: int) -> None:
        self._stack[-1].last = [suffix[0], output]
        for byte in suffix[1:]:
            node = _UnfinishedNode()
            node.last = [byte, 0]
            self._stack.append(node)
        self._stack.append(_UnfinishedNode(is_final=True))

    def _compile(self, node: _UnfinishedNode) -> int:
        key = node.key()
        state = self._registry.get(key)
        if state is not None:
            return state
        state = len(self.finals)
        self.finals.append(node.is_final)
        self.final_outputs.append(node.final_output)
        self.transitions.append({b: (out, t) for b, out, t in node.trans})
        self._registry[key] = state
        return state


class FstMatcher:
    """Longest-prefix index backed by a minimal byte transducer."""

    backend = BACKEND_FST

    __slots__ = ("_finals", "_final_outputs", "_transitions", "_root", "_len")

    def __init__(
        self,
        finals: list[bool],
        final_outputs: list[int],
        transitions: list[dict[int, tuple[int, int]]],
        root: int,
        size: int,
    ) -> None:
        self._finals = finals
        self._final_outputs = final_outputs
        self._transitions = transitions
        self._root = root
        self._len = size

    @classmethod
    def build(cls, pieces: Mapping[str, int]) -> "FstMatcher":
        """Build a transducer mapping each piece to its index.

        Raises
        ------
        EncodingError
            If a piece cannot be encoded as UTF-8.
        """
        builder = _FstBuilder()
        encoded = encode_pieces(pieces)
        for key, idx in encoded:
            builder.add(key, idx)
        root = builder.finish()
        logger.debug(
            "Built FST: %d keys, %d states, %d transitions",
            len(encoded),
            len(builder.finals),
            sum(len(t) for t in builder.transitions),
        )
        return cls(
            builder.finals,
            builder.final_outputs,
            builder.transitions,
            root,
            len(encoded),
        )

    # ── Queries ────────────────────────────────────────────────────

    def longest_prefix(self, word: ByteString) -> tuple[int, int]:
        state = self._root
        acc = 0
        best_len, best_idx = 0, 0
        for pos, byte in enumerate(word):
            trans = self._transitions[state].get(byte)
            if trans is None:
                break
            out, state = trans
            acc += out
            if self._finals[state] and is_char_boundary(word, pos + 1):
                best_len, best_idx = pos + 1, acc + self._final_outputs[state]
        return best_len, best_idx

    def get(self, piece: str) -> int | None:
        try:
            data = piece.encode("utf-8")
        except UnicodeEncodeError:
            return None
        state = self._root
        acc = 0
        for byte in data:
            trans = self._transitions[state].get(byte)
            if trans is None:
                return None
            out, state = trans
            acc += out
        if not self._finals[state]:
            return None
        return acc + self._final_outputs[state]

    def items(self) -> Iterator[tuple[str, int]]:
        # Depth-first in byte order; the stack holds (state, path, acc).
        stack: list[tuple[int, bytes, int]] = [(self._root, b"", 0)]
        while stack:
            state, path, acc = stack.pop()
            if self._finals[state]:
                yield path.decode("utf-8"), acc + self._final_outputs[state]
            for byte in sorted(self._transitions[state], reverse=True):
                out, target = self._transitions[state][byte]
                stack.append((target, path + bytes((byte,)), acc + out))

    # ── Introspection ──────────────────────────────────────────────

    @property
    def num_states(self) -> int:
        return len(self._finals)

    @property
    def num_transitions(self) -> int:
        return sum(len(t) for t in self._transitions)

    def __len__(self) -> int:
        return self._len

    def __contains__(self, piece: object) -> bool:
        return isinstance(piece, str) and self.get(piece) is not None

    def __repr__(self) -> str:
        return f"FstMatcher(pieces={self._len}, states={self.num_states})"
