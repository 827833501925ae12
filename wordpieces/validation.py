"""Consistency checks for a built word piece vocabulary.

Checks that the vocabulary listing can be reconstructed from the indices,
that both index backends split words identically, and how many sample
words are covered without a missing piece.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .constants import BACKEND_FST, BACKEND_SORTED, CONTINUATION_MARKER
from .pieces import WordPieces
from .vocab import VocabularyBuilder


@dataclass
class ValidationReport:
    """Vocabulary validation results."""

    backend: str = ""
    num_pieces: int = 0
    num_initial: int = 0
    num_continuation: int = 0

    # Reconstruction
    roundtrip_ok: bool = True
    roundtrip_failures: list[str] = field(default_factory=list)
    index_gaps: list[int] = field(default_factory=list)

    # Backend agreement
    backends_agree: bool = True
    disagreements: list[str] = field(default_factory=list)

    # Coverage
    words_checked: int = 0
    words_fully_split: int = 0

    @property
    def coverage(self) -> float:
        if self.words_checked == 0:
            return 0.0
        return self.words_fully_split / self.words_checked

    @property
    def ok(self) -> bool:
        return self.roundtrip_ok and self.backends_agree

    def summary(self) -> str:
        lines = [
            f"Backend: {self.backend}",
            f"Pieces: {self.num_pieces} "
            f"({self.num_initial} initial, {self.num_continuation} continuation)",
            f"Roundtrip fidelity: {self.roundtrip_ok} "
            f"({len(self.roundtrip_failures)} failures)",
            f"Index gaps: {len(self.index_gaps)}",
            f"Backends agree: {self.backends_agree} "
            f"({len(self.disagreements)} disagreements)",
        ]
        if self.words_checked:
            lines.append(
                f"Coverage: {self.words_fully_split}/{self.words_checked} "
                f"words fully split ({self.coverage * 100:.1f}%)"
            )
        for failure in self.roundtrip_failures[:10]:
            lines.append(f"  {failure}")
        for disagreement in self.disagreements[:10]:
            lines.append(f"  {disagreement}")
        return "\n".join(lines)


# ── Individual check functions ─────────────────────────────────────


def check_roundtrip(
    word_pieces: WordPieces,
    lines: Sequence[str],
) -> tuple[bool, list[str]]:
    """Verify ``pieces_by_index()`` reproduces the vocabulary *lines*."""
    rebuilt = word_pieces.pieces_by_index()
    failures: list[str] = []
    if len(rebuilt) != len(lines):
        failures.append(
            f"LENGTH: {len(lines)} lines -> {len(rebuilt)} reconstructed"
        )
    for idx, (expected, actual) in enumerate(zip(lines, rebuilt)):
        if expected != actual:
            failures.append(f"MISMATCH at {idx}: {expected!r} -> {actual!r}")
    return len(failures) == 0, failures


def find_index_gaps(word_pieces: WordPieces) -> list[int]:
    """Return indices below the largest index that no piece uses."""
    used = {idx for _, idx in word_pieces.word_initial.items()}
    used.update(idx for _, idx in word_pieces.continuation.items())
    if not used:
        return []
    return [idx for idx in range(max(used)) if idx not in used]


def check_backend_agreement(
    lines: Sequence[str],
    words: Iterable[str],
    marker: str = CONTINUATION_MARKER,
) -> tuple[bool, list[str]]:
    """Build both backends from *lines* and compare lookups and splits."""
    fst = VocabularyBuilder.from_line_source(lines, marker=marker, backend=BACKEND_FST)
    srt = VocabularyBuilder.from_line_source(lines, marker=marker, backend=BACKEND_SORTED)

    failures: list[str] = []
    if list(fst.word_initial.items()) != list(srt.word_initial.items()):
        failures.append("ITEMS: word-initial pieces differ")
    if list(fst.continuation.items()) != list(srt.continuation.items()):
        failures.append("ITEMS: continuation pieces differ")

    for word in words:
        if not word:
            continue
        a = list(fst.split(word))
        b = list(srt.split(word))
        if a != b:
            failures.append(f"SPLIT {word!r}: fst={a} sorted={b}")
    return len(failures) == 0, failures


def count_fully_split(word_pieces: WordPieces, words: Iterable[str]) -> tuple[int, int]:
    """Return ``(checked, fully_split)`` over the non-empty *words*."""
    checked = fully = 0
    for word in words:
        if not word:
            continue
        checked += 1
        if not any(p.is_missing for p in word_pieces.split(word)):
            fully += 1
    return checked, fully


# ── Orchestrator ───────────────────────────────────────────────────


def validate_word_pieces(
    word_pieces: WordPieces,
    lines: Sequence[str],
    sample_words: Sequence[str] | None = None,
) -> ValidationReport:
    """Run the full validation suite.

    Parameters
    ----------
    word_pieces
        Word pieces built from *lines*.
    lines
        The vocabulary listing the pieces were built from.
    sample_words
        Words used for backend agreement and coverage.  The vocabulary
        pieces themselves are always checked for agreement.

    Returns
    -------
    ValidationReport
    """
    report = ValidationReport(
        backend=word_pieces.backend,
        num_pieces=len(word_pieces),
        num_initial=word_pieces.num_initial,
        num_continuation=word_pieces.num_continuation,
    )

    report.roundtrip_ok, report.roundtrip_failures = check_roundtrip(word_pieces, lines)
    report.index_gaps = find_index_gaps(word_pieces)

    words = list(sample_words or [])
    report.backends_agree, report.disagreements = check_backend_agreement(
        lines, [*lines, *words], marker=word_pieces.marker
    )

    if words:
        report.words_checked, report.words_fully_split = count_fully_split(
            word_pieces, words
        )
    return report
