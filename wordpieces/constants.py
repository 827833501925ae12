"""Central constants for word piece vocabularies and splitting.

Every default that affects how a vocabulary listing is interpreted, which
index backend is used, or how the command line tool logs lives here so
that all other modules import from a single source of truth.
"""

from __future__ import annotations

# ── Vocabulary format ──────────────────────────────────────────────
# A vocabulary line starting with the marker is a continuation piece;
# the marker is stripped before the piece is stored.
CONTINUATION_MARKER: str = "##"

# ── Index backends ─────────────────────────────────────────────────
# "fst":    minimal acyclic byte transducer, O(bytes) lookup.
# "sorted": sorted byte strings narrowed by binary search per code point.
BACKEND_FST: str = "fst"
BACKEND_SORTED: str = "sorted"
BACKENDS: tuple[str, ...] = (BACKEND_FST, BACKEND_SORTED)
DEFAULT_BACKEND: str = BACKEND_FST

# ── Hugging Face export ────────────────────────────────────────────
DEFAULT_UNK_TOKEN: str = "[UNK]"
MAX_INPUT_CHARS_PER_WORD: int = 100
HF_TOKENIZER_FILENAME: str = "tokenizer.json"

# ── Logging ────────────────────────────────────────────────────────
LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
