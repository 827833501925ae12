"""Word pieces: split words into subword units.

A subword tokenizer splits a word into several pieces, so-called *word
pieces*, as popularized by the BERT encoder.  Given a vocabulary of
word-initial pieces and ``##``-marked continuation pieces, a word is
split greedily into the longest known pieces, yielding each piece's text
and vocabulary index.
"""

from __future__ import annotations

from .config import SplitterConfig
from .constants import BACKENDS, CONTINUATION_MARKER
from .errors import EncodingError, WordPiecesError
from .export import save_hf_tokenizer, to_hf_tokenizer
from .fst import FstMatcher
from .matcher import PrefixMatcher, build_matcher
from .pieces import MISSING, WordPiece, WordPieceIter, WordPieces
from .sorted_strings import SortedStringsMatcher
from .validation import ValidationReport, validate_word_pieces
from .vocab import VocabularyBuilder, load_word_pieces, read_vocab_lines

__all__ = [
    "BACKENDS",
    "CONTINUATION_MARKER",
    "EncodingError",
    "FstMatcher",
    "MISSING",
    "PrefixMatcher",
    "SortedStringsMatcher",
    "SplitterConfig",
    "ValidationReport",
    "VocabularyBuilder",
    "WordPiece",
    "WordPieceIter",
    "WordPieces",
    "WordPiecesError",
    "build_matcher",
    "load_word_pieces",
    "read_vocab_lines",
    "save_hf_tokenizer",
    "to_hf_tokenizer",
    "validate_word_pieces",
]

__version__ = "0.1.0"
