"""Export word pieces as a Hugging Face ``tokenizers`` WordPiece model.

The exported tokenizer uses the same greedy longest-match-first rule, so
for every word that :meth:`WordPieces.split` covers completely it yields
the same ids.  It differs on partial matches: Hugging Face replaces the
whole word with the unknown token, whereas ``split`` keeps the pieces
found before the missing one.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from tokenizers import Tokenizer
from tokenizers.models import WordPiece

from .constants import DEFAULT_UNK_TOKEN, HF_TOKENIZER_FILENAME, MAX_INPUT_CHARS_PER_WORD
from .pieces import WordPieces

logger = logging.getLogger(__name__)


def hf_vocab(word_pieces: WordPieces, unk_token: str = DEFAULT_UNK_TOKEN) -> dict[str, int]:
    """Return the ``token -> id`` mapping for the exported model.

    Continuation pieces carry their marker.  *unk_token* is appended at
    the next free id when the vocabulary does not contain it.
    """
    vocab: dict[str, int] = {}
    for piece, idx in word_pieces.word_initial.items():
        vocab[piece] = idx
    for piece, idx in word_pieces.continuation.items():
        vocab[word_pieces.marker + piece] = idx

    if unk_token not in vocab:
        vocab[unk_token] = max(vocab.values(), default=-1) + 1
    return vocab


def to_hf_tokenizer(
    word_pieces: WordPieces,
    *,
    unk_token: str = DEFAULT_UNK_TOKEN,
    max_input_chars_per_word: int = MAX_INPUT_CHARS_PER_WORD,
) -> Tokenizer:
    """Build an in-memory HuggingFace ``Tokenizer`` over *word_pieces*.

    No normalizer or pre-tokenizer is set: like ``split``, the tokenizer
    expects a single pre-isolated word.
    """
    model = WordPiece(
        vocab=hf_vocab(word_pieces, unk_token),
        unk_token=unk_token,
        max_input_chars_per_word=max_input_chars_per_word,
        continuing_subword_prefix=word_pieces.marker,
    )
    return Tokenizer(model)


def save_hf_tokenizer(
    word_pieces: WordPieces,
    output_dir: str | Path,
    *,
    filename: str = HF_TOKENIZER_FILENAME,
    unk_token: str = DEFAULT_UNK_TOKEN,
    max_input_chars_per_word: int = MAX_INPUT_CHARS_PER_WORD,
) -> Path:
    """Atomically save the exported tokenizer (temp file + rename)."""
    tokenizer = to_hf_tokenizer(
        word_pieces,
        unk_token=unk_token,
        max_input_chars_per_word=max_input_chars_per_word,
    )

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / filename
    fd, tmp_path = tempfile.mkstemp(dir=str(output_dir), suffix=".tmp")
    try:
        os.close(fd)
        tokenizer.save(tmp_path)
        Path(tmp_path).replace(output_path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
    logger.info("Saved Hugging Face tokenizer to %s", output_path)
    return output_path
