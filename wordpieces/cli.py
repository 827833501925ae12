"""Command-line interface for splitting words against a vocabulary.

Usage:
    wordpieces split vocab.txt coördinatie voorkomen
    echo voorman | wordpieces split vocab.txt --ids
    wordpieces validate vocab.txt --sample words.txt
    wordpieces export vocab.txt -o tokenizer/
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path

from .config import SplitterConfig
from .constants import BACKENDS, LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVELS
from .export import save_hf_tokenizer
from .pieces import WordPieces
from .validation import validate_word_pieces
from .vocab import VocabularyBuilder, load_word_pieces, read_vocab_lines

logger = logging.getLogger("wordpieces")


def configure_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """Send package log records to stderr and, optionally, to *log_file*."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(formatter)
    logger.addHandler(sh)
    if log_file is not None:
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordpieces",
        description="Split words into word pieces (greedy longest match)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="SplitterConfig YAML file (flags below override it)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="Index backend (default: fst)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", default=None, help="Also log to this file")

    sub = parser.add_subparsers(dest="cmd", required=True)

    split_p = sub.add_parser("split", help="Split words into pieces")
    split_p.add_argument("vocab", help="Vocabulary file, one piece per line")
    split_p.add_argument("words", nargs="*", help="Words to split (default: stdin lines)")
    split_p.add_argument("--ids", action="store_true", help="Print piece indices")
    split_p.add_argument("--unk", default=None, help="Text printed for a missing piece")

    validate_p = sub.add_parser("validate", help="Check a vocabulary for consistency")
    validate_p.add_argument("vocab", help="Vocabulary file, one piece per line")
    validate_p.add_argument(
        "--sample",
        default=None,
        help="File with one word per line for agreement and coverage checks",
    )

    export_p = sub.add_parser("export", help="Export a Hugging Face tokenizer.json")
    export_p.add_argument("vocab", help="Vocabulary file, one piece per line")
    export_p.add_argument(
        "--output", "-o",
        default="tokenizer",
        help="Output directory (default: tokenizer/)",
    )
    return parser


def _load_config(args: argparse.Namespace) -> SplitterConfig:
    config = SplitterConfig.from_yaml(args.config) if args.config else SplitterConfig()
    if args.backend:
        config = replace(config, backend=args.backend)
    return config


def format_split(
    word_pieces: WordPieces,
    word: str,
    *,
    ids: bool = False,
    unk: str = "[UNK]",
) -> str:
    """Render one word as ``word<TAB>piece piece ...``."""
    rendered: list[str] = []
    for piece in word_pieces.split(word):
        if piece.is_missing:
            rendered.append(unk)
        elif ids:
            rendered.append(str(piece.idx))
        else:
            rendered.append(piece.piece or "")
    return f"{word}\t{' '.join(rendered)}"


def _iter_words(words: Sequence[str]) -> Iterable[str]:
    if words:
        yield from words
        return
    for line in sys.stdin:
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        yield line


def _cmd_split(args: argparse.Namespace, config: SplitterConfig) -> int:
    word_pieces = load_word_pieces(args.vocab, config)
    unk = args.unk if args.unk is not None else config.unk_token
    for word in _iter_words(args.words):
        if not word:
            continue
        print(format_split(word_pieces, word, ids=args.ids, unk=unk))
    return 0


def _cmd_validate(args: argparse.Namespace, config: SplitterConfig) -> int:
    lines = list(read_vocab_lines(args.vocab, encoding=config.encoding))
    word_pieces = VocabularyBuilder.from_line_source(
        lines, marker=config.continuation_marker, backend=config.backend
    )
    sample = None
    if args.sample:
        sample = list(read_vocab_lines(args.sample, encoding=config.encoding))
    report = validate_word_pieces(word_pieces, lines, sample_words=sample)
    print(report.summary())
    return 0 if report.ok else 1


def _cmd_export(args: argparse.Namespace, config: SplitterConfig) -> int:
    word_pieces = load_word_pieces(args.vocab, config)
    path = save_hf_tokenizer(
        word_pieces,
        args.output,
        unk_token=config.unk_token,
        max_input_chars_per_word=config.max_input_chars_per_word,
    )
    print(f"Saved to: {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args, extra = parser.parse_known_args(argv)
    if extra:
        # Words given after an option of `split` are left over by argparse.
        if args.cmd != "split" or any(arg.startswith("-") for arg in extra):
            parser.error(f"unrecognized arguments: {' '.join(extra)}")
        args.words = [*(args.words or []), *extra]
    configure_logging(args.log_level, args.log_file)
    config = _load_config(args)

    if args.cmd == "split":
        return _cmd_split(args, config)
    if args.cmd == "validate":
        return _cmd_validate(args, config)
    return _cmd_export(args, config)


if __name__ == "__main__":
    sys.exit(main())
