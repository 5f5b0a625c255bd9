"""CLI entrypoint for the brick word puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from brickword.core.constants import (
    LAYOUT_RETRY_LIMIT,
    PARTITION_RETRY_LIMIT,
    PLACEMENT_ATTEMPT_LIMIT,
    SeedOrder,
)
from brickword.core.exceptions import BrickwordError
from brickword.engine.generator import GeneratorConfig, PuzzleGenerator
from brickword.io.hints import GeminiHintProvider
from brickword.utils.logger import configure_logging
from brickword.utils.pretty import print_puzzle


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turn a word list into a packed brick puzzle",
    )
    parser.add_argument("--words", nargs="+", metavar="WORD", help="Words to hide in the puzzle")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--hint", type=str, default=None, help="Hint passed through unchanged")
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Ask Gemini for a hint (falls back to a template hint)",
    )
    parser.add_argument("--language", type=str, default="English", help="Language of generated hints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--layout-retries",
        type=int,
        default=LAYOUT_RETRY_LIMIT,
        help="Layout attempts before giving up on a disconnected crossword",
    )
    parser.add_argument(
        "--partition-retries",
        type=int,
        default=PARTITION_RETRY_LIMIT,
        help="Partition attempts before giving up on a single-brick result",
    )
    parser.add_argument(
        "--placement-attempts",
        type=int,
        default=PLACEMENT_ATTEMPT_LIMIT,
        help="Spiral slots tried per brick while packing",
    )
    parser.add_argument(
        "--seed-order",
        type=str,
        choices=[order.value for order in SeedOrder],
        default=SeedOrder.SHUFFLE.value,
        help="Order in which cells seed new bricks",
    )
    parser.add_argument(
        "--strict-placement",
        action="store_true",
        help="Fail instead of leaving an unplaceable brick at its source position",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--pretty", action="store_true", help="Print the layouts to stderr")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    words: List[str] = []
    if args.words:
        words.extend(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))
    if not words:
        parser.error("provide --words and/or --words-file")

    config = GeneratorConfig(
        seed=args.seed,
        layout_retry_limit=args.layout_retries,
        partition_retry_limit=args.partition_retries,
        placement_attempt_limit=args.placement_attempts,
        seed_order=SeedOrder(args.seed_order),
        strict_placement=args.strict_placement,
        language=args.language,
    )
    generator = PuzzleGenerator(
        config,
        hint_provider=GeminiHintProvider() if args.llm else None,
    )
    try:
        result = generator.generate(words, hint=args.hint)
    except BrickwordError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.pretty:
        print_puzzle(result, stream=sys.stderr)

    output_text = json.dumps(result.state.to_jsonable(), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
