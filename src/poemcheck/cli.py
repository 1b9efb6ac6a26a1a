"""
Command line interface: validate poems and count syllables
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .config import CounterConfig
from .errors import InferenceError, ValidationPassError
from .patterns import get_pattern, list_patterns

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_UNVERIFIED = 2
EXIT_ERROR = 3


def _read_content(file: Optional[str]) -> Optional[str]:
    if file is None or file == "-":
        return sys.stdin.read()

    path = Path(file)
    if not path.exists():
        print(f"Error: Poem file not found: {file}")
        return None
    return path.read_text(encoding="utf-8")


def _build_config(args: argparse.Namespace) -> CounterConfig:
    config = CounterConfig.from_env()
    if args.lexicon:
        config.lexicon_path = args.lexicon
    if args.model:
        config.model_path = args.model
    if args.metadata:
        config.metadata_path = args.metadata
    if args.degraded:
        config.degraded_mode = True
    return config


async def _validate(args: argparse.Namespace) -> int:
    pattern = None
    if args.type:
        try:
            pattern = get_pattern(args.type)
        except ValueError as e:
            print(f"Error: {e}")
            return EXIT_ERROR

    content = _read_content(args.file)
    if content is None:
        return EXIT_ERROR

    try:
        validator = _build_config(args).build_validator()
    except (OSError, ValueError) as e:
        print(f"Error: Could not load lexicon: {e}")
        return EXIT_ERROR

    try:
        result = await validator.validate(content, pattern)
    except ValidationPassError as e:
        print(f"Unable to check syllables right now: {e.cause}")
        return EXIT_UNVERIFIED

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print("=" * 60)
        print(f"Poem type: {result.pattern_key}")
        print("=" * 60)
        print(f"Syllables: {result.syllable_counts}")
        print(f"Valid: {result.is_valid}")
        print(result.feedback)

    return EXIT_VALID if result.is_valid else EXIT_INVALID


async def _count(args: argparse.Namespace) -> int:
    content = _read_content(args.file)
    if content is None:
        return EXIT_ERROR

    try:
        resolver = _build_config(args).build_resolver()
    except (OSError, ValueError) as e:
        print(f"Error: Could not load lexicon: {e}")
        return EXIT_ERROR

    try:
        breakdown = await resolver.count_text(content)
    except InferenceError as e:
        print(f"Unable to count syllables right now: {e}")
        return EXIT_UNVERIFIED

    if args.json:
        print(breakdown.model_dump_json(indent=2))
    else:
        for word in breakdown.words:
            marker = "" if word.is_complete else " (partial)"
            print(f"{word.word}: {word.syllables}{marker}")
        print(f"\nTotal: {breakdown.total}")

    return EXIT_VALID


def _patterns(args: argparse.Namespace) -> int:
    for pattern in list_patterns():
        syllables = "-".join(str(s) for s in pattern.syllables)
        print(f"{pattern.key:<14} {pattern.name:<10} {syllables:<28} {pattern.description}")
    return EXIT_VALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poemcheck", description="Count syllables and validate poem structure"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show per-word resolution logs"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_engine_options(sub: argparse.ArgumentParser):
        sub.add_argument("file", nargs="?", default=None, help="Text file (default: stdin)")
        sub.add_argument("--lexicon", type=str, default=None, help="Lexicon JSON path")
        sub.add_argument("--model", type=str, default=None, help="ONNX model path")
        sub.add_argument("--metadata", type=str, default=None, help="Model metadata JSON path")
        sub.add_argument(
            "--degraded",
            action="store_true",
            help="Use the vowel-counting heuristic instead of the model",
        )
        sub.add_argument("--json", action="store_true", help="Print JSON output")

    validate_parser = subparsers.add_parser("validate", help="Validate a poem")
    add_engine_options(validate_parser)
    validate_parser.add_argument(
        "-t", "--type", type=str, default=None, help="Poem type (default: auto-detect)"
    )

    count_parser = subparsers.add_parser("count", help="Count syllables per word")
    add_engine_options(count_parser)

    subparsers.add_parser("patterns", help="List supported poem types")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "patterns":
        return _patterns(args)
    if args.command == "count":
        return asyncio.run(_count(args))

    return asyncio.run(_validate(args))


if __name__ == "__main__":
    sys.exit(main())
