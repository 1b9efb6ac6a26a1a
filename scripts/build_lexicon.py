#!/usr/bin/env python3
"""Build the syllable lexicon JSON from the CMU Pronouncing Dictionary."""

import argparse
import json
import re
from pathlib import Path

import pronouncing
from tqdm import tqdm

# Constants
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_PATH = PROJECT_ROOT / "data" / "cmu-syllables.json"
WORD_PATTERN = re.compile(r"[a-z'-]+")
VARIANT_SUFFIX = re.compile(r"\(\d+\)$")


def syllables_for_phones(phones: str) -> int:
    """Count syllables in an ARPAbet pronunciation (one stress digit per vowel)."""
    return sum(ch.isdigit() for ch in phones)


def build_lexicon() -> dict[str, int]:
    """Map every normalized CMU word to its syllable count.

    Words with several pronunciations keep the largest count.

    Returns:
        Sorted word -> syllable count mapping
    """
    pronouncing.init_cmu()

    lexicon: dict[str, int] = {}
    for word, phones in tqdm(pronouncing.pronunciations, desc="Counting syllables"):
        word = VARIANT_SUFFIX.sub("", word.lower())
        if not WORD_PATTERN.fullmatch(word):
            continue

        count = syllables_for_phones(phones)
        if count > 0:
            lexicon[word] = max(count, lexicon.get(word, 0))

    return dict(sorted(lexicon.items()))


def main():
    parser = argparse.ArgumentParser(
        description="Build the word -> syllable count lexicon from CMUdict"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=str(OUTPUT_PATH),
        help=f"Output JSON path (default: {OUTPUT_PATH})",
    )
    args = parser.parse_args()

    lexicon = build_lexicon()

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(lexicon, f, ensure_ascii=False)

    print(f"Wrote {len(lexicon)} words to: {output_path}")


if __name__ == "__main__":
    main()
