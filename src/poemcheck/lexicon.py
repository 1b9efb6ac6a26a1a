"""
Static syllable dictionary (word -> syllable count)
"""

import json
import logging
import re
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Characters kept by normalization; everything else is stripped
_STRIP_PATTERN = re.compile(r"[^a-z'-]")
_ENTRY_PATTERN = re.compile(r"[a-z'-]+")


def normalize_word(word: str) -> str:
    """Lowercase a word and strip everything outside [a-z'-]"""
    return _STRIP_PATTERN.sub("", word.lower())


class Lexicon:
    """
    Read-only word -> syllable count table

    Keys must already be normalized. A miss is a normal outcome and
    returns None so callers can fall back to the predictor.
    """

    def __init__(self, entries: Optional[Mapping[str, int]] = None):
        self._entries: dict[str, int] = dict(entries or {})

    @classmethod
    def empty(cls) -> "Lexicon":
        return cls()

    @classmethod
    def from_json(cls, path: str | Path) -> "Lexicon":
        """
        Load a lexicon from a JSON object mapping words to counts

        Entries whose key is not a normalized word or whose value is not a
        positive integer are dropped with a warning.

        Args:
            path: Path to the JSON file

        Returns:
            Lexicon with the valid entries
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)

        if not isinstance(raw, dict):
            raise ValueError(f"Lexicon file must contain a JSON object: {path}")

        entries = {}
        skipped = 0
        for word, count in raw.items():
            valid_count = isinstance(count, int) and not isinstance(count, bool) and count > 0
            if _ENTRY_PATTERN.fullmatch(word) and valid_count:
                entries[word] = count
            else:
                skipped += 1

        if skipped:
            logger.warning(f"Skipped {skipped} malformed lexicon entries in {path}")
        logger.info(f"📖 Loaded lexicon with {len(entries)} words from {path}")

        return cls(entries)

    def lookup(self, word: str) -> Optional[int]:
        """Return the dictionary syllable count, or None if the word is unknown"""
        return self._entries.get(word)

    @property
    def is_loaded(self) -> bool:
        return bool(self._entries)

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)
