"""
Poem pattern catalog
Central source of truth for all supported poem forms
"""

from .models import PoemPattern
from .tokenizer import split_lines

DEFAULT_PATTERN = "haiku"

POEM_PATTERNS: dict[str, PoemPattern] = {
    pattern.key: pattern
    for pattern in (
        PoemPattern(
            key="haiku",
            name="Haiku",
            description="Traditional Japanese",
            syllables=(5, 7, 5),
        ),
        PoemPattern(
            key="tanka",
            name="Tanka",
            description="Extended haiku",
            syllables=(5, 7, 5, 7, 7),
        ),
        PoemPattern(
            key="cinquain",
            name="Cinquain",
            description="American - Adelaide Crapsey",
            syllables=(2, 4, 6, 8, 2),
        ),
        PoemPattern(
            key="nonet",
            name="Nonet",
            description="Descending syllable count",
            syllables=(9, 8, 7, 6, 5, 4, 3, 2, 1),
        ),
        PoemPattern(
            key="shadorma",
            name="Shadorma",
            description="Spanish origin",
            syllables=(3, 5, 3, 3, 7, 5),
        ),
        PoemPattern(
            key="etheree",
            name="Etheree",
            description="Ascending syllable count",
            syllables=(1, 2, 3, 4, 5, 6, 7, 8, 9, 10),
        ),
        PoemPattern(
            key="etheree_desc",
            name="Etheree",
            description="Descending syllable count",
            syllables=(10, 9, 8, 7, 6, 5, 4, 3, 2, 1),
        ),
    )
}

# Tie-break among patterns with the same line count. Extend by hand when
# adding patterns.
PREFERENCE_ORDER = (
    "haiku",
    "tanka",
    "cinquain",
    "shadorma",
    "nonet",
    "etheree",
    "etheree_desc",
)


def get_pattern(key: str) -> PoemPattern:
    """Get poem pattern by key"""
    try:
        return POEM_PATTERNS[key]
    except KeyError:
        available = ", ".join(POEM_PATTERNS)
        raise ValueError(f"Unknown poem type: {key} (available: {available})") from None


def list_patterns() -> list[PoemPattern]:
    return list(POEM_PATTERNS.values())


def detect_pattern(content: str) -> str:
    """
    Detect poem type from content based on number of non-empty lines

    Args:
        content: The poem content

    Returns:
        The detected pattern key ("haiku" when nothing matches)
    """
    if not content or not content.strip():
        return DEFAULT_PATTERN

    line_count = sum(1 for line in split_lines(content) if line.strip())
    matching = [key for key, pattern in POEM_PATTERNS.items() if pattern.line_count == line_count]

    if not matching:
        return DEFAULT_PATTERN

    for preferred in PREFERENCE_ORDER:
        if preferred in matching:
            return preferred

    return matching[0]
