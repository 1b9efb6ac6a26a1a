"""
Poem Structure Validator
Checks per-line syllable counts against a poem pattern
"""

import logging
from typing import Optional, Sequence

from .errors import InferenceError, ValidationPassError
from .models import PoemPattern, ValidationResult
from .patterns import detect_pattern, get_pattern
from .resolver import SyllableResolver
from .tokenizer import split_lines

logger = logging.getLogger(__name__)


class StructureValidator:
    """Validates poem text against a poem pattern"""

    def __init__(self, resolver: SyllableResolver):
        """
        Initialize validator

        Args:
            resolver: SyllableResolver used for the per-line counts
        """
        self.resolver = resolver

    # ==================== PUBLIC API ====================

    async def validate(
        self,
        content: str,
        pattern: PoemPattern | str | None = None,
        sequence: Optional[int] = None,
    ) -> ValidationResult:
        """
        Run one validation pass

        Args:
            content: Poem text as currently typed
            pattern: PoemPattern, pattern key, or None to detect from content
            sequence: Request sequence number, echoed in the result

        Returns:
            ValidationResult for this pass

        Raises:
            ValidationPassError: if a syllable prediction failed
        """
        if pattern is None:
            pattern = detect_pattern(content)
        if isinstance(pattern, str):
            pattern = get_pattern(pattern)

        expected = pattern.syllables

        try:
            syllable_counts = await self.resolver.count_lines(content, expected)
        except InferenceError as e:
            raise ValidationPassError(e, sequence) from e

        lines = split_lines(content)[: len(expected)]

        has_all_required_lines = len(lines) == len(expected) and all(
            line.strip() for line in lines
        )
        structure_matches = all(
            count == target for count, target in zip(syllable_counts, expected)
        )

        # Partial poems are never valid
        is_complete = has_all_required_lines and structure_matches

        feedback = build_feedback(
            syllable_counts,
            expected,
            lines,
            pattern.name.lower(),
            is_complete,
            has_all_required_lines,
        )

        return ValidationResult(
            is_valid=is_complete,
            is_complete=is_complete,
            syllable_counts=syllable_counts,
            feedback=feedback,
            has_all_required_lines=has_all_required_lines,
            structure_matches=structure_matches,
            pattern_key=pattern.key,
            sequence=sequence,
        )


def build_feedback(
    actual: Sequence[int],
    expected: Sequence[int],
    lines: Sequence[str],
    poem_type: str,
    is_complete: bool,
    has_all_required_lines: bool,
) -> str:
    """Pick the single feedback message shown to the writer"""
    if is_complete:
        return f"Perfect {poem_type}! You're a natural poet."

    if not has_all_required_lines:
        present_lines = sum(1 for line in lines if line.strip())
        if present_lines > 0:
            return f"Great start! Finish all {len(expected)} lines."
        return f"Write your {poem_type}..."

    for i, (act, tgt) in enumerate(zip(actual, expected)):
        if act > tgt:
            return f"Line {i + 1} has too many syllables ({act}/{tgt})"
        if act < tgt and lines[i].strip():
            return f"Line {i + 1} needs more syllables ({act}/{tgt})"

    return f"Keep writing your {poem_type}..."
