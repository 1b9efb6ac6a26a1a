"""
Live validation session for an editor

Every content change dispatches a validation pass tagged with a
monotonically increasing sequence number. Passes can finish out of order;
a result is only accepted if no newer pass has been dispatched since.
"""

import logging
from typing import Optional

from .errors import ValidationPassError
from .models import PoemPattern, ValidationResult
from .validator import StructureValidator

logger = logging.getLogger(__name__)


class ValidationSession:
    """Keeps the latest accepted ValidationResult for one editor"""

    def __init__(
        self,
        validator: StructureValidator,
        pattern: PoemPattern | str | None = None,
        failure_threshold: int = 3,
    ):
        """
        Initialize session

        Args:
            validator: StructureValidator running the passes
            pattern: Poem pattern or key (None detects it per pass)
            failure_threshold: Consecutive failed passes before unable_to_verify
        """
        self.validator = validator
        self.pattern = pattern
        self.failure_threshold = failure_threshold

        self._latest_sequence = 0
        self._last_result: Optional[ValidationResult] = None
        self._consecutive_failures = 0

    @property
    def last_result(self) -> Optional[ValidationResult]:
        """Latest accepted result (stale-but-valid after a failed pass)"""
        return self._last_result

    @property
    def latest_sequence(self) -> int:
        return self._latest_sequence

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    @property
    def unable_to_verify(self) -> bool:
        """True once enough passes in a row have failed"""
        return self._consecutive_failures >= self.failure_threshold

    def next_sequence(self) -> int:
        self._latest_sequence += 1
        return self._latest_sequence

    def is_current(self, sequence: Optional[int]) -> bool:
        return sequence is not None and sequence >= self._latest_sequence

    def accept(self, result: ValidationResult) -> bool:
        """
        Store a finished result unless a newer pass was dispatched

        Returns:
            True if the result became the current one
        """
        if not self.is_current(result.sequence):
            logger.debug(
                f"Discarding stale pass {result.sequence} "
                f"(latest is {self._latest_sequence})"
            )
            return False

        self._last_result = result
        self._consecutive_failures = 0
        return True

    def record_failure(self, error: ValidationPassError) -> bool:
        """
        Count a failed pass unless it is stale

        Returns:
            True if the failure was counted
        """
        if not self.is_current(error.sequence):
            return False

        self._consecutive_failures += 1
        logger.warning(
            f"Validation pass {error.sequence} failed at '{error.word}', "
            f"keeping previous result ({self._consecutive_failures} in a row)"
        )
        return True

    async def submit(self, content: str) -> Optional[ValidationResult]:
        """
        Validate new content

        Args:
            content: Full poem text after the change

        Returns:
            The result to display: the new result, the previous one if this
            pass failed, or None if this pass was superseded by a newer one
        """
        sequence = self.next_sequence()

        try:
            result = await self.validator.validate(content, self.pattern, sequence=sequence)
        except ValidationPassError as e:
            if not self.record_failure(e):
                return None
            return self._last_result

        if not self.accept(result):
            return None
        return result
