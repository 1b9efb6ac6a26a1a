"""
Error types for syllable counting and poem validation
"""

from typing import Optional


class PoemCheckError(Exception):
    """Base class for all poemcheck errors"""


class PredictorInitError(PoemCheckError):
    """The syllable model or its metadata could not be loaded"""


class InferenceError(PoemCheckError):
    """A single scoring call failed or timed out"""

    def __init__(self, word: str, cause: Optional[BaseException] = None):
        self.word = word
        self.cause = cause
        reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown"
        super().__init__(f'ML syllable counting failed for word "{word}": {reason}')


class ValidationPassError(PoemCheckError):
    """
    A validation pass could not be completed

    Wraps the InferenceError that aborted the pass. Callers usually keep
    the last good ValidationResult and try again on the next change.
    """

    def __init__(self, error: InferenceError, sequence: Optional[int] = None):
        self.word = error.word
        self.cause = error
        self.sequence = sequence
        super().__init__(f"Validation pass {sequence} failed at word '{error.word}'")
