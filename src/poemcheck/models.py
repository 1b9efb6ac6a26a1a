"""
Pydantic Models for Poem Validation
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class Token(BaseModel):
    """A single word extracted from the poem text"""

    model_config = ConfigDict(frozen=True)

    word: str = Field(description="Raw word as typed (casing preserved)")
    line_index: int = Field(ge=0, description="Zero-based line the word sits on")
    is_complete: bool = Field(
        default=True, description="False for the trailing word still being typed"
    )


class WordSyllableResult(BaseModel):
    """Syllable count for one token"""

    word: str
    syllables: int = Field(ge=0)
    is_complete: bool = True


class SyllableBreakdown(BaseModel):
    """Total syllables plus the per-word breakdown"""

    total: int = Field(default=0, ge=0)
    words: list[WordSyllableResult] = Field(default_factory=list)


class PoemPattern(BaseModel):
    """A poem form: one expected syllable count per line"""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Catalog identifier, e.g. 'haiku'")
    name: str = Field(description="Display name, e.g. 'Haiku'")
    description: str = ""
    syllables: tuple[PositiveInt, ...] = Field(min_length=1)

    @property
    def line_count(self) -> int:
        return len(self.syllables)


class ValidationResult(BaseModel):
    """Result of one validation pass"""

    is_valid: bool = Field(description="Complete and every line matches")
    is_complete: bool = Field(description="All lines present and matching")
    syllable_counts: list[int] = Field(description="Actual syllables per expected line")
    feedback: str = ""
    has_all_required_lines: bool = False
    structure_matches: bool = False
    pattern_key: Optional[str] = None
    sequence: Optional[int] = Field(
        default=None, description="Request sequence number of the pass"
    )
