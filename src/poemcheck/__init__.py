"""Poem syllable counting and validation.

This module provides:
- Hybrid syllable counting (CMU-derived dictionary + ONNX model fallback)
- Live tokenization that tells finished words from the one being typed
- Structure validation against haiku, tanka, cinquain and other forms
- Out-of-order safe validation sessions for editors

Architecture:
    Lexicon: Static word -> syllable table
    OnnxSyllablePredictor: Model-based fallback, lazily loaded once
    VowelHeuristicPredictor: Explicit degraded mode without the model
    SyllableResolver: Per-token dictionary/model routing and line totals
    StructureValidator: Pattern comparison and writer feedback
    ValidationSession: Sequence-numbered passes with last-good retention
    CounterConfig: Asset paths, inference settings and factories
"""

from .config import CounterConfig
from .errors import (
    InferenceError,
    PoemCheckError,
    PredictorInitError,
    ValidationPassError,
)
from .lexicon import Lexicon, normalize_word
from .models import (
    PoemPattern,
    SyllableBreakdown,
    Token,
    ValidationResult,
    WordSyllableResult,
)
from .patterns import POEM_PATTERNS, detect_pattern, get_pattern, list_patterns
from .predictor import (
    BasePredictor,
    ModelMetadata,
    OnnxSyllablePredictor,
    VowelHeuristicPredictor,
)
from .resolver import SyllableResolver
from .session import ValidationSession
from .tokenizer import tokenize
from .validator import StructureValidator

__version__ = "0.1.0"

__all__ = [
    # Engine
    "SyllableResolver",
    "StructureValidator",
    "ValidationSession",
    "CounterConfig",
    # Components
    "Lexicon",
    "BasePredictor",
    "OnnxSyllablePredictor",
    "VowelHeuristicPredictor",
    "ModelMetadata",
    "tokenize",
    "normalize_word",
    # Patterns
    "POEM_PATTERNS",
    "get_pattern",
    "detect_pattern",
    "list_patterns",
    # Models
    "Token",
    "WordSyllableResult",
    "SyllableBreakdown",
    "PoemPattern",
    "ValidationResult",
    # Errors
    "PoemCheckError",
    "PredictorInitError",
    "InferenceError",
    "ValidationPassError",
]
