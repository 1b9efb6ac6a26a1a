"""
Counter Configuration - asset paths, inference settings and component factories
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .lexicon import Lexicon
from .predictor import BasePredictor, OnnxSyllablePredictor, VowelHeuristicPredictor
from .resolver import SyllableResolver
from .validator import StructureValidator

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class CounterConfig:
    """Configuration for the syllable counting engine"""

    # Asset settings
    lexicon_path: str = "data/cmu-syllables.json"
    model_path: str = "models/syllable_model.onnx"
    metadata_path: str = "models/model_metadata.json"

    # Inference settings
    inference_timeout: float = 3.0
    concurrent_scoring: bool = True
    degraded_mode: bool = False  # Vowel counting instead of the model

    # Session settings
    failure_threshold: int = 3

    enable_logging: bool = True

    @classmethod
    def from_env(cls) -> "CounterConfig":
        """Build a config from POEMCHECK_* environment variables"""
        defaults = cls()
        return cls(
            lexicon_path=os.getenv("POEMCHECK_LEXICON_PATH", defaults.lexicon_path),
            model_path=os.getenv("POEMCHECK_MODEL_PATH", defaults.model_path),
            metadata_path=os.getenv("POEMCHECK_METADATA_PATH", defaults.metadata_path),
            inference_timeout=float(
                os.getenv("POEMCHECK_INFERENCE_TIMEOUT", defaults.inference_timeout)
            ),
            degraded_mode=os.getenv("POEMCHECK_DEGRADED_MODE", "").lower() in _TRUE_VALUES,
            failure_threshold=int(
                os.getenv("POEMCHECK_FAILURE_THRESHOLD", defaults.failure_threshold)
            ),
        )

    # ==================== FACTORIES ====================

    def build_lexicon(self) -> Lexicon:
        """Load the lexicon; a missing file yields an empty one"""
        path = Path(self.lexicon_path)
        if not path.exists():
            logger.warning(
                f"Lexicon not found at {path}, every word will use the predictor"
            )
            return Lexicon.empty()
        return Lexicon.from_json(path)

    def build_predictor(self) -> BasePredictor:
        if self.degraded_mode:
            logger.warning("⚠️  Degraded mode: counting syllables with the vowel heuristic")
            return VowelHeuristicPredictor()
        return OnnxSyllablePredictor(
            self.model_path, self.metadata_path, timeout=self.inference_timeout
        )

    def build_resolver(self) -> SyllableResolver:
        return SyllableResolver(
            self.build_lexicon(),
            self.build_predictor(),
            concurrent=self.concurrent_scoring,
            enable_logging=self.enable_logging,
        )

    def build_validator(self) -> StructureValidator:
        return StructureValidator(self.build_resolver())
