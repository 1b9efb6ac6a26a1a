"""
Syllable Predictors
Machine-learned fallback for words missing from the lexicon or still being typed
"""

import asyncio
import json
import logging
import math
import time
from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Callable, Optional

import numpy as np
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import InferenceError, PredictorInitError
from .lexicon import normalize_word

logger = logging.getLogger(__name__)


class ModelMetadata(BaseModel):
    """Character encoding contract of the syllable model"""

    max_word_length: int = Field(gt=0)
    alphabet: list[str] = Field(min_length=1)
    alphabet_size: int = Field(gt=0)

    @field_validator("alphabet", mode="before")
    @classmethod
    def _split_alphabet(cls, value):
        # Accept "abc..." as well as ["a", "b", "c", ...]
        if isinstance(value, str):
            return list(value)
        return value

    @model_validator(mode="after")
    def _check_alphabet_size(self):
        if any(len(char) != 1 for char in self.alphabet):
            raise ValueError("alphabet entries must be single characters")
        if self.alphabet_size < len(self.alphabet):
            raise ValueError(
                f"alphabet_size {self.alphabet_size} is smaller than "
                f"the alphabet ({len(self.alphabet)} characters)"
            )
        return self

    @cached_property
    def char_index(self) -> dict[str, int]:
        return {char: i for i, char in enumerate(self.alphabet)}

    @classmethod
    def from_file(cls, path: str | Path) -> "ModelMetadata":
        """
        Load metadata from JSON

        The fields may sit at the top level or under "character_encoding".

        Raises:
            PredictorInitError: if the file is missing or incomplete
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls.model_validate(data.get("character_encoding", data))
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            raise PredictorInitError(f"Invalid model metadata {path}: {e}") from e


def encode_word(word: str, metadata: ModelMetadata) -> np.ndarray:
    """
    One-hot encode a word into a [1, max_word_length, alphabet_size] tensor

    Characters past max_word_length are truncated; characters outside the
    alphabet leave an all-zero row.
    """
    clean_word = normalize_word(word)
    tensor = np.zeros(
        (1, metadata.max_word_length, metadata.alphabet_size), dtype=np.float32
    )
    index = metadata.char_index

    for position, char in enumerate(clean_word[: metadata.max_word_length]):
        char_index = index.get(char)
        if char_index is not None:
            tensor[0, position, char_index] = 1.0

    return tensor


def round_syllables(raw: float) -> int:
    """Round half up to the nearest integer, never below 1"""
    return max(1, math.floor(raw + 0.5))


class BasePredictor(ABC):
    """Abstract base class for syllable predictors."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the predictor. Idempotent.

        Raises:
            PredictorInitError: if the predictor cannot be made ready
        """
        pass

    @abstractmethod
    async def score(self, word: str) -> int:
        """Predict the syllable count of a word.

        Args:
            word: Raw or normalized word

        Returns:
            Syllable count, at least 1 for any non-empty word

        Raises:
            InferenceError: if the prediction fails
        """
        pass

    async def try_initialize(self) -> bool:
        """Initialize and report success instead of raising"""
        try:
            await self.initialize()
            return True
        except PredictorInitError as e:
            logger.error(f"Failed to initialize syllable predictor: {e}")
            return False

    def dispose(self) -> None:
        """Release any held resources"""


def _create_onnx_session(model_path: str):
    import onnxruntime as ort

    return ort.InferenceSession(model_path, providers=["CPUExecutionProvider"])


class OnnxSyllablePredictor(BasePredictor):
    """
    Syllable predictor backed by an ONNX model

    The inference session is created lazily on first use and shared by
    every later call. Concurrent first callers all await the same loading
    task, so the model is only loaded once.
    """

    def __init__(
        self,
        model_path: str | Path,
        metadata: ModelMetadata | str | Path,
        timeout: Optional[float] = 3.0,
        session_factory: Optional[Callable[[str], Any]] = None,
    ):
        """
        Initialize predictor

        Args:
            model_path: Path to the .onnx model
            metadata: ModelMetadata or path to the metadata JSON
            timeout: Seconds before a scoring call counts as failed (None disables)
            session_factory: Builds the session from a path (onnxruntime by default)
        """
        self.model_path = str(model_path)
        self._metadata_source = metadata
        self.metadata: Optional[ModelMetadata] = (
            metadata if isinstance(metadata, ModelMetadata) else None
        )
        self.timeout = timeout
        self._session_factory = session_factory or _create_onnx_session

        self._session = None
        self._input_name: Optional[str] = None
        self._output_name: Optional[str] = None
        self._init_task: Optional[asyncio.Task] = None

    @property
    def is_loaded(self) -> bool:
        return self._session is not None

    async def initialize(self) -> None:
        if self._session is not None:
            return

        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._load())
        task = self._init_task

        try:
            await asyncio.shield(task)
        except PredictorInitError:
            if self._init_task is task:
                self._init_task = None
            raise

    async def _load(self) -> None:
        logger.info(f"🚀 Loading syllable model from: {self.model_path}")

        metadata = self.metadata
        if metadata is None:
            metadata = ModelMetadata.from_file(self._metadata_source)

        try:
            session = await asyncio.to_thread(self._session_factory, self.model_path)
            input_name = session.get_inputs()[0].name
            output_name = session.get_outputs()[0].name
        except Exception as e:
            logger.error(f"Failed to load syllable model from {self.model_path}: {e}")
            raise PredictorInitError(f"ML model initialization failed: {e}") from e

        self.metadata = metadata
        self._input_name = input_name
        self._output_name = output_name
        self._session = session
        logger.info("✅ Syllable model loaded successfully")

    async def score(self, word: str) -> int:
        clean_word = normalize_word(word)
        if not clean_word:
            return 0

        try:
            # Cancelling the wait leaves the shared loading task running
            await asyncio.wait_for(self.initialize(), timeout=self.timeout)
        except (PredictorInitError, asyncio.TimeoutError) as e:
            raise InferenceError(word, e) from e

        features = encode_word(clean_word, self.metadata)
        start_time = time.perf_counter()

        try:
            outputs = await asyncio.wait_for(
                asyncio.to_thread(
                    self._session.run,
                    [self._output_name],
                    {self._input_name: features},
                ),
                timeout=self.timeout,
            )
            raw_output = float(np.asarray(outputs[0]).reshape(-1)[0])
        except Exception as e:
            # asyncio.TimeoutError included
            raise InferenceError(word, e) from e

        if not math.isfinite(raw_output):
            raise InferenceError(word, ValueError(f"non-finite model output {raw_output}"))

        syllables = round_syllables(raw_output)
        elapsed = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f'ML raw output: "{clean_word}" {raw_output:.4f} -> '
            f"{syllables} syllables ({elapsed:.2f}ms)"
        )
        return syllables

    def dispose(self) -> None:
        self._session = None
        self._input_name = None
        self._output_name = None
        self._init_task = None


class VowelHeuristicPredictor(BasePredictor):
    """
    Degraded mode: vowel-cluster counting instead of the model

    Only used when explicitly selected. Counts runs of a/e/i/o/u/y, drops
    one for a trailing silent e unless the word ends in consonant + "le".
    """

    VOWELS = frozenset("aeiouy")

    async def initialize(self) -> None:
        return None

    async def score(self, word: str) -> int:
        return self.count(word)

    @classmethod
    def count(cls, word: str) -> int:
        clean_word = "".join(c for c in word.lower() if "a" <= c <= "z")
        if not clean_word:
            return 0

        syllables = 0
        previous_was_vowel = False
        for char in clean_word:
            is_vowel = char in cls.VOWELS
            if is_vowel and not previous_was_vowel:
                syllables += 1
            previous_was_vowel = is_vowel

        # Consonant + "le" keeps its syllable: table, little
        consonant_le = (
            clean_word.endswith("le")
            and len(clean_word) > 2
            and clean_word[-3] not in cls.VOWELS
        )
        if clean_word.endswith("e") and syllables > 1 and not consonant_le:
            syllables -= 1

        return max(1, syllables)
