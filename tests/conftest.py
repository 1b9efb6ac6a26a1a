"""
Pytest configuration for tests
"""

import asyncio
import time
from types import SimpleNamespace

import numpy as np
import pytest
from dotenv import load_dotenv

from poemcheck import BasePredictor, InferenceError, Lexicon, ModelMetadata


def pytest_configure(config):
    """Load environment variables before running tests"""
    load_dotenv()


LEXICON_ENTRIES = {
    "spring": 1,
    "rain": 1,
    "falls": 1,
    "softly": 2,
    "cherry": 2,
    "blossoms": 2,
    "drift": 1,
    "on": 1,
    "the": 1,
    "breeze": 1,
    "new": 1,
    "life": 1,
    "begins": 2,
    "here": 1,
    "haiku": 2,
    "beauti": 3,
    "cat": 1,
    "don't": 1,
    "well-known": 2,
}


class FakeSession:
    """Stands in for onnxruntime.InferenceSession"""

    def __init__(self, output=2.0, delay=0.0, error=None):
        self.output = output
        self.delay = delay
        self.error = error
        self.calls = []

    def get_inputs(self):
        return [SimpleNamespace(name="word_input")]

    def get_outputs(self):
        return [SimpleNamespace(name="syllables")]

    def run(self, output_names, feeds):
        self.calls.append((output_names, feeds))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return [np.array([[self.output]], dtype=np.float32)]


class ScriptedPredictor(BasePredictor):
    """Predictor returning fixed counts and recording every call"""

    def __init__(self, counts=None, default=2, failing=(), delays=None):
        self.counts = dict(counts or {})
        self.default = default
        self.failing = set(failing)
        self.delays = dict(delays or {})
        self.calls = []

    async def initialize(self) -> None:
        return None

    async def score(self, word: str) -> int:
        self.calls.append(word)
        if word in self.delays:
            await asyncio.sleep(self.delays[word])
        if word in self.failing:
            raise InferenceError(word, RuntimeError("model exploded"))
        return self.counts.get(word, self.default)


@pytest.fixture
def lexicon():
    return Lexicon(LEXICON_ENTRIES)


@pytest.fixture
def metadata():
    return ModelMetadata(
        max_word_length=5,
        alphabet="abcdefghijklmnopqrstuvwxyz'-",
        alphabet_size=28,
    )


@pytest.fixture
def predictor():
    return ScriptedPredictor()


@pytest.fixture
def make_predictor():
    return ScriptedPredictor


@pytest.fixture
def make_session():
    return FakeSession
