"""
Hybrid Syllable Resolver
Dictionary lookup for finished words, model prediction for the rest
"""

import asyncio
import logging
import time
from typing import Sequence

from .lexicon import Lexicon, normalize_word
from .models import SyllableBreakdown, Token, WordSyllableResult
from .predictor import BasePredictor
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class SyllableResolver:
    """
    Resolves syllable counts for tokens

    Resolution order for one token:
    - empty after normalization: 0
    - complete single letter: 1
    - complete word in the lexicon: lexicon count
    - anything else (unknown or still being typed): predictor

    InferenceError from the predictor propagates to the caller.
    """

    def __init__(
        self,
        lexicon: Lexicon,
        predictor: BasePredictor,
        concurrent: bool = True,
        enable_logging: bool = True,
    ):
        """
        Initialize resolver

        Args:
            lexicon: Static syllable dictionary
            predictor: Fallback predictor
            concurrent: Score the tokens of one pass concurrently
            enable_logging: Emit per-word debug logs
        """
        self.lexicon = lexicon
        self.predictor = predictor
        self.concurrent = concurrent
        self.enable_logging = enable_logging

    # ==================== PER TOKEN ====================

    async def resolve(self, token: Token) -> WordSyllableResult:
        """Count syllables for a single token"""
        syllables = await self._count_word(token.word, token.is_complete)
        return WordSyllableResult(
            word=token.word, syllables=syllables, is_complete=token.is_complete
        )

    async def _count_word(self, word: str, is_complete: bool) -> int:
        clean_word = normalize_word(word)
        if not clean_word:
            return 0

        start_time = time.perf_counter()

        if is_complete:
            if len(clean_word) == 1:
                self._log(f'Single letter rule: "{clean_word}" = 1 syllable')
                return 1

            dict_result = self.lexicon.lookup(clean_word)
            if dict_result is not None:
                self._log(
                    f'Dict lookup: "{clean_word}" = {dict_result} syllables '
                    f"({self._elapsed_ms(start_time):.2f}ms)"
                )
                return dict_result

            ml_result = await self.predictor.score(clean_word)
            self._log(
                f'ML inference: "{clean_word}" = {ml_result} syllables '
                f"({self._elapsed_ms(start_time):.2f}ms)"
            )
            return ml_result

        # Partial words never match the dictionary entry they will become
        ml_result = await self.predictor.score(clean_word)
        self._log(
            f'ML inference (partial): "{clean_word}" = {ml_result} syllables '
            f"({self._elapsed_ms(start_time):.2f}ms)"
        )
        return ml_result

    # ==================== AGGREGATES ====================

    async def resolve_all(self, tokens: Sequence[Token]) -> SyllableBreakdown:
        """
        Resolve every token

        Args:
            tokens: Tokens in text order

        Returns:
            SyllableBreakdown with the total and one result per token, in order
        """
        if self.concurrent:
            results = await asyncio.gather(
                *(self.resolve(token) for token in tokens), return_exceptions=True
            )
            # Report the failure of the earliest token, not the fastest one
            for result in results:
                if isinstance(result, BaseException):
                    raise result
        else:
            results = [await self.resolve(token) for token in tokens]

        return SyllableBreakdown(
            total=sum(result.syllables for result in results), words=list(results)
        )

    async def resolve_lines(self, tokens: Sequence[Token], line_count: int) -> list[int]:
        """
        Sum syllables per line for the first line_count lines

        Tokens on later lines are ignored and never resolved.

        Args:
            tokens: Tokens in text order
            line_count: Number of lines the poem pattern expects

        Returns:
            One count per expected line (0 for a missing line)
        """
        counts = [0] * line_count
        relevant = [token for token in tokens if token.line_index < line_count]

        breakdown = await self.resolve_all(relevant)
        for token, result in zip(relevant, breakdown.words):
            counts[token.line_index] += result.syllables

        return counts

    # ==================== TEXT HELPERS ====================

    async def count_text(self, text: str) -> SyllableBreakdown:
        """Count syllables in free text, with per-word breakdown"""
        return await self.resolve_all(tokenize(text))

    async def count_lines(self, content: str, expected: Sequence[int]) -> list[int]:
        """
        Count syllables per line of a poem

        Args:
            content: Poem text
            expected: Expected syllables per line (only its length is used)

        Returns:
            Actual syllables per expected line
        """
        if not content or not content.strip():
            return [0] * len(expected)

        start_time = time.perf_counter()
        counts = await self.resolve_lines(tokenize(content), len(expected))
        self._log(
            f"Poem validation: {counts} vs {list(expected)} "
            f"({self._elapsed_ms(start_time):.2f}ms total)"
        )
        return counts

    # ==================== PRIVATE HELPERS ====================

    def _log(self, message: str):
        if self.enable_logging:
            logger.debug(message)

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000
