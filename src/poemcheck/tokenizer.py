"""
Tokenizer: raw poem text -> word tokens with line index and completeness
"""

import re
import unicodedata

from .models import Token

WORD_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9'’-]*")
_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text on line breaks, tolerating \\r\\n"""
    return _LINE_BREAK.split(text)


def ends_with_boundary(text: str) -> bool:
    """True if the last character is whitespace or Unicode punctuation"""
    if not text:
        return False
    last = text[-1]
    return last.isspace() or unicodedata.category(last).startswith("P")


def tokenize(text: str) -> list[Token]:
    """
    Extract word tokens from text, top-to-bottom and left-to-right

    Every token is complete except the very last one of the text, which is
    the word still being typed unless the text ends with whitespace or
    punctuation.

    Args:
        text: Raw, possibly multi-line text

    Returns:
        Ordered list of tokens
    """
    if not text or not text.strip():
        return []

    words = [
        (match.group(0), line_index)
        for line_index, line in enumerate(split_lines(text))
        for match in WORD_PATTERN.finditer(line)
    ]
    if not words:
        return []

    last_is_partial = not ends_with_boundary(text)
    tokens = []
    for position, (word, line_index) in enumerate(words):
        is_complete = not (last_is_partial and position == len(words) - 1)
        tokens.append(Token(word=word, line_index=line_index, is_complete=is_complete))

    return tokens
