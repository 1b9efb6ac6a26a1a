import pytest

from poemcheck.patterns import (
    POEM_PATTERNS,
    PREFERENCE_ORDER,
    detect_pattern,
    get_pattern,
    list_patterns,
)


def test_catalog_contents():
    assert get_pattern("haiku").syllables == (5, 7, 5)
    assert get_pattern("tanka").syllables == (5, 7, 5, 7, 7)
    assert get_pattern("cinquain").syllables == (2, 4, 6, 8, 2)
    assert get_pattern("nonet").line_count == 9
    assert get_pattern("etheree").syllables[0] == 1
    assert get_pattern("etheree_desc").syllables[0] == 10
    assert [p.key for p in list_patterns()] == list(POEM_PATTERNS)


def test_preference_order_covers_catalog():
    assert set(PREFERENCE_ORDER) == set(POEM_PATTERNS)


def test_unknown_pattern():
    with pytest.raises(ValueError, match="limerick"):
        get_pattern("limerick")


@pytest.mark.parametrize(
    "content,expected",
    [
        ("", "haiku"),
        ("   \n  ", "haiku"),
        ("one\ntwo\nthree", "haiku"),
        ("a\nb\nc\nd\ne", "tanka"),
        ("a\nb\nc\nd\ne\nf", "shadorma"),
        ("\n".join("x" * 9), "nonet"),
        ("\n".join("x" * 10), "etheree"),
        ("one\ntwo", "haiku"),
        ("a\n\nb\n\nc\n", "haiku"),
    ],
)
def test_detect_pattern(content, expected):
    assert detect_pattern(content) == expected
