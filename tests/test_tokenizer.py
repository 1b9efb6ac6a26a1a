from poemcheck.tokenizer import ends_with_boundary, split_lines, tokenize


def test_empty_and_whitespace_text():
    assert tokenize("") == []
    assert tokenize("   \n\t ") == []


def test_trailing_letter_marks_last_word_partial():
    tokens = tokenize("ca")
    assert [t.word for t in tokens] == ["ca"]
    assert tokens[0].is_complete is False


def test_trailing_space_or_punctuation_completes_all():
    for text in ("cat ", "cat.", "cat,", "cat!", "cat\n"):
        tokens = tokenize(text)
        assert [t.word for t in tokens] == ["cat"], text
        assert all(t.is_complete for t in tokens), text


def test_only_last_token_of_whole_text_is_partial():
    tokens = tokenize("Spring rain\nfalls soft")
    assert [(t.word, t.line_index, t.is_complete) for t in tokens] == [
        ("Spring", 0, True),
        ("rain", 0, True),
        ("falls", 1, True),
        ("soft", 1, False),
    ]


def test_punctuation_splits_and_inner_marks_are_kept():
    tokens = tokenize("Don't stop—well-known, it’s 2024!")
    assert [t.word for t in tokens] == ["Don't", "stop", "well-known", "it’s", "2024"]


def test_casing_preserved():
    assert tokenize("Cherry Blossoms ")[0].word == "Cherry"


def test_blank_lines_keep_line_indexes():
    tokens = tokenize("one\n\n...\nfour ")
    assert [(t.word, t.line_index) for t in tokens] == [("one", 0), ("four", 3)]


def test_crlf_line_breaks():
    tokens = tokenize("one\r\ntwo\r\n")
    assert [(t.word, t.line_index) for t in tokens] == [("one", 0), ("two", 1)]
    assert all(t.is_complete for t in tokens)


def test_text_ending_in_symbol_without_words():
    assert tokenize("!!!") == []


def test_helpers():
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
    assert ends_with_boundary("word ")
    assert ends_with_boundary("word…")
    assert not ends_with_boundary("word")
    assert not ends_with_boundary("")
