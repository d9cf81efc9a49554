import pytest
from sphana_tokenizer import TokenizerConfig, WordSplitter


@pytest.fixture
def splitter(config) -> WordSplitter:
    return WordSplitter(config)


def test_splits_words_and_punctuation(splitter):
    assert splitter.split("Hello, world!") == ["hello", ",", "world", "!"]


def test_cased_splitting_keeps_case():
    splitter = WordSplitter(TokenizerConfig(cased=True))
    assert splitter.split("Hello World") == ["Hello", "World"]


def test_separators_are_dropped_and_empty_pieces_discarded(splitter):
    assert splitter.split("a  b\r\nc") == ["a", "b", "c"]


def test_bare_newline_is_not_a_separator(splitter):
    assert splitter.split("a\nb") == ["a\nb"]


@pytest.mark.parametrize("text,expected", [
    ("don't", ["don", "'", "t"]),
    ("e-mail", ["e", "-", "mail"]),
    ("x=(1+2)", ["x", "=", "(", "1", "+", "2", ")"]),
    ("...", [".", ".", "."]),
    ("", []),
])
def test_punctuation_becomes_single_pieces(splitter, text, expected):
    assert splitter.split(text) == expected


def test_custom_delimiters():
    splitter = WordSplitter(TokenizerConfig(space_delimiters=["|"], punctuation_delimiters="/"))
    assert splitter.split("a b|c/d") == ["a b", "c", "/", "d"]


def test_split_aligned_offsets(splitter):
    spans = splitter.split_aligned("Hi, you")

    assert [span.text for span in spans] == ["hi", ",", "you"]
    assert [(span.start, span.approximate_end) for span in spans] == [(0, 2), (2, 3), (4, 7)]
    assert all(span.last_start == span.start for span in spans)
    assert all(span.original_text == "Hi, you" for span in spans)
