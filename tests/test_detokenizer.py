import pytest
from sphana_tokenizer import Detokenizer, WordPieceTokenizer
from sphana_tokenizer.models import TokenizedToken


@pytest.fixture
def detokenizer() -> Detokenizer:
    return Detokenizer()


def test_merges_continuations(detokenizer):
    assert detokenizer.detokenize(["un", "##aff", "##able", "cat", "##s"]) == ["unaffable", "cats"]


def test_leading_continuations_are_kept(detokenizer):
    assert detokenizer.detokenize(["##s", "##s", "the"]) == ["ss", "the"]


def test_empty(detokenizer):
    assert detokenizer.detokenize([]) == []
    assert detokenizer.detokenize_aligned([], "") == []


def test_detokenize_tokens_uses_original_of_heads(detokenizer):
    tokens = [
        TokenizedToken(token="[UNK]", vocabulary_index=1, original="xyz"),
        TokenizedToken(token="cat", vocabulary_index=9, original="cat"),
        TokenizedToken(token="##s", vocabulary_index=8, original="s"),
    ]
    assert detokenizer.detokenize_tokens(tokens) == ["xyz", "cats"]


def test_detokenize_aligned(injector, detokenizer):
    text = "the cats"
    tokens = injector.get(WordPieceTokenizer).tokenize_raw_aligned(text)

    words = detokenizer.detokenize_aligned(tokens, text)

    assert [word.text for word in words] == ["the", "cats"]
    assert [(word.start, word.last_start, word.approximate_end) for word in words] == [(0, 0, 3), (4, 7, 8)]
    assert [word.from_original() for word in words] == ["the", "cats"]


def test_detokenize_aligned_orphan_run(injector, detokenizer):
    text = "the cats"
    tokens = injector.get(WordPieceTokenizer).tokenize_raw_aligned(text)

    words = detokenizer.detokenize_aligned(tokens[2:], text)

    assert [(word.text, word.start, word.approximate_end) for word in words] == [("s", 7, 8)]
