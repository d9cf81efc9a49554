import pytest
from injector import Injector
from sphana_tokenizer import (
    InvalidConfigurationException,
    MalformedVocabularyException,
    TokenChunkerService,
    TokenizerConfig,
    TokenizerModule,
    Transliterator,
    Vocabulary,
    WordPieceTokenizer
)


def test_loads_vocabulary_from_config(tmp_path, vocabulary_tokens):
    vocabulary_path = tmp_path / "vocab.txt"
    vocabulary_path.write_text("\n".join(vocabulary_tokens) + "\n")

    injector = Injector([TokenizerModule(TokenizerConfig(vocabulary_path=vocabulary_path))])

    assert len(injector.get(Vocabulary)) == len(vocabulary_tokens)
    assert injector.get(WordPieceTokenizer).tokenize_simple("the cats") == ["the", "cat", "##s"]


def test_services_are_singletons(injector):
    assert injector.get(Transliterator) is injector.get(Transliterator)
    assert injector.get(Vocabulary) is injector.get(Vocabulary)
    assert injector.get(TokenChunkerService) is injector.get(TokenChunkerService)


def test_missing_vocabulary_path():
    injector = Injector([TokenizerModule(TokenizerConfig())])

    with pytest.raises(InvalidConfigurationException):
        injector.get(Vocabulary)


def test_missing_vocabulary_file(tmp_path):
    injector = Injector([TokenizerModule(TokenizerConfig(vocabulary_path=tmp_path / "missing.txt"))])

    with pytest.raises(MalformedVocabularyException):
        injector.get(Vocabulary)
