import pytest
from injector import Injector
from sphana_tokenizer import TokenizerConfig, TokenizerModule, Vocabulary

VOCABULARY_TOKENS = [
    "[PAD]", "[UNK]", "[CLS]", "[SEP]",
    "the", "sat", "on", "mat", "##s", "cat",
    "un", "##aff", "##able", "hello", "world",
    ",", ".", "!", "cafe", "dog", "##g", "a", "b", "##b"
]

@pytest.fixture
def vocabulary() -> Vocabulary:
    return Vocabulary.load(VOCABULARY_TOKENS)

@pytest.fixture
def config() -> TokenizerConfig:
    return TokenizerConfig()

@pytest.fixture
def injector(config, vocabulary) -> Injector:
    return Injector([TokenizerModule(config, vocabulary)])

@pytest.fixture
def vocabulary_tokens() -> list[str]:
    return list(VOCABULARY_TOKENS)
