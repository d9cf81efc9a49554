import logging
from typing import Optional
from injector import Binder, Module, provider, singleton
from sphana_tokenizer.configs import TokenizerConfig
from sphana_tokenizer.exceptions import InvalidConfigurationException
from sphana_tokenizer.services.vocabulary import Vocabulary
from sphana_tokenizer.utils import VocabularyReader

class TokenizerModule(Module):
    """Binds the tokenizer configuration and its vocabulary.

    The vocabulary is read from config.vocabulary_path unless an already loaded one is given.
    Services are singletons resolved on demand.
    """

    def __init__(self, config: TokenizerConfig, vocabulary: Optional[Vocabulary] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__config = config
        self.__vocabulary = vocabulary

    def configure(self, binder: Binder) -> None:
        binder.bind(TokenizerConfig, to=self.__config)

    @singleton
    @provider
    def provide_vocabulary(self, config: TokenizerConfig) -> Vocabulary:
        if self.__vocabulary is not None:
            return self.__vocabulary
        if config.vocabulary_path is None:
            raise InvalidConfigurationException("vocabulary_path must be configured to load the vocabulary")
        lines: list[str] = VocabularyReader.read_file(config.vocabulary_path)
        self.__logger.info(f"Loading vocabulary from {config.vocabulary_path}")
        return Vocabulary.load(lines, config.special_tokens)
