import logging
from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from sphana_tokenizer.exceptions import InvalidConfigurationException
from sphana_tokenizer.models import SpecialTokens

logger = logging.getLogger(__name__)

DEFAULT_SPACE_DELIMITERS: list[str] = [" ", "   ", "\r\n"]
DEFAULT_PUNCTUATION_DELIMITERS: str = ".,;:\\/?!#$%()=+-*\"'–_`<>&^@{}[]|~"

class TokenizerConfig(BaseModel):
    vocabulary_path: Optional[Path] = Field(default=None, description="Path to the newline-delimited vocabulary file.")
    cased: bool = Field(default=False, description="Keep the letter case of words; uncased tokenizers lower-case every piece.")
    max_tokens: int = Field(default=256, gt=0, description="Maximum number of tokens per encoded row, including special tokens.")
    max_word_length: int = Field(default=50, gt=0, description="Words longer than this are skipped by the subword tokenizer.")
    special_tokens: SpecialTokens = Field(default_factory=SpecialTokens, description="Reserved vocabulary tokens.")
    space_delimiters: list[str] = Field(default_factory=lambda: list(DEFAULT_SPACE_DELIMITERS), description="Ordered literal separators dropped when splitting words.")
    punctuation_delimiters: str = Field(default=DEFAULT_PUNCTUATION_DELIMITERS, description="Characters emitted as their own one-character pieces.")
    transliteration_exceptions: str = Field(default="", description="Characters kept as-is by the transliterator.")
    approx_char_to_token_ratio: int = Field(default=5, gt=0, description="Characters per token used to cut input text when max_chunks is set.")
    realign_slack_ratio: float = Field(default=0.25, ge=0.0, description="Extra search window per chunk character for the fuzzy realigner, counted in characters the tokenizer keeps.")
    realign_min_slack: int = Field(default=32, ge=0, description="Minimum extra search window for the fuzzy realigner, counted in characters the tokenizer keeps.")

    @field_validator("space_delimiters")
    @classmethod
    def validate_space_delimiters(cls, value: list[str]) -> list[str]:
        if any(not delimiter for delimiter in value):
            raise ValueError("space_delimiters must not contain empty strings")
        return value

    @field_validator("vocabulary_path", mode="before")
    @classmethod
    def expand_path(cls, value):
        if value is None or isinstance(value, Path):
            return value
        return Path(value).expanduser()


def load_config(path: Optional[Path | str]) -> TokenizerConfig:
    """Load a TokenizerConfig from the sphana.tokenizer section of a YAML file.

    A relative vocabulary_path is resolved against the directory of the config file.
    """
    if path is None:
        return TokenizerConfig()

    resolved: Path = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise InvalidConfigurationException(f"Config file not found at: {resolved}", {"path": str(resolved)})

    try:
        with open(resolved, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigurationException(f"Config file {resolved} is not valid YAML: {e}", {"path": str(resolved)}) from e

    if not isinstance(raw_config, dict):
        raise InvalidConfigurationException(f"Config file {resolved} must contain a mapping", {"path": str(resolved)})

    tokenizer_config: dict = (raw_config.get("sphana") or {}).get("tokenizer") or {}

    vocabulary_path = tokenizer_config.get("vocabulary_path")
    if vocabulary_path is not None and not Path(vocabulary_path).expanduser().is_absolute():
        tokenizer_config["vocabulary_path"] = resolved.parent / vocabulary_path

    try:
        config: TokenizerConfig = TokenizerConfig.model_validate(tokenizer_config)
    except ValidationError as e:
        raise InvalidConfigurationException(f"Config file {resolved} is invalid: {e}", {"path": str(resolved)}) from e

    logger.info(f"TokenizerConfig loaded from {resolved}")
    return config
