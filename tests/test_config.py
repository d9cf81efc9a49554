"""Tests for configuration helpers."""

from pathlib import Path

import pytest
import yaml

from sphana_tokenizer import InvalidConfigurationException, TokenizerConfig, load_config


def test_defaults():
    cfg = TokenizerConfig()

    assert cfg.vocabulary_path is None
    assert cfg.cased is False
    assert cfg.max_tokens == 256
    assert cfg.max_word_length == 50
    assert cfg.special_tokens.classification == "[CLS]"
    assert cfg.space_delimiters == [" ", "   ", "\r\n"]
    assert "–" in cfg.punctuation_delimiters
    assert cfg.approx_char_to_token_ratio == 5
    assert cfg.realign_slack_ratio == 0.25
    assert cfg.realign_min_slack == 32


def test_load_config_without_path():
    assert load_config(None) == TokenizerConfig()


def test_load_config(tmp_path):
    cfg_path = tmp_path / "tokenizer.yaml"
    data = {
        "sphana": {
            "tokenizer": {
                "vocabulary_path": "vocab.txt",
                "cased": True,
                "max_tokens": 128,
                "special_tokens": {"unknown": "<unk>"},
            }
        }
    }
    cfg_path.write_text(yaml.safe_dump(data))

    cfg = load_config(cfg_path)

    assert cfg.vocabulary_path == (tmp_path / "vocab.txt").resolve()
    assert cfg.cased is True
    assert cfg.max_tokens == 128
    assert cfg.special_tokens.unknown == "<unk>"
    assert cfg.special_tokens.classification == "[CLS]"


def test_absolute_vocabulary_path_is_kept(tmp_path):
    vocabulary_path = tmp_path / "elsewhere" / "vocab.txt"
    cfg_path = tmp_path / "tokenizer.yaml"
    cfg_path.write_text(yaml.safe_dump({"sphana": {"tokenizer": {"vocabulary_path": str(vocabulary_path)}}}))

    assert load_config(str(cfg_path)).vocabulary_path == vocabulary_path


def test_missing_section_gives_defaults(tmp_path):
    cfg_path = tmp_path / "tokenizer.yaml"
    cfg_path.write_text(yaml.safe_dump({"sphana": {"rag": {}}}))

    assert load_config(cfg_path) == TokenizerConfig()


def test_missing_file(tmp_path):
    with pytest.raises(InvalidConfigurationException):
        load_config(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    cfg_path = tmp_path / "tokenizer.yaml"
    cfg_path.write_text("sphana: [unclosed")

    with pytest.raises(InvalidConfigurationException):
        load_config(cfg_path)


@pytest.mark.parametrize("overrides", [
    {"max_tokens": 0},
    {"max_word_length": -1},
    {"approx_char_to_token_ratio": 0},
    {"space_delimiters": [" ", ""]},
])
def test_invalid_values(tmp_path, overrides):
    cfg_path = tmp_path / "tokenizer.yaml"
    cfg_path.write_text(yaml.safe_dump({"sphana": {"tokenizer": overrides}}))

    with pytest.raises(InvalidConfigurationException) as exc_info:
        load_config(cfg_path)
    assert exc_info.value.diagnostic_code == "20400"


def test_path_expansion():
    cfg = TokenizerConfig(vocabulary_path="~/vocab.txt")
    assert cfg.vocabulary_path == Path("~/vocab.txt").expanduser()
