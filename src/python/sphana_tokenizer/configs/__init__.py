from .tokenizer_config import TokenizerConfig, load_config

__all__ = [
    "TokenizerConfig",
    "load_config"
]
