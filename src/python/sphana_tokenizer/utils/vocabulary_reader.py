import logging
from pathlib import Path
from sphana_tokenizer.exceptions import MalformedVocabularyException

logger = logging.getLogger(__name__)

class VocabularyReader:

    @staticmethod
    def read_file(path: Path | str) -> list[str]:
        resolved: Path = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise MalformedVocabularyException(f"Vocabulary file not found at: {resolved}", {"path": str(resolved)})

        try:
            with open(resolved, "r", encoding="utf-8", newline="") as f:
                lines: list[str] = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedVocabularyException(f"Vocabulary file {resolved} could not be read: {e}", {"path": str(resolved)}) from e

        logger.info(f"Read {len(lines)} vocabulary lines from {resolved}")
        return lines
