from typing import Optional
from injector import singleton
from sphana_tokenizer.utils import CharacterClasses

@singleton
class SpecialCharCollapser:
    """Drops a special character when it repeats the previously kept character."""

    def collapse(self, text: str) -> str:
        return self.collapse_with_alignment(text)[0]

    def collapse_with_alignment(self, text: str, alignment: Optional[list[int]] = None) -> tuple[str, list[int]]:
        if alignment is None:
            alignment = list(range(len(text)))
        elif len(alignment) != len(text):
            raise ValueError(f"alignment length ({len(alignment)}) must match text length ({len(text)})")

        special_chars: frozenset[str] = CharacterClasses.special_chars()
        kept: list[str] = []
        kept_alignment: list[int] = []
        last: str = "\0"
        for index, c in enumerate(text):
            if c == last and c in special_chars:
                continue
            last = c
            kept.append(c)
            kept_alignment.append(alignment[index])
        return "".join(kept), kept_alignment
