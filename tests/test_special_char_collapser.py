import pytest
from sphana_tokenizer import SpecialCharCollapser
from sphana_tokenizer.utils import CharacterClasses


@pytest.fixture
def collapser() -> SpecialCharCollapser:
    return SpecialCharCollapser()


def test_collapses_repeated_special_characters(collapser):
    assert collapser.collapse("aa!!  !!bb") == "aa! !bb"


def test_keeps_repeated_regular_characters(collapser):
    assert collapser.collapse("aabbcc") == "aabbcc"


def test_keeps_non_adjacent_repeats(collapser):
    assert collapser.collapse("!a!") == "!a!"


@pytest.mark.parametrize("text,expected", [
    ("wait....", "wait."),
    ("a\t\tb", "a\tb"),
    ("$$5", "$5"),
    ("so——", "so—"),
    ("((x))", "(x)"),
    ("© ©©", "© ©"),
])
def test_special_character_classes(collapser, text, expected):
    assert collapser.collapse(text) == expected


def test_alignment_skips_removed_characters(collapser):
    assert collapser.collapse_with_alignment("a!!b") == ("a!b", [0, 1, 3])


def test_alignment_composes_with_upstream(collapser):
    assert collapser.collapse_with_alignment("a!!b", [10, 11, 12, 13]) == ("a!b", [10, 11, 13])


def test_empty_text(collapser):
    assert collapser.collapse_with_alignment("") == ("", [])


@pytest.mark.parametrize("c", [" ", " ", "　", "€", "©", "«", "¿", "…", "-"])
def test_special_characters(c):
    assert CharacterClasses.is_special_char(c)


@pytest.mark.parametrize("c", ["a", "Z", "7", "é"])
def test_regular_characters(c):
    assert not CharacterClasses.is_special_char(c)
