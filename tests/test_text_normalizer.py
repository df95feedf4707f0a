"""Unit tests for text normalization rules and tokenization."""

from __future__ import annotations

import pytest

from wertrace.models.datatypes import PreprocessingOptions
from wertrace.text.normalizer import (
    CollapseWhitespace,
    LowercaseText,
    ReplacePunctuation,
    TextNormalizer,
    normalize_text,
    prepare_tokens,
    tokenize,
)

ALL_ON = PreprocessingOptions()
ALL_OFF = PreprocessingOptions(lowercase=False, remove_punctuation=False, remove_extra_spaces=False)


def test_all_rules_normalize_mixed_case_punctuated_text() -> None:
    """Enabled rules should fold case, drop punctuation, and collapse spaces."""

    assert normalize_text("  Hello,   World! ", ALL_ON) == "hello world"


def test_punctuation_is_replaced_not_deleted() -> None:
    """Punctuation between words should leave the words separate."""

    options = PreprocessingOptions(lowercase=False, remove_extra_spaces=False)

    assert normalize_text("fox,dog", options) == "fox dog"
    assert tokenize(normalize_text("fox,dog", options)) == ["fox", "dog"]


def test_disabled_rules_leave_text_untouched() -> None:
    """With every switch off the text should come back verbatim."""

    assert normalize_text("  A,b  C ", ALL_OFF) == "  A,b  C "


def test_rules_apply_in_fixed_order_for_any_subset() -> None:
    """Depunctuation runs before collapsing even when lowercase is off."""

    options = PreprocessingOptions(lowercase=False)

    assert normalize_text("Fox,  Dog.", options) == "Fox Dog"


def test_extended_latin_letters_survive_punctuation_removal() -> None:
    """Letters from the Latin-1 supplement and extended blocks are word characters."""

    options = PreprocessingOptions(lowercase=False)

    assert normalize_text("Café naïve Ḁ", options) == "Café naïve Ḁ"
    assert normalize_text("crème-brûlée", options) == "crème brûlée"


def test_underscore_and_digits_are_word_characters() -> None:
    """Digits and underscores should not be treated as punctuation."""

    assert normalize_text("snake_case 42!", ALL_ON) == "snake_case 42"


def test_collapse_whitespace_trims_and_joins_runs() -> None:
    """Whitespace-only normalization should collapse tabs and newlines."""

    options = PreprocessingOptions(lowercase=False, remove_punctuation=False)

    assert normalize_text("  a \t b\n", options) == "a b"


def test_lowercase_only_keeps_punctuation_and_spacing() -> None:
    """Lowercase rule alone should not touch punctuation or spacing."""

    options = PreprocessingOptions(remove_punctuation=False, remove_extra_spaces=False)

    assert normalize_text(" Hello,  World ", options) == " hello,  world "


def test_text_normalizer_builds_only_enabled_rules_in_order() -> None:
    """Rule list should follow lowercase -> depunctuate -> collapse."""

    normalizer = TextNormalizer(ALL_ON)
    assert [type(rule) for rule in normalizer.rules] == [
        LowercaseText,
        ReplacePunctuation,
        CollapseWhitespace,
    ]

    partial = TextNormalizer(PreprocessingOptions(lowercase=False, remove_punctuation=False))
    assert [type(rule) for rule in partial.rules] == [CollapseWhitespace]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", []),
        ("   ", []),
        ("one", ["one"]),
        ("  a  b\tc \n", ["a", "b", "c"]),
    ],
)
def test_tokenize_splits_on_whitespace_and_drops_empty_fragments(
    text: str, expected: list[str]
) -> None:
    """Tokenization should never yield empty tokens."""

    assert tokenize(text) == expected


def test_prepare_tokens_without_options_tokenizes_verbatim() -> None:
    """Absent options should skip every normalization rule."""

    assert prepare_tokens("Hello, world", None) == ["Hello,", "world"]
    assert prepare_tokens("Hello, world", ALL_ON) == ["hello", "world"]
