"""Deterministic text normalization rules.

Responsibilities:
- Provide composable rules for case folding, punctuation replacement,
  and whitespace collapsing.
- Apply enabled rules in a fixed order so output never depends on which
  subset of options is set.
- Split normalized text into whitespace-delimited tokens.
"""

from __future__ import annotations

import re
from typing import Protocol

from ..models.datatypes import PreprocessingOptions

# ASCII word characters, whitespace, and the extended Latin blocks survive.
_PUNCTUATION_RE = re.compile(r"[^A-Za-z0-9_\s\u00C0-\u024F\u1E00-\u1EFF]")
_WHITESPACE_RE = re.compile(r"\s+")


class NormalizationRule(Protocol):
    """Protocol for text normalization rules."""

    def apply(self, text: str) -> str:
        """Apply a single normalization transformation."""


class LowercaseText:
    """Fold text to lowercase."""

    def apply(self, text: str) -> str:
        return text.lower()


class ReplacePunctuation:
    """Replace punctuation with spaces so adjacent words stay separate."""

    def apply(self, text: str) -> str:
        """Replace each non-word, non-space character with one space."""

        return _PUNCTUATION_RE.sub(" ", text)


class CollapseWhitespace:
    """Collapse whitespace runs to single spaces and trim both ends."""

    def apply(self, text: str) -> str:
        return _WHITESPACE_RE.sub(" ", text).strip()


class TextNormalizer:
    """Apply the rules enabled by `PreprocessingOptions` in canonical order."""

    def __init__(self, options: PreprocessingOptions) -> None:
        """Build the rule sequence lowercase -> depunctuate -> collapse."""

        self.options = options
        self.rules: list[NormalizationRule] = []
        if options.lowercase:
            self.rules.append(LowercaseText())
        if options.remove_punctuation:
            self.rules.append(ReplacePunctuation())
        if options.remove_extra_spaces:
            self.rules.append(CollapseWhitespace())

    def normalize(self, text: str) -> str:
        """Apply all configured rules in order."""

        current = text
        for rule in self.rules:
            current = rule.apply(current)
        return current


def normalize_text(text: str, options: PreprocessingOptions) -> str:
    """Normalize one text with the given options."""

    return TextNormalizer(options).normalize(text)


def tokenize(text: str) -> list[str]:
    """Split text on whitespace, dropping empty fragments."""

    return [token for token in _WHITESPACE_RE.split(text) if token]


def prepare_tokens(text: str, options: PreprocessingOptions | None) -> list[str]:
    """Normalize text when options are given, then tokenize.

    Passing `None` tokenizes the text verbatim.
    """

    if options is not None:
        text = normalize_text(text, options)
    return tokenize(text)
