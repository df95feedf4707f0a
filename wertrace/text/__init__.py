"""Text preprocessing and tokenization components.

This package provides the deterministic normalization rules applied to
reference and prediction texts before alignment.
"""

from .normalizer import (
    CollapseWhitespace,
    LowercaseText,
    ReplacePunctuation,
    TextNormalizer,
    normalize_text,
    prepare_tokens,
    tokenize,
)

__all__ = [
    "TextNormalizer",
    "LowercaseText",
    "ReplacePunctuation",
    "CollapseWhitespace",
    "normalize_text",
    "prepare_tokens",
    "tokenize",
]
