"""Alignment utilities for matching reference tokens to hypothesis tokens."""

from .aligner import DEFAULT_MAX_TOKENS, align_tokens
from .cost_matrix import CostMatrix
from .formatting import format_alignment

__all__ = ["DEFAULT_MAX_TOKENS", "CostMatrix", "align_tokens", "format_alignment"]
