"""Top-level package for wertrace.

This package computes word error rate (WER) between reference and predicted
transcripts together with a token-level alignment trace. The main entry
points are `calculate_wer` for one pair and `WerPipeline` for datasets.
"""

from .alignment import align_tokens, format_alignment
from .metrics import calculate_wer, calculate_wer_with_defaults, error_statistics
from .models import PreprocessingOptions
from .pipeline import WerPipeline

__all__ = [
    "PreprocessingOptions",
    "WerPipeline",
    "__version__",
    "align_tokens",
    "calculate_wer",
    "calculate_wer_with_defaults",
    "error_statistics",
    "format_alignment",
]

__version__ = "0.1.0"
