"""Word error rate metrics for single pairs and batches."""

from .batch import BatchTotals, aggregate_reports, aggregate_totals
from .wer import (
    calculate_wer,
    calculate_wer_with_defaults,
    compute_metrics,
    error_statistics,
    safe_rate,
)

__all__ = [
    "BatchTotals",
    "aggregate_reports",
    "aggregate_totals",
    "calculate_wer",
    "calculate_wer_with_defaults",
    "compute_metrics",
    "error_statistics",
    "safe_rate",
]
