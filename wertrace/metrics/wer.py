"""Word error rate computation for single reference/prediction pairs.

Responsibilities:
- Tally alignment entries into substitution, insertion, and deletion counts.
- Derive WER and per-type rates relative to the reference token count.
- Provide the grouped per-type view used by presentation layers.

Rates are reported as `0.0` when the reference has no tokens.
"""

from __future__ import annotations

from typing import Sequence

from ..alignment.aligner import DEFAULT_MAX_TOKENS, align_tokens
from ..models.datatypes import (
    DEFAULT_PREPROCESSING_OPTIONS,
    AlignmentEntry,
    EditOperation,
    ErrorDetail,
    ErrorStatistics,
    ErrorTypeSummary,
    MetricsReport,
    PreprocessingOptions,
)
from ..text.normalizer import prepare_tokens


def safe_rate(count: int, total_words: int) -> float:
    """Divide `count` by `total_words`, returning `0.0` for an empty reference."""

    if total_words <= 0:
        return 0.0
    return count / total_words


def compute_metrics(
    alignment: Sequence[AlignmentEntry],
    detailed_errors: Sequence[ErrorDetail] | None = None,
) -> MetricsReport:
    """Build a metrics report from an alignment trace.

    Args:
        alignment: Forward-ordered alignment entries.
        detailed_errors: Precomputed error details; projected from
            `alignment` when omitted.

    Returns:
        Report with counts, zero-guarded rates, and the trace itself.
    """

    counts = {
        EditOperation.SUBSTITUTION: 0,
        EditOperation.INSERTION: 0,
        EditOperation.DELETION: 0,
    }
    total_words = 0
    for entry in alignment:
        if entry.operation in counts:
            counts[entry.operation] += 1
        if entry.reference_position is not None:
            total_words += 1

    if detailed_errors is None:
        detailed_errors = [
            entry.to_error_detail() for entry in alignment if entry.operation.is_error
        ]

    substitutions = counts[EditOperation.SUBSTITUTION]
    insertions = counts[EditOperation.INSERTION]
    deletions = counts[EditOperation.DELETION]
    return MetricsReport(
        wer=safe_rate(substitutions + insertions + deletions, total_words),
        substitutions=substitutions,
        insertions=insertions,
        deletions=deletions,
        total_words=total_words,
        substitution_rate=safe_rate(substitutions, total_words),
        insertion_rate=safe_rate(insertions, total_words),
        deletion_rate=safe_rate(deletions, total_words),
        alignment=tuple(alignment),
        detailed_errors=tuple(detailed_errors),
    )


def calculate_wer(
    reference: str,
    prediction: str,
    options: PreprocessingOptions | None = None,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> MetricsReport:
    """Normalize, tokenize, align, and score one reference/prediction pair.

    Without `options` both texts are tokenized verbatim.
    """

    reference_tokens = prepare_tokens(reference, options)
    prediction_tokens = prepare_tokens(prediction, options)
    result = align_tokens(reference_tokens, prediction_tokens, max_tokens=max_tokens)
    return compute_metrics(result.alignment, result.detailed_errors)


def calculate_wer_with_defaults(reference: str, prediction: str) -> MetricsReport:
    """Score a pair with lowercase, punctuation, and whitespace normalization on."""

    return calculate_wer(reference, prediction, DEFAULT_PREPROCESSING_OPTIONS)


def error_statistics(report: MetricsReport) -> ErrorStatistics:
    """Group a report's detailed errors by type."""

    def _summary(operation: EditOperation, rate: float) -> ErrorTypeSummary:
        errors = tuple(
            error for error in report.detailed_errors if error.operation is operation
        )
        return ErrorTypeSummary(count=len(errors), errors=errors, rate=rate)

    return ErrorStatistics(
        substitutions=_summary(EditOperation.SUBSTITUTION, report.substitution_rate),
        insertions=_summary(EditOperation.INSERTION, report.insertion_rate),
        deletions=_summary(EditOperation.DELETION, report.deletion_rate),
        total_errors=report.total_errors,
        accuracy=1 - report.wer,
    )
