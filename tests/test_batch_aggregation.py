"""Unit tests for corpus-level aggregation of per-pair metrics."""

from __future__ import annotations

import itertools

import pytest

from wertrace.metrics.batch import BatchTotals, aggregate_reports, aggregate_totals
from wertrace.metrics.wer import calculate_wer
from wertrace.models.datatypes import MetricsReport


def _report(total_words: int, substitutions: int = 0, deletions: int = 0) -> MetricsReport:
    errors = substitutions + deletions
    return MetricsReport(
        wer=errors / total_words,
        substitutions=substitutions,
        insertions=0,
        deletions=deletions,
        total_words=total_words,
        substitution_rate=substitutions / total_words,
        insertion_rate=0.0,
        deletion_rate=deletions / total_words,
    )


def test_corpus_wer_pools_errors_instead_of_averaging_rates() -> None:
    """Two samples (4 words, 1 error) and (6 words, 2 errors) should give 3/10."""

    totals = aggregate_reports([_report(4, substitutions=1), _report(6, deletions=2)])

    assert totals.samples == 2
    assert totals.total_words == 10
    assert totals.total_errors == 3
    assert totals.wer == pytest.approx(0.3)
    assert totals.wer != pytest.approx((0.25 + 2 / 6) / 2)
    assert totals.substitution_rate == pytest.approx(0.1)
    assert totals.deletion_rate == pytest.approx(0.2)


def test_empty_batch_is_the_identity_with_zero_rates() -> None:
    """Aggregating nothing should return the identity totals."""

    totals = aggregate_reports([])

    assert totals == BatchTotals()
    assert totals.wer == 0
    assert totals.insertion_rate == 0


def test_batch_of_empty_references_keeps_zero_guard() -> None:
    """Insertions against empty references should not divide by zero."""

    totals = aggregate_reports([calculate_wer("", "a b"), calculate_wer("", "c")])

    assert totals.insertions == 3
    assert totals.total_words == 0
    assert totals.wer == 0


def test_combine_is_commutative_and_associative() -> None:
    """Any grouping or order of partial totals should give the same result."""

    parts = [
        BatchTotals.from_report(calculate_wer("a b c", "a c")),
        BatchTotals.from_report(calculate_wer("x y", "x y z")),
        BatchTotals.from_report(calculate_wer("p q r s", "p t r s")),
    ]

    expected = aggregate_totals(parts)
    for ordering in itertools.permutations(parts):
        assert aggregate_totals(ordering) == expected
    assert (parts[0] + parts[1]) + parts[2] == parts[0] + (parts[1] + parts[2])
    assert parts[0].combine(BatchTotals()) == parts[0]


def test_from_report_lifts_counts() -> None:
    """One report should become totals with a single sample."""

    totals = BatchTotals.from_report(calculate_wer("a b c", "a x c d"))

    assert totals == BatchTotals(
        samples=1, substitutions=1, insertions=1, deletions=0, total_words=3
    )


def test_add_rejects_other_types() -> None:
    """Adding a non-totals value should raise a type error."""

    with pytest.raises(TypeError):
        BatchTotals() + 1  # type: ignore[operator]


def test_totals_payload_includes_derived_rates() -> None:
    """Serialized totals should carry counts and derived rates."""

    payload = aggregate_reports([_report(4, substitutions=1)]).to_payload()

    assert payload == {
        "samples": 1,
        "wer": 0.25,
        "substitutions": 1,
        "insertions": 0,
        "deletions": 0,
        "totalWords": 4,
        "substitutionRate": 0.25,
        "insertionRate": 0.0,
        "deletionRate": 0.0,
    }
