"""Unit tests for single-pair WER metrics and the grouped error view."""

from __future__ import annotations

import random

import pytest

from wertrace.alignment.aligner import align_tokens
from wertrace.metrics.wer import (
    calculate_wer,
    calculate_wer_with_defaults,
    compute_metrics,
    error_statistics,
    safe_rate,
)
from wertrace.models.datatypes import EditOperation, PreprocessingOptions


def test_identical_texts_score_zero() -> None:
    """Identical texts should have no errors and four correct entries."""

    report = calculate_wer("The quick brown fox", "The quick brown fox")

    assert report.wer == 0
    assert report.total_words == 4
    assert [entry.operation for entry in report.alignment] == [EditOperation.CORRECT] * 4


def test_one_substitution_in_two_words_is_half() -> None:
    """A single substituted word out of two should give WER 0.5."""

    report = calculate_wer("Hello world", "Hello word")

    assert report.substitutions == 1
    assert report.insertions == 0
    assert report.deletions == 0
    assert report.wer == pytest.approx(0.5)
    assert report.substitution_rate == pytest.approx(0.5)
    assert report.detailed_errors[0].reference_word == "world"
    assert report.detailed_errors[0].prediction_word == "word"


def test_empty_reference_reports_zero_rates() -> None:
    """An empty reference should report zero WER while keeping the insertion."""

    report = calculate_wer("", "hello")

    assert report.total_words == 0
    assert report.wer == 0
    assert report.insertion_rate == 0
    assert report.insertions == 1
    assert [entry.operation for entry in report.alignment] == [EditOperation.INSERTION]


def test_dropped_word_is_one_third() -> None:
    """One deletion out of three reference words should give WER 1/3."""

    report = calculate_wer("a b c", "a c")

    assert report.deletions == 1
    assert report.detailed_errors[0].reference_word == "b"
    assert report.wer == pytest.approx(1 / 3)
    assert report.deletion_rate == pytest.approx(1 / 3)


def test_normalization_makes_punctuated_texts_match() -> None:
    """Lowercasing and punctuation removal should make these texts identical."""

    options = PreprocessingOptions(lowercase=True, remove_punctuation=True)

    assert calculate_wer("Hello, world!", "hello world", options).wer == 0
    assert calculate_wer_with_defaults("Hello, world!", "hello world").wer == 0


def test_without_options_tokens_are_compared_verbatim() -> None:
    """Verbatim tokenization should count case and punctuation differences."""

    report = calculate_wer("Hello, world!", "hello world")

    assert report.substitutions == 2
    assert report.wer == pytest.approx(1.0)


def test_wer_can_exceed_one() -> None:
    """Insertions beyond the reference length should push WER above 1."""

    report = calculate_wer("a", "x y z")

    assert report.substitutions == 1
    assert report.insertions == 2
    assert report.wer == pytest.approx(3.0)
    assert error_statistics(report).accuracy == pytest.approx(-2.0)


def test_compute_metrics_on_empty_alignment() -> None:
    """No entries should produce an all-zero report."""

    report = compute_metrics(())

    assert report.total_words == 0
    assert report.total_errors == 0
    assert report.wer == 0
    assert report.alignment == ()
    assert report.detailed_errors == ()


def test_compute_metrics_projects_errors_when_not_given() -> None:
    """Error details should be derived from the alignment when omitted."""

    result = align_tokens(["a", "b", "c"], ["a", "x"])

    report = compute_metrics(result.alignment)

    assert report.detailed_errors == result.detailed_errors
    assert report.total_words == 3


def test_rate_consistency_holds_for_arbitrary_inputs() -> None:
    """Counts should match non-correct entries and WER should match counts."""

    generator = random.Random(42)
    vocabulary = ["a", "b", "c", "d"]
    for _ in range(150):
        reference = " ".join(
            generator.choice(vocabulary) for _ in range(generator.randint(0, 8))
        )
        prediction = " ".join(
            generator.choice(vocabulary) for _ in range(generator.randint(0, 8))
        )

        report = calculate_wer(reference, prediction)

        non_correct = [entry for entry in report.alignment if entry.operation.is_error]
        assert report.total_errors == len(non_correct) == len(report.detailed_errors)
        assert report.total_words == len(reference.split())
        expected = report.total_errors / report.total_words if report.total_words else 0
        assert report.wer == pytest.approx(expected)


def test_error_statistics_groups_errors_by_type() -> None:
    """Grouped view should split errors per type with matching rates."""

    report = calculate_wer("a b c d", "a x c d e")

    statistics = error_statistics(report)

    assert statistics.substitutions.count == 1
    assert statistics.substitutions.errors[0].reference_word == "b"
    assert statistics.substitutions.rate == pytest.approx(0.25)
    assert statistics.insertions.count == 1
    assert statistics.insertions.errors[0].prediction_word == "e"
    assert statistics.deletions.count == 0
    assert statistics.deletions.errors == ()
    assert statistics.total_errors == 2
    assert statistics.accuracy == pytest.approx(0.5)


def test_report_payload_uses_external_field_names() -> None:
    """Payload should expose camelCase keys and omit absent positions."""

    payload = calculate_wer("a b", "a b c").to_payload()

    assert payload["totalWords"] == 2
    assert payload["insertionRate"] == pytest.approx(0.5)
    assert payload["alignment"][2] == {
        "reference": "",
        "prediction": "c",
        "type": "insertion",
        "predictionPosition": 2,
    }
    assert payload["detailedErrors"] == [
        {"type": "insertion", "predictionWord": "c", "predictionPosition": 2}
    ]


def test_statistics_payload_includes_accuracy() -> None:
    """Grouped payload should carry per-type blocks and accuracy."""

    payload = error_statistics(calculate_wer("a b", "a c")).to_payload()

    assert payload["substitutions"]["count"] == 1
    assert payload["insertions"] == {"count": 0, "errors": [], "rate": 0.0}
    assert payload["totalErrors"] == 1
    assert payload["accuracy"] == pytest.approx(0.5)


@pytest.mark.parametrize(
    ("count", "total", "expected"),
    [(1, 4, 0.25), (3, 0, 0.0), (0, 0, 0.0), (5, 2, 2.5)],
)
def test_safe_rate_guards_empty_reference(count: int, total: int, expected: float) -> None:
    """Rates should fall back to zero when there are no reference words."""

    assert safe_rate(count, total) == pytest.approx(expected)
