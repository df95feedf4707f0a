"""Corpus-level aggregation of per-pair metrics.

Totals combine with an associative, commutative `combine`, so a batch can be
reduced in any order or split across workers and still produce the same WER.
Corpus WER is total errors over total reference words, not a mean of
per-sample rates.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Iterable

from ..models.datatypes import MetricsReport
from .wer import safe_rate


@dataclass(frozen=True, slots=True)
class BatchTotals:
    """Summed counts across evaluated samples.

    `BatchTotals()` is the identity element for `combine`.
    """

    samples: int = 0
    substitutions: int = 0
    insertions: int = 0
    deletions: int = 0
    total_words: int = 0

    @classmethod
    def from_report(cls, report: MetricsReport) -> BatchTotals:
        """Lift one pair's report into batch totals."""

        return cls(
            samples=1,
            substitutions=report.substitutions,
            insertions=report.insertions,
            deletions=report.deletions,
            total_words=report.total_words,
        )

    def combine(self, other: BatchTotals) -> BatchTotals:
        """Return the element-wise sum of two totals."""

        return BatchTotals(
            samples=self.samples + other.samples,
            substitutions=self.substitutions + other.substitutions,
            insertions=self.insertions + other.insertions,
            deletions=self.deletions + other.deletions,
            total_words=self.total_words + other.total_words,
        )

    def __add__(self, other: BatchTotals) -> BatchTotals:
        if not isinstance(other, BatchTotals):
            return NotImplemented
        return self.combine(other)

    @property
    def total_errors(self) -> int:
        return self.substitutions + self.insertions + self.deletions

    @property
    def wer(self) -> float:
        return safe_rate(self.total_errors, self.total_words)

    @property
    def substitution_rate(self) -> float:
        return safe_rate(self.substitutions, self.total_words)

    @property
    def insertion_rate(self) -> float:
        return safe_rate(self.insertions, self.total_words)

    @property
    def deletion_rate(self) -> float:
        return safe_rate(self.deletions, self.total_words)

    def to_payload(self) -> dict[str, Any]:
        """Serialize totals and derived rates."""

        return {
            "samples": self.samples,
            "wer": self.wer,
            "substitutions": self.substitutions,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "totalWords": self.total_words,
            "substitutionRate": self.substitution_rate,
            "insertionRate": self.insertion_rate,
            "deletionRate": self.deletion_rate,
        }


def aggregate_totals(totals: Iterable[BatchTotals]) -> BatchTotals:
    """Fold partial totals, e.g. from independent workers."""

    return reduce(BatchTotals.combine, totals, BatchTotals())


def aggregate_reports(reports: Iterable[MetricsReport]) -> BatchTotals:
    """Fold per-pair reports into corpus totals."""

    return aggregate_totals(BatchTotals.from_report(report) for report in reports)
