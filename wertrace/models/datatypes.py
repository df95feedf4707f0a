"""Core datatypes shared across wertrace modules.

Responsibilities:
- Represent immutable records exchanged between normalization, alignment,
  and metrics stages.
- Provide explicit typing and payload serialization for report consumers.

Key types:
- `PreprocessingOptions`, `EditOperation`, `AlignmentEntry`, `ErrorDetail`,
  `AlignmentResult`, `MetricsReport`, `ErrorTypeSummary`, `ErrorStatistics`,
  `DataRow`, and `BatchReport`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..metrics.batch import BatchTotals


@dataclass(frozen=True, slots=True)
class PreprocessingOptions:
    """Switches controlling text normalization before tokenization.

    Attributes:
        lowercase: Fold characters to lowercase.
        remove_punctuation: Replace non-word, non-space characters with a space.
        remove_extra_spaces: Collapse whitespace runs and trim the ends.
    """

    lowercase: bool = True
    remove_punctuation: bool = True
    remove_extra_spaces: bool = True


DEFAULT_PREPROCESSING_OPTIONS = PreprocessingOptions()


class EditOperation(str, Enum):
    """Classification of one aligned unit."""

    CORRECT = "correct"
    SUBSTITUTION = "substitution"
    INSERTION = "insertion"
    DELETION = "deletion"

    @property
    def is_error(self) -> bool:
        return self is not EditOperation.CORRECT


@dataclass(frozen=True, slots=True)
class AlignmentEntry:
    """One aligned unit between reference and prediction tokens.

    Attributes:
        operation: Edit classification for this unit.
        reference: Reference token, empty for insertions.
        prediction: Prediction token, empty for deletions.
        reference_position: 0-based index into the reference tokens, or `None`.
        prediction_position: 0-based index into the prediction tokens, or `None`.
    """

    operation: EditOperation
    reference: str
    prediction: str
    reference_position: int | None = None
    prediction_position: int | None = None

    def to_error_detail(self) -> ErrorDetail:
        """Project a non-correct entry into its reduced error view."""

        if not self.operation.is_error:
            raise ValueError("Correct alignment entries have no error detail.")
        has_reference = self.operation is not EditOperation.INSERTION
        has_prediction = self.operation is not EditOperation.DELETION
        return ErrorDetail(
            operation=self.operation,
            reference_word=self.reference if has_reference else None,
            prediction_word=self.prediction if has_prediction else None,
            reference_position=self.reference_position if has_reference else None,
            prediction_position=self.prediction_position if has_prediction else None,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the external alignment payload shape."""

        payload: dict[str, Any] = {
            "reference": self.reference,
            "prediction": self.prediction,
            "type": self.operation.value,
        }
        if self.reference_position is not None:
            payload["referencePosition"] = self.reference_position
        if self.prediction_position is not None:
            payload["predictionPosition"] = self.prediction_position
        return payload


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    """Reduced view of a non-correct alignment entry.

    Fields that do not apply to the error kind are `None` rather than empty
    strings: insertions carry no reference side, deletions no prediction side.
    """

    operation: EditOperation
    reference_word: str | None = None
    prediction_word: str | None = None
    reference_position: int | None = None
    prediction_position: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the external error payload, omitting absent fields."""

        payload: dict[str, Any] = {"type": self.operation.value}
        if self.reference_word is not None:
            payload["referenceWord"] = self.reference_word
        if self.prediction_word is not None:
            payload["predictionWord"] = self.prediction_word
        if self.reference_position is not None:
            payload["referencePosition"] = self.reference_position
        if self.prediction_position is not None:
            payload["predictionPosition"] = self.prediction_position
        return payload


@dataclass(frozen=True, slots=True)
class AlignmentResult:
    """Alignment trace with its projected error list."""

    alignment: tuple[AlignmentEntry, ...]
    detailed_errors: tuple[ErrorDetail, ...]


@dataclass(frozen=True, slots=True)
class MetricsReport:
    """Word error metrics and alignment for one reference/prediction pair.

    Attributes:
        wer: Total errors divided by `total_words`, `0.0` for empty references.
        substitutions: Number of substitution entries.
        insertions: Number of insertion entries.
        deletions: Number of deletion entries.
        total_words: Reference token count.
        substitution_rate: `substitutions / total_words` with the same zero guard.
        insertion_rate: `insertions / total_words` with the same zero guard.
        deletion_rate: `deletions / total_words` with the same zero guard.
        alignment: Ordered alignment trace.
        detailed_errors: Reduced error views of non-correct entries.
    """

    wer: float
    substitutions: int
    insertions: int
    deletions: int
    total_words: int
    substitution_rate: float
    insertion_rate: float
    deletion_rate: float
    alignment: tuple[AlignmentEntry, ...] = field(default_factory=tuple)
    detailed_errors: tuple[ErrorDetail, ...] = field(default_factory=tuple)

    @property
    def total_errors(self) -> int:
        return self.substitutions + self.insertions + self.deletions

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the external report contract."""

        return {
            "wer": self.wer,
            "substitutions": self.substitutions,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "totalWords": self.total_words,
            "substitutionRate": self.substitution_rate,
            "insertionRate": self.insertion_rate,
            "deletionRate": self.deletion_rate,
            "alignment": [entry.to_payload() for entry in self.alignment],
            "detailedErrors": [error.to_payload() for error in self.detailed_errors],
        }


@dataclass(frozen=True, slots=True)
class ErrorTypeSummary:
    """Count, error list, and rate for one error kind."""

    count: int
    errors: tuple[ErrorDetail, ...]
    rate: float

    def to_payload(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "errors": [error.to_payload() for error in self.errors],
            "rate": self.rate,
        }


@dataclass(frozen=True, slots=True)
class ErrorStatistics:
    """Per-type grouping of a report's errors for presentation layers."""

    substitutions: ErrorTypeSummary
    insertions: ErrorTypeSummary
    deletions: ErrorTypeSummary
    total_errors: int
    accuracy: float

    def to_payload(self) -> dict[str, Any]:
        return {
            "substitutions": self.substitutions.to_payload(),
            "insertions": self.insertions.to_payload(),
            "deletions": self.deletions.to_payload(),
            "totalErrors": self.total_errors,
            "accuracy": self.accuracy,
        }


@dataclass(frozen=True, slots=True)
class DataRow:
    """One ingested evaluation sample."""

    reference: str
    prediction: str


@dataclass(frozen=True, slots=True)
class BatchReport:
    """Per-sample reports plus corpus-level totals for a dataset run."""

    reports: tuple[MetricsReport, ...]
    totals: BatchTotals

    def to_payload(self) -> dict[str, Any]:
        return {
            "samples": len(self.reports),
            "totals": self.totals.to_payload(),
            "reports": [report.to_payload() for report in self.reports],
        }
