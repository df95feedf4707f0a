"""Evaluation orchestration for wertrace.

Responsibilities:
- Define the stage order for single-pair and dataset evaluation.
- Map core failures (oversized inputs, malformed datasets) to stage-scoped
  `EvaluationStageError`s with actionable hints.

Key types:
- `WerPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .alignment.aligner import align_tokens
from .config import EvaluationConfig
from .errors import DatasetFormatError, EvaluationStageError, SequenceTooLongError
from .io.datasets import load_dataset
from .metrics.batch import aggregate_reports
from .metrics.wer import calculate_wer, compute_metrics
from .models.datatypes import BatchReport, DataRow, MetricsReport
from .telemetry.logger import RunLogger
from .telemetry.stages import ProgressCallback, StageTracker
from .text.normalizer import prepare_tokens

_SIZE_LIMIT_HINT = "Split the text into shorter segments or raise `max_tokens`."
_DATASET_SHAPE_HINT = (
    "CSV needs reference/prediction columns; JSON needs an array "
    "of objects with `reference` and `prediction` keys."
)


class WerPipeline:
    """Coordinate normalization, alignment, and scoring for wertrace runs."""

    def __init__(
        self,
        config: EvaluationConfig | None = None,
        run_logger: RunLogger | None = None,
        stage_progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize with a validated config and optional telemetry sinks."""

        self.config = config or EvaluationConfig()
        self.config.validate()
        self.tracker = StageTracker(run_logger, stage_progress_callback)

    def evaluate(self, reference: str, prediction: str) -> MetricsReport:
        """Score one reference/prediction pair stage by stage."""

        options = self.config.preprocessing_options()
        with self.tracker.stage("normalize") as summary:
            reference_tokens = prepare_tokens(reference, options)
            prediction_tokens = prepare_tokens(prediction, options)
            summary.update(
                reference_tokens=len(reference_tokens),
                prediction_tokens=len(prediction_tokens),
            )

        try:
            with self.tracker.stage("align") as summary:
                result = align_tokens(
                    reference_tokens, prediction_tokens, max_tokens=self.config.max_tokens
                )
                summary["entries"] = len(result.alignment)
        except SequenceTooLongError as exc:
            raise EvaluationStageError(stage="align", detail=str(exc), hint=_SIZE_LIMIT_HINT) from exc

        with self.tracker.stage("metrics") as summary:
            report = compute_metrics(result.alignment, result.detailed_errors)
            summary["wer"] = f"{report.wer:.4f}"
        return report

    def evaluate_rows(self, rows: Sequence[DataRow]) -> BatchReport:
        """Score every row and fold the results into corpus totals.

        Rows are independent; with `workers > 1` they are scored on a thread
        pool. Report order always follows row order.
        """

        try:
            with self.tracker.stage("evaluate") as summary:
                reports = self._evaluate_all(rows)
                summary["samples"] = len(reports)
        except SequenceTooLongError as exc:
            raise EvaluationStageError(
                stage="evaluate", detail=str(exc), hint=_SIZE_LIMIT_HINT
            ) from exc

        with self.tracker.stage("aggregate") as summary:
            totals = aggregate_reports(reports)
            summary.update(samples=totals.samples, wer=f"{totals.wer:.4f}")
        return BatchReport(reports=tuple(reports), totals=totals)

    def evaluate_dataset(self, path: Path, dataset_format: str | None = None) -> BatchReport:
        """Load a CSV/JSON dataset and score it."""

        rows = self._load(path, dataset_format)
        return self.evaluate_rows(rows)

    def _load(self, path: Path, dataset_format: str | None) -> list[DataRow]:
        """Load dataset rows and map failures to `load` stage errors."""

        if not path.exists():
            raise EvaluationStageError(
                stage="load",
                detail=f"Dataset not found: `{path}`.",
                hint="Provide an existing CSV or JSON file.",
            )
        try:
            with self.tracker.stage("load") as summary:
                rows = load_dataset(path, dataset_format)
                summary["rows"] = len(rows)
        except DatasetFormatError as exc:
            raise EvaluationStageError(
                stage="load",
                detail=f"Invalid dataset `{path}`: {exc}",
                hint=_DATASET_SHAPE_HINT,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise EvaluationStageError(
                stage="load",
                detail=f"Failed to read dataset `{path}`: {exc}",
                hint="Verify file permissions and UTF-8 encoding.",
            ) from exc
        return rows

    def _evaluate_all(self, rows: Sequence[DataRow]) -> list[MetricsReport]:
        """Score rows sequentially or on a thread pool."""

        if self.config.workers <= 1 or len(rows) <= 1:
            return [self._evaluate_row(row) for row in rows]
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            return list(executor.map(self._evaluate_row, rows))

    def _evaluate_row(self, row: DataRow) -> MetricsReport:
        """Score one row without per-stage telemetry."""

        return calculate_wer(
            row.reference,
            row.prediction,
            self.config.preprocessing_options(),
            max_tokens=self.config.max_tokens,
        )
