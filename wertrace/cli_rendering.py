"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
single-pair metric summaries, and batch totals.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer

from .errors import EvaluationStageError
from .metrics.batch import BatchTotals
from .models.datatypes import ErrorStatistics, MetricsReport


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, EvaluationStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _percent(value: float) -> str:
    return f"{value * 100:.2f}%"


def echo_metrics_summary(report: MetricsReport) -> None:
    """Print WER and reference size for one pair."""

    typer.echo(f"WER: {report.wer:.4f} ({_percent(report.wer)})")
    typer.echo(f"Reference words: {report.total_words}")
    typer.echo(f"Total errors: {report.total_errors}")


def echo_error_statistics(statistics: ErrorStatistics) -> None:
    """Print per-type error counts, rates, and the erroneous words."""

    typer.echo(
        f"Substitutions: {statistics.substitutions.count} "
        f"({_percent(statistics.substitutions.rate)})"
    )
    for error in statistics.substitutions.errors:
        typer.echo(f"  {error.reference_word} -> {error.prediction_word}")
    typer.echo(
        f"Insertions: {statistics.insertions.count} ({_percent(statistics.insertions.rate)})"
    )
    for error in statistics.insertions.errors:
        typer.echo(f"  + {error.prediction_word}")
    typer.echo(
        f"Deletions: {statistics.deletions.count} ({_percent(statistics.deletions.rate)})"
    )
    for error in statistics.deletions.errors:
        typer.echo(f"  - {error.reference_word}")
    typer.echo(f"Accuracy: {_percent(statistics.accuracy)}")


def echo_batch_summary(totals: BatchTotals) -> None:
    """Print corpus-level totals for a batch run."""

    typer.echo(f"Samples: {totals.samples}")
    typer.echo(f"Reference words: {totals.total_words}")
    typer.echo(f"WER: {totals.wer:.4f} ({_percent(totals.wer)})")
    typer.echo(f"Substitutions: {totals.substitutions} ({_percent(totals.substitution_rate)})")
    typer.echo(f"Insertions: {totals.insertions} ({_percent(totals.insertion_rate)})")
    typer.echo(f"Deletions: {totals.deletions} ({_percent(totals.deletion_rate)})")


def echo_json(payload: dict[str, Any]) -> None:
    """Print a payload as deterministic, indented JSON."""

    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))
