"""Command-line interface for wertrace.

Responsibilities:
- Expose user-facing commands for single-pair and dataset evaluation.
- Convert CLI arguments into `EvaluationConfig` and run the pipeline.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated, Any

import typer

from .alignment.formatting import format_alignment
from .cli_rendering import (
    echo_batch_summary,
    echo_error_statistics,
    echo_json,
    echo_metrics_summary,
    exit_with_command_error,
)
from .config import ConfigLoader, EvaluationConfig
from .errors import EvaluationStageError
from .io.storage import ReportStore
from .metrics.wer import error_statistics
from .pipeline import WerPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="wertrace",
    no_args_is_help=True,
    help="Word error rate with alignment traces.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with evaluation defaults."),
]
LowercaseOption = Annotated[
    bool | None,
    typer.Option("--lowercase/--no-lowercase", help="Fold texts to lowercase."),
]
PunctuationOption = Annotated[
    bool | None,
    typer.Option(
        "--remove-punctuation/--keep-punctuation",
        help="Replace punctuation with spaces before tokenizing.",
    ),
]
SpacesOption = Annotated[
    bool | None,
    typer.Option(
        "--collapse-spaces/--keep-spaces",
        help="Collapse whitespace runs and trim both ends.",
    ),
]
RawOption = Annotated[
    bool | None,
    typer.Option(
        "--raw/--preprocess",
        help="Tokenize texts verbatim, skipping all normalization.",
    ),
]
MaxTokensOption = Annotated[
    int | None,
    typer.Option("--max-tokens", help="Refuse to align sequences longer than this."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Write stage logs to stderr."),
]


def _load_yaml_config(config_path: Path | None) -> EvaluationConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise EvaluationStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise EvaluationStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise EvaluationStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _resolve_config(config_file: Path | None, **overrides: Any) -> EvaluationConfig:
    """Resolve effective config: explicit CLI values > YAML file > defaults."""

    base_config = _load_yaml_config(config_file) or EvaluationConfig()
    raw = overrides.pop("raw", None)
    if raw is not None:
        overrides["preprocess"] = not raw
    explicit = {key: value for key, value in overrides.items() if value is not None}
    config = replace(base_config, **explicit)
    try:
        config.validate()
    except ValueError as exc:
        raise EvaluationStageError(
            stage="config",
            detail=str(exc),
            hint="Pass positive values for `--max-tokens` and `--workers`.",
        ) from exc
    return config


@app.command("compare")
def compare_command(
    reference: Annotated[str, typer.Argument(help="Reference (ground truth) text.")],
    prediction: Annotated[str, typer.Argument(help="Predicted (hypothesis) text.")],
    config_file: ConfigOption = None,
    lowercase: LowercaseOption = None,
    remove_punctuation: PunctuationOption = None,
    remove_extra_spaces: SpacesOption = None,
    raw: RawOption = None,
    max_tokens: MaxTokensOption = None,
    show_alignment: Annotated[
        bool,
        typer.Option("--show-alignment", help="Print the REF/HYP/OPS alignment."),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full report as JSON."),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Compute WER and the alignment trace for one text pair."""

    try:
        config = _resolve_config(
            config_file,
            lowercase=lowercase,
            remove_punctuation=remove_punctuation,
            remove_extra_spaces=remove_extra_spaces,
            raw=raw,
            max_tokens=max_tokens,
        )
        pipeline = WerPipeline(config, run_logger=RunLogger() if verbose else None)
        report = pipeline.evaluate(reference, prediction)
    except Exception as exc:
        exit_with_command_error("compare", exc)

    statistics = error_statistics(report)
    if as_json:
        echo_json({**report.to_payload(), "statistics": statistics.to_payload()})
        return

    echo_metrics_summary(report)
    echo_error_statistics(statistics)
    if show_alignment:
        typer.echo("")
        typer.echo(format_alignment(report.alignment))


@app.command("batch")
def batch_command(
    dataset: Annotated[Path, typer.Argument(help="CSV or JSON dataset of text pairs.")],
    dataset_format: Annotated[
        str | None,
        typer.Option("--format", help="Dataset format `csv` or `json` (default: suffix)."),
    ] = None,
    config_file: ConfigOption = None,
    lowercase: LowercaseOption = None,
    remove_punctuation: PunctuationOption = None,
    remove_extra_spaces: SpacesOption = None,
    raw: RawOption = None,
    max_tokens: MaxTokensOption = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", help="Threads used to score samples."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Directory for `report.json` and `alignments.txt`."),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Compute corpus-level WER over a dataset."""

    try:
        config = _resolve_config(
            config_file,
            lowercase=lowercase,
            remove_punctuation=remove_punctuation,
            remove_extra_spaces=remove_extra_spaces,
            raw=raw,
            max_tokens=max_tokens,
            workers=workers,
        )
        pipeline = WerPipeline(config, run_logger=RunLogger() if verbose else None)
        batch = pipeline.evaluate_dataset(dataset, dataset_format)
        written = ReportStore(out).write_batch(batch) if out is not None else None
    except Exception as exc:
        exit_with_command_error("batch", exc)

    echo_batch_summary(batch.totals)
    if written is not None:
        typer.echo(f"Report: {written[0]}")
        typer.echo(f"Alignments: {written[1]}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
