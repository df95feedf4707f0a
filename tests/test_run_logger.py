"""Unit tests for stage event lines."""

from __future__ import annotations

import io

import pytest

from wertrace.errors import DatasetFormatError
from wertrace.telemetry.logger import RunLogger
from wertrace.telemetry.stages import StageTracker


def test_stage_events_are_written_as_single_lines() -> None:
    """Start/complete/failure events should follow the `[wertrace]` format."""

    sink = io.StringIO()
    logger = RunLogger(sink=sink)

    logger.stage_started("align")
    logger.stage_completed("metrics", wer="0.5000", samples=3)
    logger.stage_failed("load", DatasetFormatError("bad header: secret text"))

    assert sink.getvalue().splitlines() == [
        "[wertrace] level=INFO stage=align event=start",
        "[wertrace] level=INFO stage=metrics event=complete samples=3 wer=0.5000",
        "[wertrace] level=ERROR stage=load event=failure error_type=DatasetFormatError",
    ]


def test_context_values_are_sanitized() -> None:
    """Whitespace and shell-unsafe characters should be replaced."""

    sink = io.StringIO()
    logger = RunLogger(sink=sink)

    logger.stage_completed("load", path="my data/set;1.csv", note="  ")

    assert sink.getvalue().strip() == (
        "[wertrace] level=INFO stage=load event=complete note=none path=my_data/set_1.csv"
    )


def test_closed_logger_writes_nothing() -> None:
    sink = io.StringIO()
    logger = RunLogger(sink=sink)

    logger.close()
    logger.stage_started("align")

    assert sink.getvalue() == ""


def test_stage_tracker_reports_progress_and_reraises() -> None:
    """Failures should be logged with their type and propagate unchanged."""

    sink = io.StringIO()
    progress: list[tuple[str, int, int]] = []
    tracker = StageTracker(
        RunLogger(sink=sink),
        lambda stage, index, total: progress.append((stage, index, total)),
        stages=("first", "second"),
    )

    with tracker.stage("second") as summary:
        summary["items"] = 2
    with pytest.raises(KeyError):
        with tracker.stage("unlisted"):
            raise KeyError("boom")

    assert progress == [("second", 2, 2)]
    assert sink.getvalue().splitlines() == [
        "[wertrace] level=INFO stage=second event=start",
        "[wertrace] level=INFO stage=second event=complete items=2",
        "[wertrace] level=INFO stage=unlisted event=start",
        "[wertrace] level=ERROR stage=unlisted event=failure error_type=KeyError",
    ]
