"""Stage tracking for the evaluation pipeline.

`StageTracker.stage(name)` wraps one unit of pipeline work: it reports
progress, logs start/complete/failure through an optional `RunLogger`, and
re-raises failures untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .logger import RunLogger

PIPELINE_STAGES = ("load", "normalize", "align", "metrics", "evaluate", "aggregate")

ProgressCallback = Callable[[str, int, int], None]


class StageTracker:
    """Report named pipeline stages to a progress callback and a run logger."""

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        progress_callback: ProgressCallback | None = None,
        stages: tuple[str, ...] = PIPELINE_STAGES,
    ) -> None:
        self.run_logger = run_logger
        self.progress_callback = progress_callback
        self.stages = stages

    @contextmanager
    def stage(self, name: str) -> Iterator[dict[str, object]]:
        """Track one stage; the yielded dict becomes the completion context.

        Progress is reported as `(name, 1-based index, stage count)` for
        stages listed in `stages` only.
        """

        if self.progress_callback is not None and name in self.stages:
            self.progress_callback(name, self.stages.index(name) + 1, len(self.stages))
        if self.run_logger is not None:
            self.run_logger.stage_started(name)

        summary: dict[str, object] = {}
        try:
            yield summary
        except Exception as exc:
            if self.run_logger is not None:
                self.run_logger.stage_failed(name, exc)
            raise

        if self.run_logger is not None:
            self.run_logger.stage_completed(name, **summary)
