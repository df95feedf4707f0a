"""Stage event logging for evaluation runs.

Every event is one line of space-separated `key=value` tokens:

    [wertrace] level=INFO stage=align event=complete entries=4

The fixed fields travel as loguru `extra` values and are laid out by the
handler format; free-form context is sorted by key so lines are stable
across runs.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger

_LINE_FORMAT = (
    "[wertrace] level={level} stage={extra[stage]} event={extra[event]}{extra[context]}"
)
_SAFE_PUNCTUATION = frozenset("-_.:/")


def _token(value: object) -> str:
    """Render a context value as one shell-safe token; blanks become `none`."""

    text = str(value).strip()
    if not text:
        return "none"
    return "".join(ch if ch.isalnum() or ch in _SAFE_PUNCTUATION else "_" for ch in text)


class RunLogger:
    """Write the stage events of a run to a single sink (stderr by default).

    Creating a logger replaces any previously installed loguru handlers, so
    only the latest run writes lines.
    """

    def __init__(self, sink: TextIO | None = None) -> None:
        _loguru_logger.remove()
        self._handler_id = _loguru_logger.add(
            sink if sink is not None else sys.stderr,
            format=_LINE_FORMAT,
            level="INFO",
            colorize=False,
        )

    def event(self, stage: str, event: str, level: str = "INFO", **context: object) -> None:
        """Write one event line for `stage`."""

        rendered = "".join(f" {key}={_token(context[key])}" for key in sorted(context))
        _loguru_logger.bind(stage=stage, event=event, context=rendered).log(level, event)

    def stage_started(self, stage: str) -> None:
        self.event(stage, "start")

    def stage_completed(self, stage: str, **context: object) -> None:
        self.event(stage, "complete", **context)

    def stage_failed(self, stage: str, error: BaseException) -> None:
        # Only the exception type is logged; messages may quote input text.
        self.event(stage, "failure", level="ERROR", error_type=type(error).__name__)

    def close(self) -> None:
        """Detach this logger's handler."""

        _loguru_logger.remove(self._handler_id)
