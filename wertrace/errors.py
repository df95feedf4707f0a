"""Domain exceptions for evaluation stages and CLI diagnostics."""

from __future__ import annotations


class EvaluationStageError(RuntimeError):
    """Raised when a specific evaluation stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped evaluation error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class SequenceTooLongError(ValueError):
    """Raised when a token sequence exceeds the configured alignment bound."""

    def __init__(self, *, side: str, length: int, limit: int) -> None:
        """Initialize with the offending side and its token count."""

        super().__init__(
            f"{side.capitalize()} has {length} tokens; alignment limit is {limit}."
        )
        self.side = side
        self.length = length
        self.limit = limit


class DatasetFormatError(ValueError):
    """Raised when an input dataset cannot be parsed into evaluation rows."""
