"""Runtime telemetry helpers."""

from .logger import RunLogger
from .stages import PIPELINE_STAGES, StageTracker

__all__ = ["PIPELINE_STAGES", "RunLogger", "StageTracker"]
