"""Dataset ingestion and report artifact storage."""

from .datasets import load_dataset, parse_csv, parse_json
from .storage import ReportStore, render_alignment_blocks

__all__ = [
    "ReportStore",
    "load_dataset",
    "parse_csv",
    "parse_json",
    "render_alignment_blocks",
]
