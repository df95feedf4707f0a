"""Typed records exchanged between wertrace stages."""

from .datatypes import (
    DEFAULT_PREPROCESSING_OPTIONS,
    AlignmentEntry,
    AlignmentResult,
    BatchReport,
    DataRow,
    EditOperation,
    ErrorDetail,
    ErrorStatistics,
    ErrorTypeSummary,
    MetricsReport,
    PreprocessingOptions,
)

__all__ = [
    "DEFAULT_PREPROCESSING_OPTIONS",
    "AlignmentEntry",
    "AlignmentResult",
    "BatchReport",
    "DataRow",
    "EditOperation",
    "ErrorDetail",
    "ErrorStatistics",
    "ErrorTypeSummary",
    "MetricsReport",
    "PreprocessingOptions",
]
