"""Plain-text rendering of alignment traces."""

from __future__ import annotations

from typing import Sequence

from ..models.datatypes import AlignmentEntry, EditOperation

OPERATION_CODES = {
    EditOperation.CORRECT: "✓",
    EditOperation.SUBSTITUTION: "S",
    EditOperation.INSERTION: "I",
    EditOperation.DELETION: "D",
}


def format_alignment(alignment: Sequence[AlignmentEntry]) -> str:
    """Render `REF:`/`HYP:`/`OPS:` lines with one padded column per entry.

    Each column is as wide as the longest of its reference token, prediction
    token, and 1-character operation code.
    """

    reference_cells: list[str] = []
    prediction_cells: list[str] = []
    operation_cells: list[str] = []

    for entry in alignment:
        width = max(len(entry.reference), len(entry.prediction), 1)
        reference_cells.append(entry.reference.ljust(width))
        prediction_cells.append(entry.prediction.ljust(width))
        operation_cells.append(OPERATION_CODES[entry.operation].ljust(width))

    return "\n".join(
        [
            f"REF: {' '.join(reference_cells)}",
            f"HYP: {' '.join(prediction_cells)}",
            f"OPS: {' '.join(operation_cells)}",
        ]
    )
