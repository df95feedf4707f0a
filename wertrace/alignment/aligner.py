"""Token alignment by minimum edit distance.

Responsibilities:
- Guard against token sequences too long to materialize a cost matrix for.
- Backtrack the cost matrix into a forward-ordered alignment trace.
- Project non-correct entries into reduced error details.

Backtracking prefers match, then substitution, then deletion, then insertion
whenever several transitions explain a cell, so inputs with more than one
minimum-cost alignment always yield the same trace.
"""

from __future__ import annotations

from typing import Sequence

from ..errors import SequenceTooLongError
from ..models.datatypes import AlignmentEntry, AlignmentResult, EditOperation
from .cost_matrix import CostMatrix

DEFAULT_MAX_TOKENS = 5000


def check_sequence_length(tokens: Sequence[str], side: str, max_tokens: int) -> None:
    """Raise `SequenceTooLongError` when `tokens` exceeds `max_tokens`."""

    if len(tokens) > max_tokens:
        raise SequenceTooLongError(side=side, length=len(tokens), limit=max_tokens)


def align_tokens(
    reference: Sequence[str],
    hypothesis: Sequence[str],
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> AlignmentResult:
    """Align two token sequences and classify every aligned unit.

    Args:
        reference: Reference tokens.
        hypothesis: Hypothesis (prediction) tokens.
        max_tokens: Upper bound on either sequence length.

    Returns:
        Forward-ordered alignment trace plus error details for its
        non-correct entries.

    Raises:
        SequenceTooLongError: If either sequence is longer than `max_tokens`.
    """

    check_sequence_length(reference, "reference", max_tokens)
    check_sequence_length(hypothesis, "hypothesis", max_tokens)

    matrix = CostMatrix.build(reference, hypothesis)
    alignment = _backtrack(matrix, reference, hypothesis)
    detailed_errors = tuple(
        entry.to_error_detail() for entry in alignment if entry.operation.is_error
    )
    return AlignmentResult(alignment=alignment, detailed_errors=detailed_errors)


def _backtrack(
    matrix: CostMatrix,
    reference: Sequence[str],
    hypothesis: Sequence[str],
) -> tuple[AlignmentEntry, ...]:
    """Walk from the bottom-right cell to the origin, collecting entries."""

    entries: list[AlignmentEntry] = []
    i, j = len(reference), len(hypothesis)
    reference_position = i - 1
    hypothesis_position = j - 1

    while i > 0 or j > 0:
        current = matrix.cell(i, j)
        if i > 0 and j > 0 and reference[i - 1] == hypothesis[j - 1]:
            operation = EditOperation.CORRECT
        elif i > 0 and j > 0 and current == matrix.cell(i - 1, j - 1) + 1:
            operation = EditOperation.SUBSTITUTION
        elif i > 0 and current == matrix.cell(i - 1, j) + 1:
            operation = EditOperation.DELETION
        elif j > 0 and current == matrix.cell(i, j - 1) + 1:
            operation = EditOperation.INSERTION
        else:
            raise RuntimeError(f"Cost matrix is inconsistent at cell ({i}, {j}).")

        if operation is EditOperation.DELETION:
            entries.append(
                AlignmentEntry(
                    operation=operation,
                    reference=reference[i - 1],
                    prediction="",
                    reference_position=reference_position,
                )
            )
            i -= 1
            reference_position -= 1
        elif operation is EditOperation.INSERTION:
            entries.append(
                AlignmentEntry(
                    operation=operation,
                    reference="",
                    prediction=hypothesis[j - 1],
                    prediction_position=hypothesis_position,
                )
            )
            j -= 1
            hypothesis_position -= 1
        else:
            entries.append(
                AlignmentEntry(
                    operation=operation,
                    reference=reference[i - 1],
                    prediction=hypothesis[j - 1],
                    reference_position=reference_position,
                    prediction_position=hypothesis_position,
                )
            )
            i -= 1
            j -= 1
            reference_position -= 1
            hypothesis_position -= 1

    entries.reverse()
    return tuple(entries)
