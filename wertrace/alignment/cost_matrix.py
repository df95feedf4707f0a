"""Edit-distance cost matrix over token sequences.

Responsibilities:
- Build the Wagner-Fischer table with unit costs, tokens as atoms.
- Store cells in one flat row-major buffer for random access during
  backtracking.
"""

from __future__ import annotations

from array import array
from typing import Sequence


class CostMatrix:
    """Fully materialized `(m+1) x (n+1)` edit-distance table.

    `cell(i, j)` is the minimum number of substitutions, insertions, and
    deletions turning the first `i` reference tokens into the first `j`
    hypothesis tokens.
    """

    __slots__ = ("rows", "columns", "_cells")

    def __init__(self, rows: int, columns: int, cells: array) -> None:
        """Wrap a flat buffer of `rows * columns` cells."""

        if len(cells) != rows * columns:
            raise ValueError("Cost matrix buffer size does not match its dimensions.")
        self.rows = rows
        self.columns = columns
        self._cells = cells

    @classmethod
    def build(cls, reference: Sequence[str], hypothesis: Sequence[str]) -> CostMatrix:
        """Fill the table bottom-up for the given token sequences."""

        rows = len(reference) + 1
        columns = len(hypothesis) + 1
        cells = array("l", [0]) * (rows * columns)

        for i in range(rows):
            cells[i * columns] = i
        for j in range(columns):
            cells[j] = j

        for i in range(1, rows):
            reference_token = reference[i - 1]
            row = i * columns
            previous_row = row - columns
            for j in range(1, columns):
                if reference_token == hypothesis[j - 1]:
                    cells[row + j] = cells[previous_row + j - 1]
                else:
                    cells[row + j] = 1 + min(
                        cells[previous_row + j - 1],  # substitution
                        cells[previous_row + j],  # deletion
                        cells[row + j - 1],  # insertion
                    )
        return cls(rows, columns, cells)

    def cell(self, i: int, j: int) -> int:
        """Return the cost at row `i`, column `j`."""

        if not (0 <= i < self.rows and 0 <= j < self.columns):
            raise IndexError(f"Cell ({i}, {j}) is outside a {self.rows}x{self.columns} matrix.")
        return self._cells[i * self.columns + j]

    def __getitem__(self, index: tuple[int, int]) -> int:
        i, j = index
        return self.cell(i, j)

    @property
    def distance(self) -> int:
        """Total edit distance between the full sequences."""

        return self._cells[-1]
