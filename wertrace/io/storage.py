"""Batch report artifacts on disk.

Responsibilities:
- Write a batch run as `report.json` plus a human-readable `alignments.txt`.
- Read a previously written report back for inspection.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..alignment.formatting import format_alignment
from ..models.datatypes import BatchReport

REPORT_FILENAME = "report.json"
ALIGNMENTS_FILENAME = "alignments.txt"


def render_alignment_blocks(batch: BatchReport) -> str:
    """Render one `# sample N wer=...` block per report, in sample order."""

    blocks = [
        f"# sample {index} wer={report.wer:.4f}\n{format_alignment(report.alignment)}"
        for index, report in enumerate(batch.reports, start=1)
    ]
    return "\n\n".join(blocks) + "\n"


class ReportStore:
    """Output directory holding the artifacts of one batch run."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @property
    def report_path(self) -> Path:
        return self.root / REPORT_FILENAME

    @property
    def alignments_path(self) -> Path:
        return self.root / ALIGNMENTS_FILENAME

    def write_batch(self, batch: BatchReport) -> tuple[Path, Path]:
        """Write both artifacts and return `(report_path, alignments_path)`.

        JSON keys are sorted and non-ASCII tokens are written verbatim so
        repeated runs over the same dataset produce identical files.
        """

        self.root.mkdir(parents=True, exist_ok=True)
        self.report_path.write_text(
            json.dumps(batch.to_payload(), ensure_ascii=False, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        self.alignments_path.write_text(render_alignment_blocks(batch), encoding="utf-8")
        return self.report_path, self.alignments_path

    def load_report(self) -> dict[str, Any]:
        """Read `report.json` back as a payload mapping."""

        return json.loads(self.report_path.read_text(encoding="utf-8"))
