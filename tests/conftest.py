"""Shared pytest fixtures for the full wertrace test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

# One substitution over 4 reference words, then two deletions over 6.
CORPUS_ROWS = (
    ("a b c d", "a b c x"),
    ("a b c d e f", "a b c d"),
)


@pytest.fixture
def csv_dataset_path(tmp_path: Path) -> Path:
    """Write the two-sample corpus as CSV with an extra id column."""

    lines = ["id,Reference Text,Model Prediction"]
    lines.extend(
        f"{index},{reference},{prediction}"
        for index, (reference, prediction) in enumerate(CORPUS_ROWS, start=1)
    )
    path = tmp_path / "corpus.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def json_dataset_path(tmp_path: Path) -> Path:
    """Write the two-sample corpus as JSON using alias keys."""

    payload = [
        {"ground_truth": reference, "hyp": prediction}
        for reference, prediction in CORPUS_ROWS
    ]
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
