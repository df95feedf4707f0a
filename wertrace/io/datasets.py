"""Dataset ingestion for batch evaluation.

Responsibilities:
- Parse CSV files with fuzzily named reference/prediction columns.
- Parse JSON arrays of records exposing reference/prediction under aliases.
- Reject malformed datasets with descriptive `DatasetFormatError`s before
  any sample reaches the aligner.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any, Mapping

from ..errors import DatasetFormatError
from ..models.datatypes import DataRow

_REFERENCE_HEADER_HINTS = ("ref", "ground", "truth")
_PREDICTION_HEADER_HINTS = ("pred", "hyp")
_REFERENCE_KEYS = ("reference", "ref", "ground_truth", "truth")
_PREDICTION_KEYS = ("prediction", "pred", "hypothesis", "hyp")
_SUPPORTED_FORMATS = frozenset({"csv", "json"})


def _find_column(header: list[str], hints: tuple[str, ...]) -> int | None:
    """Return the first header index containing any of `hints`."""

    for index, name in enumerate(header):
        if any(hint in name for hint in hints):
            return index
    return None


def parse_csv(content: str) -> list[DataRow]:
    """Parse CSV text into rows.

    The header must hold one reference-like and one prediction-like column.
    Data rows too short to reach both columns are skipped.

    Raises:
        DatasetFormatError: If the header or required columns are missing.
    """

    records = list(csv.reader(io.StringIO(content.strip())))
    if len(records) < 2:
        raise DatasetFormatError("CSV must have at least a header row and one data row.")

    header = [name.strip().lower() for name in records[0]]
    reference_index = _find_column(header, _REFERENCE_HEADER_HINTS)
    prediction_index = _find_column(header, _PREDICTION_HEADER_HINTS)
    if reference_index is None or prediction_index is None:
        raise DatasetFormatError("CSV must contain columns for reference and prediction.")

    required_width = max(reference_index, prediction_index) + 1
    rows: list[DataRow] = []
    for record in records[1:]:
        if len(record) < required_width:
            continue
        rows.append(
            DataRow(
                reference=record[reference_index].strip(),
                prediction=record[prediction_index].strip(),
            )
        )
    return rows


def _first_truthy(item: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    """Return the first truthy value among `keys` as text, or `""`."""

    for key in keys:
        value = item.get(key)
        if value:
            return str(value)
    return ""


def parse_json(content: str) -> list[DataRow]:
    """Parse a JSON array of sample objects into rows.

    Raises:
        DatasetFormatError: If the text is not valid JSON, the root is not an
            array, or an item is not an object.
    """

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DatasetFormatError(f"Invalid JSON: {exc.msg} (line {exc.lineno}).") from exc

    if not isinstance(payload, list):
        raise DatasetFormatError("JSON must be an array of objects.")

    rows: list[DataRow] = []
    for index, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise DatasetFormatError(f"Invalid data format at index {index}.")
        rows.append(
            DataRow(
                reference=_first_truthy(item, _REFERENCE_KEYS),
                prediction=_first_truthy(item, _PREDICTION_KEYS),
            )
        )
    return rows


def resolve_dataset_format(path: Path, dataset_format: str | None = None) -> str:
    """Resolve the dataset format from an explicit value or the file suffix."""

    resolved = (dataset_format or path.suffix.lstrip(".")).strip().lower()
    if resolved not in _SUPPORTED_FORMATS:
        supported = ", ".join(sorted(_SUPPORTED_FORMATS))
        raise DatasetFormatError(
            f"Unsupported dataset format `{resolved or '(none)'}` for `{path}`; "
            f"supported: {supported}."
        )
    return resolved


def load_dataset(path: Path, dataset_format: str | None = None) -> list[DataRow]:
    """Read a UTF-8 dataset file and parse it into rows."""

    resolved = resolve_dataset_format(path, dataset_format)
    content = path.read_text(encoding="utf-8")
    if resolved == "csv":
        return parse_csv(content)
    return parse_json(content)
