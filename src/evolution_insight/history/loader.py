"""Read revision logs and complexity measurements from files."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from ..exceptions import InvalidInputError
from ..logging_config import get_logger
from .model import revision_from_record
from .models import ComplexityIndex, Revision

logger = get_logger(__name__)


def load_revisions(path: Path) -> list[Revision]:
    """Load revision records from a JSON array or a JSON-lines file.

    Record shape is documented on ``RevisionModel.from_records``. Values are
    not validated here; ``ingest`` does that.
    """
    records = _read_json_records(path)
    revisions = [revision_from_record(r, i) for i, r in enumerate(records)]
    logger.info(f"Loaded {len(revisions)} revisions from {path}")
    return revisions


def load_complexity(path: Path) -> ComplexityIndex:
    """Load complexity scores from CSV or JSON.

    CSV needs ``entity`` and ``complexity`` columns and may carry a
    ``timestamp`` column; rows with a timestamp become trend samples.

    JSON is either a mapping ``{entity: score}`` or a list of
    ``{"entity", "complexity", "timestamp"?}`` objects.
    """
    index = ComplexityIndex()
    if path.suffix.lower() == ".csv":
        for row_no, row in enumerate(_read_csv(path), start=2):
            _add_complexity(index, row, f"{path}:{row_no}")
    else:
        data = _read_json(path)
        if isinstance(data, dict):
            for entity, score in data.items():
                index.scores[entity] = _to_float(score, f"{path}:{entity}")
        elif isinstance(data, list):
            for i, row in enumerate(data):
                if not isinstance(row, dict):
                    raise InvalidInputError(f"{path}[{i}]", "expected an object")
                _add_complexity(index, row, f"{path}[{i}]")
        else:
            raise InvalidInputError(str(path), "expected a JSON object or array")

    logger.info(f"Loaded complexity for {len(index)} entities from {path}")
    return index


def _add_complexity(index: ComplexityIndex, row: dict[str, Any], source: str) -> None:
    entity = row.get("entity")
    if not entity:
        raise InvalidInputError(source, "missing 'entity'")
    score = _to_float(row.get("complexity"), source)
    timestamp = row.get("timestamp")
    if timestamp in (None, ""):
        index.scores[entity] = score
        return
    try:
        index.add_sample(entity, int(timestamp), score)
    except (TypeError, ValueError):
        raise InvalidInputError(source, f"invalid timestamp {timestamp!r}") from None


def _to_float(value: Any, source: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(source, f"invalid complexity value {value!r}") from None


def _read_json_records(path: Path) -> list[Any]:
    text = _read_text(path)
    stripped = text.lstrip()
    if stripped.startswith("["):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInputError(str(path), f"invalid JSON: {e}") from e
        return data

    records = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"{path}:{line_no}", f"invalid JSON line: {e}") from e
    return records


def _read_json(path: Path) -> Any:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise InvalidInputError(str(path), f"invalid JSON: {e}") from e


def _read_csv(path: Path) -> list[dict[str, str]]:
    reader = csv.DictReader(_read_text(path).splitlines())
    if not reader.fieldnames or not {"entity", "complexity"} <= set(reader.fieldnames):
        raise InvalidInputError(str(path), "CSV needs 'entity' and 'complexity' columns")
    return list(reader)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidInputError(str(path), str(e)) from e
