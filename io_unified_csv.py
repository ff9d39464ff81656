"""CSV import/export helpers for the unified sectioned survey schema.

This module reads and writes the consolidated CSV layout that stores
meta settings and both survey point sets (``P`` and ``R``) in a single
file.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from models import Point, TestCase

MetaMapping = Dict[str, str]

FIELDS = ["section", "key", "value", "id", "x", "y"]


class CsvFormatError(ValueError):
    """Raised when the CSV contents are invalid."""


def _read_csv_rows(path: str) -> List[dict]:
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            return list(csv.DictReader(handle))
    except FileNotFoundError as exc:  # pragma: no cover - surfaced to caller
        raise exc
    except OSError as exc:  # pragma: no cover - surfaced to caller
        raise OSError(f"Failed to read CSV '{path}': {exc}") from exc


def _get(row: dict, key: str) -> str:
    return str(row.get(key) or "").strip()


def _parse_int(
    row: dict,
    field: str,
    *,
    default: Optional[int] = None,
    context: str,
    row_number: int,
) -> int:
    raw = _get(row, field)
    if raw == "":
        if default is None:
            raise CsvFormatError(
                f"Missing value for '{field}' in {context} row {row_number}."
            )
        return int(default)
    try:
        return int(raw)
    except ValueError as exc:
        raise CsvFormatError(
            f"Invalid integer for '{field}' in {context} row {row_number}: {raw!r}"
        ) from exc


def _finish_point_set(name: str, rows: List[Tuple[int, int, int, int]]) -> List[Point]:
    """Order ``(id, row, x, y)`` tuples by id and check ids run 1..n."""

    rows.sort(key=lambda item: item[0])
    points: List[Point] = []
    for expected, (pid, row_number, x, y) in enumerate(rows, start=1):
        if pid != expected:
            if pid == expected - 1:
                raise CsvFormatError(f"Duplicate id {pid} in section '{name}' row {row_number}.")
            raise CsvFormatError(
                f"Section '{name}' ids must run 1..{len(rows)}; found {pid} in row {row_number}."
            )
        points.append(Point(x, y, pid))
    return points


def load_unified_csv(path: str) -> Tuple[MetaMapping, TestCase]:
    """Load a unified CSV file."""

    rows = _read_csv_rows(path)
    if not rows:
        return {}, TestCase(p=[], r=[], label=Path(path).stem)

    has_section = any(_get(r, "section") for r in rows)
    if not has_section:
        raise CsvFormatError(
            "Missing 'section' column; only the unified, sectioned CSV is supported."
        )

    meta: MetaMapping = {}
    sets: Dict[str, List[Tuple[int, int, int, int]]] = {"p": [], "r": []}

    for index, row in enumerate(rows, start=2):
        section = _get(row, "section").lower()
        if not section:
            continue
        if section == "meta":
            key = _get(row, "key")
            value = _get(row, "value")
            if key:
                meta[key] = value
            continue

        if section in sets:
            bucket = sets[section]
            context = section.upper()
            pid = _parse_int(
                row, "id", context=context, row_number=index, default=len(bucket) + 1
            )
            x = _parse_int(row, "x", context=context, row_number=index)
            y = _parse_int(row, "y", context=context, row_number=index)
            bucket.append((pid, index, x, y))
            continue

        raise CsvFormatError(f"Unknown section '{section}' in row {index}.")

    case = TestCase(
        p=_finish_point_set("P", sets["p"]),
        r=_finish_point_set("R", sets["r"]),
        label=Path(path).stem,
    )
    return meta, case


def write_unified_csv(path: str, meta: MetaMapping, case: TestCase) -> None:
    """Write the unified CSV format."""

    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    with open(path_obj, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDS)
        writer.writeheader()

        for key, value in meta.items():
            writer.writerow({"section": "meta", "key": key, "value": value})

        for name, points in (("P", case.p), ("R", case.r)):
            for pt in points:
                writer.writerow({"section": name, "id": pt.id, "x": pt.x, "y": pt.y})


__all__ = [
    "CsvFormatError",
    "FIELDS",
    "load_unified_csv",
    "write_unified_csv",
]
