"""Reader and writer for the whitespace-separated multi-case format.

Layout: a leading case count ``t``; then for every case ``n``, ``n``
coordinate pairs for P, ``m`` and ``m`` coordinate pairs for R. Any
whitespace separates tokens. Output is one line per case, either
``a b e1 e2`` or ``-1``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from models import NO_CROSSING, CrossingResult, Point, TestCase, make_point_set


class CaseFormatError(ValueError):
    """Raised when the case stream is malformed."""


class _Tokens:
    def __init__(self, text: str) -> None:
        self._tokens: Iterator[str] = iter(text.split())
        self.position = 0

    def next_int(self, what: str) -> int:
        try:
            raw = next(self._tokens)
        except StopIteration:
            raise CaseFormatError(
                f"Unexpected end of input while reading {what} (token {self.position + 1})."
            ) from None
        self.position += 1
        try:
            return int(raw)
        except ValueError as exc:
            raise CaseFormatError(
                f"Invalid integer for {what} at token {self.position}: {raw!r}"
            ) from exc

    def next_count(self, what: str) -> int:
        value = self.next_int(what)
        if value < 0:
            raise CaseFormatError(f"Negative {what} at token {self.position}: {value}")
        return value


def _read_point_set(tokens: _Tokens, name: str, case_no: int) -> List[Point]:
    count = tokens.next_count(f"size of {name} in case {case_no}")
    coords = []
    for index in range(1, count + 1):
        x = tokens.next_int(f"x of {name}[{index}] in case {case_no}")
        y = tokens.next_int(f"y of {name}[{index}] in case {case_no}")
        coords.append((x, y))
    return make_point_set(coords)


def parse_cases(text: str) -> List[TestCase]:
    """Parse every test case from ``text``. Tokens after the last case are ignored."""

    tokens = _Tokens(text)
    if not text.strip():
        return []
    total = tokens.next_count("number of test cases")
    cases: List[TestCase] = []
    for case_no in range(1, total + 1):
        p = _read_point_set(tokens, "P", case_no)
        r = _read_point_set(tokens, "R", case_no)
        cases.append(TestCase(p=p, r=r, label=f"case {case_no}"))
    return cases


def load_cases(path: str) -> List[TestCase]:
    """Load test cases from a text file."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:  # pragma: no cover - surfaced to caller
        raise exc
    except OSError as exc:  # pragma: no cover - surfaced to caller
        raise OSError(f"Failed to read cases '{path}': {exc}") from exc
    return parse_cases(text)


def format_cases(cases: Iterable[TestCase]) -> str:
    """Serialise cases back into the input format (used for fixtures)."""

    cases = list(cases)
    lines = [str(len(cases))]
    for case in cases:
        for points in (case.p, case.r):
            lines.append(str(len(points)))
            lines.extend(f"{pt.x} {pt.y}" for pt in points)
    return "\n".join(lines) + "\n"


def format_result(result: Optional[CrossingResult]) -> str:
    return result.format() if result is not None else NO_CROSSING


__all__ = [
    "CaseFormatError",
    "format_cases",
    "format_result",
    "load_cases",
    "parse_cases",
]
