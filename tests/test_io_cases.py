"""Unit tests for the whitespace multi-case reader and writer."""
from __future__ import annotations

from pathlib import Path

import pytest

from io_cases import CaseFormatError, format_cases, format_result, load_cases, parse_cases
from models import CrossingResult


SAMPLE = """2
4
0 0
4 0
4 4
0 4
4
2 2
6 2
6 6
2 6
3
0 0 1 0 0 1
3
10 10 11 10 10 11
"""


def test_parse_sample() -> None:
    cases = parse_cases(SAMPLE)
    assert len(cases) == 2
    first, second = cases
    assert [pt.coords for pt in first.p] == [(0, 0), (4, 0), (4, 4), (0, 4)]
    assert [pt.id for pt in first.r] == [1, 2, 3, 4]
    assert second.r[2].coords == (10, 11)
    assert second.label == "case 2"


def test_load_and_format_cases(tmp_path: Path) -> None:
    cases = parse_cases(SAMPLE)
    path = tmp_path / "cases.txt"
    path.write_text(format_cases(cases), encoding="utf-8")
    loaded = load_cases(str(path))
    assert [[pt.coords for pt in c.p] for c in loaded] == [[pt.coords for pt in c.p] for c in cases]
    assert [[pt.coords for pt in c.r] for c in loaded] == [[pt.coords for pt in c.r] for c in cases]


def test_empty_input_and_empty_sets() -> None:
    assert parse_cases("   \n") == []
    (case,) = parse_cases("1\n0\n1\n5 5\n")
    assert case.p == []
    assert case.r[0].coords == (5, 5)


def test_negative_coordinates_and_trailing_tokens() -> None:
    (case,) = parse_cases("1 1 -3 -4 1 7 8 extra tokens")
    assert case.p[0].coords == (-3, -4)
    assert case.r[0].coords == (7, 8)


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("1\n2\n0 0\n", "end of input"),
        ("1\n1\n0 zero\n1\n1 1\n", "Invalid integer"),
        ("1\n-2\n", "Negative"),
        ("x", "number of test cases"),
    ],
)
def test_malformed_input_raises(text: str, fragment: str) -> None:
    with pytest.raises(CaseFormatError, match=fragment):
        parse_cases(text)


def test_format_result() -> None:
    assert format_result(None) == "-1"
    assert format_result(CrossingResult(3, 1, 2, 4, "R")) == "3 1 2 4"
