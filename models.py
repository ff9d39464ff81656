"""Core data models for boundary crossing searches."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Tuple

Coord = Tuple[int, int]
Direction = Literal["P", "R"]

NO_CROSSING = "-1"


@dataclass(frozen=True)
class Point:
    """Integer survey point tagged with its 1-based input position."""

    x: int
    y: int
    id: int = 0

    @property
    def coords(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class Edge:
    """Directed hull edge between two consecutive hull vertices."""

    start: Point
    end: Point

    @property
    def ids(self) -> Tuple[int, int]:
        return (self.start.id, self.end.id)


@dataclass(frozen=True)
class CrossingResult:
    """Segment endpoints and crossed hull edge, as reported ids.

    ``direction`` is ``"P"`` when the segment joins two points of P and the
    edge belongs to R's hull, ``"R"`` for the mirrored case. The ids are
    always stored in output order: segment ids first, edge ids second.
    """

    a_id: int
    b_id: int
    e1_id: int
    e2_id: int
    direction: Direction = "P"

    @property
    def ids(self) -> Tuple[int, int, int, int]:
        return (self.a_id, self.b_id, self.e1_id, self.e2_id)

    def format(self) -> str:
        return " ".join(str(i) for i in self.ids)


@dataclass(frozen=True)
class TestCase:
    """One pair of point sets to check for a boundary conflict."""

    __test__ = False  # keep pytest from collecting this dataclass

    p: List[Point]
    r: List[Point]
    label: Optional[str] = None


@dataclass
class SearchConfig:
    """Sampling policy and domain limits shared across modules."""

    near_offsets: int = 10  # partners following i in angular order
    antipodal_band: int = 5  # +/- band around n // 2
    random_offsets: int = 10
    hull_samples: int = 20  # coarse stride is n // hull_samples
    seed: Optional[int] = None
    use_fallback: bool = True
    # keeps every cross product inside a signed 64-bit range
    coordinate_limit: int = 10**9


def make_point_set(coords: Iterable[Coord]) -> List[Point]:
    """Wrap raw ``(x, y)`` pairs as points with ids 1..n in input order."""

    return [Point(int(x), int(y), index) for index, (x, y) in enumerate(coords, start=1)]


def point_by_id(points: Iterable[Point], point_id: int) -> Point:
    """Look up a point by id, raising ``KeyError`` when it is absent."""

    for pt in points:
        if pt.id == point_id:
            return pt
    raise KeyError(f"No point with id {point_id}.")


__all__ = [
    "Coord",
    "CrossingResult",
    "Direction",
    "Edge",
    "NO_CROSSING",
    "Point",
    "SearchConfig",
    "TestCase",
    "make_point_set",
    "point_by_id",
]
