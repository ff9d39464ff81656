# geometry.py
# Exact integer 2D primitives, monotone chain hull and convex membership.
#
# Coordinates are plain Python ints. Callers keep |x|, |y| within
# SearchConfig.coordinate_limit so every product below would also fit a
# signed 64-bit integer; see validation.validate_case.

from __future__ import annotations
from typing import List, Sequence

from models import Edge, Point


def cross(o: Point, a: Point, b: Point) -> int:
    """Twice the signed area of triangle o->a->b (>0 means a left turn)."""
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def sign(v: int) -> int:
    if v < 0:
        return -1
    if v > 0:
        return 1
    return 0


def segments_intersect(a: Point, b: Point, c: Point, d: Point) -> bool:
    """True iff closed segments ab and cd share at least one point.

    Touching endpoints and collinear overlap count as intersecting.
    """
    if (max(a.x, b.x) < min(c.x, d.x) or max(c.x, d.x) < min(a.x, b.x)
            or max(a.y, b.y) < min(c.y, d.y) or max(c.y, d.y) < min(a.y, b.y)):
        return False

    cp1 = cross(a, b, c)
    cp2 = cross(a, b, d)
    cp3 = cross(c, d, a)
    cp4 = cross(c, d, b)

    # zero means touching; otherwise the endpoints must straddle the line
    straddles_ab = cp1 == 0 or cp2 == 0 or sign(cp1) != sign(cp2)
    straddles_cd = cp3 == 0 or cp4 == 0 or sign(cp3) != sign(cp4)
    return straddles_ab and straddles_cd


def on_segment(a: Point, b: Point, p: Point) -> bool:
    """Closed-segment membership: collinear with ab and inside its bounding box."""
    return (
        cross(a, b, p) == 0
        and min(a.x, b.x) <= p.x <= max(a.x, b.x)
        and min(a.y, b.y) <= p.y <= max(a.y, b.y)
    )


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """Monotone chain convex hull. Returns points in CCW order, no duplicate last point.

    Collinear boundary points are dropped, so only strictly convex turns
    remain. Inputs of size <= 2 come back unchanged (as a new list).
    """
    if len(points) <= 2:
        return list(points)
    pts = sorted(points, key=lambda p: (p.x, p.y))
    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    # all-identical input leaves a zero-length two-point hull, as for n == 2
    return lower[:-1] + upper[:-1]


def point_in_convex_hull(hull: Sequence[Point], p: Point) -> bool:
    """Check if p is inside (or on the boundary of) a CCW convex hull in O(log n)."""
    n = len(hull)
    if n == 0:
        return False
    if n == 1:
        return p.coords == hull[0].coords
    if n == 2:
        return on_segment(hull[0], hull[1], p)

    origin = hull[0]
    if cross(origin, hull[1], p) < 0 or cross(origin, hull[n - 1], p) > 0:
        return False

    lo, hi = 1, n - 1
    while lo + 1 < hi:
        mid = (lo + hi) // 2
        if cross(origin, hull[mid], p) >= 0:
            lo = mid
        else:
            hi = mid
    return cross(hull[lo], hull[hi], p) >= 0


def hull_edges(hull: Sequence[Point]) -> List[Edge]:
    if len(hull) < 2:
        return []
    if len(hull) == 2:
        return [Edge(hull[0], hull[1])]
    return [Edge(hull[i], hull[(i + 1) % len(hull)]) for i in range(len(hull))]


__all__ = [
    "convex_hull",
    "cross",
    "hull_edges",
    "on_segment",
    "point_in_convex_hull",
    "segments_intersect",
    "sign",
]
