"""Logarithmic segment versus convex hull intersection.

The locator finds *one* hull edge crossed by a segment. It projects the hull
onto the normal of the segment to find the two extreme vertices, which split
the hull into two monotone chains. Along each chain the side of the
segment's supporting line changes at most once, so a binary search finds the
edge where it flips; an exact segment test then confirms the edge.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from geometry import cross, segments_intersect, sign
from models import Edge, Point

logger = logging.getLogger(__name__)


def extreme_index(n: int, score: Callable[[int], int], maximize: bool, samples: int = 20) -> int:
    """Index of the vertex with the largest (or smallest) ``score``.

    ``score`` must be unimodal over the cyclic order, which holds for any
    linear projection of a convex polygon. A coarse stride picks the start,
    then hill climbing walks to the optimum in at most ``n`` steps.
    """
    def better(u: int, v: int) -> bool:
        return u > v if maximize else u < v

    best = 0
    best_val = score(0)
    step = max(1, n // max(1, samples))
    for i in range(0, n, step):
        val = score(i)
        if better(val, best_val):
            best, best_val = i, val

    curr = best
    for _ in range(n):
        nxt = (curr + 1) % n
        prev = (curr - 1) % n
        val_curr = score(curr)
        if better(score(nxt), val_curr):
            curr = nxt
        elif better(score(prev), val_curr):
            curr = prev
        else:
            break  # local optimum is global by unimodality
    return curr


def _check_chain(
    a: Point, b: Point, hull: Sequence[Point], start: int, end: int
) -> Optional[Edge]:
    """Search the cyclic chain start..end for the edge where the line ab crosses."""
    n = len(hull)

    def side(idx: int) -> int:
        return sign(cross(a, b, hull[idx]))

    start_side = side(start)
    if start_side == 0:
        nxt = (start + 1) % n
        if segments_intersect(a, b, hull[start], hull[nxt]):
            return Edge(hull[start], hull[nxt])
        prev = (start - 1) % n
        if segments_intersect(a, b, hull[prev], hull[start]):
            return Edge(hull[prev], hull[start])
        return None

    if side(end) == start_side:
        return None

    lo, hi = 0, (end - start) % n
    while lo + 1 < hi:
        mid = (lo + hi) // 2
        if side((start + mid) % n) == start_side:
            lo = mid
        else:
            hi = mid

    idx1 = (start + lo) % n
    idx2 = (start + lo + 1) % n
    if segments_intersect(a, b, hull[idx1], hull[idx2]):
        return Edge(hull[idx1], hull[idx2])
    return None


def intersect_segment_convex_hull(
    a: Point, b: Point, hull: Sequence[Point], samples: int = 20
) -> Optional[Edge]:
    """Return one edge of ``hull`` that the closed segment ab touches or crosses.

    Parameters
    ----------
    a, b:
        Segment endpoints.
    hull:
        Counter-clockwise convex hull as produced by ``geometry.convex_hull``.
    samples:
        Number of coarse samples used to seed the extreme vertex search.

    Returns
    -------
    Edge or None
        A consecutive hull edge ``e`` with
        ``segments_intersect(a, b, e.start, e.end)``, or ``None`` when no
        edge was found.
    """
    n = len(hull)
    if n < 2:
        return None
    if n == 2:
        if segments_intersect(a, b, hull[0], hull[1]):
            return Edge(hull[0], hull[1])
        return None

    dx = b.x - a.x
    dy = b.y - a.y

    def dot(idx: int) -> int:
        return -dy * hull[idx].x + dx * hull[idx].y

    max_idx = extreme_index(n, dot, maximize=True, samples=samples)
    min_idx = extreme_index(n, dot, maximize=False, samples=samples)

    side_max = sign(cross(a, b, hull[max_idx]))
    side_min = sign(cross(a, b, hull[min_idx]))
    if side_max == side_min and side_max != 0:
        # the supporting line misses the hull entirely
        return None

    edge = _check_chain(a, b, hull, max_idx, min_idx)
    if edge is None:
        edge = _check_chain(a, b, hull, min_idx, max_idx)
    if edge is not None:
        logger.debug("segment %s-%s crosses hull edge %s-%s", a.id, b.id, *edge.ids)
    return edge


__all__ = ["extreme_index", "intersect_segment_convex_hull"]
