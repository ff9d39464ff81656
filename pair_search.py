"""Candidate pair search for a segment of one set crossing the other set's hull.

Testing every pair of points is quadratic, so each point is only paired with
a curated set of partners in angular order around the target hull's
centroid: its next few neighbours, a band around the antipodal position and
a handful of random offsets. A containment fallback covers nested layouts the
sampled pairs can miss. The search is a heuristic; a crossing that needs one
specific unsampled pair may go unreported.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from geometry import convex_hull, point_in_convex_hull
from hull_search import intersect_segment_convex_hull
from models import CrossingResult, Direction, Edge, Point, SearchConfig

logger = logging.getLogger(__name__)

Hit = Tuple[Point, Point, Edge]


def hull_centroid(hull: Sequence[Point]) -> Tuple[float, float]:
    """Mean of the hull vertex coordinates."""
    coords = np.array([pt.coords for pt in hull], dtype=float)
    cx, cy = coords.mean(axis=0)
    return float(cx), float(cy)


def angular_order(points: Sequence[Point], centre: Tuple[float, float]) -> List[Point]:
    """Points sorted by polar angle around ``centre`` (ties keep input order)."""
    if not points:
        return []
    coords = np.array([pt.coords for pt in points], dtype=float)
    angles = np.arctan2(coords[:, 1] - centre[1], coords[:, 0] - centre[0])
    order = np.argsort(angles, kind="stable")
    return [points[int(i)] for i in order]


def candidate_offsets(n: int, config: SearchConfig, rng: np.random.Generator) -> List[int]:
    """Partner offsets tried for every point, in the order they are tested."""
    offsets = list(range(1, config.near_offsets + 1))
    half = n // 2
    offsets.extend(half - k for k in range(0, config.antipodal_band + 1))
    offsets.extend(half + k for k in range(1, config.antipodal_band + 1))
    if n > 0 and config.random_offsets > 0:
        offsets.extend(int(k) for k in rng.integers(0, n, size=config.random_offsets))
    return offsets


def directed_search(
    points: Sequence[Point],
    hull: Sequence[Point],
    config: SearchConfig,
    rng: np.random.Generator,
) -> Optional[Hit]:
    """First sampled segment of ``points`` that crosses an edge of ``hull``."""
    if not points or len(hull) < 2:
        return None
    ordered = angular_order(points, hull_centroid(hull))
    n = len(ordered)
    offsets = candidate_offsets(n, config, rng)
    for i in range(n):
        for k in offsets:
            j = (i + k) % n
            if i == j:
                continue
            a, b = ordered[i], ordered[j]
            edge = intersect_segment_convex_hull(a, b, hull, samples=config.hull_samples)
            if edge is not None:
                return a, b, edge
    return None


def containment_fallback(
    points: Sequence[Point],
    own_hull: Sequence[Point],
    other_hull: Sequence[Point],
    samples: int = 20,
) -> Optional[Hit]:
    """Join a point lying inside ``other_hull`` to an own hull vertex outside it.

    Only the first contained point is tried; the segment from it to an
    exterior vertex must leave ``other_hull`` through one of its edges.
    """
    for p in points:
        if not point_in_convex_hull(other_hull, p):
            continue
        for q in own_hull:
            if point_in_convex_hull(other_hull, q):
                continue
            edge = intersect_segment_convex_hull(p, q, other_hull, samples=samples)
            if edge is not None:
                return p, q, edge
        break
    return None


def _to_result(hit: Hit, direction: Direction) -> CrossingResult:
    a, b, edge = hit
    return CrossingResult(a.id, b.id, edge.start.id, edge.end.id, direction)


def find_crossing(
    p: Sequence[Point],
    r: Sequence[Point],
    config: Optional[SearchConfig] = None,
) -> Optional[CrossingResult]:
    """Search for a segment of one set crossing the other set's convex hull.

    Stages run in order and the first hit wins: P segments against R's hull,
    R segments against P's hull, then the containment fallback in both
    directions. Returns ``None`` when no stage finds a crossing.

    The required fallback only covers P points inside R's hull. The mirrored
    stage for R points inside P's hull is an extension on top of it; like the
    first fallback it is switched off by ``config.use_fallback = False``.
    """
    config = config or SearchConfig()
    rng = np.random.default_rng(config.seed)
    hull_p = convex_hull(p)
    hull_r = convex_hull(r)
    logger.debug("hull sizes: P=%d R=%d", len(hull_p), len(hull_r))

    hit = directed_search(p, hull_r, config, rng)
    if hit is not None:
        logger.debug("found by P -> hull(R) search")
        return _to_result(hit, "P")

    hit = directed_search(r, hull_p, config, rng)
    if hit is not None:
        logger.debug("found by R -> hull(P) search")
        return _to_result(hit, "R")

    if not config.use_fallback:
        return None

    hit = containment_fallback(p, hull_p, hull_r, samples=config.hull_samples)
    if hit is not None:
        logger.debug("found by containment fallback, P inside hull(R)")
        return _to_result(hit, "P")

    hit = containment_fallback(r, hull_r, hull_p, samples=config.hull_samples)
    if hit is not None:
        logger.debug("found by containment fallback, R inside hull(P)")
        return _to_result(hit, "R")

    logger.debug("no crossing found")
    return None


__all__ = [
    "angular_order",
    "candidate_offsets",
    "containment_fallback",
    "directed_search",
    "find_crossing",
    "hull_centroid",
]
