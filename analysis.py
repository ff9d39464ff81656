# analysis.py
# Independent checks of reported crossings and per-set hull summaries.
from __future__ import annotations
from typing import Dict, Sequence
import numpy as np

from geometry import convex_hull, hull_edges, segments_intersect
from models import CrossingResult, Point, point_by_id

# ---------- Crossing verification -----------------------------------------------

def crossing_is_valid(result: CrossingResult, p: Sequence[Point], r: Sequence[Point]) -> bool:
    """Re-derive a reported crossing from scratch.

    The segment ids are resolved in the source set, the edge ids in the other
    set; the edge must be a consecutive edge of the other set's hull and the
    two closed segments must intersect.
    """
    source, target = (p, r) if result.direction == "P" else (r, p)
    try:
        a = point_by_id(source, result.a_id)
        b = point_by_id(source, result.b_id)
        e1 = point_by_id(target, result.e1_id)
        e2 = point_by_id(target, result.e2_id)
    except KeyError:
        return False
    if a.id == b.id:
        return False
    edge_ids = {edge.ids for edge in hull_edges(convex_hull(target))}
    if (e1.id, e2.id) not in edge_ids and (e2.id, e1.id) not in edge_ids:
        return False
    return segments_intersect(a, b, e1, e2)

# ---------- Hull summaries ------------------------------------------------------

def hull_summary(points: Sequence[Point]) -> Dict[str, object]:
    """Vertex count, bounding box and vertex centroid of a set's hull."""
    hull = convex_hull(points)
    if not hull:
        return {"points": 0, "hull_vertices": 0, "hull_ids": [], "bbox": None, "centroid": None}
    xy = np.array([pt.coords for pt in hull], dtype=float)
    lo = xy.min(axis=0)
    hi = xy.max(axis=0)
    centroid = xy.mean(axis=0)
    return {
        "points": len(points),
        "hull_vertices": len(hull),
        "hull_ids": [pt.id for pt in hull],
        "bbox": (float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])),
        "centroid": (float(centroid[0]), float(centroid[1])),
    }


__all__ = ["crossing_is_valid", "hull_summary"]
