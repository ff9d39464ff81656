"""Unit tests for the exact integer geometry helpers."""
from __future__ import annotations

import numpy as np

from geometry import (
    convex_hull,
    cross,
    hull_edges,
    on_segment,
    point_in_convex_hull,
    segments_intersect,
    sign,
)
from models import Point, make_point_set


def _pt(x, y, pid=0):
    return Point(x, y, pid)


def _random_sets(seed, count=40, size=12, span=8):
    rng = np.random.default_rng(seed)
    for _ in range(count):
        n = int(rng.integers(1, size))
        coords = rng.integers(-span, span + 1, size=(n, 2))
        yield make_point_set((int(x), int(y)) for x, y in coords)


def test_cross_and_sign():
    o, a = _pt(0, 0), _pt(1, 0)
    assert cross(o, a, _pt(0, 1)) == 1
    assert cross(o, a, _pt(0, -1)) == -1
    assert cross(o, a, _pt(5, 0)) == 0
    assert [sign(v) for v in (-7, 0, 3)] == [-1, 0, 1]


def test_segments_intersect_cases():
    # proper crossing
    assert segments_intersect(_pt(0, 0), _pt(4, 4), _pt(0, 4), _pt(4, 0))
    # shared endpoint
    assert segments_intersect(_pt(0, 0), _pt(2, 0), _pt(2, 0), _pt(2, 5))
    # T junction
    assert segments_intersect(_pt(0, 0), _pt(4, 0), _pt(2, 0), _pt(2, 3))
    # collinear overlap
    assert segments_intersect(_pt(0, 0), _pt(4, 0), _pt(3, 0), _pt(6, 0))
    # collinear but disjoint
    assert not segments_intersect(_pt(0, 0), _pt(1, 0), _pt(2, 0), _pt(3, 0))
    # parallel
    assert not segments_intersect(_pt(0, 0), _pt(4, 0), _pt(0, 1), _pt(4, 1))
    # lines cross outside both segments
    assert not segments_intersect(_pt(0, 0), _pt(1, 1), _pt(3, 0), _pt(2, 1))


def test_segments_intersect_is_symmetric():
    rng = np.random.default_rng(11)
    for _ in range(500):
        a, b, c, d = (_pt(int(x), int(y)) for x, y in rng.integers(-4, 5, size=(4, 2)))
        assert segments_intersect(a, b, c, d) == segments_intersect(c, d, a, b)
        assert segments_intersect(a, b, c, d) == segments_intersect(b, a, d, c)


def test_on_segment():
    a, b = _pt(0, 0), _pt(4, 2)
    assert on_segment(a, b, _pt(2, 1))
    assert on_segment(a, b, a)
    assert not on_segment(a, b, _pt(6, 3))
    assert not on_segment(a, b, _pt(2, 2))


def test_convex_hull_square_drops_collinear_and_interior():
    pts = make_point_set([(0, 0), (2, 0), (4, 0), (4, 4), (2, 2), (0, 4), (0, 2)])
    hull = convex_hull(pts)
    assert [pt.coords for pt in hull] == [(0, 0), (4, 0), (4, 4), (0, 4)]
    assert [pt.id for pt in hull] == [1, 3, 4, 6]


def test_convex_hull_degenerate_inputs():
    assert convex_hull([]) == []
    single = make_point_set([(3, 3)])
    assert convex_hull(single) == single
    pair = make_point_set([(1, 1), (1, 1)])
    assert convex_hull(pair) == pair
    line = make_point_set([(0, 0), (3, 3), (1, 1), (2, 2)])
    assert [pt.coords for pt in convex_hull(line)] == [(0, 0), (3, 3)]
    same = make_point_set([(5, 5)] * 4)
    assert [pt.coords for pt in convex_hull(same)] == [(5, 5), (5, 5)]
    assert [pt.id for pt in convex_hull(same)] == [1, 4]


def test_identical_points_give_same_hull_shape_for_any_count():
    for count in (2, 3, 6):
        hull = convex_hull(make_point_set([(5, 5)] * count))
        assert len(hull) == 2
        assert point_in_convex_hull(hull, _pt(5, 5))
        assert not point_in_convex_hull(hull, _pt(5, 6))
        assert [e.ids for e in hull_edges(hull)] == [(1, count)]


def test_convex_hull_does_not_mutate_input():
    pts = make_point_set([(4, 4), (0, 0), (4, 0), (0, 4)])
    before = list(pts)
    convex_hull(pts)
    assert pts == before


def test_convex_hull_properties_on_random_sets():
    for pts in _random_sets(3):
        hull = convex_hull(pts)
        assert all(any(h is p for p in pts) for h in hull)
        if len(hull) >= 3:
            n = len(hull)
            for i in range(n):
                assert cross(hull[i], hull[(i + 1) % n], hull[(i + 2) % n]) > 0
            assert len({pt.coords for pt in hull}) == n
        for p in pts:
            assert point_in_convex_hull(hull, p)


def test_point_in_convex_hull_small_hulls():
    assert not point_in_convex_hull([], _pt(0, 0))
    assert point_in_convex_hull([_pt(1, 2)], _pt(1, 2))
    assert not point_in_convex_hull([_pt(1, 2)], _pt(2, 1))
    seg = [_pt(0, 0), _pt(4, 4)]
    assert point_in_convex_hull(seg, _pt(2, 2))
    assert not point_in_convex_hull(seg, _pt(5, 5))
    assert not point_in_convex_hull(seg, _pt(2, 3))


def test_point_in_convex_hull_boundary_is_inside():
    hull = convex_hull(make_point_set([(0, 0), (6, 0), (6, 6), (0, 6)]))
    assert point_in_convex_hull(hull, _pt(3, 3))
    assert point_in_convex_hull(hull, _pt(0, 0))
    assert point_in_convex_hull(hull, _pt(6, 3))
    assert point_in_convex_hull(hull, _pt(3, 6))
    assert not point_in_convex_hull(hull, _pt(7, 3))
    assert not point_in_convex_hull(hull, _pt(-1, -1))
    # on the rays from hull[0] but beyond the polygon
    assert not point_in_convex_hull(hull, _pt(8, 0))
    assert not point_in_convex_hull(hull, _pt(0, 8))


def test_point_in_convex_hull_matches_edge_scan():
    rng = np.random.default_rng(5)
    for pts in _random_sets(7, count=60):
        hull = convex_hull(pts)
        if len(hull) < 3:
            continue
        for x, y in rng.integers(-10, 11, size=(30, 2)):
            q = _pt(int(x), int(y))
            expected = all(cross(e.start, e.end, q) >= 0 for e in hull_edges(hull))
            assert point_in_convex_hull(hull, q) == expected


def test_inside_point_is_not_strictly_outside_any_edge():
    hull = convex_hull(make_point_set([(0, 0), (5, 1), (6, 5), (2, 7), (-1, 3)]))
    inside = _pt(2, 3)
    assert point_in_convex_hull(hull, inside)
    for edge in hull_edges(hull):
        assert cross(edge.start, edge.end, inside) >= 0


def test_hull_edges():
    assert hull_edges([_pt(0, 0)]) == []
    two = [_pt(0, 0, 1), _pt(1, 0, 2)]
    assert [e.ids for e in hull_edges(two)] == [(1, 2)]
    tri = make_point_set([(0, 0), (1, 0), (0, 1)])
    assert [e.ids for e in hull_edges(tri)] == [(1, 2), (2, 3), (3, 1)]
