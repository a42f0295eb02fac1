"""Tests for ring normalization and triangulation."""
import numpy as np

from province_map.core.triangulate import iter_triangles, normalize_ring, triangulate_ring


def _area(points, tri):
    a, b, c = (points[i] for i in tri)
    return abs((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])) / 2


class TestNormalizeRing:
    def test_closed_ring_loses_one_point(self):
        ring = np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)
        assert len(normalize_ring(ring)) == 4

    def test_closure_within_tolerance(self):
        ring = np.array([[0, 0], [1, 0], [1, 1], [5e-7, -5e-7]], dtype=float)
        assert len(normalize_ring(ring)) == 3

    def test_open_ring_unchanged(self):
        ring = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        out = normalize_ring(ring)
        np.testing.assert_array_equal(out, ring)

    def test_near_but_outside_tolerance_unchanged(self):
        ring = np.array([[0, 0], [1, 0], [1, 1], [2e-6, 0]], dtype=float)
        assert len(normalize_ring(ring)) == 4

    def test_single_point_unchanged(self):
        ring = np.array([[3.0, 4.0]])
        assert len(normalize_ring(ring)) == 1

    def test_empty_ring(self):
        assert len(normalize_ring(np.empty((0, 2)))) == 0


class TestTriangulateRing:
    def test_square_two_triangles(self):
        ring = np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=float)
        indices = triangulate_ring(ring)
        assert indices.dtype == np.uint32
        assert len(indices) == 6
        assert np.all(indices < len(ring))
        tris = list(iter_triangles(indices, len(ring)))
        assert sum(_area(ring, t) for t in tris) == 100.0

    def test_concave_l_shape(self):
        ring = np.array([[0, 0], [4, 0], [4, 1], [1, 1], [1, 4], [0, 4]], dtype=float)
        indices = triangulate_ring(ring)
        tris = list(iter_triangles(indices, len(ring)))
        assert len(tris) == 4
        assert np.isclose(sum(_area(ring, t) for t in tris), 7.0)

    def test_screen_space_clockwise_ring(self):
        ring = np.array([[0, 0], [0, 10], [10, 10], [10, 0]], dtype=float)
        indices = triangulate_ring(ring)
        assert len(indices) == 6

    def test_too_few_points(self):
        assert len(triangulate_ring(np.array([[0.0, 0.0], [1.0, 1.0]]))) == 0
        assert len(triangulate_ring(np.empty((0, 2)))) == 0

    def test_collinear_ring_does_not_raise(self):
        ring = np.array([[0, 0], [1, 1], [2, 2], [3, 3]], dtype=float)
        indices = triangulate_ring(ring)
        assert np.all(indices < len(ring))

    def test_self_intersecting_ring_indices_in_range(self):
        ring = np.array([[0, 0], [10, 10], [10, 0], [0, 10]], dtype=float)
        indices = triangulate_ring(ring)
        assert len(indices) % 3 == 0
        assert np.all(indices < len(ring))


class TestIterTriangles:
    def test_valid_triples(self):
        assert list(iter_triangles(np.array([0, 1, 2, 0, 2, 3]), 4)) == [(0, 1, 2), (0, 2, 3)]

    def test_out_of_range_triangle_skipped(self):
        indices = np.array([0, 1, 2, 0, 2, 9, 1, 2, 3])
        assert list(iter_triangles(indices, 4)) == [(0, 1, 2), (1, 2, 3)]

    def test_trailing_partial_triple_ignored(self):
        assert list(iter_triangles(np.array([0, 1, 2, 3, 0]), 4)) == [(0, 1, 2)]

    def test_index_equal_to_count_is_out_of_range(self):
        assert list(iter_triangles(np.array([0, 1, 4]), 4)) == []

    def test_empty(self):
        assert list(iter_triangles(np.array([], dtype=np.uint32), 4)) == []
