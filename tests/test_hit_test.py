"""Tests for ray-cast point containment."""
import numpy as np

from province_map.core.hit_test import point_in_ring

SQUARE = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])


def test_point_inside_square():
    assert point_in_ring(SQUARE, 5, 5)


def test_point_outside_square():
    assert not point_in_ring(SQUARE, 15, 15)
    assert not point_in_ring(SQUARE, -1, 5)


def test_winding_does_not_matter():
    assert point_in_ring(SQUARE[::-1].copy(), 5, 5)


def test_concave_notch_is_outside():
    ring = np.array([[0, 0], [4, 0], [4, 1], [1, 1], [1, 4], [0, 4]], dtype=float)
    assert point_in_ring(ring, 0.5, 3.0)
    assert point_in_ring(ring, 3.0, 0.5)
    assert not point_in_ring(ring, 3.0, 3.0)


def test_horizontal_edges_do_not_divide_by_zero():
    ring = np.array([[0, 0], [10, 0], [10, 5], [5, 5], [5, 10], [0, 10]], dtype=float)
    assert point_in_ring(ring, 2, 5)
    assert not point_in_ring(ring, 8, 8)


def test_degenerate_rings():
    assert not point_in_ring(np.empty((0, 2)), 0, 0)
    assert not point_in_ring(np.array([[1.0, 1.0]]), 1, 1)
    assert not point_in_ring(np.array([[0.0, 0.0], [5.0, 5.0]]), 2, 2)


def test_explicitly_closed_ring_still_works():
    closed = np.vstack([SQUARE, SQUARE[:1]])
    assert point_in_ring(closed, 5, 5)
