"""Tests for the camera, ring bounds indexing, and visibility culling."""
import numpy as np
import pytest
from pydantic import ValidationError

from province_map.core.spatial import (
    Camera2D, index_bounds, index_geometry, is_ring_visible, ring_bounds,
)
from province_map.models import Color, Province, ProvinceGeometry, Rect


def _province(pid, *rings):
    return Province(
        id=pid,
        color=Color.pastel_for(pid),
        geometry=ProvinceGeometry(polygons=list(rings), polygon_indices=[[] for _ in rings]),
    )


SQUARE = [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]


class TestCamera2D:
    def test_centered_camera_is_identity(self):
        cam = Camera2D.centered(800, 600)
        assert cam.world_to_screen(123.0, 45.0) == pytest.approx((123.0, 45.0))
        view = cam.view_rect(800, 600)
        assert (view.x_min, view.y_min, view.x_max, view.y_max) == pytest.approx((0, 0, 800, 600))

    def test_screen_to_world_inverts_world_to_screen(self):
        cam = Camera2D(target_x=100, target_y=-50, offset_x=400, offset_y=300, zoom=2.5)
        sx, sy = cam.world_to_screen(37.0, 12.0)
        assert cam.screen_to_world(sx, sy) == pytest.approx((37.0, 12.0))

    def test_zoom_shrinks_view(self):
        cam = Camera2D(target_x=500, target_y=500, offset_x=400, offset_y=300, zoom=2.0)
        view = cam.view_rect(800, 600)
        assert view.width == pytest.approx(400)
        assert view.height == pytest.approx(300)
        assert view.x_min == pytest.approx(300)
        assert view.y_min == pytest.approx(350)

    def test_zoom_must_be_positive(self):
        with pytest.raises(ValidationError):
            Camera2D(zoom=0)
        cam = Camera2D()
        with pytest.raises(ValidationError):
            cam.zoom = -1.0


class TestRingBounds:
    def test_ring_bounds(self):
        r = ring_bounds(np.array([[3.0, 4.0], [-1.0, 8.0], [5.0, 2.0]]))
        assert r == Rect(x_min=-1.0, y_min=2.0, x_max=5.0, y_max=8.0)

    def test_index_bounds_one_per_ring(self):
        provinces = index_bounds([
            _province("A", SQUARE),
            _province("B", SQUARE, [[20.0, 20.0], [30.0, 20.0], [25.0, 30.0]]),
        ])
        assert [p.id for p in provinces] == ["A", "B"]
        for p in provinces:
            assert len(p.polygon_bounds) == len(p.polygons) == len(p.polygon_indices)
        assert provinces[1].polygon_bounds[1] == Rect(x_min=20, y_min=20, x_max=30, y_max=30)

    def test_index_bounds_keeps_geometry_and_input(self):
        p = _province("A", SQUARE)
        (indexed,) = index_bounds([p])
        np.testing.assert_array_equal(indexed.polygons[0], p.polygons[0])
        assert indexed.color == p.color
        assert p.polygon_bounds == ()

    def test_index_geometry(self):
        g = ProvinceGeometry(polygons=[SQUARE], polygon_indices=[[0, 1, 2]])
        indexed = index_geometry(g)
        assert indexed.polygon_bounds == (Rect(x_min=0, y_min=0, x_max=10, y_max=10),)
        assert not indexed.polygons[0].flags.writeable


class TestVisibility:
    def test_ring_without_bounds_is_not_visible(self):
        p = _province("A", SQUARE)
        view = Rect(x_min=-100, y_min=-100, x_max=100, y_max=100)
        assert not is_ring_visible(p, 0, view)

    def test_ring_outside_view_is_culled(self):
        (p,) = index_bounds([_province("A", SQUARE)])
        assert not is_ring_visible(p, 0, Rect(x_min=20, y_min=20, x_max=40, y_max=40))

    def test_ring_overlapping_by_one_unit_is_visible(self):
        (p,) = index_bounds([_province("A", SQUARE)])
        assert is_ring_visible(p, 0, Rect(x_min=9, y_min=9, x_max=40, y_max=40))

    def test_ring_index_past_bounds_is_not_visible(self):
        (p,) = index_bounds([_province("A", SQUARE)])
        assert not is_ring_visible(p, 3, Rect(x_min=-100, y_min=-100, x_max=100, y_max=100))
