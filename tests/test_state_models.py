"""Tests for state and configuration Pydantic models."""
import pytest
from pydantic import ValidationError


class TestMapConfig:
    def test_defaults(self):
        from province_map.core.models import MapConfig
        c = MapConfig()
        assert (c.width, c.height) == (1280, 720)
        assert c.min_admin_level == 4
        assert c.duplicate_ids == "warn"

    def test_dimensions_must_be_positive(self):
        from province_map.core.models import MapConfig
        with pytest.raises(ValidationError):
            MapConfig(width=0)
        with pytest.raises(ValidationError):
            MapConfig(height=-1)

    def test_duplicate_policy_values(self):
        from province_map.core.models import MapConfig
        with pytest.raises(ValidationError):
            MapConfig(duplicate_ids="ignore")

    def test_assignment_validated(self):
        from province_map.core.models import MapConfig
        c = MapConfig()
        with pytest.raises(ValidationError):
            c.min_admin_level = -1

    def test_engine_overrides(self):
        from province_map.core.engine import MapEngine
        from province_map.core.models import MapConfig
        engine = MapEngine(MapConfig(width=640), height=480)
        assert (engine.width, engine.height) == (640, 480)


class TestViewport:
    def test_defaults(self):
        from province_map.state import Viewport
        v = Viewport()
        assert (v.width, v.height) == (1280, 720)

    def test_rejects_zero(self):
        from province_map.state import Viewport
        with pytest.raises(ValidationError):
            Viewport(width=0)


class TestSessionState:
    def test_defaults(self):
        from province_map.state import SessionState
        s = SessionState()
        assert s.engine is None
        assert not s.map_loaded
        assert s.camera.zoom == 1.0
        assert s.camera.offset_x == 640

    def test_color_fields_parse_hex(self):
        from province_map.state import SessionState
        s = SessionState()
        s.outline_color = "#102030"
        assert s.outline_color.as_tuple() == (0x10, 0x20, 0x30, 255)

    def test_reset_camera_follows_viewport(self):
        from province_map.state import SessionState, Viewport
        s = SessionState()
        s.viewport = Viewport(width=200, height=100)
        s.reset_camera()
        assert (s.camera.offset_x, s.camera.offset_y) == (100, 50)

    def test_summary_without_map(self):
        from province_map.state import SessionState
        summary = SessionState().summary()
        assert summary["map"]["loaded"] is False
        assert summary["map"]["geo_bounds"] is None
        assert set(summary) == {"map", "viewport", "camera", "colors"}

    def test_engine_field_type_checked(self):
        from province_map.state import SessionState
        with pytest.raises(ValidationError):
            SessionState(engine="not an engine")
