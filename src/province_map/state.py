"""Session state for the province-map MCP server.

Holds the loaded map engine, viewport size, camera, and draw colors.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from province_map.core.engine import MapEngine
from province_map.core.spatial import Camera2D
from province_map.models import Color, DARK_GRAY

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720


class Viewport(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    width: int = Field(default=DEFAULT_WIDTH, gt=0, le=16384)
    height: int = Field(default=DEFAULT_HEIGHT, gt=0, le=16384)


class SessionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    engine: Optional[MapEngine] = None
    map_path: str = ""
    viewport: Viewport = Field(default_factory=Viewport)
    camera: Camera2D = Field(
        default_factory=lambda: Camera2D.centered(DEFAULT_WIDTH, DEFAULT_HEIGHT)
    )
    outline_color: Color = DARK_GRAY
    background_color: Color = Color(r=0, g=82, b=172, a=255)

    @field_validator("outline_color", "background_color", mode="before")
    @classmethod
    def parse_color(cls, v):
        return Color.parse(v)

    @property
    def map_loaded(self) -> bool:
        return self.engine is not None and self.engine.is_loaded

    def reset_camera(self) -> None:
        self.camera = Camera2D.centered(self.viewport.width, self.viewport.height)

    def summary(self) -> dict:
        engine = self.engine
        return {
            "map": {
                "loaded": self.map_loaded,
                "path": self.map_path or None,
                "provinces": len(engine) if self.map_loaded else 0,
                "rings": sum(p.ring_count for p in engine) if self.map_loaded else 0,
                "geo_bounds": engine.geo_bounds.as_dict() if self.map_loaded else None,
            },
            "viewport": {
                "width": self.viewport.width,
                "height": self.viewport.height,
            },
            "camera": self.camera.model_dump(),
            "colors": {
                "outline": self.outline_color.as_hex(),
                "background": self.background_color.as_hex(),
            },
        }


# Global session state, one per MCP server process
state = SessionState()
