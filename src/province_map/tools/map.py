"""Map loading tools: load_map, list_provinces."""

import json
import logging
from typing import Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state, Viewport
from ..core.engine import MapEngine
from ..core.models import MapConfig
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def register_map_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def load_map(
        file_path: str,
        width: int | None = None,
        height: int | None = None,
        min_admin_level: int = 4,
        duplicate_ids: Literal["warn", "reject"] = "warn",
    ) -> str:
        """Load a GeoJSON feature collection of administrative regions.

        Replaces any previously loaded map and resets the camera.
        **Next:** list_provinces, province_at, or render_map.

        Args:
            file_path: Path to a .geojson/.json feature collection.
            width/height: Viewport size in pixels the map is projected onto
                (default: current viewport, 1280x720 initially).
            min_admin_level: Lowest admin_level accepted as a province (default 4).
            duplicate_ids: 'warn' keeps duplicates (lookups return the first),
                'reject' fails the load.
        """
        try:
            viewport = Viewport(
                width=width or state.viewport.width,
                height=height or state.viewport.height,
            )
            config = MapConfig(
                width=viewport.width,
                height=viewport.height,
                min_admin_level=min_admin_level,
                duplicate_ids=duplicate_ids,
            )
        except ValueError as e:
            return f"Error: {e}"

        engine = MapEngine(config)
        if not engine.load_map(file_path):
            return f"Error: Failed to load map from {file_path} (see server logs)."

        state.engine = engine
        state.map_path = file_path
        state.viewport = viewport
        state.reset_camera()

        rings = sum(p.ring_count for p in engine)
        return (
            f"Map loaded: {len(engine)} provinces, {rings} rings "
            f"projected onto {viewport.width}x{viewport.height}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_provinces(limit: int = 50, offset: int = 0) -> str:
        """List loaded provinces in load order as JSON.

        **Requires:** load_map first.

        Args:
            limit: Maximum number of provinces to return (default 50).
            offset: Number of provinces to skip.
        """
        try:
            require_state(state, map_loaded=True)
        except ValueError as e:
            return f"Error: {e}"

        provinces = state.engine.provinces
        page = provinces[max(offset, 0):max(offset, 0) + max(limit, 0)]
        return json.dumps({
            "total": len(provinces),
            "offset": offset,
            "provinces": [
                {"id": p.id, "name": p.name, "rings": p.ring_count, "color": p.color.as_hex()}
                for p in page
            ],
        }, indent=2)
