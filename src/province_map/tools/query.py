"""Province query tools: get_province, province_at, set_province_color."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..models import Color
from ._prereqs import require_state


def register_query_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_province(province_id: str) -> str:
        """Look up a province by its region id.

        **Requires:** load_map first.
        """
        try:
            require_state(state, map_loaded=True)
        except ValueError as e:
            return f"Error: {e}"

        province = state.engine.get_by_id(province_id)
        if province is None:
            return f"No province with id {province_id!r}"
        return json.dumps(province.summary(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def province_at(x: float, y: float) -> str:
        """Find the province containing a world-space point.

        World space is the projected map space (0..width, 0..height at load).
        **Requires:** load_map first.
        """
        try:
            require_state(state, map_loaded=True)
        except ValueError as e:
            return f"Error: {e}"

        province = state.engine.province_at(x, y)
        if province is None:
            return f"No province at ({x}, {y})"
        return json.dumps(province.summary(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def province_at_screen(x: float, y: float) -> str:
        """Find the province under a screen pixel, using the current camera.

        **Requires:** load_map first.
        """
        try:
            require_state(state, map_loaded=True)
        except ValueError as e:
            return f"Error: {e}"

        wx, wy = state.camera.screen_to_world(x, y)
        province = state.engine.province_at(wx, wy)
        if province is None:
            return f"No province at screen ({x}, {y}) / world ({wx:.2f}, {wy:.2f})"
        return json.dumps(province.summary(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_province_color(province_id: str, color: str) -> str:
        """Recolor a province. Unknown ids are ignored.

        **Requires:** load_map first.

        Args:
            province_id: Region id of the province.
            color: Hex color, #RRGGBB or #RRGGBBAA.
        """
        try:
            require_state(state, map_loaded=True)
            parsed = Color.parse(color)
        except ValueError as e:
            return f"Error: {e}"

        if not state.engine.set_color(province_id, parsed):
            return f"No province with id {province_id!r}; nothing changed"
        return f"Province {province_id} color set to {parsed.as_hex()}"
