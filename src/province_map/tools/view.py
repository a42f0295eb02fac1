"""View tools: set_camera, set_colors, render_map."""

import logging
from pathlib import Path
from typing import Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.spatial import Camera2D
from ..exporters.png import export_png as do_export_png
from ..exporters.svg import export_svg as do_export_svg
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def register_view_tools(mcp: FastMCP):

    @mcp.tool()
    def set_camera(
        target_x: float | None = None,
        target_y: float | None = None,
        zoom: float | None = None,
        reset: bool = False,
    ) -> str:
        """Pan and zoom the view used by render_map and province_at_screen.

        The world point (target_x, target_y) is drawn at the viewport center.

        Args:
            target_x/target_y: World-space point to center on.
            zoom: Magnification (> 0, 1 = no zoom).
            reset: Restore the default view showing the whole map.
        """
        base = (
            Camera2D.centered(state.viewport.width, state.viewport.height)
            if reset else state.camera
        )
        updates = {
            k: v for k, v in
            {"target_x": target_x, "target_y": target_y, "zoom": zoom}.items()
            if v is not None
        }
        try:
            cam = Camera2D.model_validate({**base.model_dump(), **updates})
        except ValueError as e:
            return f"Error: {e}"
        state.camera = cam

        view = cam.view_rect(state.viewport.width, state.viewport.height)
        return (
            f"Camera: target=({cam.target_x:.2f}, {cam.target_y:.2f}), zoom={cam.zoom}, "
            f"view=({view.x_min:.1f}, {view.y_min:.1f})..({view.x_max:.1f}, {view.y_max:.1f})"
        )

    @mcp.tool()
    def set_colors(outline: str | None = None, background: str | None = None) -> str:
        """Set the outline and background colors used by render_map (hex #RRGGBB[AA])."""
        try:
            if outline is not None:
                state.outline_color = outline
            if background is not None:
                state.background_color = background
        except ValueError as e:
            return f"Error: {e}"
        return (
            f"Colors: outline={state.outline_color.as_hex()}, "
            f"background={state.background_color.as_hex()}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def render_map(output_path: str, format: Literal["svg", "png"] = "svg") -> str:
        """Render the current view of the map to an image file.

        Draws filled provinces, then their outlines, skipping rings outside
        the camera view.
        **Requires:** load_map first.

        Args:
            output_path: Where to write the image.
            format: 'svg' or 'png'.
        """
        try:
            require_state(state, map_loaded=True)
        except ValueError as e:
            return f"Error: {e}"

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        export = do_export_png if format == "png" else do_export_svg
        try:
            result = export(
                state.engine,
                state.camera,
                state.viewport.width,
                state.viewport.height,
                output_path,
                edge_color=state.outline_color,
                background=state.background_color,
            )
        except OSError as e:
            logger.error("Render to %s failed: %s", output_path, e)
            return f"Error: {e}"

        return (
            f"Rendered {result['visible_rings']} rings ({result['culled_rings']} culled), "
            f"{result['triangles']} triangles to {output_path}"
        )
