"""PNG render backend using Pillow."""

from PIL import Image, ImageDraw

from province_map.core.render import render_map
from province_map.core.spatial import Camera2D
from province_map.models import Color, DARK_GRAY


class PngRenderer:
    """Rasterizes draw calls onto an RGBA image in screen space."""

    def __init__(self, camera: Camera2D, width: int, height: int, background: Color | None = None):
        self.camera = camera
        bg = background.as_tuple() if background is not None else (0, 0, 0, 0)
        self.image = Image.new("RGBA", (width, height), color=bg)
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def _pt(self, p) -> tuple[float, float]:
        return self.camera.world_to_screen(float(p[0]), float(p[1]))

    def draw_triangle(self, a, b, c, color: Color) -> None:
        self._draw.polygon([self._pt(a), self._pt(b), self._pt(c)], fill=color.as_tuple())

    def draw_line(self, start, end, color: Color) -> None:
        self._draw.line([self._pt(start), self._pt(end)], fill=color.as_tuple(), width=1)

    def save(self, output_path: str) -> None:
        self.image.save(output_path, format="PNG")


def export_png(
    engine,
    camera: Camera2D,
    width: int,
    height: int,
    output_path: str,
    edge_color: Color = DARK_GRAY,
    background: Color | None = None,
) -> dict:
    """Render the visible provinces to a PNG file."""
    renderer = PngRenderer(camera, width, height, background=background)
    stats = render_map(engine, renderer, camera, width, height, edge_color=edge_color)
    renderer.save(output_path)
    return {"success": True, "filepath": output_path, **stats.model_dump()}
