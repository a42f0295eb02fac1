"""SVG render backend for map snapshots."""

from province_map.core.render import render_map
from province_map.core.spatial import Camera2D
from province_map.models import Color, DARK_GRAY


def _svg_color(color: Color) -> tuple[str, str]:
    return f"rgb({color.r},{color.g},{color.b})", f"{color.a / 255:.3f}"


class SvgRenderer:
    """Collects draw calls as SVG elements in screen space."""

    def __init__(self, camera: Camera2D, width: int, height: int, background: Color | None = None):
        self.camera = camera
        self.width = width
        self.height = height
        self.background = background
        self.elements: list[str] = []

    def _pt(self, p) -> str:
        x, y = self.camera.world_to_screen(float(p[0]), float(p[1]))
        return f"{x:.2f},{y:.2f}"

    def draw_triangle(self, a, b, c, color: Color) -> None:
        rgb, opacity = _svg_color(color)
        self.elements.append(
            f'<polygon points="{self._pt(a)} {self._pt(b)} {self._pt(c)}" '
            f'fill="{rgb}" fill-opacity="{opacity}" stroke="none"/>'
        )

    def draw_line(self, start, end, color: Color) -> None:
        rgb, opacity = _svg_color(color)
        x1, y1 = self._pt(start).split(",")
        x2, y2 = self._pt(end).split(",")
        self.elements.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="{rgb}" stroke-opacity="{opacity}" stroke-width="1"/>'
        )

    def to_svg(self) -> str:
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" '
            f'height="{self.height}" viewBox="0 0 {self.width} {self.height}">'
        ]
        if self.background is not None:
            rgb, opacity = _svg_color(self.background)
            parts.append(
                f'<rect width="{self.width}" height="{self.height}" '
                f'fill="{rgb}" fill-opacity="{opacity}"/>'
            )
        parts.extend(self.elements)
        parts.append("</svg>")
        return "\n".join(parts)

    def save(self, output_path: str) -> None:
        with open(output_path, "w") as f:
            f.write(self.to_svg())


def export_svg(
    engine,
    camera: Camera2D,
    width: int,
    height: int,
    output_path: str,
    edge_color: Color = DARK_GRAY,
    background: Color | None = None,
) -> dict:
    """Render the visible provinces to an SVG file."""
    renderer = SvgRenderer(camera, width, height, background=background)
    stats = render_map(engine, renderer, camera, width, height, edge_color=edge_color)
    renderer.save(output_path)
    return {"success": True, "filepath": output_path, **stats.model_dump()}
