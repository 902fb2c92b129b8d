from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from .styles import FONT_SIZES, FONT_WEIGHTS, STROKE_WIDTHS, TEXT_BASELINE_SHIFT
from .theme import DEFAULTS, DiagramColors, build_style_block, svg_open_tag

# ============================================================================
# Drawing surfaces
#
# The renderer only talks to the DrawingSurface protocol. Concrete surfaces:
#   RecordingSurface  records every command (headless, used by tests)
#   SvgSurface        accumulates SVG markup themed with CSS variables
#   TkCanvasSurface   draws onto a tkinter Canvas (see tk_app.py)
# ============================================================================

Point2D = tuple[float, float]


class DrawingSurface(Protocol):
    width: float
    height: float

    def clear(self) -> None: ...

    def stroke_circle(self, x: float, y: float, radius: float) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float) -> None: ...

    def draw_text(self, x: float, y: float, text: str) -> None:
        """Draw ``text`` centered on (x, y)."""
        ...

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def fill_triangle(self, a: Point2D, b: Point2D, c: Point2D) -> None: ...

    def scaled(self, factor: float) -> Any:
        """Context manager: everything drawn inside is scaled by ``factor``."""
        ...


class RecordingSurface:
    """Surface that records drawing commands instead of drawing them."""

    def __init__(self, width: float = 800, height: float = 600) -> None:
        self.width = width
        self.height = height
        self.commands: list[tuple[str, tuple[Any, ...]]] = []
        # Scale factor active while the last command was recorded
        self.scale = 1.0
        self.clear_count = 0

    def clear(self) -> None:
        self.commands = []
        self.clear_count += 1

    def stroke_circle(self, x: float, y: float, radius: float) -> None:
        self.commands.append(("stroke_circle", (x, y, radius)))

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self.commands.append(("fill_circle", (x, y, radius)))

    def draw_text(self, x: float, y: float, text: str) -> None:
        self.commands.append(("draw_text", (x, y, text)))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.commands.append(("stroke_line", (x1, y1, x2, y2)))

    def fill_triangle(self, a: Point2D, b: Point2D, c: Point2D) -> None:
        self.commands.append(("fill_triangle", (a, b, c)))

    @contextmanager
    def scaled(self, factor: float) -> Iterator[None]:
        previous = self.scale
        self.scale = previous * factor
        self.commands.append(("push_scale", (factor,)))
        try:
            yield
        finally:
            self.commands.append(("pop_scale", ()))
            self.scale = previous

    def calls(self, name: str) -> list[tuple[Any, ...]]:
        """Arguments of every recorded command called ``name``."""
        return [args for cmd, args in self.commands if cmd == name]


class SvgSurface:
    """Surface that accumulates SVG elements.

    All colors use CSS custom properties (var(--_xxx)) from the theme system,
    so the same markup renders in any palette.
    """

    def __init__(
        self,
        width: float = 800,
        height: float = 600,
        colors: DiagramColors | None = None,
        font: str = "Inter",
        transparent: bool = False,
    ) -> None:
        self.width = width
        self.height = height
        self.colors = colors or DiagramColors(bg=DEFAULTS["bg"], fg=DEFAULTS["fg"])
        self.font = font
        self.transparent = transparent
        self.parts: list[str] = []

    def clear(self) -> None:
        self.parts = []

    def stroke_circle(self, x: float, y: float, radius: float) -> None:
        self.parts.append(
            f'<circle cx="{x}" cy="{y}" r="{radius}" fill="none" '
            f'stroke="var(--_node-stroke)" stroke-width="{STROKE_WIDTHS["node"]}" />'
        )

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self.parts.append(
            f'<circle cx="{x}" cy="{y}" r="{radius}" fill="var(--_node-fill)" />'
        )

    def draw_text(self, x: float, y: float, text: str) -> None:
        self.parts.append(
            f'<text x="{x}" y="{y}" text-anchor="middle" dy="{TEXT_BASELINE_SHIFT}" '
            f'font-size="{FONT_SIZES["node_label"]}" font-weight="{FONT_WEIGHTS["node_label"]}" '
            f'fill="var(--_text)">{_escape_xml(text)}</text>'
        )

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.parts.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="var(--_line)" stroke-width="{STROKE_WIDTHS["edge"]}" />'
        )

    def fill_triangle(self, a: Point2D, b: Point2D, c: Point2D) -> None:
        points = " ".join(f"{px},{py}" for (px, py) in (a, b, c))
        self.parts.append(f'<polygon points="{points}" fill="var(--_arrow)" />')

    @contextmanager
    def scaled(self, factor: float) -> Iterator[None]:
        if factor == 1:
            yield
            return
        self.parts.append(f'<g transform="scale({factor})">')
        try:
            yield
        finally:
            self.parts.append("</g>")

    def to_svg(self) -> str:
        """The complete SVG document for everything drawn since the last clear."""
        return "\n".join(
            [
                svg_open_tag(self.width, self.height, self.colors, self.transparent),
                build_style_block(self.font),
                *self.parts,
                "</svg>",
            ]
        )


def _escape_xml(text: str) -> str:
    """Escape special XML characters in text content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
