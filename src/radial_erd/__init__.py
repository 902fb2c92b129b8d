"""radial-erd — Turn SQL CREATE TABLE text into an interactive radial ER diagram."""

from __future__ import annotations

from .types import (
    ColumnDescriptor,
    ForeignKeyRef,
    TableDescriptor,
    EntityNode,
    AttributeNode,
    DiagramModel,
    DiagramOptions,
    RenderOptions,
)
from .theme import DiagramColors, THEMES, DEFAULTS
from .parser import parse_sql
from .layout import layout_diagram
from .renderer import render_diagram
from .surface import DrawingSurface, RecordingSurface, SvgSurface
from .interaction import InteractionController

__all__ = [
    "render_sql_svg",
    "parse_sql",
    "layout_diagram",
    "render_diagram",
    "InteractionController",
    "DrawingSurface",
    "RecordingSurface",
    "SvgSurface",
    "ColumnDescriptor",
    "ForeignKeyRef",
    "TableDescriptor",
    "EntityNode",
    "AttributeNode",
    "DiagramModel",
    "DiagramOptions",
    "RenderOptions",
    "DiagramColors",
    "THEMES",
    "DEFAULTS",
]

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


def _build_colors(options: RenderOptions) -> DiagramColors:
    """Build DiagramColors from render options."""
    return DiagramColors(
        bg=options.bg or DEFAULTS["bg"],
        fg=options.fg or DEFAULTS["fg"],
        line=options.line,
        accent=options.accent,
        muted=options.muted,
        surface=options.surface,
        border=options.border,
    )


def render_sql_svg(
    text: str,
    options: RenderOptions | None = None,
    diagram_options: DiagramOptions | None = None,
) -> str:
    """Render CREATE TABLE text to an SVG string.

    Same pipeline as the interactive view (parse, radial layout, full
    redraw), drawn once onto an SVG surface.
    """
    if options is None:
        options = RenderOptions()

    surface = SvgSurface(
        width=options.width or DEFAULT_WIDTH,
        height=options.height or DEFAULT_HEIGHT,
        colors=_build_colors(options),
        font=options.font or "Inter",
        transparent=options.transparent or False,
    )
    model = layout_diagram(parse_sql(text), surface.width, surface.height, diagram_options)
    render_diagram(model, surface, options=diagram_options)
    return surface.to_svg()
