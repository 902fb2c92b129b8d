from __future__ import annotations

import math

from .styles import ARROW_HEAD
from .surface import DrawingSurface
from .types import DiagramModel, DiagramOptions, Node

# ============================================================================
# Diagram renderer
#
# Every call clears the surface and redraws the whole model; nothing is
# patched incrementally. The zoom factor is a view transform wrapped around
# the redraw and never touches node coordinates.
#
# Render order:
#   1. Entity circles, each followed by its attribute circles
#   2. Ownership edges: entity -> each of its attributes
#   3. Foreign-key edges: entity -> referenced entity (when it exists)
# ============================================================================


def render_diagram(
    model: DiagramModel,
    surface: DrawingSurface,
    zoom: float = 1.0,
    options: DiagramOptions | None = None,
) -> None:
    """Clear ``surface`` and draw ``model`` on it at the given zoom."""
    if options is None:
        options = DiagramOptions()

    surface.clear()
    with surface.scaled(zoom):
        for entity in model.entities:
            _draw_node(surface, entity)
            for attr in entity.attributes:
                _draw_node(surface, attr)

        for entity in model.entities:
            for attr in entity.attributes:
                _draw_edge(surface, entity, attr, options.arrow_head_length)

        for entity in model.entities:
            for fk in entity.foreign_keys:
                target = model.find_entity(fk.referenced_table)
                # Dangling reference: the table is gone or was renamed
                if target is None:
                    continue
                _draw_edge(surface, entity, target, options.arrow_head_length)


# ============================================================================
# Nodes
# ============================================================================


def _draw_node(surface: DrawingSurface, node: Node) -> None:
    """Filled, stroked circle with the name centered inside.

    A node resized to a non-positive radius keeps its label but no circle.
    """
    if node.radius > 0:
        surface.fill_circle(node.x, node.y, node.radius)
        surface.stroke_circle(node.x, node.y, node.radius)
    surface.draw_text(node.x, node.y, node.name)


# ============================================================================
# Edges
# ============================================================================


def edge_point(source: Node, toward: Node) -> tuple[float, float]:
    """Point on ``source``'s boundary along the line to ``toward``'s center.

    Coincident centers have no direction; the source center is returned.
    """
    dx = toward.x - source.x
    dy = toward.y - source.y
    distance = math.sqrt(dx * dx + dy * dy)
    if distance == 0:
        return (source.x, source.y)
    return (
        source.x + dx / distance * source.radius,
        source.y + dy / distance * source.radius,
    )


def arrow_head(
    start: tuple[float, float],
    tip: tuple[float, float],
    length: float = ARROW_HEAD["length"],
) -> tuple[tuple[float, float], tuple[float, float], tuple[float, float]]:
    """Triangle for an arrow pointing from ``start`` to ``tip``.

    The trailing corners sit ``length`` px behind the tip, rotated
    +/-30 degrees from the edge direction.
    """
    angle = math.atan2(tip[1] - start[1], tip[0] - start[0])
    spread = ARROW_HEAD["angle"]
    left = (
        tip[0] - length * math.cos(angle - spread),
        tip[1] - length * math.sin(angle - spread),
    )
    right = (
        tip[0] - length * math.cos(angle + spread),
        tip[1] - length * math.sin(angle + spread),
    )
    return (tip, left, right)


def _draw_edge(
    surface: DrawingSurface, source: Node, target: Node, head_length: float
) -> None:
    start = edge_point(source, target)
    end = edge_point(target, source)
    surface.stroke_line(start[0], start[1], end[0], end[1])
    surface.fill_triangle(*arrow_head(start, end, head_length))
