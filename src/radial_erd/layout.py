from __future__ import annotations

import math

from .types import (
    AttributeNode,
    DiagramModel,
    DiagramOptions,
    EntityNode,
    TableDescriptor,
)

# ============================================================================
# Radial layout engine
#
# Entities sit evenly spaced on a circle of radius R = min(width, height) / 2
# around the surface center. Each entity's attributes sit evenly spaced on a
# circle of radius R / 2 around that entity.
#
# The layout always builds a fresh model; positions and sizes adjusted by the
# user in a previous model are not carried over.
# ============================================================================


def radial_positions(
    count: int, cx: float, cy: float, radius: float
) -> list[tuple[float, float]]:
    """Positions of ``count`` points at angles 2*pi*k/count around (cx, cy)."""
    positions: list[tuple[float, float]] = []
    for k in range(count):
        angle = 2 * math.pi * k / count
        positions.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return positions


def layout_diagram(
    tables: list[TableDescriptor],
    width: float,
    height: float,
    options: DiagramOptions | None = None,
) -> DiagramModel:
    """Place parsed tables on the surface and return a new diagram model."""
    if options is None:
        options = DiagramOptions()

    ring_radius = min(width, height) / 2
    attr_ring_radius = ring_radius / 2

    model = DiagramModel()
    entity_positions = radial_positions(len(tables), width / 2, height / 2, ring_radius)

    for table, (x, y) in zip(tables, entity_positions):
        entity = EntityNode(
            name=table.name,
            x=x,
            y=y,
            radius=options.entity_radius,
            foreign_keys=list(table.foreign_keys),
        )
        attr_positions = radial_positions(len(table.attributes), x, y, attr_ring_radius)
        for column, (ax, ay) in zip(table.attributes, attr_positions):
            entity.attributes.append(
                AttributeNode(
                    name=column.name,
                    x=ax,
                    y=ay,
                    radius=options.attribute_radius,
                    type=column.type,
                    is_primary_key=column.is_primary_key,
                    owner=entity,
                )
            )
        model.entities.append(entity)

    return model
