from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Literal, Union

from .styles import (
    ARROW_HEAD,
    ATTRIBUTE_RADIUS,
    ENTITY_RADIUS,
    RESIZE_TOLERANCE,
    ZOOM_MAX,
    ZOOM_MIN,
    ZOOM_STEP,
)

# ============================================================================
# Parsed DDL — logical structure extracted from CREATE TABLE text
# ============================================================================


@dataclass(slots=True)
class ColumnDescriptor:
    """A single column of a parsed table."""

    name: str
    # Declared type as written (VARCHAR, INT, DECIMAL(10,2), ...)
    type: str
    is_primary_key: bool = False


@dataclass(slots=True)
class ForeignKeyRef:
    """A foreign key recorded on the owning table.

    Resolved to a target entity by name at draw time, never by reference.
    """

    # Column on the owning table
    attribute: str
    referenced_table: str
    referenced_attribute: str


@dataclass(slots=True)
class TableDescriptor:
    name: str
    attributes: list[ColumnDescriptor] = field(default_factory=list)
    foreign_keys: list[ForeignKeyRef] = field(default_factory=list)


# ============================================================================
# Diagram model — live, mutable nodes positioned on the surface
#
# Nodes compare by identity (eq=False): two attributes with the same name and
# position are still distinct nodes, which matters for deletion.
# ============================================================================

NodeKind = Literal["entity", "attribute"]

InteractionState = Literal["idle", "dragging", "resizing"]


@dataclass(slots=True, eq=False)
class EntityNode:
    """Circular node for one table."""

    kind: ClassVar[NodeKind] = "entity"

    name: str
    x: float
    y: float
    radius: float
    attributes: list[AttributeNode] = field(default_factory=list)
    foreign_keys: list[ForeignKeyRef] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class AttributeNode:
    """Circular node for one column, owned by exactly one entity."""

    kind: ClassVar[NodeKind] = "attribute"

    name: str
    x: float
    y: float
    radius: float
    type: str
    is_primary_key: bool
    # Back-reference to the owning entity (not ownership)
    owner: EntityNode = field(repr=False)


Node = Union[EntityNode, AttributeNode]


def contains_point(node: Node, x: float, y: float) -> bool:
    """Hit-test: the point lies inside or on the node's circle.

    A node resized past zero has no inside and is never hit.
    """
    if node.radius < 0:
        return False
    dx = x - node.x
    dy = y - node.y
    return dx * dx + dy * dy <= node.radius * node.radius


@dataclass(slots=True)
class DiagramModel:
    """All entity nodes of the current session."""

    entities: list[EntityNode] = field(default_factory=list)

    def nodes(self) -> Iterator[Node]:
        """Yield nodes in hit-test order: every entity, then every attribute."""
        yield from self.entities
        for entity in self.entities:
            yield from entity.attributes

    def find_entity(self, name: str) -> EntityNode | None:
        """First entity whose name matches exactly. Names are not unique."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def node_at(self, x: float, y: float) -> Node | None:
        for node in self.nodes():
            if contains_point(node, x, y):
                return node
        return None

    def remove(self, node: Node) -> None:
        """Remove an entity from the model, or an attribute from its owner."""
        if node.kind == "entity":
            self.entities[:] = [e for e in self.entities if e is not node]
        else:
            owner = node.owner
            owner.attributes[:] = [a for a in owner.attributes if a is not node]


# ============================================================================
# Options — user-facing configuration
# ============================================================================


@dataclass(slots=True)
class DiagramOptions:
    """Geometry and interaction settings for one diagram session."""

    entity_radius: float = ENTITY_RADIUS
    attribute_radius: float = ATTRIBUTE_RADIUS
    # Pointer-to-boundary distance that starts a resize instead of a drag
    resize_tolerance: float = RESIZE_TOLERANCE
    zoom_step: float = ZOOM_STEP
    min_zoom: float = ZOOM_MIN
    max_zoom: float = ZOOM_MAX
    arrow_head_length: float = ARROW_HEAD["length"]


@dataclass(slots=True)
class RenderOptions:
    """SVG output settings."""

    bg: str | None = None
    fg: str | None = None
    line: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None
    font: str | None = None
    width: int | None = None
    height: int | None = None
    transparent: bool | None = None
