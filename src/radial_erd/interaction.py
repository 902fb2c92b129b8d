from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from .layout import layout_diagram
from .parser import parse_sql
from .renderer import render_diagram
from .surface import DrawingSurface
from .types import (
    DiagramModel,
    DiagramOptions,
    InteractionState,
    Node,
    TableDescriptor,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Interaction controller
#
# Owns the diagram model and turns pointer events into model mutations.
# Every handler runs to completion, redraw included, before returning.
#
# States:
#   idle      no node grabbed
#   dragging  pointer moves the selected node's center
#   resizing  pointer moves the selected node's boundary
#
# Hit-testing uses raw model coordinates. The zoom factor only scales the
# drawing, so away from 1.0 the pointer and the drawn nodes drift apart.
# ============================================================================

TextSource = Callable[[], str]
ConfirmPrompt = Callable[[str], bool]
# (message, default) -> new value, or None when cancelled
TextPrompt = Callable[[str, str], Optional[str]]


class InteractionController:
    def __init__(
        self,
        surface: DrawingSurface,
        *,
        confirm: ConfirmPrompt,
        prompt: TextPrompt,
        text_source: TextSource | None = None,
        options: DiagramOptions | None = None,
    ) -> None:
        self.surface = surface
        self.confirm = confirm
        self.prompt = prompt
        self.text_source = text_source
        self.options = options or DiagramOptions()

        self.model = DiagramModel()
        self.zoom = 1.0
        self.state: InteractionState = "idle"
        self.selected: Node | None = None
        self._drag_offset: tuple[float, float] = (0.0, 0.0)
        self._resize_offset = 0.0
        # Descriptors of the last generate, re-laid out on surface resize
        self._tables: list[TableDescriptor] = []

    # ------------------------------------------------------------------
    # Model lifecycle
    # ------------------------------------------------------------------

    def generate(self, text: str | None = None) -> DiagramModel:
        """Parse DDL, lay it out at the current surface size and redraw.

        Reads the text source when ``text`` is not given. The previous model,
        including any manual edits, is discarded.
        """
        if text is None:
            text = self.text_source() if self.text_source is not None else ""
        self._tables = parse_sql(text)
        self._relayout()
        logger.info(
            "Generated diagram with %d entities and %d attributes",
            len(self.model.entities),
            sum(len(e.attributes) for e in self.model.entities),
        )
        self.redraw()
        return self.model

    def resize(self, width: float, height: float) -> None:
        """Surface size changed: lay out again and redraw."""
        self.surface.width = width
        self.surface.height = height
        self._relayout()
        self.redraw()

    def redraw(self) -> None:
        render_diagram(self.model, self.surface, self.zoom, self.options)

    def _relayout(self) -> None:
        self.state = "idle"
        self.selected = None
        self.model = layout_diagram(
            self._tables, self.surface.width, self.surface.height, self.options
        )

    # ------------------------------------------------------------------
    # Pointer: press / move / release
    # ------------------------------------------------------------------

    def press(self, x: float, y: float) -> Node | None:
        """Grab the node under the pointer, by its boundary or its body."""
        node = self.model.node_at(x, y)
        if node is None:
            return None

        distance = math.hypot(x - node.x, y - node.y)
        self.selected = node
        if abs(distance - node.radius) <= self.options.resize_tolerance:
            self.state = "resizing"
            self._resize_offset = distance - node.radius
        else:
            self.state = "dragging"
            self._drag_offset = (x - node.x, y - node.y)
        return node

    def move(self, x: float, y: float) -> bool:
        """Apply a pointer move to the grabbed node. True if anything changed."""
        node = self.selected
        if node is None or self.state == "idle":
            return False

        if self.state == "dragging":
            node.x = x - self._drag_offset[0]
            node.y = y - self._drag_offset[1]
        else:
            # Not clamped: the radius may reach zero or go negative
            node.radius = math.hypot(x - node.x, y - node.y) - self._resize_offset
        self.redraw()
        return True

    def release(self) -> None:
        self.state = "idle"
        self.selected = None

    # ------------------------------------------------------------------
    # Delete / rename
    # ------------------------------------------------------------------

    def delete_at(self, x: float, y: float) -> bool:
        """Delete the node under the pointer after confirmation.

        Foreign keys naming a deleted entity are left in place; the renderer
        drops their edges because the name no longer resolves.
        """
        node = self.model.node_at(x, y)
        if node is None:
            return False
        if not self.confirm(f'Delete node "{node.name}"?'):
            return False

        self.model.remove(node)
        logger.info("Deleted %s %r", node.kind, node.name)
        self.redraw()
        return True

    def rename_at(self, x: float, y: float) -> bool:
        """Rename the node under the pointer. Blank or cancelled input is ignored."""
        node = self.model.node_at(x, y)
        if node is None:
            return False

        value = self.prompt(f"Rename node (current name: {node.name})", node.name)
        if value is None or value.strip() == "":
            return False

        node.name = value.strip()
        self.redraw()
        return True

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------

    def zoom_by(self, notches: int) -> float:
        """Step the zoom factor once in the direction of ``notches``."""
        if notches == 0:
            return self.zoom
        step = self.options.zoom_step if notches > 0 else -self.options.zoom_step
        zoom = round(self.zoom + step, 6)
        self.zoom = max(self.options.min_zoom, min(self.options.max_zoom, zoom))
        self.redraw()
        return self.zoom

    def wheel(self, delta_y: float, modifier: bool) -> float:
        """Scroll gesture: zooms only with the modifier held. Scrolling down zooms out."""
        if not modifier or delta_y == 0:
            return self.zoom
        return self.zoom_by(-1 if delta_y > 0 else 1)
