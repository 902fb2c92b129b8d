from __future__ import annotations

import math

# ============================================================================
# Geometry defaults — session-start sizes, mutable afterwards by resizing
# ============================================================================

ENTITY_RADIUS = 50
ATTRIBUTE_RADIUS = 45

# Pointer within this many px of a node's boundary grabs it for resizing
RESIZE_TOLERANCE = 5

# ============================================================================
# Zoom — one global view factor, changed in fixed notches
# ============================================================================

ZOOM_STEP = 0.1
ZOOM_MIN = 0.5
ZOOM_MAX = 2.0

# ============================================================================
# Drawing constants
# ============================================================================

FONT_SIZES = {
    "node_label": 12,
}

FONT_WEIGHTS = {
    "node_label": 500,
}

STROKE_WIDTHS = {
    "node": 2,
    "edge": 1,
}

TEXT_BASELINE_SHIFT = "0.35em"

ARROW_HEAD = {
    # Distance from tip to each trailing corner, in px
    "length": 10,
    # Half-angle between the edge and each trailing corner
    "angle": math.pi / 6,
}
