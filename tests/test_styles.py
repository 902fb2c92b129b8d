"""Tests for styles and theme -- constants, color mixing and SVG style block."""
from __future__ import annotations

import pytest

from radial_erd.styles import (
    ARROW_HEAD,
    ATTRIBUTE_RADIUS,
    ENTITY_RADIUS,
    ZOOM_MAX,
    ZOOM_MIN,
)
from radial_erd.theme import (
    DEFAULTS,
    THEMES,
    DiagramColors,
    build_style_block,
    mix_hex,
    resolve_palette,
    svg_open_tag,
)
from radial_erd.types import DiagramOptions


class TestConstants:
    def test_session_defaults(self):
        assert ENTITY_RADIUS == 50
        assert ATTRIBUTE_RADIUS == 45
        assert ARROW_HEAD["length"] == 10
        assert (ZOOM_MIN, ZOOM_MAX) == (0.5, 2.0)

    def test_options_default_to_the_constants(self):
        options = DiagramOptions()
        assert options.entity_radius == ENTITY_RADIUS
        assert options.resize_tolerance == 5
        assert options.zoom_step == pytest.approx(0.1)


class TestThemes:
    def test_contains_light_and_dark_palettes(self):
        assert "zinc-light" in THEMES
        assert "zinc-dark" in THEMES

    def test_every_theme_has_hex_bg_and_fg(self):
        for colors in THEMES.values():
            assert colors.bg.startswith("#")
            assert colors.fg.startswith("#")


class TestMixHex:
    def test_endpoints(self):
        assert mix_hex("#ffffff", "#000000", 100) == "#ffffff"
        assert mix_hex("#ffffff", "#000000", 0) == "#000000"

    def test_halfway(self):
        assert mix_hex("#000000", "#ffffff", 50) == "#808080"

    def test_short_hex(self):
        assert mix_hex("#fff", "#000", 100) == "#ffffff"


class TestResolvePalette:
    def test_explicit_colors_win(self):
        palette = resolve_palette(DiagramColors(bg="#111111", fg="#eeeeee", line="#123456", accent="#abcdef"))
        assert palette["line"] == "#123456"
        assert palette["arrow"] == "#abcdef"
        assert palette["text"] == "#eeeeee"

    def test_derived_colors_sit_between_bg_and_fg(self):
        palette = resolve_palette(DiagramColors(bg=DEFAULTS["bg"], fg=DEFAULTS["fg"]))
        for key in ("line", "arrow", "node_fill", "node_stroke"):
            assert palette[key] not in (DEFAULTS["bg"], DEFAULTS["fg"])


class TestSvgHelpers:
    def test_style_block_derives_variables(self):
        block = build_style_block("Inter")
        assert block.startswith("<style>")
        assert "--_node-fill" in block
        assert "--_arrow" in block
        assert "font-family: 'Inter'" in block

    def test_open_tag_sets_background_unless_transparent(self):
        colors = DiagramColors(bg="#fff", fg="#000")
        assert "background:var(--bg)" in svg_open_tag(10, 10, colors)
        assert "background" not in svg_open_tag(10, 10, colors, transparent=True)
