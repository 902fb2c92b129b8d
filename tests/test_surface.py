"""Tests for the concrete drawing surfaces (SVG and Tk canvas)."""
from __future__ import annotations

import re

import pytest

from radial_erd.renderer import render_diagram
from radial_erd.surface import RecordingSurface, SvgSurface
from radial_erd.theme import DiagramColors
from radial_erd.types import AttributeNode, DiagramModel, EntityNode


def make_model() -> DiagramModel:
    entity = EntityNode(name="users", x=100, y=100, radius=50)
    entity.attributes.append(
        AttributeNode(name="id", x=250, y=100, radius=45, type="INT", is_primary_key=True, owner=entity)
    )
    return DiagramModel([entity])


# ============================================================================
# SVG surface
# ============================================================================


class TestSvgSurface:
    def test_document_structure(self):
        surface = SvgSurface(400, 300)
        svg = surface.to_svg()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
        assert 'viewBox="0 0 400 300"' in svg
        assert "<style>" in svg
        assert svg.endswith("</svg>")

    def test_renders_one_circle_pair_per_node_and_one_polygon_per_edge(self):
        surface = SvgSurface()
        render_diagram(make_model(), surface)
        svg = surface.to_svg()
        # fill + stroke per node
        assert len(re.findall(r"<circle ", svg)) == 4
        assert len(re.findall(r"<polygon ", svg)) == 1
        assert len(re.findall(r"<line ", svg)) == 1
        assert ">users</text>" in svg
        assert ">id</text>" in svg

    def test_uses_theme_variables(self):
        surface = SvgSurface()
        render_diagram(make_model(), surface)
        svg = surface.to_svg()
        assert 'fill="var(--_node-fill)"' in svg
        assert 'stroke="var(--_node-stroke)"' in svg
        assert 'stroke="var(--_line)"' in svg
        assert 'fill="var(--_arrow)"' in svg

    def test_zoom_wraps_the_drawing_in_a_scale_group(self):
        surface = SvgSurface()
        render_diagram(make_model(), surface, zoom=1.5)
        svg = surface.to_svg()
        assert '<g transform="scale(1.5)">' in svg
        assert svg.index("<g ") < svg.index("<circle ")
        assert svg.rindex("</g>") > svg.rindex("<polygon ")

    def test_no_scale_group_at_zoom_one(self):
        surface = SvgSurface()
        render_diagram(make_model(), surface)
        assert "<g " not in surface.to_svg()

    def test_clear_discards_earlier_drawing(self):
        surface = SvgSurface()
        render_diagram(make_model(), surface)
        render_diagram(DiagramModel(), surface)
        assert "<circle" not in surface.to_svg()

    def test_escapes_node_names(self):
        surface = SvgSurface()
        surface.draw_text(0, 0, "<a & b>")
        assert "&lt;a &amp; b&gt;" in surface.to_svg()

    def test_colors_go_into_the_root_tag(self):
        surface = SvgSurface(colors=DiagramColors(bg="#000000", fg="#ffffff", accent="#ff0000"))
        svg = surface.to_svg()
        assert "--bg:#000000" in svg
        assert "--accent:#ff0000" in svg


class TestRecordingSurface:
    def test_nested_scales_multiply_and_restore(self):
        surface = RecordingSurface()
        with surface.scaled(2):
            with surface.scaled(0.5):
                assert surface.scale == 1.0
            assert surface.scale == 2
        assert surface.scale == 1.0


# ============================================================================
# Tk canvas surface (driven through a stand-in canvas, no display needed)
# ============================================================================


class FakeCanvas:
    def __init__(self) -> None:
        self.items: list[tuple[str, tuple, dict]] = []
        self.scales: list[tuple] = []

    def delete(self, tag):
        assert tag == "all"
        self.items = []

    def _create(self, kind, *coords, **options):
        self.items.append((kind, coords, options))
        return len(self.items)

    def create_oval(self, *coords, **options):
        return self._create("oval", *coords, **options)

    def create_line(self, *coords, **options):
        return self._create("line", *coords, **options)

    def create_polygon(self, *coords, **options):
        return self._create("polygon", *coords, **options)

    def create_text(self, *coords, **options):
        return self._create("text", *coords, **options)

    def scale(self, *args):
        self.scales.append(args)


class TestTkCanvasSurface:
    @pytest.fixture
    def tk_app(self):
        pytest.importorskip("tkinter")
        from radial_erd import tk_app

        return tk_app

    def test_draws_items_onto_the_canvas(self, tk_app):
        canvas = FakeCanvas()
        surface = tk_app.TkCanvasSurface(canvas, 800, 600)
        render_diagram(make_model(), surface)

        kinds = [kind for kind, _coords, _options in canvas.items]
        assert kinds.count("oval") == 4
        assert kinds.count("text") == 2
        assert kinds.count("line") == 1
        assert kinds.count("polygon") == 1

    def test_circle_bounding_box(self, tk_app):
        canvas = FakeCanvas()
        surface = tk_app.TkCanvasSurface(canvas, 800, 600)
        surface.stroke_circle(100, 100, 50)
        assert canvas.items[0][1] == (50, 50, 150, 150)

    def test_zoom_scales_drawn_items_about_the_origin(self, tk_app):
        canvas = FakeCanvas()
        surface = tk_app.TkCanvasSurface(canvas, 800, 600)
        render_diagram(make_model(), surface, zoom=0.5)
        assert canvas.scales == [(tk_app.DIAGRAM_TAG, 0, 0, 0.5, 0.5)]

    def test_no_scaling_at_zoom_one(self, tk_app):
        canvas = FakeCanvas()
        surface = tk_app.TkCanvasSurface(canvas, 800, 600)
        render_diagram(make_model(), surface)
        assert canvas.scales == []

    def test_palette_colors_are_concrete(self, tk_app):
        canvas = FakeCanvas()
        surface = tk_app.TkCanvasSurface(canvas, 800, 600, DiagramColors(bg="#ffffff", fg="#000000"))
        surface.stroke_line(0, 0, 1, 1)
        assert canvas.items[0][2]["fill"] == "#808080"
