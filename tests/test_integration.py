"""Integration tests -- end-to-end SQL -> parse -> layout -> SVG, and the CLI."""
from __future__ import annotations

import re

import pytest

from radial_erd import render_sql_svg
from radial_erd.__main__ import main
from radial_erd.types import DiagramOptions, RenderOptions

SCHEMA = """
CREATE TABLE `customers` (
  `id` INT PRIMARY KEY,
  `name` VARCHAR(100)
);
CREATE TABLE orders (
  id INT PRIMARY KEY,
  customer_id INT REFERENCES customers(id),
  total DECIMAL(10,2)
);
"""


class TestRenderSqlSvg:
    def test_renders_tables_and_columns(self):
        svg = render_sql_svg(SCHEMA)
        assert "<svg" in svg
        assert "</svg>" in svg
        for name in ("customers", "orders", "id", "name", "customer_id", "total"):
            assert f">{name}</text>" in svg

    def test_edges_for_ownership_and_foreign_keys(self):
        svg = render_sql_svg(SCHEMA)
        # 5 attributes + 1 foreign key
        assert len(re.findall(r"<line ", svg)) == 6
        assert len(re.findall(r"<polygon ", svg)) == 6

    def test_empty_input_renders_an_empty_diagram(self):
        svg = render_sql_svg("")
        assert "<circle" not in svg
        assert svg.endswith("</svg>")

    def test_size_and_colors_from_options(self):
        svg = render_sql_svg(SCHEMA, RenderOptions(width=1000, height=500, bg="#000000", fg="#ffffff"))
        assert 'viewBox="0 0 1000 500"' in svg
        assert "--bg:#000000" in svg

    def test_diagram_options_set_radii(self):
        svg = render_sql_svg(
            "CREATE TABLE t (id INT)",
            diagram_options=DiagramOptions(entity_radius=33, attribute_radius=22),
        )
        assert 'r="33"' in svg
        assert 'r="22"' in svg


class TestCli:
    def test_writes_svg_file(self, tmp_path):
        sql_file = tmp_path / "schema.sql"
        sql_file.write_text(SCHEMA, encoding="utf-8")
        out = tmp_path / "erd.svg"

        assert main([str(sql_file), "-o", str(out), "--width", "640", "--height", "480"]) == 0
        svg = out.read_text(encoding="utf-8")
        assert 'viewBox="0 0 640 480"' in svg
        assert ">orders</text>" in svg

    def test_theme_colors_are_applied(self, tmp_path):
        sql_file = tmp_path / "schema.sql"
        sql_file.write_text(SCHEMA, encoding="utf-8")
        out = tmp_path / "erd.svg"

        main([str(sql_file), "-o", str(out), "--theme", "nord"])
        assert "--bg:#2e3440" in out.read_text(encoding="utf-8")

    def test_unknown_theme_is_rejected(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["-o", str(tmp_path / "x.svg"), "--theme", "no-such-theme"])
