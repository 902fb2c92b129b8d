# To run:
# python -m radial_erd schema.sql            (interactive window)
# python -m radial_erd schema.sql -o erd.svg (static SVG)

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from . import render_sql_svg
from .theme import THEMES
from .types import RenderOptions

logger = logging.getLogger("radial_erd")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radial-erd",
        description="Draw SQL CREATE TABLE statements as a radial ER diagram.",
    )
    parser.add_argument("file", nargs="?", help="SQL file to load (default: stdin for -o, empty editor otherwise)")
    parser.add_argument("-o", "--output", help="write an SVG file instead of opening a window")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--theme", choices=sorted(THEMES), help="color palette")
    parser.add_argument("-v", "--verbose", action="store_true", help="log parser and controller details")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    colors = THEMES[args.theme] if args.theme else None

    if args.output:
        sql = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
        options = RenderOptions(width=args.width, height=args.height)
        if colors is not None:
            options = RenderOptions(**{**asdict(options), **asdict(colors)})
        Path(args.output).write_text(render_sql_svg(sql, options), encoding="utf-8")
        logger.info("Wrote %s", args.output)
        return 0

    from .tk_app import run_app

    sql = Path(args.file).read_text(encoding="utf-8") if args.file else ""
    run_app(initial_sql=sql, colors=colors)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
