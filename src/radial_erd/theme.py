from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

# ============================================================================
# Types
# ============================================================================


@dataclass(slots=True)
class DiagramColors:
    """Diagram color configuration.

    Required: bg + fg give you a clean mono diagram.
    Optional: line, accent, muted, surface, border bring in richer color.
    """

    bg: str
    fg: str
    line: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None


# ============================================================================
# Defaults
# ============================================================================

DEFAULTS = {"bg": "#FFFFFF", "fg": "#27272A"}

# ============================================================================
# Mix weights (percent of fg blended into bg) for derived colors
# ============================================================================

MIX = {
    "text": 100,
    "line": 50,
    "arrow": 70,
    "node_fill": 3,
    "node_stroke": 60,
}

# ============================================================================
# Well-known theme palettes
# ============================================================================

THEMES: dict[str, DiagramColors] = {
    "zinc-light": DiagramColors(bg="#FFFFFF", fg="#27272A"),
    "zinc-dark": DiagramColors(bg="#18181B", fg="#FAFAFA"),
    "tokyo-night": DiagramColors(
        bg="#1a1b26", fg="#a9b1d6",
        line="#3d59a1", accent="#7aa2f7", muted="#565f89",
    ),
    "catppuccin-latte": DiagramColors(
        bg="#eff1f5", fg="#4c4f69",
        line="#9ca0b0", accent="#8839ef", muted="#9ca0b0",
    ),
    "nord": DiagramColors(
        bg="#2e3440", fg="#d8dee9",
        line="#4c566a", accent="#88c0d0", muted="#616e88",
    ),
    "github-light": DiagramColors(
        bg="#ffffff", fg="#1f2328",
        line="#d1d9e0", accent="#0969da", muted="#59636e",
    ),
    "github-dark": DiagramColors(
        bg="#0d1117", fg="#e6edf3",
        line="#3d444d", accent="#4493f8", muted="#9198a1",
    ),
}


# ============================================================================
# Resolved palette — concrete hex colors for surfaces without CSS
# ============================================================================


def mix_hex(fg: str, bg: str, percent: float) -> str:
    """Blend ``percent`` of ``fg`` into ``bg`` (both #RRGGBB)."""
    f = _parse_hex(fg)
    b = _parse_hex(bg)
    t = percent / 100
    mixed = (round(fc * t + bc * (1 - t)) for fc, bc in zip(f, b))
    return "#" + "".join(f"{c:02x}" for c in mixed)


def resolve_palette(colors: DiagramColors) -> dict[str, str]:
    """Compute the derived drawing colors the SVG style block expresses as CSS."""
    return {
        "bg": colors.bg,
        "text": colors.fg,
        "line": colors.line or mix_hex(colors.fg, colors.bg, MIX["line"]),
        "arrow": colors.accent or mix_hex(colors.fg, colors.bg, MIX["arrow"]),
        "node_fill": colors.surface or mix_hex(colors.fg, colors.bg, MIX["node_fill"]),
        "node_stroke": colors.border or mix_hex(colors.fg, colors.bg, MIX["node_stroke"]),
    }


def _parse_hex(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


# ============================================================================
# SVG style block
# ============================================================================


def build_style_block(font: str) -> str:
    """Build the CSS variable derivation rules for the SVG <style> block."""
    font_import = (
        f"@import url('https://fonts.googleapis.com/css2?family={quote(font)}"
        f":wght@400;500;600;700&amp;display=swap');"
    )

    derived_vars = f"""
    /* Derived from --bg and --fg (overridable via --line, --accent, etc.) */
    --_text:          var(--fg);
    --_line:          var(--line, color-mix(in srgb, var(--fg) {MIX["line"]}%, var(--bg)));
    --_arrow:         var(--accent, color-mix(in srgb, var(--fg) {MIX["arrow"]}%, var(--bg)));
    --_node-fill:     var(--surface, color-mix(in srgb, var(--fg) {MIX["node_fill"]}%, var(--bg)));
    --_node-stroke:   var(--border, color-mix(in srgb, var(--fg) {MIX["node_stroke"]}%, var(--bg)));"""

    lines = [
        "<style>",
        f"  {font_import}",
        f"  text {{ font-family: '{font}', system-ui, sans-serif; }}",
        f"  svg {{{derived_vars}",
        "  }",
        "</style>",
    ]
    return "\n".join(lines)


def svg_open_tag(
    width: float,
    height: float,
    colors: DiagramColors,
    transparent: bool = False,
) -> str:
    """Build the SVG opening tag with CSS variables set as inline styles."""
    vars_parts = [
        f"--bg:{colors.bg}",
        f"--fg:{colors.fg}",
    ]
    if colors.line:
        vars_parts.append(f"--line:{colors.line}")
    if colors.accent:
        vars_parts.append(f"--accent:{colors.accent}")
    if colors.muted:
        vars_parts.append(f"--muted:{colors.muted}")
    if colors.surface:
        vars_parts.append(f"--surface:{colors.surface}")
    if colors.border:
        vars_parts.append(f"--border:{colors.border}")

    vars_str = ";".join(vars_parts)
    bg_style = "" if transparent else ";background:var(--bg)"

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}" style="{vars_str}{bg_style}">'
    )
