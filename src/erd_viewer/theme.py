from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

# ============================================================================
# Types
# ============================================================================


@dataclass(slots=True)
class DiagramColors:
    """Colors for an ERD, emitted as CSS variables on the <svg> tag.

    ``bg`` and ``fg`` are enough for a monochrome diagram. The optional
    colors override derived variables: ``line`` the relationship connectors,
    ``accent`` the PK badge text (``--_pk``), ``surface`` and ``border`` the
    table fill and outline, ``muted`` column types. The table header band
    (``--_header``), the key/column separator (``--_separator``) and the key
    badge background are always mixed from ``bg`` and ``fg``.
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

DEFAULTS = {"bg": "#FFFFFF", "fg": "#111827"}

# color-mix() weights for derived CSS variables
MIX = {
    "text_sec": 60,
    "text_faint": 35,
    "line": 55,
    "node_fill": 0,
    "node_stroke": 40,
    "header": 6,
    "separator": 30,
    "key_badge": 12,
}

# ============================================================================
# Well-known theme palettes
# ============================================================================

THEMES: dict[str, DiagramColors] = {
    "light": DiagramColors(bg="#FFFFFF", fg="#111827", line="#6b7280"),
    "slate-dark": DiagramColors(
        bg="#111827", fg="#F3F4F6",
        line="#6b7280", accent="#facc15", muted="#9ca3af",
    ),
    "github-light": DiagramColors(
        bg="#ffffff", fg="#1f2328",
        line="#d1d9e0", accent="#0969da", muted="#59636e",
    ),
    "github-dark": DiagramColors(
        bg="#0d1117", fg="#e6edf3",
        line="#3d444d", accent="#4493f8", muted="#9198a1",
    ),
    "nord": DiagramColors(
        bg="#2e3440", fg="#d8dee9",
        line="#4c566a", accent="#88c0d0", muted="#616e88",
    ),
}


# ============================================================================
# SVG style block
# ============================================================================


def build_style_block(font: str) -> str:
    """Build the CSS variable derivation rules for the SVG <style> block."""
    font_import = (
        f"@import url('https://fonts.googleapis.com/css2?family={quote(font)}"
        ":wght@400;600;700&amp;display=swap');"
    )

    derived_vars = f"""
    /* Derived from --bg and --fg (overridable via --line, --accent, etc.) */
    --_text:          var(--fg);
    --_text-sec:      var(--muted, color-mix(in srgb, var(--fg) {MIX["text_sec"]}%, var(--bg)));
    --_text-faint:    color-mix(in srgb, var(--fg) {MIX["text_faint"]}%, var(--bg));
    --_line:          var(--line, color-mix(in srgb, var(--fg) {MIX["line"]}%, var(--bg)));
    --_pk:            var(--accent, var(--fg));
    --_node-fill:     var(--surface, color-mix(in srgb, var(--fg) {MIX["node_fill"]}%, var(--bg)));
    --_node-stroke:   var(--border, color-mix(in srgb, var(--fg) {MIX["node_stroke"]}%, var(--bg)));
    --_header:        color-mix(in srgb, var(--fg) {MIX["header"]}%, var(--bg));
    --_separator:     color-mix(in srgb, var(--fg) {MIX["separator"]}%, var(--bg));
    --_key-badge:     color-mix(in srgb, var(--fg) {MIX["key_badge"]}%, var(--bg));"""

    return "\n".join([
        "<style>",
        f"  {font_import}",
        f"  text {{ font-family: '{font}', system-ui, sans-serif; }}",
        "  .mono { font-family: 'JetBrains Mono', 'SF Mono', ui-monospace, monospace; }",
        f"  svg {{{derived_vars}",
        "  }",
        "</style>",
    ])


def svg_open_tag(
    width: float,
    height: float,
    colors: DiagramColors,
    transparent: bool = False,
    min_x: float = 0,
    min_y: float = 0,
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
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{min_x} {min_y} {width} {height}" '
        f'width="{width}" height="{height}" style="{vars_str}{bg_style}">'
    )
