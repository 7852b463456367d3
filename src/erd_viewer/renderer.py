from __future__ import annotations

from .routing import row_offsets
from .sizing import COLUMN_HEIGHT, SEPARATOR_HEIGHT, TABLE_HEADER_HEIGHT, TABLE_PADDING_HEIGHT
from .styles import (
    COLUMN_PAD_X,
    FONT_SIZES,
    FONT_WEIGHTS,
    MARKER_SIZE,
    STROKE_WIDTHS,
    TEXT_BASELINE_SHIFT,
    estimate_mono_text_width,
    estimate_text_width,
    truncate_to_width,
)
from .theme import DiagramColors, build_style_block, svg_open_tag
from .types import Column, PositionedErd, RoutedLink, TableNode

# ============================================================================
# ERD SVG renderer
#
# Renders a positioned ERD to SVG.
# All colors use CSS custom properties (var(--_xxx)) from the theme system.
#
# Render order:
#   1. Relationship polylines (behind boxes), with crow / one markers
#   2. Table boxes (header, primary-key rows, separator, other rows)
# ============================================================================


def render_erd_svg(
    diagram: PositionedErd,
    colors: DiagramColors,
    font: str = "Inter",
    transparent: bool = False,
) -> str:
    """Render a positioned ERD as an SVG string.

    Args:
        diagram: The laid out and routed diagram.
        colors: DiagramColors with bg/fg and optional enrichment variables.
        font: Font family name for text rendering.
        transparent: If True, renders with transparent background.
    """
    parts: list[str] = []

    parts.append(
        svg_open_tag(diagram.width, diagram.height, colors, transparent, diagram.min_x, diagram.min_y)
    )
    parts.append(build_style_block(font))
    parts.append(_render_marker_defs())

    for routed in diagram.links:
        parts.append(_render_link(routed))

    for node in diagram.nodes:
        parts.append(_render_table(node, diagram.show_columns))

    parts.append("</svg>")
    return "\n".join(parts)


# ============================================================================
# Markers
# ============================================================================


def _render_marker_defs() -> str:
    """Crow's foot ("crow") and single tick ("one") connector markers."""
    sw = STROKE_WIDTHS["connector"]
    return "\n".join([
        "<defs>",
        f'<marker id="crow" viewBox="0 0 10 10" refX="9" refY="5" '
        f'markerWidth="{MARKER_SIZE}" markerHeight="{MARKER_SIZE}" orient="auto-start-reverse">',
        f'<path d="M 0 0 L 10 5 L 0 10" fill="none" stroke="var(--_line)" stroke-width="{sw}" />',
        "</marker>",
        f'<marker id="one" viewBox="0 0 10 10" refX="1" refY="5" '
        f'markerWidth="{MARKER_SIZE}" markerHeight="{MARKER_SIZE}" orient="auto-start-reverse">',
        f'<path d="M 0 0 L 0 10" fill="none" stroke="var(--_line)" stroke-width="{sw}" />',
        "</marker>",
        "</defs>",
    ])


# ============================================================================
# Relationship rendering
# ============================================================================


def _render_link(routed: RoutedLink) -> str:
    if len(routed.points) < 2:
        return ""
    path_data = " ".join(f"{p.x},{p.y}" for p in routed.points)
    return (
        f'<polyline data-link="{_escape_xml(routed.link.id)}" points="{path_data}" '
        f'fill="none" stroke="var(--_line)" stroke-width="{STROKE_WIDTHS["connector"]}" '
        f'marker-start="url(#{routed.marker_start})" marker-end="url(#{routed.marker_end})" />'
    )


# ============================================================================
# Table rendering
# ============================================================================


def _render_table(node: TableNode, show_columns: bool) -> str:
    """Render a table box with header and, when shown, its column rows."""
    x, y, width, height = node.x, node.y, node.width, node.height
    parts: list[str] = []

    parts.append(
        f'<rect x="{x}" y="{y}" width="{width}" height="{height}" rx="8" ry="8" '
        f'fill="var(--_node-fill)" stroke="var(--_node-stroke)" '
        f'stroke-width="{STROKE_WIDTHS["outer_box"]}" />'
    )
    parts.append(
        f'<path d="M {x} {y + TABLE_HEADER_HEIGHT} V {y + 8} Q {x} {y} {x + 8} {y} '
        f'H {x + width - 8} Q {x + width} {y} {x + width} {y + 8} V {y + TABLE_HEADER_HEIGHT} Z" '
        f'fill="var(--_header)" stroke="var(--_node-stroke)" '
        f'stroke-width="{STROKE_WIDTHS["outer_box"]}" />'
    )

    name_size = FONT_SIZES["table_name"]
    name_weight = FONT_WEIGHTS["table_name"]
    name = truncate_to_width(
        node.name,
        width - COLUMN_PAD_X * 2,
        estimate_text_width("x", name_size, name_weight),
    )
    parts.append(
        f'<text x="{x + width / 2}" y="{y + TABLE_HEADER_HEIGHT / 2}" text-anchor="middle" '
        f'dy="{TEXT_BASELINE_SHIFT}" font-size="{name_size}" font-weight="{name_weight}" '
        f'fill="var(--_text)">{_escape_xml(name)}</text>'
    )

    column_count = len(node.pk_columns) + len(node.other_columns)
    if not show_columns:
        if column_count:
            body_mid = y + TABLE_HEADER_HEIGHT + (height - TABLE_HEADER_HEIGHT) / 2
            label = f"{column_count} column" + ("" if column_count == 1 else "s")
            parts.append(
                f'<text x="{x + width / 2}" y="{body_mid}" text-anchor="middle" '
                f'dy="{TEXT_BASELINE_SHIFT}" font-size="{FONT_SIZES["column_type"]}" '
                f'fill="var(--_text-faint)" font-style="italic">{label}</text>'
            )
        return "\n".join(parts)

    for column, offset in row_offsets(node):
        parts.append(_render_column(column, x, y + offset, width))

    if node.pk_columns and node.other_columns:
        sep_y = (
            y + TABLE_HEADER_HEIGHT + TABLE_PADDING_HEIGHT
            + len(node.pk_columns) * COLUMN_HEIGHT + SEPARATOR_HEIGHT / 2
        )
        parts.append(
            f'<line x1="{x + 8}" y1="{sep_y}" x2="{x + width - 8}" y2="{sep_y}" '
            f'stroke="var(--_separator)" stroke-width="{STROKE_WIDTHS["separator"]}" />'
        )

    return "\n".join(parts)


def _render_column(column: Column, box_x: float, y: float, box_width: float) -> str:
    """Render one column row: [PK|FK badge] name on the left, type on the right."""
    parts: list[str] = []

    badge = "PK" if column.is_pk else ("FK" if column.is_fk else "")
    name_x = box_x + COLUMN_PAD_X
    if badge:
        badge_size = FONT_SIZES["key_badge"]
        badge_w = estimate_text_width(badge, badge_size, FONT_WEIGHTS["key_badge"]) + 8
        parts.append(
            f'<rect x="{name_x}" y="{y - 7}" width="{badge_w}" height="14" '
            f'rx="2" ry="2" fill="var(--_key-badge)" />'
        )
        parts.append(
            f'<text x="{name_x + badge_w / 2}" y="{y}" text-anchor="middle" '
            f'dy="{TEXT_BASELINE_SHIFT}" font-size="{badge_size}" '
            f'font-weight="{FONT_WEIGHTS["key_badge"]}" '
            f'fill="{"var(--_pk)" if column.is_pk else "var(--_text-sec)"}">{badge}</text>'
        )
        name_x += badge_w + 6

    type_size = FONT_SIZES["column_type"]
    type_w = estimate_mono_text_width(column.type, type_size)
    name_weight = FONT_WEIGHTS["pk_column"] if column.is_pk else FONT_WEIGHTS["column"]
    name_room = box_x + box_width - COLUMN_PAD_X - type_w - 8 - name_x
    name = truncate_to_width(
        column.name,
        name_room,
        estimate_text_width("x", FONT_SIZES["column"], name_weight),
    )
    parts.append(
        f'<text x="{name_x}" y="{y}" dy="{TEXT_BASELINE_SHIFT}" '
        f'font-size="{FONT_SIZES["column"]}" font-weight="{name_weight}" '
        f'fill="var(--_text)">{_escape_xml(name)}</text>'
    )

    parts.append(
        f'<text x="{box_x + box_width - COLUMN_PAD_X}" y="{y}" class="mono" text-anchor="end" '
        f'dy="{TEXT_BASELINE_SHIFT}" font-size="{type_size}" '
        f'fill="var(--_text-sec)">{_escape_xml(column.type)}</text>'
    )

    return "\n".join(parts)


# ============================================================================
# Utilities
# ============================================================================


def _escape_xml(text: str) -> str:
    """Escape special XML characters in text content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
