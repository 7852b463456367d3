"""erd-viewer -- Lay out and render entity-relationship diagrams from schema JSON."""

from __future__ import annotations

import random

from .types import (
    Column,
    TableNode,
    RelationshipLink,
    Schema,
    Point,
    RoutedLink,
    PositionedErd,
    LayoutOptions,
    RenderOptions,
    RawSchema,
)
from .theme import DiagramColors, THEMES, DEFAULTS
from .loader import SchemaLoadError, load_schema, load_schema_file
from .parser import build_schema, select_nodes
from .sizing import recalculate_node_heights
from .layout import apply_layout, LAYOUT_OPTIONS, DEFAULT_LAYOUT
from .force import detect_clusters
from .routing import route_link, route_links, markers_for
from .renderer import render_erd_svg
from .styles import CANVAS_PADDING

__all__ = [
    "render_erd",
    "layout_erd",
    "load_schema",
    "load_schema_file",
    "build_schema",
    "select_nodes",
    "recalculate_node_heights",
    "apply_layout",
    "detect_clusters",
    "route_link",
    "route_links",
    "markers_for",
    "render_erd_svg",
    "LAYOUT_OPTIONS",
    "THEMES",
    "DEFAULTS",
    "SchemaLoadError",
    "Column",
    "TableNode",
    "RelationshipLink",
    "Schema",
    "Point",
    "RoutedLink",
    "PositionedErd",
    "LayoutOptions",
    "RenderOptions",
    "DiagramColors",
]


def _build_colors(options: RenderOptions) -> DiagramColors:
    """Build DiagramColors from render options."""
    return DiagramColors(
        bg=options.bg or DEFAULTS["bg"],
        fg=options.fg or DEFAULTS["fg"],
        line=options.line,
        accent=options.accent,
        muted=options.muted,
        surface=options.surface,
        border=options.border,
    )


def layout_erd(
    schema: RawSchema | Schema,
    options: RenderOptions | None = None,
    rng: random.Random | None = None,
) -> PositionedErd:
    """Size, lay out and route a schema.

    Accepts either a raw schema document or an already built Schema (for
    instance one restricted with ``select_nodes``).
    """
    if options is None:
        options = RenderOptions()
    show_columns = True if options.show_columns is None else options.show_columns
    padding = CANVAS_PADDING if options.padding is None else options.padding

    if not isinstance(schema, Schema):
        schema = build_schema(schema, show_columns)

    nodes = recalculate_node_heights(schema.nodes, show_columns)
    nodes = apply_layout(
        nodes,
        schema.links,
        options.layout or DEFAULT_LAYOUT,
        options.layout_options,
        rng,
    )
    links = route_links(nodes, schema.links)

    if not nodes:
        return PositionedErd(width=2 * padding, height=2 * padding, show_columns=show_columns)

    xs = [n.x for n in nodes] + [n.x + n.width for n in nodes]
    ys = [n.y for n in nodes] + [n.y + n.height for n in nodes]
    for routed in links:
        xs.extend(p.x for p in routed.points)
        ys.extend(p.y for p in routed.points)

    min_x = float(min(xs) - padding)
    min_y = float(min(ys) - padding)
    return PositionedErd(
        width=max(xs) + padding - min_x,
        height=max(ys) + padding - min_y,
        min_x=min_x,
        min_y=min_y,
        nodes=nodes,
        links=links,
        show_columns=show_columns,
    )


def render_erd(
    source: str | RawSchema | Schema,
    options: RenderOptions | None = None,
    rng: random.Random | None = None,
) -> str:
    """Render a schema to an SVG string.

    ``source`` may be the JSON text of a schema document, an already parsed
    document, or a built Schema. Malformed JSON raises SchemaLoadError.
    """
    if options is None:
        options = RenderOptions()
    if isinstance(source, str):
        source = load_schema(source)

    positioned = layout_erd(source, options, rng)
    return render_erd_svg(
        positioned,
        _build_colors(options),
        options.font or "Inter",
        options.transparent or False,
    )
