from __future__ import annotations

from .sizing import COLUMN_HEIGHT, SEPARATOR_HEIGHT, TABLE_HEADER_HEIGHT, TABLE_PADDING_HEIGHT
from .types import (
    Cardinality,
    Column,
    MarkerId,
    Point,
    RelationshipLink,
    RoutedLink,
    TableNode,
)

# ============================================================================
# Relationship routing
#
# Every link is drawn as a six-point elbow connector between two column rows:
#
#   S ── stub ┐
#             │ (to the midpoint between both rows)
#             └──────── across ────────┐
#                                      │
#                               stub ──┘ T
#
# Each end leaves through the left edge of its table when the other table's
# center lies to the left, otherwise through the right edge.
# ============================================================================

# Horizontal distance the connector runs out from a table edge before turning
ROUTE_STUB = 24


def row_offsets(node: TableNode) -> list[tuple[Column, float]]:
    """Every column row in drawing order with its center offset from the table top."""
    first = TABLE_HEADER_HEIGHT + TABLE_PADDING_HEIGHT + COLUMN_HEIGHT / 2
    rows = [(column, first + i * COLUMN_HEIGHT) for i, column in enumerate(node.pk_columns)]

    first += len(node.pk_columns) * COLUMN_HEIGHT
    if node.pk_columns:
        first += SEPARATOR_HEIGHT
    rows.extend(
        (column, first + j * COLUMN_HEIGHT) for j, column in enumerate(node.other_columns)
    )
    return rows


def column_offset(node: TableNode, column_name: str) -> float:
    """Vertical offset of a column row's center, relative to the table top.

    The first row with a matching name wins. Unknown columns, and rows that
    fall outside a collapsed table, resolve to the table's vertical center.
    """
    if column_name:
        for column, offset in row_offsets(node):
            if column.name == column_name:
                return _within(offset, node)
    return node.height / 2


def route_link(source: TableNode, target: TableNode, link: RelationshipLink) -> list[Point]:
    """Polyline from the source column row to the target column row."""
    source_cx = source.x + source.width / 2
    target_cx = target.x + target.width / 2

    source_dir = -1 if target_cx < source_cx else 1
    target_dir = -1 if source_cx < target_cx else 1

    start = Point(
        x=source.x if source_dir < 0 else source.x + source.width,
        y=source.y + column_offset(source, link.from_column),
    )
    end = Point(
        x=target.x if target_dir < 0 else target.x + target.width,
        y=target.y + column_offset(target, link.to_column),
    )
    mid_y = (start.y + end.y) / 2
    out_x = start.x + source_dir * ROUTE_STUB
    in_x = end.x + target_dir * ROUTE_STUB

    return [
        start,
        Point(x=out_x, y=start.y),
        Point(x=out_x, y=mid_y),
        Point(x=in_x, y=mid_y),
        Point(x=in_x, y=end.y),
        end,
    ]


def markers_for(cardinality: Cardinality | None) -> tuple[MarkerId, MarkerId]:
    """(start, end) markers: crow's foot on the source side for many-to-one."""
    if cardinality == "many-to-one":
        return "crow", "one"
    return "one", "one"


def route_links(nodes: list[TableNode], links: list[RelationshipLink]) -> list[RoutedLink]:
    """Route every link whose tables are both present; skip the rest."""
    node_map = {node.id: node for node in nodes}
    routed: list[RoutedLink] = []
    for link in links:
        source = node_map.get(link.source)
        target = node_map.get(link.target)
        if source is None or target is None:
            continue
        marker_start, marker_end = markers_for(link.cardinality)
        routed.append(
            RoutedLink(
                link=link,
                points=route_link(source, target, link),
                marker_start=marker_start,
                marker_end=marker_end,
            )
        )
    return routed


def _within(offset: float, node: TableNode) -> float:
    return offset if offset <= node.height else node.height / 2
