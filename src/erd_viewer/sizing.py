from __future__ import annotations

from dataclasses import replace

from .types import TableNode

# ============================================================================
# Table node sizing
#
# A table box is laid out as:
#   1. Header (table name)
#   2. Primary-key section (padded rows)
#   3. Separator, only when both sections have rows
#   4. Other-column section (padded rows)
#
# With columns hidden every box collapses to MIN_TABLE_HEIGHT.
# ============================================================================

TABLE_WIDTH = 288
TABLE_HEADER_HEIGHT = 48
COLUMN_HEIGHT = 24
TABLE_PADDING_HEIGHT = 8
SEPARATOR_HEIGHT = 8
MIN_TABLE_HEIGHT = 80


def calculate_table_height(pk_count: int, other_count: int, show_columns: bool) -> float:
    """Rendered height of a table box with the given column counts."""
    if not show_columns:
        return MIN_TABLE_HEIGHT

    height = (
        TABLE_HEADER_HEIGHT
        + TABLE_PADDING_HEIGHT * 2
        + (pk_count + other_count) * COLUMN_HEIGHT
    )
    if pk_count > 0 and other_count > 0:
        height += SEPARATOR_HEIGHT

    return max(height, MIN_TABLE_HEIGHT)


def node_height(node: TableNode, show_columns: bool) -> float:
    return calculate_table_height(len(node.pk_columns), len(node.other_columns), show_columns)


def recalculate_node_heights(nodes: list[TableNode], show_columns: bool) -> list[TableNode]:
    """Return copies of ``nodes`` with heights refreshed for ``show_columns``.

    Positions, widths and columns are carried over untouched, so a layout can
    be re-run on the result without re-deriving anything else.
    """
    return [replace(node, height=node_height(node, show_columns)) for node in nodes]
