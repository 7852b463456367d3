from __future__ import annotations

import logging

from .layout import layout_grid
from .sizing import TABLE_WIDTH, calculate_table_height
from .types import (
    Cardinality,
    Column,
    RawColumn,
    RawSchema,
    RawTable,
    RelationshipLink,
    Schema,
    TableNode,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Schema model builder
#
# Turns the raw schema document into table nodes and relationship links.
# Lookups that fail degrade quietly:
#   - unknown source column or cardinality -> cardinality None
#   - target table without a primary key   -> to_column ""
#   - link to a table that does not exist  -> kept here, skipped by layout
#                                             and routing
# ============================================================================

CARDINALITIES: tuple[Cardinality, ...] = ("many-to-one", "one-to-one", "one-to-many")

_FALSE_STRINGS = {"", "false", "no", "0"}


def build_schema(raw: RawSchema, show_columns: bool = True) -> Schema:
    """Build the schema graph. Tables start out on the default grid."""
    tables_by_name: dict[str, RawTable] = {}
    nodes: list[TableNode] = []

    for table in raw.get("tables") or []:
        name = str(table.get("table_name", ""))
        if name in tables_by_name:
            logger.debug("Skipping duplicate table %r", name)
            continue
        tables_by_name[name] = table

        columns = table.get("columns") or []
        pk_columns = [_to_column(c) for c in columns if _as_flag(c.get("is_pk"))]
        other_columns = [_to_column(c) for c in columns if not _as_flag(c.get("is_pk"))]

        nodes.append(
            TableNode(
                id=name,
                name=name,
                pk_columns=pk_columns,
                other_columns=other_columns,
                x=0.0,
                y=0.0,
                width=TABLE_WIDTH,
                height=calculate_table_height(len(pk_columns), len(other_columns), show_columns),
            )
        )

    links: list[RelationshipLink] = []
    for index, rel in enumerate(raw.get("relationship_index") or []):
        from_table = str(rel.get("from_table", ""))
        to_table = str(rel.get("to_table", ""))
        from_column = str(rel.get("from_column", ""))

        links.append(
            RelationshipLink(
                id=f"link-{index}-{from_table}-{to_table}",
                source=from_table,
                target=to_table,
                from_column=from_column,
                to_column=_first_pk_name(tables_by_name.get(to_table)),
                cardinality=_source_cardinality(tables_by_name.get(from_table), from_column),
            )
        )

    return Schema(nodes=layout_grid(nodes), links=links)


def select_nodes(schema: Schema, visible_ids: set[str] | list[str]) -> Schema:
    """Restrict a schema to the visible tables and the links between them."""
    visible = set(visible_ids)
    nodes = [node for node in schema.nodes if node.id in visible]
    links = [
        link for link in schema.links
        if link.source in visible and link.target in visible
    ]
    return Schema(nodes=nodes, links=links)


# ============================================================================
# Helpers
# ============================================================================


def _to_column(raw: RawColumn) -> Column:
    return Column(
        name=str(raw.get("column_name", "")),
        type=str(raw.get("data_type", "")),
        is_pk=_as_flag(raw.get("is_pk")),
        is_fk=_as_flag(raw.get("is_fk")),
    )


def _as_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _first_pk_name(table: RawTable | None) -> str:
    if table is None:
        return ""
    for column in table.get("columns") or []:
        if _as_flag(column.get("is_pk")):
            return str(column.get("column_name", ""))
    return ""


def _source_cardinality(table: RawTable | None, column_name: str) -> Cardinality | None:
    """Cardinality annotation of the foreign-key column on the source table."""
    if table is None:
        return None
    for column in table.get("columns") or []:
        if column.get("column_name") == column_name:
            value = column.get("fk_cardinality")
            if isinstance(value, str) and value.strip().lower() in CARDINALITIES:
                return value.strip().lower()  # type: ignore[return-value]
            if value:
                logger.debug("Unrecognised cardinality %r on %s", value, column_name)
            return None
    return None
