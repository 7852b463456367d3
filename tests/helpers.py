"""Shared builders for table nodes and links used across the test modules."""
from __future__ import annotations

from erd_viewer.types import Column, RelationshipLink, TableNode


def make_node(
    node_id: str,
    pk: list[str] | None = None,
    other: list[str] | None = None,
    width: float = 288,
    height: float = 120,
    x: float = 0,
    y: float = 0,
) -> TableNode:
    """Helper: a table node with the named primary-key and other columns."""
    return TableNode(
        id=node_id,
        name=node_id,
        pk_columns=[Column(name=c, type="int", is_pk=True, is_fk=False) for c in pk or []],
        other_columns=[Column(name=c, type="text", is_pk=False, is_fk=False) for c in other or []],
        x=x,
        y=y,
        width=width,
        height=height,
    )


def make_link(source: str, target: str, index: int = 0, cardinality=None) -> RelationshipLink:
    return RelationshipLink(
        id=f"link-{index}-{source}-{target}",
        source=source,
        target=target,
        from_column=f"{target.lower()}_id",
        to_column="id",
        cardinality=cardinality,
    )


