from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypedDict

# ============================================================================
# Raw schema -- the JSON document produced by the schema export tooling
# ============================================================================


class RawColumn(TypedDict, total=False):
    column_name: str
    data_type: str
    is_pk: bool
    # Exporters emit either a bool or a string flag here
    is_fk: str | bool
    fk_cardinality: str | None
    references_table: str | None


class RawRelationship(TypedDict, total=False):
    from_table: str
    from_column: str
    to_table: str
    type: str


class RawTable(TypedDict, total=False):
    table_name: str
    columns: list[RawColumn]
    relationships: list[RawRelationship]


class RawSchema(TypedDict, total=False):
    tables: list[RawTable]
    relationship_index: list[RawRelationship]


# ============================================================================
# Schema model -- normalized graph of sized table nodes and typed links
# ============================================================================

Cardinality = Literal["many-to-one", "one-to-one", "one-to-many"]

LayoutType = Literal[
    "grid",
    "hierarchic",
    "top-down",
    "left-right",
    "orthogonal",
    "organic",
    "circular",
    "star",
    "relationship-paths",
    "smart-organic",
]

# Marker identifiers referenced by the rendering layer
MarkerId = Literal["crow", "one"]


@dataclass(slots=True, frozen=True)
class Column:
    name: str
    type: str
    is_pk: bool
    is_fk: bool


@dataclass(slots=True)
class TableNode:
    """A table box: two column sections plus its top-left position and size."""

    id: str
    name: str
    pk_columns: list[Column]
    other_columns: list[Column]
    x: float
    y: float
    width: float
    height: float


@dataclass(slots=True)
class RelationshipLink:
    id: str
    # Source and target table ids
    source: str
    target: str
    # Column on the source table holding the foreign key
    from_column: str
    # First primary-key column of the target table, "" when none resolves
    to_column: str
    cardinality: Cardinality | None = None


@dataclass(slots=True)
class Schema:
    nodes: list[TableNode] = field(default_factory=list)
    links: list[RelationshipLink] = field(default_factory=list)


# ============================================================================
# Routed output -- ready for SVG rendering
# ============================================================================


@dataclass(slots=True)
class Point:
    x: float
    y: float


@dataclass(slots=True)
class RoutedLink:
    link: RelationshipLink
    # Polyline from the source column anchor to the target column anchor
    points: list[Point]
    marker_start: MarkerId
    marker_end: MarkerId


@dataclass(slots=True)
class PositionedErd:
    """Laid out and routed diagram. min_x/min_y give the canvas origin."""

    width: float
    height: float
    min_x: float = 0.0
    min_y: float = 0.0
    nodes: list[TableNode] = field(default_factory=list)
    links: list[RoutedLink] = field(default_factory=list)
    show_columns: bool = True


# ============================================================================
# Options -- user-facing configuration
# ============================================================================


@dataclass(slots=True)
class LayoutOptions:
    """Overrides for strategy constants. None keeps the strategy's default."""

    node_spacing: float | None = None
    rank_spacing: float | None = None
    iterations: int | None = None


@dataclass(slots=True)
class RenderOptions:
    bg: str | None = None
    fg: str | None = None
    line: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None
    font: str | None = None
    padding: int | None = None
    transparent: bool | None = None
    show_columns: bool | None = None
    layout: str | None = None
    layout_options: LayoutOptions | None = None
