from __future__ import annotations

import logging
import math
import random
from typing import Callable

from .force import layout_organic, layout_smart_organic
from .graph import degree_counts, place, valid_links
from .layered import layout_hierarchical, layout_orthogonal, layout_relationship_paths
from .types import LayoutOptions, LayoutType, RelationshipLink, TableNode

logger = logging.getLogger(__name__)

# ============================================================================
# Layout engine
#
# Every strategy is a pure function (nodes, links, options, rng) -> nodes
# that returns fresh node objects with only x/y replaced. Links that point
# at tables outside ``nodes`` are dropped before any strategy sees them.
# ============================================================================

# Grid
TABLES_PER_ROW = 5
GRID_GAP_X = 150
GRID_GAP_Y = 100
GRID_ROW_HEIGHT = 400

# Circular / star
LAYOUT_CENTER_X = 1500
LAYOUT_CENTER_Y = 1000
CIRCLE_MIN_RADIUS = 400
CIRCLE_RADIUS_PER_NODE = 50
STAR_RADIUS = 600

DEFAULT_LAYOUT: LayoutType = "grid"

Strategy = Callable[
    [list[TableNode], list[RelationshipLink], LayoutOptions, random.Random],
    list[TableNode],
]


# ============================================================================
# Entry point
# ============================================================================


def apply_layout(
    nodes: list[TableNode],
    links: list[RelationshipLink],
    layout_type: str = DEFAULT_LAYOUT,
    options: LayoutOptions | None = None,
    rng: random.Random | None = None,
) -> list[TableNode]:
    """Position ``nodes`` with the named strategy.

    Unknown strategy names fall back to the grid. ``rng`` only matters for the
    organic strategies; pass a seeded ``random.Random`` for reproducible runs.
    """
    if not nodes:
        return []

    strategy = _STRATEGIES.get(layout_type)
    if strategy is None:
        logger.warning("Unknown layout %r, falling back to %s", layout_type, DEFAULT_LAYOUT)
        strategy = _STRATEGIES[DEFAULT_LAYOUT]

    usable = valid_links(nodes, links)
    if len(usable) != len(links):
        logger.debug("Ignoring %d link(s) to tables outside the layout", len(links) - len(usable))

    return strategy(
        list(nodes),
        usable,
        options or LayoutOptions(),
        rng if rng is not None else random.Random(),
    )


# ============================================================================
# Grid
# ============================================================================


def layout_grid(nodes: list[TableNode]) -> list[TableNode]:
    """Row-major tiling, TABLES_PER_ROW tables per row. Ignores links."""
    if not nodes:
        return []
    column_pitch = max(node.width for node in nodes) + GRID_GAP_X
    row_pitch = GRID_ROW_HEIGHT + GRID_GAP_Y
    return [
        place(node, (i % TABLES_PER_ROW) * column_pitch, (i // TABLES_PER_ROW) * row_pitch)
        for i, node in enumerate(nodes)
    ]


# ============================================================================
# Circular
# ============================================================================


def layout_circular(nodes: list[TableNode], links: list[RelationshipLink]) -> list[TableNode]:
    """Place tables on one circle, most connected first, starting at angle 0."""
    count = len(nodes)
    if count == 0:
        return []

    radius = max(CIRCLE_MIN_RADIUS, count * CIRCLE_RADIUS_PER_NODE)
    degrees = degree_counts(nodes, links)
    # sorted() is stable: ties keep input order
    ranked = sorted(nodes, key=lambda n: -degrees[n.id])
    rank_of = {node.id: rank for rank, node in enumerate(ranked)}

    positioned: list[TableNode] = []
    for node in nodes:
        angle = 2 * math.pi * rank_of[node.id] / count
        positioned.append(
            place(
                node,
                LAYOUT_CENTER_X + radius * math.cos(angle) - node.width / 2,
                LAYOUT_CENTER_Y + radius * math.sin(angle) - node.height / 2,
            )
        )
    return positioned


# ============================================================================
# Star
# ============================================================================


def layout_star(nodes: list[TableNode], links: list[RelationshipLink]) -> list[TableNode]:
    """Most connected table in the centre, every other table on a ring."""
    if not nodes:
        return []

    degrees = degree_counts(nodes, links)
    hub = nodes[0]
    for node in nodes:
        if degrees[node.id] > degrees[hub.id]:
            hub = node

    spokes = [node for node in nodes if node.id != hub.id]
    spoke_index = {node.id: i for i, node in enumerate(spokes)}

    positioned: list[TableNode] = []
    for node in nodes:
        if node.id == hub.id:
            positioned.append(
                place(node, LAYOUT_CENTER_X - node.width / 2, LAYOUT_CENTER_Y - node.height / 2)
            )
            continue
        angle = 2 * math.pi * spoke_index[node.id] / len(spokes)
        positioned.append(
            place(
                node,
                LAYOUT_CENTER_X + STAR_RADIUS * math.cos(angle) - node.width / 2,
                LAYOUT_CENTER_Y + STAR_RADIUS * math.sin(angle) - node.height / 2,
            )
        )
    return positioned


# ============================================================================
# Strategy table
# ============================================================================

_STRATEGIES: dict[str, Strategy] = {
    "grid": lambda nodes, links, opts, rng: layout_grid(nodes),
    "hierarchic": lambda nodes, links, opts, rng: layout_hierarchical(nodes, links, "TB", opts),
    "top-down": lambda nodes, links, opts, rng: layout_hierarchical(nodes, links, "TB", opts),
    "left-right": lambda nodes, links, opts, rng: layout_hierarchical(nodes, links, "LR", opts),
    "orthogonal": lambda nodes, links, opts, rng: layout_orthogonal(nodes, links, opts),
    "organic": lambda nodes, links, opts, rng: layout_organic(nodes, links, rng, opts),
    "circular": lambda nodes, links, opts, rng: layout_circular(nodes, links),
    "star": lambda nodes, links, opts, rng: layout_star(nodes, links),
    "relationship-paths": lambda nodes, links, opts, rng: layout_relationship_paths(nodes, links, opts),
    "smart-organic": lambda nodes, links, opts, rng: layout_smart_organic(nodes, links, rng, opts),
}

# (value, label, description) for every selectable strategy
LAYOUT_OPTIONS: list[tuple[LayoutType, str, str]] = [
    ("grid", "Grid", "Simple 5-column grid layout"),
    ("hierarchic", "Hierarchic", "Clear top-down flow for tree structures"),
    ("top-down", "Top-Down", "Hierarchical with main entity at top"),
    ("left-right", "Left-Right", "Hierarchical flowing left to right"),
    ("orthogonal", "Orthogonal", "Grid-aligned with minimal crossings"),
    ("organic", "Organic", "Natural clustering of related entities"),
    ("circular", "Circular", "Entities arranged in a circle"),
    ("star", "Star", "Central entity with others radiating out"),
    ("relationship-paths", "Relationship Paths", "Optimized for clear relationship paths"),
    ("smart-organic", "Smart Organic", "Advanced organic with cluster detection"),
]
