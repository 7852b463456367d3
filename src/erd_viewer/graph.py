from __future__ import annotations

from dataclasses import replace

from .types import RelationshipLink, TableNode

# ============================================================================
# Graph helpers shared by the layout strategies
# ============================================================================


def valid_links(nodes: list[TableNode], links: list[RelationshipLink]) -> list[RelationshipLink]:
    """Links whose source and target are both present in ``nodes``."""
    ids = {node.id for node in nodes}
    return [link for link in links if link.source in ids and link.target in ids]


def degree_counts(nodes: list[TableNode], links: list[RelationshipLink]) -> dict[str, int]:
    """Total (in + out) degree per node id; dangling links are not counted."""
    degrees = {node.id: 0 for node in nodes}
    for link in links:
        if link.source in degrees and link.target in degrees:
            degrees[link.source] += 1
            degrees[link.target] += 1
    return degrees


def place(node: TableNode, x: float, y: float) -> TableNode:
    return replace(node, x=x, y=y)


def shift_to_margin(nodes: list[TableNode], margin: float) -> list[TableNode]:
    """Translate the layout so its minimum x and y both equal ``margin``."""
    if not nodes:
        return nodes
    dx = margin - min(node.x for node in nodes)
    dy = margin - min(node.y for node in nodes)
    return [place(node, node.x + dx, node.y + dy) for node in nodes]
