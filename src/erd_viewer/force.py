from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .graph import place, shift_to_margin
from .types import LayoutOptions, RelationshipLink, TableNode

# ============================================================================
# Force-directed layouts
#
# Every pair of tables repels with k_r / d^2 and every link pulls its two
# tables together with k_a * d. Each iteration first computes a velocity for
# every table from the current positions, then applies all of them at once:
#   position += velocity * damping
#
# The iteration count is fixed, so running time is bounded by
# O(iterations * n^2) for the all-pairs repulsion regardless of convergence.
# Initial positions come from the caller's random source.
# ============================================================================

ORGANIC = {
    "iterations": 100,
    "repulsion": 50000.0,
    "attraction": 0.01,
    "damping": 0.9,
    # Initial positions are drawn from [0, spread)^2
    "spread": 2000.0,
    "margin": 100.0,
}

SMART_ORGANIC = {
    "iterations": 150,
    "repulsion": 60000.0,
    "attraction": 0.015,
    "damping": 0.85,
    "center_x": 1500.0,
    "center_y": 1000.0,
    # Distance of each cluster's seed area from the shared center
    "cluster_radius": 800.0,
    # Side of the square each cluster's tables are scattered in
    "cluster_spread": 400.0,
    # Applied to repulsion across clusters and attraction within a cluster
    "cluster_bias": 1.5,
    "margin": 100.0,
}

# Below this distance two tables count as coincident
_EPSILON = 1e-9


@dataclass(slots=True)
class _Body:
    id: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    cluster: int = 0


# ============================================================================
# Strategies
# ============================================================================


def layout_organic(
    nodes: list[TableNode],
    links: list[RelationshipLink],
    rng: random.Random,
    options: LayoutOptions | None = None,
) -> list[TableNode]:
    """Plain force-directed layout from uniformly random starting positions."""
    if not nodes:
        return []
    params = dict(ORGANIC)
    if options and options.iterations is not None:
        params["iterations"] = options.iterations

    spread = params["spread"]
    bodies = [_Body(node.id, rng.random() * spread, rng.random() * spread) for node in nodes]
    _simulate(bodies, links, params, rng, cluster_bias=1.0)
    return _apply_positions(nodes, bodies, params["margin"])


def layout_smart_organic(
    nodes: list[TableNode],
    links: list[RelationshipLink],
    rng: random.Random,
    options: LayoutOptions | None = None,
) -> list[TableNode]:
    """Force-directed layout that keeps connected components apart.

    Each component is seeded in its own angular sector around a shared center,
    and during simulation repulsion between components and attraction within a
    component are both scaled by ``cluster_bias``.
    """
    if not nodes:
        return []
    params = dict(SMART_ORGANIC)
    if options and options.iterations is not None:
        params["iterations"] = options.iterations

    clusters = detect_clusters(nodes, links)
    cluster_count = max(1, len(set(clusters.values())))
    spread = params["cluster_spread"]

    bodies: list[_Body] = []
    for node in nodes:
        cluster = clusters[node.id]
        angle = 2 * math.pi * cluster / cluster_count
        base_x = params["center_x"] + params["cluster_radius"] * math.cos(angle)
        base_y = params["center_y"] + params["cluster_radius"] * math.sin(angle)
        bodies.append(
            _Body(
                node.id,
                base_x + (rng.random() - 0.5) * spread,
                base_y + (rng.random() - 0.5) * spread,
                cluster=cluster,
            )
        )

    _simulate(bodies, links, params, rng, cluster_bias=params["cluster_bias"])
    return _apply_positions(nodes, bodies, params["margin"])


# ============================================================================
# Clustering
# ============================================================================


def detect_clusters(nodes: list[TableNode], links: list[RelationshipLink]) -> dict[str, int]:
    """Label connected components of the undirected link graph.

    Cluster ids are assigned in node input order starting at 0. Isolated
    tables get a cluster of their own. Links to unknown tables are ignored.
    """
    adjacency: dict[str, list[str]] = {node.id: [] for node in nodes}
    for link in links:
        if link.source in adjacency and link.target in adjacency:
            adjacency[link.source].append(link.target)
            adjacency[link.target].append(link.source)

    clusters: dict[str, int] = {}
    cluster_id = 0
    for node in nodes:
        if node.id in clusters:
            continue
        stack = [node.id]
        clusters[node.id] = cluster_id
        while stack:
            current = stack.pop()
            for neighbor in adjacency[current]:
                if neighbor not in clusters:
                    clusters[neighbor] = cluster_id
                    stack.append(neighbor)
        cluster_id += 1
    return clusters


# ============================================================================
# Simulation
# ============================================================================


def _simulate(
    bodies: list[_Body],
    links: list[RelationshipLink],
    params: dict,
    rng: random.Random,
    cluster_bias: float,
) -> None:
    by_id = {body.id: body for body in bodies}
    pairs = [
        (by_id[link.source], by_id[link.target])
        for link in links
        if link.source in by_id and link.target in by_id and link.source != link.target
    ]
    repulsion = params["repulsion"]
    attraction = params["attraction"]
    damping = params["damping"]

    for _ in range(params["iterations"]):
        # Phase 1: velocities from the current positions only
        for body in bodies:
            body.vx = 0.0
            body.vy = 0.0

        for i in range(len(bodies)):
            a = bodies[i]
            for j in range(i + 1, len(bodies)):
                b = bodies[j]
                ux, uy, dist = _direction(a, b, rng)
                scale = 1.0 if a.cluster == b.cluster else cluster_bias
                force = repulsion * scale / (dist * dist)
                a.vx -= ux * force
                a.vy -= uy * force
                b.vx += ux * force
                b.vy += uy * force

        for a, b in pairs:
            ux, uy, dist = _direction(a, b, rng)
            scale = cluster_bias if a.cluster == b.cluster else 1.0
            force = attraction * scale * dist
            a.vx += ux * force
            a.vy += uy * force
            b.vx -= ux * force
            b.vy -= uy * force

        # Phase 2: move everything at once
        for body in bodies:
            body.x += body.vx * damping
            body.y += body.vy * damping


def _direction(a: _Body, b: _Body, rng: random.Random) -> tuple[float, float, float]:
    """Unit vector from a to b and their distance, clamped to at least 1.

    Coincident bodies get a random direction so they can separate.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    raw = math.hypot(dx, dy)
    if raw < _EPSILON:
        angle = rng.random() * 2 * math.pi
        return math.cos(angle), math.sin(angle), 1.0
    return dx / raw, dy / raw, max(raw, 1.0)


def _apply_positions(nodes: list[TableNode], bodies: list[_Body], margin: float) -> list[TableNode]:
    by_id = {body.id: body for body in bodies}
    moved = [place(node, by_id[node.id].x, by_id[node.id].y) for node in nodes]
    return shift_to_margin(moved, margin)
