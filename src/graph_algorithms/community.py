from __future__ import annotations

import logging
import random
from collections import defaultdict
from collections.abc import Mapping

from .centrality import Adjacency

logger = logging.getLogger(__name__)

# Level state: adj[i] maps neighbour index -> weight (no self entries),
# loops[i] holds the internal weight of super-node i, counted once.
_Level = tuple[list[dict[int, float]], list[float]]


def _strengths(adj: list[dict[int, float]], loops: list[float]) -> list[float]:
    return [sum(row.values()) + 2.0 * loop for row, loop in zip(adj, loops)]


def _level_modularity(
    adj: list[dict[int, float]],
    loops: list[float],
    comm: list[int],
    resolution: float,
    m: float,
) -> float:
    internal: dict[int, float] = defaultdict(float)
    total: dict[int, float] = defaultdict(float)
    for i, k in enumerate(_strengths(adj, loops)):
        ci = comm[i]
        total[ci] += k
        internal[ci] += loops[i]
        for j, w in adj[i].items():
            if comm[j] == ci:
                internal[ci] += w / 2.0
    return sum(internal[c] / m - resolution * (total[c] / (2.0 * m)) ** 2 for c in total)


def _one_level(
    adj: list[dict[int, float]],
    loops: list[float],
    rng: random.Random,
    resolution: float,
    m: float,
    min_gain: float,
) -> tuple[list[int], bool]:
    """Local moving phase: move single nodes while modularity improves."""
    n = len(adj)
    comm = list(range(n))
    k = _strengths(adj, loops)
    tot = list(k)
    order = list(range(n))
    rng.shuffle(order)

    moved_any = False
    current = _level_modularity(adj, loops, comm, resolution, m)
    while True:
        moves = 0
        for i in order:
            ci = comm[i]
            links: dict[int, float] = {}
            for j, w in adj[i].items():
                links[comm[j]] = links.get(comm[j], 0.0) + w

            tot[ci] -= k[i]
            best = ci
            best_gain = links.get(ci, 0.0) - resolution * tot[ci] * k[i] / (2.0 * m)
            for c, w in links.items():
                gain = w - resolution * tot[c] * k[i] / (2.0 * m)
                if gain > best_gain:
                    best, best_gain = c, gain
            tot[best] += k[i]
            if best != ci:
                comm[i] = best
                moves += 1

        if moves == 0:
            break
        moved_any = True
        new = _level_modularity(adj, loops, comm, resolution, m)
        if new - current < min_gain:
            break
        current = new
    return comm, moved_any


def _renumber(comm: list[int]) -> list[int]:
    remap: dict[int, int] = {}
    for c in comm:
        if c not in remap:
            remap[c] = len(remap)
    return [remap[c] for c in comm]


def _aggregate(adj: list[dict[int, float]], loops: list[float], comm: list[int]) -> _Level:
    size = max(comm) + 1
    new_adj: list[dict[int, float]] = [{} for _ in range(size)]
    new_loops = [0.0] * size
    for i, row in enumerate(adj):
        ci = comm[i]
        new_loops[ci] += loops[i]
        for j, w in row.items():
            cj = comm[j]
            if ci == cj:
                # visited from both endpoints
                new_loops[ci] += w / 2.0
            else:
                new_adj[ci][cj] = new_adj[ci].get(cj, 0.0) + w
    return new_adj, new_loops


def _initial_level(graph: Adjacency) -> tuple[list[str], list[dict[int, float]]]:
    node_ids = list(graph.nodes)
    index = {node: idx for idx, node in enumerate(node_ids)}
    adj = [
        {index[nei]: float(w) for nei, w in graph.neighbors(node) if nei != node}
        for node in node_ids
    ]
    return node_ids, adj


def louvain_partition(
    graph: Adjacency,
    seed: int | None = None,
    resolution: float = 1.0,
    max_levels: int = 32,
    min_gain: float = 1e-7,
) -> dict[str, int]:
    """Greedy multilevel modularity optimisation.

    The seed drives the node visiting order, so identical (graph, seed)
    input gives an identical partition. Labels are dense from 0 and carry
    no ordering meaning.
    """
    node_ids, adj = _initial_level(graph)
    loops = [0.0] * len(adj)
    m = sum(sum(row.values()) for row in adj) / 2.0
    if m <= 0.0:
        return {node: idx for idx, node in enumerate(node_ids)}

    rng = random.Random(seed)
    membership = list(range(len(node_ids)))
    modularity_now = _level_modularity(adj, loops, membership, resolution, m)

    for level in range(max(1, max_levels)):
        comm, moved = _one_level(adj, loops, rng, resolution, m, min_gain)
        if not moved:
            break
        comm = _renumber(comm)
        membership = [comm[s] for s in membership]
        adj, loops = _aggregate(adj, loops, comm)
        modularity_new = _level_modularity(adj, loops, list(range(len(adj))), resolution, m)
        logger.debug("louvain level=%s communities=%s modularity=%.6f", level, len(adj), modularity_new)
        if modularity_new - modularity_now < min_gain:
            break
        modularity_now = modularity_new

    return {node: membership[idx] for idx, node in enumerate(node_ids)}


def modularity(graph: Adjacency, partition: Mapping[str, int], resolution: float = 1.0) -> float:
    node_ids, adj = _initial_level(graph)
    m = sum(sum(row.values()) for row in adj) / 2.0
    if m <= 0.0:
        return 0.0
    comm = [partition[node] for node in node_ids]
    return _level_modularity(adj, [0.0] * len(adj), comm, resolution, m)
