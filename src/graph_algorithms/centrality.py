"""Centrality measures over an undirected adjacency.

All functions take any object exposing ``nodes`` and
``neighbors(node) -> [(node, weight), ...]`` and treat edges as unweighted
hops. Self-loops returned by ``neighbors`` are ignored.

Conventions:
- degree: number of distinct neighbours (not normalised).
- betweenness: Brandes, each unordered pair counted once.
- closeness: reachable_count / sum(hop distances), 0 for isolates.
- eigen: power iteration on (A + I) per connected component, each
  component scaled so its maximum is 1. Isolates are 0.
"""

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Sequence
from typing import Protocol

from .errors import ComputationTimeoutError, ConvergenceError


class Adjacency(Protocol):
    @property
    def nodes(self) -> Sequence[str]: ...

    def neighbors(self, node: str) -> list[tuple[str, float]]: ...


def _check_deadline(deadline: float | None, metric: str) -> None:
    if deadline is not None and time.monotonic() > deadline:
        raise ComputationTimeoutError(metric)


def _hop_distances(graph: Adjacency, source: str) -> dict[str, int]:
    dist = {source: 0}
    queue = deque([source])
    while queue:
        cur = queue.popleft()
        for nei, _weight in graph.neighbors(cur):
            if nei in dist:
                continue
            dist[nei] = dist[cur] + 1
            queue.append(nei)
    return dist


def _components(graph: Adjacency) -> list[list[str]]:
    seen: set[str] = set()
    out: list[list[str]] = []
    for node in graph.nodes:
        if node in seen:
            continue
        reached = list(_hop_distances(graph, node))
        seen.update(reached)
        out.append(reached)
    return out


def degree_centrality(graph: Adjacency, deadline: float | None = None) -> dict[str, float]:
    _check_deadline(deadline, "degree")
    return {
        node: float(sum(1 for nei, _weight in graph.neighbors(node) if nei != node))
        for node in graph.nodes
    }


def betweenness_centrality(
    graph: Adjacency,
    normalized: bool = False,
    deadline: float | None = None,
) -> dict[str, float]:
    nodes = list(graph.nodes)
    score = dict.fromkeys(nodes, 0.0)

    for source in nodes:
        _check_deadline(deadline, "betweenness")
        stack: list[str] = []
        preds: dict[str, list[str]] = {source: []}
        sigma = {source: 1.0}
        dist = {source: 0}
        queue = deque([source])
        while queue:
            v = queue.popleft()
            stack.append(v)
            for w, _weight in graph.neighbors(v):
                if w == v:
                    continue
                if w not in dist:
                    dist[w] = dist[v] + 1
                    sigma[w] = 0.0
                    preds[w] = []
                    queue.append(w)
                if dist[w] == dist[v] + 1:
                    sigma[w] += sigma[v]
                    preds[w].append(v)

        # Accumulate dependencies in order of non-increasing distance.
        delta = dict.fromkeys(stack, 0.0)
        while stack:
            w = stack.pop()
            for v in preds[w]:
                delta[v] += sigma[v] / sigma[w] * (1.0 + delta[w])
            if w != source:
                score[w] += delta[w]

    n = len(nodes)
    scale = 0.5
    if normalized and n > 2:
        scale = 1.0 / ((n - 1) * (n - 2))
    return {node: value * scale for node, value in score.items()}


def closeness_centrality(graph: Adjacency, deadline: float | None = None) -> dict[str, float]:
    out: dict[str, float] = {}
    for node in graph.nodes:
        _check_deadline(deadline, "closeness")
        dist = _hop_distances(graph, node)
        reachable = len(dist) - 1
        total = sum(dist.values())
        out[node] = reachable / total if total > 0 else 0.0
    return out


def _power_iteration(
    graph: Adjacency,
    component: list[str],
    max_iterations: int,
    tolerance: float,
    deadline: float | None,
) -> dict[str, float]:
    n = len(component)
    x = dict.fromkeys(component, 1.0 / n)
    for _ in range(max(1, max_iterations)):
        _check_deadline(deadline, "eigen")
        last = x
        # (A + I) x keeps bipartite components from oscillating.
        x = dict(last)
        for v in component:
            for w, _weight in graph.neighbors(v):
                if w != v:
                    x[w] += last[v]
        norm = math.sqrt(sum(val * val for val in x.values())) or 1.0
        x = {v: val / norm for v, val in x.items()}
        if sum(abs(x[v] - last[v]) for v in component) < n * tolerance:
            peak = max(x.values()) or 1.0
            return {v: val / peak for v, val in x.items()}
    raise ConvergenceError("eigen", max_iterations, tolerance)


def eigenvector_centrality(
    graph: Adjacency,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
    deadline: float | None = None,
) -> dict[str, float]:
    out = dict.fromkeys(graph.nodes, 0.0)
    for component in _components(graph):
        if len(component) < 2:
            continue
        out.update(_power_iteration(graph, component, max_iterations, tolerance, deadline))
    return out
