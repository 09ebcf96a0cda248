from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from interaction_graph.models import Edge


class InteractionGraph:
    """Undirected weighted view over per-type interaction edges.

    ``neighbors`` aggregates weights across interaction types and
    directions; ``edges`` keeps the original per-type list for reporting.
    Instances are not mutated after construction.
    """

    def __init__(self, nodes: Iterable[str] = (), edges: Iterable[Edge] = ()) -> None:
        self._edges: tuple[Edge, ...] = tuple(edges)
        self._adjacency: dict[str, dict[str, float]] = {}

        for node in nodes:
            self._adjacency.setdefault(node, {})

        for edge in self._edges:
            source = self._adjacency.setdefault(edge.source, {})
            target = self._adjacency.setdefault(edge.target, {})
            source[edge.target] = source.get(edge.target, 0.0) + edge.weight
            if not edge.is_loop:
                target[edge.source] = target.get(edge.source, 0.0) + edge.weight

        self._nodes: tuple[str, ...] = tuple(self._adjacency)
        self._order = {node: idx for idx, node in enumerate(self._nodes)}

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "InteractionGraph":
        return cls((), edges)

    @property
    def nodes(self) -> tuple[str, ...]:
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InteractionGraph):
            return NotImplemented
        return self._nodes == other._nodes and self._edges == other._edges

    def __repr__(self) -> str:
        return f"InteractionGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def neighbors(self, node: str) -> list[tuple[str, float]]:
        return list(self._adjacency[node].items())

    def has_loops(self) -> bool:
        return any(edge.is_loop for edge in self._edges)

    def remove_loops(self) -> "InteractionGraph":
        return InteractionGraph(self._nodes, (edge for edge in self._edges if not edge.is_loop))

    def edge_count(self) -> int:
        """Distinct undirected pairs, loops excluded."""
        total = sum(1 for node, nbrs in self._adjacency.items() for other in nbrs if other != node)
        return total // 2

    def density(self) -> float:
        n = len(self._nodes)
        if n < 2:
            return 0.0
        return self.edge_count() / (n * (n - 1) / 2.0)

    def hop_distances(self, source: str) -> dict[str, int]:
        dist = {source: 0}
        queue = deque([source])
        while queue:
            cur = queue.popleft()
            for nei in self._adjacency[cur]:
                if nei in dist:
                    continue
                dist[nei] = dist[cur] + 1
                queue.append(nei)
        return dist

    def average_path_length(self) -> float:
        total = 0
        pairs = 0
        for source in self._nodes:
            for target, d in self.hop_distances(source).items():
                if target == source:
                    continue
                total += d
                pairs += 1
        return total / pairs if pairs else 0.0

    def connected_components(self) -> list[list[str]]:
        seen: set[str] = set()
        components: list[list[str]] = []
        for node in self._nodes:
            if node in seen:
                continue
            reached = self.hop_distances(node)
            seen.update(reached)
            components.append(sorted(reached, key=self._order.__getitem__))
        return components
