from __future__ import annotations

import random

import pytest

from graph_algorithms.community import louvain_partition, modularity
from graph_state.store import InteractionGraph
from interaction_graph.models import Edge, InteractionType


def _two_cliques() -> InteractionGraph:
    left = ["x1", "x2", "x3", "x4"]
    right = ["y1", "y2", "y3", "y4"]
    edges = []
    for group in (left, right):
        for i, a in enumerate(group):
            for b in group[i + 1:]:
                edges.append(Edge(a, b, InteractionType.MENTION))
    edges.append(Edge("x1", "y1", InteractionType.RETWEET))
    return InteractionGraph.from_edges(edges)


def _random_graph(seed: int, n: int = 40, p: float = 0.12) -> InteractionGraph:
    rng = random.Random(seed)
    names = [f"user{i}" for i in range(n)]
    edges = [
        Edge(a, b, InteractionType.MENTION, rng.randint(1, 3))
        for i, a in enumerate(names)
        for b in names[i + 1:]
        if rng.random() < p
    ]
    return InteractionGraph(names, edges)


def test_cliques_split_into_two_communities() -> None:
    partition = louvain_partition(_two_cliques(), seed=42)

    assert len({partition[n] for n in ("x1", "x2", "x3", "x4")}) == 1
    assert len({partition[n] for n in ("y1", "y2", "y3", "y4")}) == 1
    assert partition["x1"] != partition["y1"]
    assert sorted(set(partition.values())) == [0, 1]


def test_same_seed_gives_same_partition() -> None:
    graph = _random_graph(3)
    assert louvain_partition(graph, seed=11) == louvain_partition(graph, seed=11)


def test_partition_labels_are_dense() -> None:
    partition = louvain_partition(_random_graph(5), seed=1)
    labels = set(partition.values())
    assert labels == set(range(len(labels)))


def test_louvain_beats_singletons() -> None:
    graph = _random_graph(9)
    partition = louvain_partition(graph, seed=0)
    singletons = {node: idx for idx, node in enumerate(graph.nodes)}
    assert modularity(graph, partition) > modularity(graph, singletons)


def test_graph_without_edges_gives_singletons() -> None:
    graph = InteractionGraph(["a", "b", "c"])
    assert louvain_partition(graph, seed=1) == {"a": 0, "b": 1, "c": 2}
    assert louvain_partition(InteractionGraph()) == {}
    assert modularity(graph, {"a": 0, "b": 1, "c": 2}) == 0.0


def test_modularity_of_clique_split() -> None:
    graph = _two_cliques()
    split = {n: 0 if n.startswith("x") else 1 for n in graph.nodes}
    # 2 * (6/13 - (13/26)^2)
    assert modularity(graph, split) == pytest.approx(12 / 13 - 0.5)
    assert modularity(graph, dict.fromkeys(graph.nodes, 0)) == pytest.approx(0.0)
