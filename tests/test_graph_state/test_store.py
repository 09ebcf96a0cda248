from __future__ import annotations

import pytest

from graph_state.store import InteractionGraph
from interaction_graph.models import Edge, InteractionType

MENTION = InteractionType.MENTION
RETWEET = InteractionType.RETWEET


def _triangle() -> InteractionGraph:
    return InteractionGraph.from_edges(
        [
            Edge("A", "B", MENTION, 1),
            Edge("A", "C", RETWEET, 2),
            Edge("B", "C", MENTION, 1),
        ]
    )


def test_nodes_follow_first_appearance() -> None:
    graph = InteractionGraph(["Z"], [Edge("B", "A", MENTION), Edge("A", "C", MENTION)])
    assert graph.nodes == ("Z", "B", "A", "C")
    assert len(graph) == 4
    assert "Z" in graph
    assert "Q" not in graph


def test_neighbors_aggregate_weights_across_types_and_directions() -> None:
    graph = InteractionGraph.from_edges(
        [
            Edge("A", "C", RETWEET, 2),
            Edge("C", "A", MENTION, 1),
            Edge("A", "B", MENTION, 1),
        ]
    )
    assert dict(graph.neighbors("A")) == {"C": 3.0, "B": 1.0}
    assert dict(graph.neighbors("C")) == {"A": 3.0}
    assert len(graph.edges) == 3
    assert graph.edge_count() == 2


def test_unknown_node_raises() -> None:
    with pytest.raises(KeyError):
        _triangle().neighbors("missing")


def test_remove_loops_is_idempotent_and_keeps_nodes() -> None:
    graph = InteractionGraph.from_edges([Edge("A", "A", MENTION, 3), Edge("A", "B", MENTION, 1)])
    assert graph.has_loops()

    once = graph.remove_loops()
    twice = once.remove_loops()

    assert once == twice
    assert not once.has_loops()
    assert once.nodes == ("A", "B")
    assert [(e.source, e.target) for e in once.edges] == [("A", "B")]
    assert dict(once.neighbors("A")) == {"B": 1.0}


def test_density() -> None:
    assert InteractionGraph().density() == 0.0
    assert InteractionGraph(["solo"]).density() == 0.0
    assert _triangle().density() == 1.0

    with_loop = InteractionGraph.from_edges([Edge("A", "A", MENTION), Edge("A", "B", MENTION)])
    assert with_loop.density() == 1.0

    sparse = InteractionGraph(["A", "B", "C", "D"], [Edge("A", "B", MENTION)])
    assert sparse.density() == pytest.approx(1 / 6)


def test_average_path_length_counts_hops() -> None:
    path = InteractionGraph.from_edges([Edge("A", "B", MENTION, 5), Edge("B", "C", MENTION, 1)])
    # ordered pairs: AB=1 AC=2 BA=1 BC=1 CA=2 CB=1
    assert path.average_path_length() == pytest.approx(8 / 6)


def test_average_path_length_skips_unreachable_pairs() -> None:
    graph = InteractionGraph(["lonely"], [Edge("A", "B", MENTION), Edge("C", "D", RETWEET)])
    assert graph.average_path_length() == 1.0
    assert InteractionGraph(["x", "y"]).average_path_length() == 0.0


def test_connected_components() -> None:
    graph = InteractionGraph(["lonely"], [Edge("A", "B", MENTION), Edge("C", "D", RETWEET), Edge("B", "E", MENTION)])
    assert graph.connected_components() == [["lonely"], ["A", "B", "E"], ["C", "D"]]
