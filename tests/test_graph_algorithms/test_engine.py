from __future__ import annotations

import time

import pytest

from graph_algorithms.config import AnalysisConfig
from graph_algorithms.engine import GraphAnalysisEngine
from graph_state.store import InteractionGraph
from interaction_graph.models import Edge, InteractionType


def _by_id(result) -> dict:
    return {node.id: node for node in result.nodes}


def make_engine(**overrides) -> GraphAnalysisEngine:
    settings = dict(
        community_seed=42,
        community_resolution=1.0,
        community_max_levels=32,
        eigen_max_iterations=100,
        eigen_tolerance=1e-6,
        metric_timeout_seconds=0.0,
        parallel_metrics=True,
        max_workers=4,
        top_k=10,
        no_target_markers=("NA", "None"),
    )
    settings.update(overrides)
    return GraphAnalysisEngine(AnalysisConfig(**settings))


def _triangle() -> InteractionGraph:
    return InteractionGraph.from_edges(
        [
            Edge("A", "B", InteractionType.MENTION, 1),
            Edge("A", "C", InteractionType.RETWEET, 2),
            Edge("B", "C", InteractionType.MENTION, 1),
        ]
    )


def _star() -> InteractionGraph:
    return InteractionGraph.from_edges([Edge("H", f"L{i}", InteractionType.MENTION) for i in range(1, 6)])


def test_triangle_scenario() -> None:
    result = make_engine().analyze(_triangle())

    assert result.summary.node_count == 3
    assert result.summary.edge_count == 3
    assert result.summary.density == 1.0
    assert [node.degree for node in result.nodes] == [2.0, 2.0, 2.0]
    eigen = [node.eigen for node in result.nodes]
    assert eigen == pytest.approx([1.0, 1.0, 1.0])
    assert result.degraded_metrics == {}
    assert all(node.community >= 0 for node in result.nodes)


def test_star_scenario() -> None:
    result = make_engine().analyze(_star())
    hub = _by_id(result)["H"]
    leaves = [node for node in result.nodes if node.id != "H"]

    assert hub.degree == 5.0
    assert all(leaf.degree == 1.0 for leaf in leaves)
    assert hub.betweenness > 0
    assert all(leaf.betweenness == 0.0 for leaf in leaves)
    assert hub.closeness == 1.0
    assert all(leaf.closeness < 1.0 for leaf in leaves)
    assert result.summary.average_path_length == pytest.approx(50 / 30)


def test_parallel_and_sequential_agree() -> None:
    graph = _star()
    parallel = make_engine(parallel_metrics=True).analyze(graph)
    sequential = make_engine(parallel_metrics=False).analyze(graph)
    assert parallel == sequential


def test_run_from_rows_excludes_loops_from_metrics() -> None:
    rows = [
        {"screen_name": "alice", "is_retweet": False, "mentions_screen_name": "bob, alice"},
        {"screen_name": "bob", "is_retweet": True, "mentions_screen_name": "carol"},
        {"screen_name": "dave", "mentions_screen_name": "NA"},
        {"screen_name": "", "mentions_screen_name": "bob"},
    ]

    result = make_engine().run(rows)

    assert [node.id for node in result.nodes] == ["alice", "bob", "carol"]
    assert all(not edge.is_loop for edge in result.edges)
    assert _by_id(result)["alice"].degree == 1.0
    assert _by_id(result)["bob"].betweenness == 1.0
    assert result.summary.component_count == 1
    assert result.summary.records_seen == 4
    assert result.summary.skipped_records == 1


def test_non_convergence_is_reported_as_degraded() -> None:
    result = make_engine(eigen_max_iterations=1).analyze(_star())

    assert set(result.degraded_metrics) == {"eigen"}
    assert "did not converge" in result.degraded_metrics["eigen"]
    assert all(node.eigen == 0.0 for node in result.nodes)
    assert _by_id(result)["H"].degree == 5.0


def test_deadline_degrades_every_metric(monkeypatch) -> None:
    engine = make_engine(metric_timeout_seconds=5.0)
    monkeypatch.setattr(engine, "_deadline", lambda: time.monotonic() - 1.0)

    result = engine.analyze(_star())

    assert set(result.degraded_metrics) == {"degree", "betweenness", "closeness", "eigen"}
    assert result.summary.community_count >= 1


def test_empty_and_edgeless_graphs() -> None:
    empty = make_engine().analyze(InteractionGraph())
    assert empty.nodes == []
    assert empty.summary.density == 0.0
    assert empty.summary.modularity == 0.0

    edgeless = make_engine().analyze(InteractionGraph(["a", "b"]))
    assert [node.community for node in edgeless.nodes] == [0, 1]
    assert edgeless.summary.average_path_length == 0.0
