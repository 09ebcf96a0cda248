from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from graph_state.store import InteractionGraph
from interaction_graph.models import METRIC_FIELDS, AnalysisResult, BuildResult, GraphSummary, Node
from processors.edge_builder import build_edges_from_rows

from .centrality import (
    betweenness_centrality,
    closeness_centrality,
    degree_centrality,
    eigenvector_centrality,
)
from .community import louvain_partition, modularity
from .config import AnalysisConfig, load_analysis_config
from .errors import GraphAnalysisError
from .metrics import DEGRADED_METRICS, GRAPH_EDGES, GRAPH_NODES, STAGE_SECONDS

logger = logging.getLogger(__name__)


class GraphAnalysisEngine:
    """Runs the fixed analysis pipeline over one graph snapshot.

    Stages:
    - loops are removed; the loop-free view feeds every later stage.
    - the four centrality passes are independent and each returns its own
      mapping, so they can run on worker threads without locking.
    - a pass that raises GraphAnalysisError (no convergence, deadline hit)
      is reported in ``degraded_metrics`` and its values stay 0.
    - Louvain runs on the same view, after which the result is frozen.
    """

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or load_analysis_config()

    def _deadline(self) -> float | None:
        if self.config.metric_timeout_seconds <= 0:
            return None
        return time.monotonic() + self.config.metric_timeout_seconds

    def _metric_tasks(self, graph: InteractionGraph, deadline: float | None) -> dict[str, Callable[[], dict[str, float]]]:
        return {
            "degree": lambda: degree_centrality(graph, deadline=deadline),
            "betweenness": lambda: betweenness_centrality(graph, deadline=deadline),
            "closeness": lambda: closeness_centrality(graph, deadline=deadline),
            "eigen": lambda: eigenvector_centrality(
                graph,
                max_iterations=self.config.eigen_max_iterations,
                tolerance=self.config.eigen_tolerance,
                deadline=deadline,
            ),
        }

    @staticmethod
    def _run_metric(name: str, task: Callable[[], dict[str, float]]) -> tuple[dict[str, float] | None, str | None]:
        start = time.perf_counter()
        try:
            return task(), None
        except GraphAnalysisError as exc:
            logger.warning("metric=%s degraded: %s", name, exc)
            DEGRADED_METRICS.labels(metric=name, reason=type(exc).__name__).inc()
            return None, str(exc)
        finally:
            STAGE_SECONDS.labels(stage=name).observe(time.perf_counter() - start)

    def compute_centrality(self, graph: InteractionGraph) -> tuple[dict[str, dict[str, float]], dict[str, str]]:
        tasks = self._metric_tasks(graph, self._deadline())
        if self.config.parallel_metrics and len(graph) > 1:
            with ThreadPoolExecutor(max_workers=max(1, self.config.max_workers), thread_name_prefix="centrality") as pool:
                futures = {name: pool.submit(self._run_metric, name, task) for name, task in tasks.items()}
                outcomes = {name: future.result() for name, future in futures.items()}
        else:
            outcomes = {name: self._run_metric(name, task) for name, task in tasks.items()}

        values: dict[str, dict[str, float]] = {}
        degraded: dict[str, str] = {}
        for name in METRIC_FIELDS:
            result, error = outcomes[name]
            if error is not None:
                degraded[name] = error
            values[name] = result or {}
        return values, degraded

    def detect_communities(self, graph: InteractionGraph) -> dict[str, int]:
        start = time.perf_counter()
        try:
            return louvain_partition(
                graph,
                seed=self.config.community_seed,
                resolution=self.config.community_resolution,
                max_levels=self.config.community_max_levels,
            )
        finally:
            STAGE_SECONDS.labels(stage="community").observe(time.perf_counter() - start)

    def analyze(self, graph: InteractionGraph, built: BuildResult | None = None) -> AnalysisResult:
        view = graph.remove_loops()
        values, degraded = self.compute_centrality(view)
        partition = self.detect_communities(view)
        score = modularity(view, partition, self.config.community_resolution)

        nodes = [
            Node(
                id=node_id,
                community=partition[node_id],
                degree=values["degree"].get(node_id, 0.0),
                betweenness=values["betweenness"].get(node_id, 0.0),
                closeness=values["closeness"].get(node_id, 0.0),
                eigen=values["eigen"].get(node_id, 0.0),
            )
            for node_id in view.nodes
        ]
        summary = GraphSummary(
            node_count=len(view),
            edge_count=view.edge_count(),
            density=view.density(),
            average_path_length=view.average_path_length(),
            component_count=len(view.connected_components()),
            community_count=len(set(partition.values())),
            modularity=score,
            records_seen=built.records_seen if built else 0,
            skipped_records=built.skipped_records if built else 0,
        )

        GRAPH_NODES.set(summary.node_count)
        GRAPH_EDGES.set(summary.edge_count)
        logger.info(
            "analysed graph nodes=%s edges=%s communities=%s modularity=%.4f degraded=%s",
            summary.node_count,
            summary.edge_count,
            summary.community_count,
            summary.modularity,
            sorted(degraded),
        )
        return AnalysisResult(nodes=nodes, edges=list(view.edges), summary=summary, degraded_metrics=degraded)

    def build_graph(self, rows: Iterable[Mapping[str, Any]]) -> tuple[InteractionGraph, BuildResult]:
        built = build_edges_from_rows(rows, self.config.no_target_markers)
        logger.info(
            "built edges=%s from records=%s skipped=%s",
            len(built.edges),
            built.records_seen,
            built.skipped_records,
        )
        return InteractionGraph.from_edges(built.edges), built

    def run(self, rows: Iterable[Mapping[str, Any]]) -> AnalysisResult:
        graph, built = self.build_graph(rows)
        return self.analyze(graph, built)
