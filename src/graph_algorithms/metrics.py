from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

GRAPH_NODES = Gauge("interaction_graph_nodes", "Nodes in the last analysed graph")
GRAPH_EDGES = Gauge("interaction_graph_edges", "Distinct undirected edges in the last analysed graph")
DEGRADED_METRICS = Counter(
    "interaction_graph_degraded_metrics_total",
    "Centrality passes that failed to produce a result",
    ["metric", "reason"],
)
STAGE_SECONDS = Histogram(
    "interaction_graph_stage_seconds",
    "Duration of analysis pipeline stages",
    ["stage"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60),
)
