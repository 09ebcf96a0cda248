from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from interaction_graph.models import METRIC_FIELDS, AnalysisResult, Node


def _check_metric(metric: str) -> None:
    if metric not in METRIC_FIELDS:
        raise ValueError(f"unknown metric {metric!r}; expected one of {', '.join(METRIC_FIELDS)}")


def _metric_value(node: Node, metric: str) -> float:
    _check_metric(metric)
    return getattr(node, metric)


def _ranked(nodes: Sequence[Node], metric: str, k: int) -> list[Node]:
    _check_metric(metric)
    if k <= 0:
        return []
    # sorted() is stable, so equal values keep their input order.
    return sorted(nodes, key=lambda node: _metric_value(node, metric), reverse=True)[:k]


def top_k(nodes: Sequence[Node], metric: str, k: int) -> list[tuple[str, float]]:
    return [(node.id, _metric_value(node, metric)) for node in _ranked(nodes, metric, k)]


def top_k_per_community(
    nodes: Sequence[Node],
    communities: Iterable[int],
    metrics: Sequence[str],
    k: int,
) -> list[Node]:
    """Union of the per-metric top-k among nodes of the selected communities."""
    wanted = set(communities)
    members = [node for node in nodes if node.community in wanted]
    picked: dict[str, Node] = {}
    for metric in metrics:
        for node in _ranked(members, metric, k):
            picked.setdefault(node.id, node)
    return list(picked.values())


def community_sizes(nodes: Iterable[Node]) -> list[tuple[int, int]]:
    counts = Counter(node.community for node in nodes)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def build_report_payload(result: AnalysisResult, k: int = 10) -> dict[str, Any]:
    summary = result.summary
    return {
        "node_count": summary.node_count,
        "edge_count": summary.edge_count,
        "density": summary.density,
        "average_path_length": summary.average_path_length,
        "component_count": summary.component_count,
        "community_count": summary.community_count,
        "modularity": summary.modularity,
        "records_seen": summary.records_seen,
        "skipped_records": summary.skipped_records,
        "degraded_metrics": dict(result.degraded_metrics),
        "communities": [
            {"community": community, "size": size} for community, size in community_sizes(result.nodes)
        ],
        "top": {
            metric: [
                {"node": node.id, metric: _metric_value(node, metric), "community": node.community}
                for node in _ranked(result.nodes, metric, k)
            ]
            for metric in METRIC_FIELDS
        },
    }
