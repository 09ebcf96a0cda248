from __future__ import annotations

from prometheus_client import Counter

SKIPPED_RECORDS = Counter(
    "interaction_graph_skipped_records_total",
    "Interaction records dropped before edge building",
    ["stage"],
)
