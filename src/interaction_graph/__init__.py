from .models import (
    METRIC_FIELDS,
    AnalysisResult,
    BuildResult,
    Edge,
    GraphSummary,
    InteractionRecord,
    InteractionType,
    Node,
)
from .wire_models import (
    EdgeValue,
    GraphSnapshotValue,
    GraphSummaryValue,
    NodeValue,
    RawInteractionValue,
)

__all__ = [
    "METRIC_FIELDS",
    "AnalysisResult",
    "BuildResult",
    "Edge",
    "EdgeValue",
    "GraphSnapshotValue",
    "GraphSummary",
    "GraphSummaryValue",
    "InteractionRecord",
    "InteractionType",
    "Node",
    "NodeValue",
    "RawInteractionValue",
]
