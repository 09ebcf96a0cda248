from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class InteractionType(str, Enum):
    MENTION = "mention"
    RETWEET = "retweet"


@dataclass(slots=True, frozen=True)
class InteractionRecord:
    source_actor: str
    target_actors: tuple[str, ...]
    interaction_type: InteractionType


@dataclass(slots=True, frozen=True)
class Edge:
    source: str
    target: str
    type: InteractionType
    weight: int = 1

    @property
    def is_loop(self) -> bool:
        return self.source == self.target


METRIC_FIELDS = ("degree", "betweenness", "closeness", "eigen")


@dataclass(slots=True)
class Node:
    id: str
    community: int = -1
    degree: float = 0.0
    betweenness: float = 0.0
    closeness: float = 0.0
    eigen: float = 0.0


@dataclass(slots=True)
class BuildResult:
    edges: list[Edge]
    records_seen: int
    skipped_records: int = 0


@dataclass(slots=True)
class GraphSummary:
    node_count: int
    edge_count: int
    density: float
    average_path_length: float
    component_count: int
    community_count: int = 0
    modularity: float = 0.0
    records_seen: int = 0
    skipped_records: int = 0


@dataclass(slots=True)
class AnalysisResult:
    nodes: list[Node]
    edges: list[Edge]
    summary: GraphSummary
    degraded_metrics: dict[str, str] = field(default_factory=dict)
