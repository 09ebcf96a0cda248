from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import models


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class RawInteractionValue(BaseModel):
    """Flat row handed over by the ingestion collaborator.

    Only ``screen_name``, ``is_retweet``, ``mentions_screen_name`` and the
    optional ``interaction_type`` reach the graph engine; the remaining
    fields are carried for reporting and never inspected downstream.
    """

    model_config = ConfigDict(extra="ignore")

    screen_name: str
    is_retweet: bool = False
    mentions_screen_name: str | list[str] | None = None
    interaction_type: models.InteractionType | None = None
    retweet_count: int | None = None
    reply_count: int | None = None
    text: str | None = None
    location: str | None = None
    created_at: str | None = None

    @field_validator("screen_name", mode="before")
    @classmethod
    def _require_actor(cls, value: Any) -> Any:
        if _is_missing(value):
            raise ValueError("screen_name is missing")
        value = str(value).strip().lstrip("@")
        if not value:
            raise ValueError("screen_name must not be blank")
        return value

    @field_validator("mentions_screen_name", "interaction_type", "retweet_count", "reply_count", mode="before")
    @classmethod
    def _missing_to_none(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            # list columns carry NA entries for absent mentions
            return [str(item) for item in value if not _is_missing(item)]
        return None if _is_missing(value) else value

    @field_validator("is_retweet", mode="before")
    @classmethod
    def _missing_to_false(cls, value: Any) -> Any:
        return False if _is_missing(value) else value

    @field_validator("text", "location", "created_at", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if _is_missing(value):
            return None
        return str(value)

    def to_domain(self) -> models.InteractionRecord:
        if self.interaction_type is not None:
            kind = self.interaction_type
        else:
            kind = models.InteractionType.RETWEET if self.is_retweet else models.InteractionType.MENTION

        raw = self.mentions_screen_name
        if raw is None:
            targets: tuple[str, ...] = ()
        elif isinstance(raw, str):
            targets = tuple(part.strip() for part in raw.split(",") if part.strip())
        else:
            targets = tuple(str(part) for part in raw)

        return models.InteractionRecord(
            source_actor=self.screen_name,
            target_actors=targets,
            interaction_type=kind,
        )


class WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NodeValue(WireModel):
    id: str
    community: int
    degree: float
    betweenness: float
    closeness: float
    eigen: float

    @classmethod
    def from_domain(cls, node: models.Node) -> "NodeValue":
        return cls(
            id=node.id,
            community=node.community,
            degree=node.degree,
            betweenness=node.betweenness,
            closeness=node.closeness,
            eigen=node.eigen,
        )

    def to_domain(self) -> models.Node:
        return models.Node(**self.model_dump())


class EdgeValue(WireModel):
    source: str
    target: str
    type: models.InteractionType
    weight: int = Field(ge=1)

    @classmethod
    def from_domain(cls, edge: models.Edge) -> "EdgeValue":
        return cls(source=edge.source, target=edge.target, type=edge.type, weight=edge.weight)

    def to_domain(self) -> models.Edge:
        return models.Edge(source=self.source, target=self.target, type=self.type, weight=self.weight)


class GraphSummaryValue(WireModel):
    node_count: int
    edge_count: int
    density: float
    average_path_length: float
    component_count: int
    community_count: int
    modularity: float
    records_seen: int = 0
    skipped_records: int = 0

    @classmethod
    def from_domain(cls, summary: models.GraphSummary) -> "GraphSummaryValue":
        return cls(
            node_count=summary.node_count,
            edge_count=summary.edge_count,
            density=summary.density,
            average_path_length=summary.average_path_length,
            component_count=summary.component_count,
            community_count=summary.community_count,
            modularity=summary.modularity,
            records_seen=summary.records_seen,
            skipped_records=summary.skipped_records,
        )

    def to_domain(self) -> models.GraphSummary:
        return models.GraphSummary(**self.model_dump())


class GraphSnapshotValue(WireModel):
    nodes: list[NodeValue]
    edges: list[EdgeValue]
    summary: GraphSummaryValue
    degraded_metrics: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, result: models.AnalysisResult) -> "GraphSnapshotValue":
        return cls(
            nodes=[NodeValue.from_domain(item) for item in result.nodes],
            edges=[EdgeValue.from_domain(item) for item in result.edges],
            summary=GraphSummaryValue.from_domain(result.summary),
            degraded_metrics=dict(result.degraded_metrics),
        )

    def to_domain(self) -> models.AnalysisResult:
        return models.AnalysisResult(
            nodes=[item.to_domain() for item in self.nodes],
            edges=[item.to_domain() for item in self.edges],
            summary=self.summary.to_domain(),
            degraded_metrics=dict(self.degraded_metrics),
        )
