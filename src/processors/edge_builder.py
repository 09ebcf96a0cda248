from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from interaction_graph.models import BuildResult, Edge, InteractionRecord, InteractionType
from interaction_graph.wire_models import RawInteractionValue

from .metrics import SKIPPED_RECORDS

logger = logging.getLogger(__name__)

DEFAULT_NO_TARGET_MARKERS = frozenset({"", "na", "nan", "none", "null"})

_NON_IDENTIFIER = re.compile(r"[^\w]")


def clean_actor(raw: str) -> str:
    return _NON_IDENTIFIER.sub("", raw)


def split_actor_field(raw: str) -> list[str]:
    """Split a delimited actor field such as ``@a, @b`` or ``c("a", "b")``."""
    actors: list[str] = []
    for part in raw.split(","):
        piece = part.strip()
        # R-style vector literal: c("a", "b")
        if piece.startswith("c(") and len(piece) > 2:
            piece = piece[2:]
        actors.append(clean_actor(piece))
    return actors


def narrow_rows(rows: Iterable[Mapping[str, Any]]) -> tuple[list[InteractionRecord], int]:
    records: list[InteractionRecord] = []
    skipped = 0
    for index, row in enumerate(rows):
        try:
            value = RawInteractionValue.model_validate(row)
        except ValidationError as exc:
            skipped += 1
            logger.debug("row=%s dropped: %s", index, exc.errors()[0]["msg"])
            continue
        records.append(value.to_domain())
    return records, skipped


def build_edges(
    records: Iterable[InteractionRecord],
    no_target_markers: Iterable[str] = DEFAULT_NO_TARGET_MARKERS,
) -> BuildResult:
    """Aggregate interaction records into weighted (source, target, type) edges.

    Self-mentions are kept; loops are removed by the graph at analysis time.
    """
    markers = {marker.lower() for marker in no_target_markers} | {""}
    counts: Counter[tuple[str, str, InteractionType]] = Counter()
    seen = 0
    skipped = 0

    for record in records:
        seen += 1
        source = clean_actor(record.source_actor or "")
        if source.lower() in markers:
            skipped += 1
            continue
        kind = InteractionType(record.interaction_type)
        for entry in record.target_actors:
            for target in split_actor_field(entry or ""):
                if target.lower() in markers:
                    continue
                counts[(source, target, kind)] += 1

    edges = [
        Edge(source=source, target=target, type=kind, weight=count)
        for (source, target, kind), count in sorted(counts.items(), key=lambda item: (item[0][0], item[0][1], item[0][2].value))
    ]
    if skipped:
        SKIPPED_RECORDS.labels(stage="build").inc(skipped)
        logger.warning("skipped %s interaction records without a source actor", skipped)
    return BuildResult(edges=edges, records_seen=seen, skipped_records=skipped)


def build_edges_from_rows(
    rows: Iterable[Mapping[str, Any]],
    no_target_markers: Iterable[str] = DEFAULT_NO_TARGET_MARKERS,
) -> BuildResult:
    records, invalid = narrow_rows(rows)
    if invalid:
        SKIPPED_RECORDS.labels(stage="narrow").inc(invalid)
        logger.warning("skipped %s malformed rows", invalid)
    result = build_edges(records, no_target_markers)
    result.records_seen += invalid
    result.skipped_records += invalid
    return result
