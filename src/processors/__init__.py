from .edge_builder import (
    DEFAULT_NO_TARGET_MARKERS,
    build_edges,
    build_edges_from_rows,
    narrow_rows,
    split_actor_field,
)

__all__ = [
    "DEFAULT_NO_TARGET_MARKERS",
    "build_edges",
    "build_edges_from_rows",
    "narrow_rows",
    "split_actor_field",
]
