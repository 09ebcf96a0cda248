from .ranking import (
    build_report_payload,
    community_sizes,
    top_k,
    top_k_per_community,
)

__all__ = [
    "build_report_payload",
    "community_sizes",
    "top_k",
    "top_k_per_community",
]
