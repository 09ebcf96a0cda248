from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class AnalysisConfig:
    community_seed: int | None
    community_resolution: float
    community_max_levels: int
    eigen_max_iterations: int
    eigen_tolerance: float
    metric_timeout_seconds: float
    parallel_metrics: bool
    max_workers: int
    top_k: int
    no_target_markers: tuple[str, ...]


def _optional_int(raw: str) -> int | None:
    raw = raw.strip()
    return int(raw) if raw else None


def load_analysis_config() -> AnalysisConfig:
    return AnalysisConfig(
        community_seed=_optional_int(os.getenv("ALGO_COMMUNITY_SEED", "42")),
        community_resolution=float(os.getenv("ALGO_COMMUNITY_RESOLUTION", "1.0")),
        community_max_levels=int(os.getenv("ALGO_COMMUNITY_MAX_LEVELS", "32")),
        eigen_max_iterations=int(os.getenv("ALGO_EIGEN_MAX_ITERATIONS", "100")),
        eigen_tolerance=float(os.getenv("ALGO_EIGEN_TOLERANCE", "1e-6")),
        metric_timeout_seconds=float(os.getenv("ALGO_METRIC_TIMEOUT_SECONDS", "0")),
        parallel_metrics=os.getenv("ALGO_PARALLEL_METRICS", "true").lower() == "true",
        max_workers=int(os.getenv("ALGO_MAX_WORKERS", "4")),
        top_k=int(os.getenv("ALGO_TOP_K", "10")),
        no_target_markers=tuple(
            item.strip() for item in os.getenv("ALGO_NO_TARGET_MARKERS", "NA,NaN,None,null").split(",")
        ),
    )
