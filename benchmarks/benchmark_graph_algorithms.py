from __future__ import annotations

import random
import time

from graph_algorithms.config import AnalysisConfig
from graph_algorithms.engine import GraphAnalysisEngine


def make_engine(parallel: bool) -> GraphAnalysisEngine:
    cfg = AnalysisConfig(
        community_seed=42,
        community_resolution=1.0,
        community_max_levels=32,
        eigen_max_iterations=200,
        eigen_tolerance=1e-6,
        metric_timeout_seconds=0.0,
        parallel_metrics=parallel,
        max_workers=4,
        top_k=10,
        no_target_markers=("NA",),
    )
    return GraphAnalysisEngine(cfg)


def make_rows(count: int, names: list[str]) -> list[dict]:
    rows = []
    for _ in range(count):
        author = random.choice(names)
        mentioned = random.sample(names, random.randint(0, 3))
        rows.append(
            {
                "screen_name": author,
                "is_retweet": random.random() < 0.4,
                "mentions_screen_name": ",".join(mentioned) or "NA",
            }
        )
    return rows


def main(records: int = 5000, actors: int = 1500) -> None:
    random.seed(42)
    names = [f"actor_{i}" for i in range(actors)]
    rows = make_rows(records, names)

    for parallel in (False, True):
        engine = make_engine(parallel)
        start = time.perf_counter()
        result = engine.run(rows)
        elapsed = time.perf_counter() - start

        print(f"parallel={parallel}")
        print(f"elapsed_sec={elapsed:.4f}")
        print(f"node_count={result.summary.node_count}")
        print(f"edge_count={result.summary.edge_count}")
        print(f"communities={result.summary.community_count}")
        print(f"modularity={result.summary.modularity:.4f}")


if __name__ == "__main__":
    main()
