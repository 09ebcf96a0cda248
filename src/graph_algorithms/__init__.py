from .centrality import (
    betweenness_centrality,
    closeness_centrality,
    degree_centrality,
    eigenvector_centrality,
)
from .community import louvain_partition, modularity
from .engine import GraphAnalysisEngine
from .errors import ComputationTimeoutError, ConvergenceError, GraphAnalysisError

__all__ = [
    "ComputationTimeoutError",
    "ConvergenceError",
    "GraphAnalysisEngine",
    "GraphAnalysisError",
    "betweenness_centrality",
    "closeness_centrality",
    "degree_centrality",
    "eigenvector_centrality",
    "louvain_partition",
    "modularity",
]
