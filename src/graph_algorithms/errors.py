from __future__ import annotations


class GraphAnalysisError(Exception):
    """Base class for failures inside the graph analysis engine."""


class ConvergenceError(GraphAnalysisError):
    def __init__(self, metric: str, iterations: int, tolerance: float) -> None:
        super().__init__(f"{metric} did not converge within {iterations} iterations (tolerance={tolerance})")
        self.metric = metric
        self.iterations = iterations
        self.tolerance = tolerance


class ComputationTimeoutError(GraphAnalysisError):
    def __init__(self, metric: str) -> None:
        super().__init__(f"{metric} exceeded its time budget")
        self.metric = metric
