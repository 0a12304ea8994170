"""
errors.py — Exception Hierarchy
================================
Executors never raise: an unmet precondition is an empty trace.
Exceptions only exist at the boundary where outside data enters the
engine (graph construction, algorithm lookup by id, run lookup).

    AlgovizError
      ├── GraphError             (also a ValueError)
      ├── UnknownAlgorithmError  (also a LookupError)
      ├── RunNotFoundError       (also a LookupError)
      └── InvalidRequestError    (also a ValueError)
"""


class AlgovizError(Exception):
    """Root of every exception raised by this package."""


class GraphError(AlgovizError, ValueError):
    """Malformed graph data: duplicate ids, non-finite weight, dangling edge."""


class UnknownAlgorithmError(AlgovizError, LookupError):
    def __init__(self, algorithm_id: str):
        super().__init__(f"Unknown algorithm: {algorithm_id}")
        self.algorithm_id = algorithm_id


class RunNotFoundError(AlgovizError, LookupError):
    def __init__(self, run_id: str):
        super().__init__(f"Unknown run: {run_id}")
        self.run_id = run_id


class InvalidRequestError(AlgovizError, ValueError):
    """A request body that is not the expected JSON shape."""
