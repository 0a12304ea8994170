"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the analytics
card used by the metrics panel and by comparison mode.

Usage:
    rec = Recorder()
    metrics = rec.run("dijkstra", graph, AlgorithmParams("A", "F"))
    rec.stepper.next_step()          # playback over the recorded steps
    rec.export()                     # serialisable snapshot for save/replay

Comparison mode:
    Two Recorders run two algorithms on the SAME graph independently, then
    compare(rec1, rec2) → ComparisonResult.  Neither run reads the other's
    state; the graph is only ever read.
"""

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union

from algoviz.errors import UnknownAlgorithmError
from algoviz.graph import Graph
from algoviz.algorithms import AlgorithmConfig, get_algorithm
from algoviz.algorithms.step import Step, AlgorithmParams
from algoviz.engine.stepper import Stepper


logger = logging.getLogger(__name__)

METRIC_FIELDS = ("nodes_visited", "edges_examined", "operations_count", "comparisons")


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm_id:      str   = ""
    algorithm_name:    str   = ""
    start_node_id:     Optional[str] = None
    end_node_id:       Optional[str] = None
    total_steps:       int   = 0          # number of Steps produced
    nodes_visited:     int   = 0          # final counters …
    edges_examined:    int   = 0
    operations_count:  int   = 0
    comparisons:       int   = 0
    wall_time_ms:      float = 0.0        # wall-clock time to run to completion
    completed:         bool  = False      # False when the run produced no steps
    final_description: str   = ""
    heuristic:         str   = ""         # A* only

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:    RunMetrics = field(default_factory=RunMetrics)
    right:   RunMetrics = field(default_factory=RunMetrics)
    # metric name → winning algorithm name, or "tie"  (fewer is better)
    winners: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"left": self.left.to_dict(), "right": self.right.to_dict(), "winners": dict(self.winners)}


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps    : Full list of Steps from the run.
        metrics  : Computed RunMetrics (available after run()).
        stepper  : A Stepper loaded with the recorded steps, cursor at -1.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo:   Optional[AlgorithmConfig] = None
        self._graph:  Optional[Graph]           = None
        self._params: AlgorithmParams           = AlgorithmParams()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(
        self,
        algorithm: Union[str, AlgorithmConfig],
        graph: Graph,
        params: Optional[AlgorithmParams] = None,
    ) -> RunMetrics:
        """Execute to completion, record every step, compute metrics."""
        algo = get_algorithm(algorithm) if isinstance(algorithm, str) else algorithm
        if algo is None:
            raise UnknownAlgorithmError(algorithm)

        self._algo   = algo
        self._graph  = graph
        self._params = params or AlgorithmParams()

        started      = time.perf_counter()
        self.steps   = algo.execute(graph, self._params)
        wall_ms      = (time.perf_counter() - started) * 1000

        self.stepper = Stepper(self.steps, graph)
        self.metrics = self._compute_metrics(wall_ms)
        logger.debug("recorded %s: %d steps in %.2f ms", algo.id, len(self.steps), wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algorithm": self._algo.id if self._algo else "",
            "params":    self._params.to_dict(),
            "graph":     self._graph.to_dict() if self._graph else {},
            "metrics":   self.metrics.to_dict() if self.metrics else {},
            "steps":     [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        algo = self._algo
        last = self.steps[-1] if self.steps else None
        counters = last.metrics.to_dict() if last else {}

        return RunMetrics(
            algorithm_id=algo.id if algo else "",
            algorithm_name=algo.name if algo else "",
            start_node_id=self._params.start_node_id,
            end_node_id=self._params.end_node_id,
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            completed=last is not None,
            final_description=last.description if last else "",
            heuristic=self._params.heuristic if algo and algo.has_heuristic else "",
            **{name: counters.get(name, 0) for name in METRIC_FIELDS},
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algorithm_name if l_val < r_val else r.algorithm_name

    winners = {name: winner(getattr(l, name), getattr(r, name)) for name in METRIC_FIELDS}
    winners["total_steps"] = winner(l.total_steps, r.total_steps)
    return ComparisonResult(left=l, right=r, winners=winners)
