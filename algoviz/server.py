"""
server.py — Algorithm Engine HTTP API
======================================
A thin JSON layer over the registry, the recorder and the stepper.

Routes:
  GET  /api/algorithms                     – every algorithm card, grouped by category
  GET  /api/algorithms/<id>                – one algorithm card
  POST /api/algorithms/<id>/validate       – can this graph + params run?
  POST /api/run                            – run to completion, keep the steps
  GET  /api/runs/<run_id>                  – metrics card of a stored run
  GET  /api/runs/<run_id>/steps/<index>    – one frame; -1 is the pristine graph
  POST /api/compare                        – run two algorithms, compare metrics

Request bodies carry the graph in its dict form:
    {"algorithm": "bfs", "graph": {...}, "params": {"startNodeId": "A"}}

State:
  Finished runs live in a per-app RunStore (in memory, oldest evicted
  first once MAX_RUNS is exceeded).  Every request builds its own Graph,
  so no run ever shares mutable state with another.

Errors:
  malformed input        → 400 {"error": ...}
  unknown algorithm/run  → 404 {"error": ...}
"""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from flask import Flask, jsonify, request

from algoviz.config import Config
from algoviz.errors import GraphError, InvalidRequestError, RunNotFoundError, UnknownAlgorithmError
from algoviz.graph import Graph, validate_for_shortest_path
from algoviz.algorithms import (
    CATEGORY_NAMES,
    AlgorithmParams,
    algorithms_by_category,
    check_params,
    get_algorithm,
    is_valid_for_graph,
    list_algorithms,
)
from algoviz.engine import Recorder, Stepper, compare


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Run store
# ---------------------------------------------------------------------------
class RunStore:
    """
    Bounded in-memory map of run id → finished Recorder.

    Shared by Flask's request threads; every access holds `_lock`.
    """

    def __init__(self, max_runs: int = 32):
        self.max_runs = max_runs
        self._runs: "OrderedDict[str, Recorder]" = OrderedDict()
        self._lock = threading.Lock()

    def add(self, recorder: Recorder) -> str:
        run_id = uuid.uuid4().hex[:12]
        with self._lock:
            self._runs[run_id] = recorder
            while len(self._runs) > self.max_runs:
                evicted, _ = self._runs.popitem(last=False)
                logger.debug("evicted run %s", evicted)
        return run_id

    def get(self, run_id: str) -> Recorder:
        with self._lock:
            recorder = self._runs.get(run_id)
        if recorder is None:
            raise RunNotFoundError(run_id)
        return recorder

    def __contains__(self, run_id: str) -> bool:
        with self._lock:
            return run_id in self._runs

    def __len__(self) -> int:
        with self._lock:
            return len(self._runs)


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return data


def _graph(data: dict, max_nodes: int) -> Graph:
    if "graph" not in data:
        raise InvalidRequestError("Missing 'graph'")
    graph = Graph.from_dict(data["graph"])
    if graph.node_count() > max_nodes:
        raise InvalidRequestError(f"Graph has {graph.node_count()} nodes; the limit is {max_nodes}")
    return graph


def _params(data: dict) -> AlgorithmParams:
    params = data.get("params") or {}
    if not isinstance(params, dict):
        raise InvalidRequestError("'params' must be an object")
    return AlgorithmParams.from_dict(params)


def _algorithm(algorithm_id: Optional[str]):
    algo = get_algorithm(algorithm_id) if isinstance(algorithm_id, str) else None
    if algo is None:
        raise UnknownAlgorithmError(str(algorithm_id))
    return algo


def _frame(stepper: Stepper) -> dict:
    """The currently displayed frame of a stepper as JSON."""
    step = stepper.current_step
    return {
        "index":       stepper.current_idx,
        "total_steps": stepper.total_steps,
        "step":        step.to_dict() if step else None,
        "node_states": {k: v.value for k, v in stepper.node_states.items()},
        "edge_states": {k: v.value for k, v in stepper.edge_states.items()},
        "metrics":     stepper.metrics.to_dict(),
        "description": stepper.description,
    }


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[object] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config or Config)
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)

    runs = RunStore(app.config["MAX_RUNS"])
    app.extensions["algoviz.runs"] = runs

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------
    @app.errorhandler(GraphError)
    @app.errorhandler(InvalidRequestError)
    def bad_request(err):
        logger.warning("rejected request to %s: %s", request.path, err)
        return jsonify({"error": str(err)}), 400

    @app.errorhandler(UnknownAlgorithmError)
    @app.errorhandler(RunNotFoundError)
    def not_found(err):
        logger.warning("%s: %s", request.path, err)
        return jsonify({"error": str(err)}), 404

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------
    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        return jsonify({
            "algorithms": [a.to_dict() for a in list_algorithms()],
            "categories": [
                {"id": cat.value, "name": CATEGORY_NAMES[cat], "algorithms": [a.id for a in algos]}
                for cat, algos in algorithms_by_category().items()
            ],
        })

    @app.route("/api/algorithms/<algorithm_id>", methods=["GET"])
    def api_algorithm(algorithm_id):
        return jsonify(_algorithm(algorithm_id).to_dict())

    @app.route("/api/algorithms/<algorithm_id>/validate", methods=["POST"])
    def api_validate(algorithm_id):
        algo   = _algorithm(algorithm_id)
        data   = _body()
        graph  = _graph(data, app.config["MAX_GRAPH_NODES"])
        params = _params(data)

        verdict = is_valid_for_graph(algo.id, graph)
        if verdict.valid and algo.requires_non_negative:
            verdict = validate_for_shortest_path(graph)
        param_verdict = check_params(algo.id, graph, params)
        return jsonify({
            "valid":         verdict.valid,
            "reason":        verdict.reason,
            "params_valid":  param_verdict.valid,
            "params_reason": param_verdict.reason,
        })

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data   = _body()
        algo   = _algorithm(data.get("algorithm"))
        graph  = _graph(data, app.config["MAX_GRAPH_NODES"])
        params = _params(data)

        rec     = Recorder()
        metrics = rec.run(algo, graph, params)
        run_id  = runs.add(rec)
        logger.info("run %s: %s on %r → %d steps", run_id, algo.id, graph, metrics.total_steps)

        return jsonify({
            "run_id":      run_id,
            "algorithm":   algo.id,
            "total_steps": metrics.total_steps,
            "metrics":     metrics.to_dict(),
            "steps":       [s.to_dict() for s in rec.steps],
        })

    @app.route("/api/runs/<run_id>", methods=["GET"])
    def api_run_summary(run_id):
        rec = runs.get(run_id)
        return jsonify({"run_id": run_id, "metrics": rec.metrics.to_dict() if rec.metrics else {}})

    @app.route("/api/runs/<run_id>/steps/<int(signed=True):index>", methods=["GET"])
    def api_run_step(run_id, index):
        rec     = runs.get(run_id)
        stepper = Stepper(rec.steps, rec.stepper.graph if rec.stepper else None)
        if not stepper.goto_step(index):
            raise InvalidRequestError(f"Step index {index} is out of range [-1, {stepper.total_steps - 1}]")
        return jsonify(_frame(stepper))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        data   = _body()
        left   = _algorithm(data.get("left"))
        right  = _algorithm(data.get("right"))
        graph  = _graph(data, app.config["MAX_GRAPH_NODES"])
        params = _params(data)

        left_rec, right_rec = Recorder(), Recorder()
        left_rec.run(left, graph, params)
        right_rec.run(right, graph, params)
        result = compare(left_rec, right_rec)
        logger.info("compared %s vs %s", left.id, right.id)
        return jsonify(result.to_dict())

    return app
