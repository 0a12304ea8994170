"""Recorder, run metrics and comparison mode."""

import pytest

from algoviz.errors import UnknownAlgorithmError
from algoviz.algorithms import AlgorithmParams, REGISTRY
from algoviz.engine import Recorder, RunMetrics, compare


class TestRecorder:
    def test_run_fills_metrics(self, triangle):
        rec = Recorder()
        metrics = rec.run("dijkstra", triangle, AlgorithmParams("A", "C"))
        last = rec.steps[-1]
        assert metrics is rec.get_metrics()
        assert metrics.algorithm_id == "dijkstra"
        assert metrics.algorithm_name == "Dijkstra's Algorithm"
        assert (metrics.start_node_id, metrics.end_node_id) == ("A", "C")
        assert metrics.total_steps == len(rec.steps)
        assert metrics.completed
        assert metrics.final_description == last.description
        assert metrics.comparisons == last.metrics.comparisons
        assert metrics.nodes_visited == last.metrics.nodes_visited
        assert metrics.wall_time_ms >= 0
        assert metrics.heuristic == ""

    def test_accepts_a_config(self, path_graph):
        metrics = Recorder().run(REGISTRY["bfs"], path_graph, AlgorithmParams("A"))
        assert metrics.algorithm_id == "bfs"

    def test_heuristic_recorded_for_astar(self, triangle):
        metrics = Recorder().run("astar", triangle, AlgorithmParams("A", "C", "manhattan"))
        assert metrics.heuristic == "manhattan"

    def test_empty_run_is_not_completed(self, path_graph):
        rec = Recorder()
        metrics = rec.run("bfs", path_graph)
        assert not metrics.completed
        assert metrics.total_steps == 0
        assert metrics.final_description == ""
        assert rec.stepper.total_steps == 0

    def test_stepper_starts_pristine(self, path_graph):
        rec = Recorder()
        rec.run("dfs", path_graph, AlgorithmParams("A"))
        assert rec.stepper.current_idx == -1
        assert rec.stepper.graph is path_graph
        rec.stepper.next_step()
        assert rec.stepper.current_step is rec.steps[0]

    def test_unknown_algorithm(self, path_graph):
        with pytest.raises(UnknownAlgorithmError):
            Recorder().run("bogo", path_graph)

    def test_export(self, path_graph):
        rec = Recorder()
        rec.run("bfs", path_graph, AlgorithmParams("A"))
        data = rec.export()
        assert set(data) == {"algorithm", "params", "graph", "metrics", "steps"}
        assert data["algorithm"] == "bfs"
        assert data["params"]["start_node_id"] == "A"
        assert len(data["steps"]) == data["metrics"]["total_steps"]
        assert data["steps"][0]["node_states"]["A"] == "visiting"

    def test_export_before_run(self):
        data = Recorder().export()
        assert data["algorithm"] == ""
        assert data["steps"] == []


class TestCompare:
    def test_same_run_ties_everywhere(self, triangle):
        left, right = Recorder(), Recorder()
        left.run("bfs", triangle, AlgorithmParams("A"))
        right.run("bfs", triangle, AlgorithmParams("A"))
        result = compare(left, right)
        assert set(result.winners.values()) == {"tie"}
        assert "total_steps" in result.winners

    def test_fewer_is_better(self, triangle):
        left, right = Recorder(), Recorder()
        left.run("dijkstra", triangle, AlgorithmParams("A", "C"))
        right.run("astar", triangle, AlgorithmParams("A", "C"))
        result = compare(left, right)
        # A* closes A and B only; Dijkstra also extracts C
        assert left.metrics.nodes_visited == 3
        assert right.metrics.nodes_visited == 2
        assert result.winners["nodes_visited"] == "A* Search"
        assert result.left is left.metrics
        assert result.right is right.metrics

    def test_lower_count_wins_on_either_side(self, triangle):
        left, right = Recorder(), Recorder()
        left.run("astar", triangle, AlgorithmParams("A", "C"))
        right.run("dijkstra", triangle, AlgorithmParams("A", "C"))
        result = compare(left, right)
        assert result.winners["nodes_visited"] == "A* Search"
        flipped = compare(right, left)
        assert flipped.winners["nodes_visited"] == "A* Search"
        assert flipped.winners == result.winners

    def test_to_dict(self, triangle):
        left, right = Recorder(), Recorder()
        left.run("kruskal", triangle)
        right.run("prim", triangle, AlgorithmParams("A"))
        data = compare(left, right).to_dict()
        assert data["left"]["algorithm_id"] == "kruskal"
        assert data["right"]["algorithm_id"] == "prim"
        assert set(data["winners"]) == {
            "nodes_visited", "edges_examined", "operations_count", "comparisons", "total_steps",
        }

    def test_missing_metrics_default_to_empty(self):
        result = compare(Recorder(), Recorder())
        assert result.left == RunMetrics()
        assert set(result.winners.values()) == {"tie"}
