"""Playback: cursor bounds, pristine frame, timing and comparison mode."""

import time

import pytest

from algoviz.graph import NodeState, EdgeState
from algoviz.algorithms import AlgorithmParams, AlgorithmMetrics, execute
from algoviz.engine import Stepper, DualStepper, StepperState, SPEED_PRESETS


@pytest.fixture
def bfs_steps(path_graph):
    return execute("bfs", path_graph, AlgorithmParams(start_node_id="A"))


@pytest.fixture
def stepper(bfs_steps, path_graph):
    return Stepper(bfs_steps, path_graph)


class TestCursor:
    def test_starts_before_first_step(self, stepper):
        assert stepper.current_idx == -1
        assert stepper.current_step is None
        assert stepper.state is StepperState.PAUSED

    def test_idle_without_steps(self):
        s = Stepper()
        assert s.state is StepperState.IDLE
        assert not s.next_step()
        assert s.node_states == {}

    def test_next_until_end(self, stepper, bfs_steps):
        moves = 0
        while stepper.next_step():
            moves += 1
        assert moves == len(bfs_steps)
        assert stepper.at_end
        assert stepper.current_step is bfs_steps[-1]
        assert stepper.state is StepperState.FINISHED

    def test_prev_from_first_step_returns_to_pristine(self, stepper):
        stepper.next_step()
        assert stepper.prev_step()
        assert stepper.current_idx == -1
        assert not stepper.prev_step()
        assert stepper.current_idx == -1

    def test_goto_bounds(self, stepper, bfs_steps):
        last = len(bfs_steps) - 1
        assert stepper.goto_step(last)
        assert stepper.goto_step(-1)
        assert not stepper.goto_step(-2)
        assert not stepper.goto_step(len(bfs_steps))
        assert stepper.current_idx == -1

    def test_goto_is_idempotent(self, stepper):
        stepper.goto_step(3)
        first = (stepper.node_states, stepper.edge_states, stepper.metrics)
        stepper.goto_step(-1)
        stepper.goto_step(3)
        assert (stepper.node_states, stepper.edge_states, stepper.metrics) == first

    def test_rewind_and_jump_to_end(self, stepper, bfs_steps):
        stepper.jump_to_end()
        assert stepper.current_idx == len(bfs_steps) - 1
        assert stepper.is_finished
        stepper.rewind()
        assert stepper.current_idx == -1
        assert stepper.state is StepperState.PAUSED

    def test_leaving_the_end_clears_finished(self, stepper):
        stepper.jump_to_end()
        stepper.prev_step()
        assert stepper.state is StepperState.PAUSED

    def test_reset(self, stepper):
        stepper.next_step()
        stepper.reset()
        assert stepper.state is StepperState.IDLE
        assert stepper.total_steps == 0


class TestPristineFrame:
    def test_uses_graph_ids(self, stepper, path_graph):
        assert stepper.node_states == {nid: NodeState.UNVISITED for nid in path_graph.nodes}
        assert stepper.edge_states == {eid: EdgeState.UNEXAMINED for eid in path_graph.edges}
        assert stepper.metrics == AlgorithmMetrics()
        assert stepper.description == ""

    def test_without_graph(self, bfs_steps):
        s = Stepper(bfs_steps)
        assert s.node_states == {}
        assert s.edge_states == {}

    def test_accessors_return_copies(self, stepper):
        stepper.next_step()
        stepper.node_states.clear()
        assert stepper.node_states


class TestPlayback:
    def test_tick_needs_playing(self, stepper):
        assert not stepper.tick(now=time.monotonic() + 10)

    def test_tick_waits_one_interval(self, stepper):
        stepper.play()
        assert stepper.is_playing
        assert not stepper.tick(now=stepper._last_tick)
        assert stepper.tick(now=stepper._last_tick + stepper.interval)
        assert stepper.current_idx == 0

    def test_plays_to_finished(self, stepper, bfs_steps):
        stepper.play()
        now = time.monotonic()
        for _ in bfs_steps:
            now += 10
            stepper.tick(now=now)
        assert stepper.at_end
        assert stepper.state is StepperState.FINISHED
        assert not stepper.tick(now=now + 10)

    def test_play_does_nothing_at_end_or_empty(self, stepper):
        stepper.jump_to_end()
        stepper.play()
        assert not stepper.is_playing
        empty = Stepper([])
        empty.play()
        assert not empty.is_playing

    def test_toggle(self, stepper):
        stepper.toggle_play()
        assert stepper.is_playing
        stepper.toggle_play()
        assert stepper.state is StepperState.PAUSED


class TestSpeed:
    @pytest.mark.parametrize("preset,interval", [("slow", 2.0), ("normal", 1.0), ("fast", 0.5), ("turbo", 0.2)])
    def test_presets(self, stepper, preset, interval):
        stepper.set_speed(preset)
        assert stepper.speed == SPEED_PRESETS[preset]
        assert stepper.interval == pytest.approx(interval)

    def test_unknown_preset_is_normal(self, stepper):
        stepper.set_speed("warp")
        assert stepper.speed == 1.0

    def test_speed_value_floor(self, stepper):
        stepper.set_speed_value(0)
        assert stepper.speed == 0.1


class TestCallback:
    def test_fires_on_every_move(self, bfs_steps, path_graph):
        seen = []
        s = Stepper(bfs_steps, path_graph, on_step=seen.append)
        s.next_step()
        s.next_step()
        s.prev_step()
        s.rewind()
        assert seen == [bfs_steps[0], bfs_steps[1], bfs_steps[0], None]


class TestDualStepper:
    @pytest.fixture
    def dual(self, path_graph):
        short = execute("bfs", path_graph, AlgorithmParams(start_node_id="D"))
        long = execute("dfs", path_graph, AlgorithmParams(start_node_id="A"))
        return DualStepper(Stepper(short[:3], path_graph), Stepper(long, path_graph))

    def test_shorter_side_clamps(self, dual):
        for _ in range(dual.total_steps):
            dual.next_step()
        assert dual.left.current_idx == 2
        assert dual.right.at_end
        assert dual.is_finished
        assert not dual.next_step()

    def test_goto_clamps_each_side(self, dual):
        dual.goto_step(5)
        assert dual.left.current_idx == 2
        assert dual.right.current_idx == 5
        dual.goto_step(-1)
        assert dual.left.current_idx == dual.right.current_idx == -1

    def test_tick_stops_when_both_finished(self, dual):
        dual.play()
        now = time.monotonic()
        for _ in range(dual.total_steps + 2):
            now += 10
            dual.tick(now=now)
        assert dual.is_finished
        assert not dual.is_playing

    def test_rewind_and_speed(self, dual):
        dual.jump_to_end()
        dual.rewind()
        assert dual.left.current_idx == dual.right.current_idx == -1
        dual.set_speed("fast")
        assert dual.interval == pytest.approx(0.5)
