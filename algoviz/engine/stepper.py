"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the only object a front end needs during playback.  It
holds the complete, already-computed list of Steps of one run and a cursor
into it, and exposes a play/pause/next/prev/speed API.

Cursor contract:
    current_idx ∈ [-1, len(steps) - 1]
    -1 means "no step applied": the pristine graph, every node UNVISITED,
    every edge UNEXAMINED, zero metrics.
Moving the cursor is pure index arithmetic.  Nothing is recomputed, so
jumping to step k always shows exactly the same frame.

State machine:
    IDLE     →  load()    →  PAUSED
    PAUSED   →  play()    →  PLAYING
    PLAYING  →  pause()   →  PAUSED
    PLAYING  →  (last step reached) → FINISHED
    any      →  reset()   →  IDLE

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread (or an
  async event loop) that also owns the timer calling tick().
"""

import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from algoviz.graph import Graph, NodeState, EdgeState
from algoviz.algorithms.step import Step, AlgorithmMetrics


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed  (multipliers of BASE_INTERVAL)
# ---------------------------------------------------------------------------
BASE_INTERVAL = 1.0     # seconds per step at 1x

SPEED_PRESETS: Dict[str, float] = {
    "slow":   0.5,      # teaching mode
    "normal": 1.0,
    "fast":   2.0,
    "turbo":  5.0,      # demo mode
}


StepCallback = Callable[[Optional[Step]], None]


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : Every Step of the loaded run.
        current_idx : Index into `steps` that is currently displayed (-1 = none).
        speed       : Playback multiplier (1.0 = one step per BASE_INTERVAL).
        graph       : Optional graph, used for the pristine frame at -1.
        on_step     : Optional callback(Step | None) fired every time the
                      cursor moves.  None is passed for the pristine frame.
    """

    def __init__(
        self,
        steps: Optional[Sequence[Step]] = None,
        graph: Optional[Graph] = None,
        on_step: Optional[StepCallback] = None,
    ):
        self.steps:       List[Step]   = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.speed:       float        = SPEED_PRESETS["normal"]
        self.graph:       Optional[Graph] = graph
        self.on_step:     Optional[StepCallback] = on_step

        # for auto-play timing
        self._last_tick:  float = 0.0

        if steps is not None:
            self.load(steps, graph)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step], graph: Optional[Graph] = None) -> None:
        """Attach a finished run.  The cursor starts before the first step."""
        self.steps       = list(steps)
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        if graph is not None:
            self.graph = graph

    def reset(self) -> None:
        """Back to IDLE; call load() again before playing."""
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE
        self._notify()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at the end."""
        if self.current_idx >= len(self.steps) - 1:
            if self.steps:
                self.state = StepperState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        if self.at_end and self.state is StepperState.PLAYING:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Go back one step (step 0 goes back to -1).  False if already at -1."""
        if self.current_idx < 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state is StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to any index in [-1, len-1]."""
        if not -1 <= idx < len(self.steps):
            return False
        self._goto(idx)
        if self.state is StepperState.FINISHED and not self.at_end:
            self.state = StepperState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to the pristine frame."""
        self._goto(-1)
        if self.state is not StepperState.IDLE:
            self.state = StepperState.PAUSED

    def jump_to_end(self) -> None:
        """Jump to the final step."""
        if self.steps:
            self._goto(len(self.steps) - 1)
            self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if not self.steps or self.state is StepperState.FINISHED or self.at_end:
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state is StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and a full
        interval has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state is not StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["normal"])

    def set_speed_value(self, multiplier: float) -> None:
        self.speed = max(0.1, multiplier)

    @property
    def interval(self) -> float:
        """Seconds between auto-advance ticks."""
        return BASE_INTERVAL / self.speed

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def at_end(self) -> bool:
        return bool(self.steps) and self.current_idx == len(self.steps) - 1

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    @property
    def node_states(self) -> Dict[str, NodeState]:
        step = self.current_step
        if step is not None:
            return dict(step.node_states)
        if self.graph is None:
            return {}
        return {nid: NodeState.UNVISITED for nid in self.graph.nodes}

    @property
    def edge_states(self) -> Dict[str, EdgeState]:
        step = self.current_step
        if step is not None:
            return dict(step.edge_states)
        if self.graph is None:
            return {}
        return {eid: EdgeState.UNEXAMINED for eid in self.graph.edges}

    @property
    def metrics(self) -> AlgorithmMetrics:
        step = self.current_step
        return step.metrics if step is not None else AlgorithmMetrics()

    @property
    def description(self) -> str:
        step = self.current_step
        return step.description if step is not None else ""

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify()

    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self.current_step)


# ---------------------------------------------------------------------------
# DualStepper — lock-step playback of two runs (comparison mode)
# ---------------------------------------------------------------------------
class DualStepper:
    """
    Drives two Steppers with one set of controls.  Each side clamps at its
    own end, so the shorter run waits on its final step while the longer
    one keeps going.
    """

    def __init__(self, left: Stepper, right: Stepper):
        self.left  = left
        self.right = right
        self._playing   = False
        self._last_tick = 0.0

    @property
    def sides(self):
        return (self.left, self.right)

    def next_step(self) -> bool:
        moved = [s.next_step() for s in self.sides]
        return any(moved)

    def prev_step(self) -> bool:
        moved = [s.prev_step() for s in self.sides]
        return any(moved)

    def goto_step(self, idx: int) -> None:
        for s in self.sides:
            s.goto_step(max(-1, min(idx, s.total_steps - 1)))

    def rewind(self) -> None:
        for s in self.sides:
            s.rewind()

    def jump_to_end(self) -> None:
        for s in self.sides:
            s.jump_to_end()

    # -- play / pause --
    def play(self) -> None:
        if not self.is_finished:
            self._playing   = True
            self._last_tick = time.monotonic()

    def pause(self) -> None:
        self._playing = False

    def toggle_play(self) -> None:
        if self._playing:
            self.pause()
        else:
            self.play()

    def tick(self, now: Optional[float] = None) -> bool:
        if not self._playing:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        moved = self.next_step()
        if self.is_finished:
            self._playing = False
        return moved

    def set_speed(self, preset: str) -> None:
        for s in self.sides:
            s.set_speed(preset)

    @property
    def interval(self) -> float:
        return self.left.interval

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_finished(self) -> bool:
        return all(s.at_end or not s.steps for s in self.sides)

    @property
    def total_steps(self) -> int:
        return max(s.total_steps for s in self.sides)
