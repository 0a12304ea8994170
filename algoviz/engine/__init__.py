"""
engine/
-------
Playback & recording layer.

    from algoviz.engine import Stepper, Recorder, compare
"""

from algoviz.engine.stepper  import Stepper, DualStepper, StepperState, SPEED_PRESETS
from algoviz.engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Stepper",
    "DualStepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
