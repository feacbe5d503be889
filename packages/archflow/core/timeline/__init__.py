"""Timeline engine: flattening and per-frame evaluation."""

from archflow.core.timeline.bookends import GlobalLevels, compute_globals
from archflow.core.timeline.envelope import (
    draw_progress,
    event_envelope,
    fade_out_trigger,
    group_fade_out_triggers,
)
from archflow.core.timeline.evaluator import TimelineEvaluator, evaluate_timeline
from archflow.core.timeline.flatten import (
    calculate_total_duration,
    default_duration,
    flatten_timeline,
)
from archflow.core.timeline.interpolation import interpolate, ramp, to_frames
from archflow.core.timeline.models import (
    STATIC_ANIM_STATE,
    ElementAnimState,
    FlatEvent,
    StepIndicatorState,
    TimelineState,
)

__all__ = [
    "STATIC_ANIM_STATE",
    "ElementAnimState",
    "FlatEvent",
    "GlobalLevels",
    "StepIndicatorState",
    "TimelineEvaluator",
    "TimelineState",
    "calculate_total_duration",
    "compute_globals",
    "default_duration",
    "draw_progress",
    "evaluate_timeline",
    "event_envelope",
    "fade_out_trigger",
    "flatten_timeline",
    "group_fade_out_triggers",
    "interpolate",
    "ramp",
    "to_frames",
]
