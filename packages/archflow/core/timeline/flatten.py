"""Timeline flattening.

Turns the nested phase/step tree into a flat list of absolute frame
intervals. A single cursor threads through the fold and only moves forward;
``parallel`` steps snapshot it, run every child from the snapshot and resume
after the longest child.
"""

from __future__ import annotations

import logging

from archflow.core.models import (
    AnimationStep,
    DimPhase,
    HoldPhase,
    HoldStep,
    ParallelStep,
    RevealPhase,
    SequencePhase,
    Timeline,
)
from archflow.core.timeline.interpolation import to_frames
from archflow.core.timeline.models import FlatEvent
from archflow.core.vocabulary import EventAction, EventSource, PhaseType, StepAction

logger = logging.getLogger(__name__)

# Default step durations (seconds)
DEFAULT_FILL_DURATION = 0.8
DEFAULT_DRAW_DURATION = 0.4
DEFAULT_SHOW_DURATION = 0.4

DEFAULT_DURATIONS: dict[str, float] = {
    StepAction.FILL_BOX.value: DEFAULT_FILL_DURATION,
    StepAction.DIM_BOX.value: DEFAULT_FILL_DURATION,
    StepAction.DRAW_LINE.value: DEFAULT_DRAW_DURATION,
    StepAction.SHOW_CONTAINER.value: DEFAULT_SHOW_DURATION,
}

_PHASE_ACTIONS = {
    PhaseType.HOLD.value: EventAction.HOLD,
    PhaseType.DIM.value: EventAction.DIM,
    PhaseType.REVEAL.value: EventAction.REVEAL,
}


def default_duration(action: str) -> float:
    """Default duration in seconds for a step action."""
    return DEFAULT_DURATIONS.get(action, DEFAULT_DRAW_DURATION)


def _validate_fps(fps: float) -> None:
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")


def _flatten_step(
    step: AnimationStep,
    cursor: int,
    fps: float,
    events: list[FlatEvent],
    parent_group: str | None = None,
) -> int:
    """Append events for ``step`` starting at ``cursor``; return the new cursor."""
    if isinstance(step, HoldStep):
        frames = to_frames(step.duration, fps)
        events.append(
            FlatEvent(
                action=EventAction.HOLD,
                source=EventSource.STEP,
                start_frame=cursor,
                duration_frames=frames,
            )
        )
        return cursor + frames

    if isinstance(step, ParallelStep):
        group = step.group or parent_group
        longest = 0
        for child in step.steps:
            child_end = _flatten_step(child, cursor, fps, events, group)
            longest = max(longest, child_end - cursor)
        return cursor + longest

    duration = step.duration if step.duration is not None else default_duration(step.action)
    frames = to_frames(duration, fps)
    events.append(
        FlatEvent(
            action=EventAction(step.action),
            source=EventSource.STEP,
            target=step.target,
            start_frame=cursor,
            duration_frames=frames,
            step_label=step.step_label,
            group=step.group or parent_group,
        )
    )
    return cursor + frames


def flatten_timeline(timeline: Timeline, fps: float) -> list[FlatEvent]:
    """Flatten a timeline into absolute frame intervals.

    Args:
        timeline: Ordered phases.
        fps: Frames per second used to convert durations.

    Returns:
        Events in timeline order. hold/dim/reveal phases yield one
        phase-sourced event each; sequence phases yield one step-sourced
        event per leaf step (parallel steps are expanded in place).

    Raises:
        ValueError: If fps <= 0.
    """
    _validate_fps(fps)
    events: list[FlatEvent] = []
    cursor = 0

    for phase in timeline:
        if isinstance(phase, SequencePhase):
            for step in phase.steps:
                cursor = _flatten_step(step, cursor, fps, events)
        elif isinstance(phase, (HoldPhase, DimPhase, RevealPhase)):
            frames = to_frames(phase.duration, fps)
            events.append(
                FlatEvent(
                    action=_PHASE_ACTIONS[phase.type],
                    source=EventSource.PHASE,
                    start_frame=cursor,
                    duration_frames=frames,
                )
            )
            cursor += frames

    logger.debug("Flattened %d phases into %d events (%d frames)", len(timeline), len(events), cursor)
    return events


def total_frames(events: list[FlatEvent]) -> int:
    """Latest end frame over flattened events (0 when empty)."""
    return max((e.end_frame for e in events), default=0)


def calculate_total_duration(timeline: Timeline, fps: float) -> int:
    """Total timeline length in frames.

    Used by hosts to size the render; shares the flattening logic so it can
    never disagree with the evaluator.
    """
    return total_frames(flatten_timeline(timeline, fps))
