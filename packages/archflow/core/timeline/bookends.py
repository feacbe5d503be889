"""Global floor and global opacity from the bookend phases.

The floor is a brightness/draw minimum applied to every element: 1 while the
diagram is shown fully lit around the walkthrough, 0 inside it. A ``dim``
phase fades the whole diagram area out (global opacity) before the
walkthrough; a ``reveal`` phase ramps the floor back to 1 afterwards.
"""

from __future__ import annotations

from typing import NamedTuple

from archflow.core.timeline.interpolation import interpolate
from archflow.core.timeline.models import FlatEvent
from archflow.core.vocabulary import BOOKEND_ACTIONS, EventAction, EventSource


class GlobalLevels(NamedTuple):
    floor: float
    opacity: float


def _first(events: list[FlatEvent], action: EventAction) -> FlatEvent | None:
    return next((e for e in events if e.action == action), None)


def sequence_start_frame(events: list[FlatEvent]) -> int:
    """End of the leading run of phase-sourced bookend events."""
    start = 0
    for evt in events:
        if evt.source != EventSource.PHASE or evt.action not in BOOKEND_ACTIONS:
            break
        start = max(start, evt.end_frame)
    return start


def compute_globals(events: list[FlatEvent], frame: float) -> GlobalLevels:
    """Global floor and diagram opacity at ``frame``.

    With a dim phase: floor stays 1 and opacity ramps 1 -> 0 across the dim;
    from the dim's end the floor is 0; opacity snaps back to 1 once the first
    event after the dim starts. Without one: the floor cuts from 1 to 0 where
    the leading hold/dim/reveal phases end. A reveal phase then ramps the
    floor 0 -> 1 and holds it at 1, overriding the above via max.
    """
    floor = 1.0
    opacity = 1.0

    dim_evt = _first(events, EventAction.DIM)
    reveal_evt = _first(events, EventAction.REVEAL)

    if dim_evt is not None:
        dim_start = dim_evt.start_frame
        dim_end = dim_evt.end_frame
        post_dim = next(
            (e for e in events if e.start_frame >= dim_end and e.action != EventAction.DIM),
            None,
        )

        if frame >= dim_end:
            floor = 0.0
            opacity = 0.0
        elif frame >= dim_start:
            opacity = interpolate(frame, (dim_start, dim_end), (1.0, 0.0))

        if post_dim is not None and frame >= post_dim.start_frame:
            opacity = 1.0
    elif frame >= sequence_start_frame(events):
        floor = 0.0

    if reveal_evt is not None:
        reveal_start = reveal_evt.start_frame
        reveal_end = reveal_evt.end_frame
        if frame >= reveal_end:
            floor = 1.0
        elif frame >= reveal_start:
            floor = max(floor, interpolate(frame, (reveal_start, reveal_end), (0.0, 1.0)))

    return GlobalLevels(floor=floor, opacity=opacity)
