"""Per-event brightness envelopes and fade-out scheduling.

An animation event fades its element in across its own duration, holds it,
then fades it out once the event a few positions later in the animation list
has finished. Events sharing a ``group`` all fade out at the latest trigger
among the group's members, so related elements leave together.
"""

from __future__ import annotations

import math

from archflow.core.timeline.interpolation import interpolate, ramp
from archflow.core.timeline.models import FlatEvent
from archflow.core.vocabulary import EventAction

# How many animation events ahead triggers this event's fade-out. A source node
# (position N) and its outgoing arrow (position N+1) both fade at N+3.
FADE_OUT_LOOKAHEAD_NODE = 3
FADE_OUT_LOOKAHEAD_ARROW = 2
FADE_OUT_S = 0.4


def lookahead(evt: FlatEvent) -> int:
    if evt.action == EventAction.DRAW_LINE:
        return FADE_OUT_LOOKAHEAD_ARROW
    return FADE_OUT_LOOKAHEAD_NODE


def fade_out_trigger(anim_events: list[FlatEvent], index: int) -> int | None:
    """Frame at which event ``index`` starts fading out, ignoring groups.

    Returns:
        End frame of the event ``lookahead`` positions later, or None when
        there is no such event (the element stays lit).
    """
    trigger_idx = index + lookahead(anim_events[index])
    if trigger_idx >= len(anim_events):
        return None
    return anim_events[trigger_idx].end_frame


def group_fade_out_triggers(anim_events: list[FlatEvent]) -> dict[str, int | None]:
    """Shared fade-out trigger per group: the latest among its members.

    A member without a trigger keeps the whole group lit (None).
    """
    latest: dict[str, float] = {}
    for i, evt in enumerate(anim_events):
        if not evt.group:
            continue
        trigger = fade_out_trigger(anim_events, i)
        value = math.inf if trigger is None else float(trigger)
        latest[evt.group] = max(latest.get(evt.group, 0.0), value)
    return {group: None if value == math.inf else int(value) for group, value in latest.items()}


def resolve_fade_out_start(
    anim_events: list[FlatEvent], index: int, group_triggers: dict[str, int | None]
) -> int | None:
    evt = anim_events[index]
    if evt.group and evt.group in group_triggers:
        return group_triggers[evt.group]
    return fade_out_trigger(anim_events, index)


def event_envelope(
    evt: FlatEvent, frame: float, fade_out_start: int | None, fade_out_frames: int
) -> float:
    """Brightness contribution of one event at ``frame``.

    Args:
        evt: The animation event.
        frame: Query frame.
        fade_out_start: Trigger frame, or None for no fade-out.
        fade_out_frames: Length of the 1 -> 0 fade-out ramp.
    """
    onset = evt.start_frame
    fade_in_end = evt.end_frame

    if fade_out_start is None:
        return ramp(frame, onset, fade_in_end)

    # Breakpoints must strictly increase past the fade-in.
    if fade_out_start <= fade_in_end:
        fade_out_start = fade_in_end + 1
    fade_out_end = fade_out_start + fade_out_frames

    return interpolate(
        frame,
        (onset, fade_in_end, fade_out_start, fade_out_end),
        (0.0, 1.0, 1.0, 0.0),
    )


def draw_progress(evt: FlatEvent, frame: float) -> float:
    """0 -> 1 across the event's own duration; never retracts."""
    return ramp(frame, evt.start_frame, evt.end_frame)
