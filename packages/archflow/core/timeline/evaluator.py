"""Timeline evaluation: per-frame animation state for every element.

Lifecycle of a walkthrough:
    [full -> dim] -> per-element envelopes -> [reveal -> full]

Evaluation is a pure function of (configuration, frame). Everything that
only depends on the configuration (flattened events, group fade-out
triggers, settlement frame, per-element event indexes) is computed once in
``TimelineEvaluator.__init__``; ``evaluate`` derives a frame from scratch.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from archflow.core.models import (
    ConnectionSpec,
    ContainerSpec,
    DiagramConfig,
    NodeSpec,
    Timeline,
    connection_id,
)
from archflow.core.timeline.bookends import compute_globals
from archflow.core.timeline.envelope import (
    FADE_OUT_S,
    draw_progress,
    event_envelope,
    group_fade_out_triggers,
    resolve_fade_out_start,
)
from archflow.core.timeline.flatten import (
    DEFAULT_DRAW_DURATION,
    flatten_timeline,
    total_frames,
)
from archflow.core.timeline.interpolation import interpolate, ramp, to_frames
from archflow.core.timeline.models import (
    ElementAnimState,
    FlatEvent,
    StepIndicatorState,
    TimelineState,
)
from archflow.core.vocabulary import ANIMATION_ACTIONS, EventAction

logger = logging.getLogger(__name__)

# Opacity of an element at brightness 0
DIM_NODE = 0.3
DIM_ARROW = 0.15
DIM_CONTAINER = 0.3

# After the last animation event, connections settle to fully drawn/lit.
SETTLE_GRACE_S = 2.0

# Below this the floor / indicator count as off
VISIBILITY_EPSILON = 0.01


def _opacity(dim_level: float, brightness: float) -> float:
    return dim_level + (1 - dim_level) * brightness


class TimelineEvaluator:
    """Resolves a timeline into animation state at any frame.

    Args:
        timeline: Ordered timeline phases.
        fps: Frames per second. ``fps <= 1`` is still-image mode.
        nodes: Node specs.
        connections: Connection specs (ids derived with ``connection_id``).
        containers: Container specs.

    Example:
        >>> evaluator = TimelineEvaluator(config.timeline, 30, config.nodes,
        ...                               config.connections, config.containers)
        >>> state = evaluator.evaluate(45)
    """

    def __init__(
        self,
        timeline: Timeline,
        fps: float,
        nodes: list[NodeSpec],
        connections: list[ConnectionSpec],
        containers: list[ContainerSpec] | None = None,
    ) -> None:
        self.fps = fps
        self.node_ids = [n.id for n in nodes]
        self.connection_ids = [connection_id(c) for c in connections]
        self.container_ids = [c.id for c in containers or []]

        self.container_members: dict[str, list[str]] = defaultdict(list)
        for node in nodes:
            if node.container is not None:
                self.container_members[node.container].append(node.id)

        self.events: list[FlatEvent] = []
        self.anim_events: list[FlatEvent] = []
        self.total_frames = 0
        self.total_steps = 0

        self.static = not timeline or fps <= 1
        if self.static:
            return

        self.events = flatten_timeline(timeline, fps)
        self.anim_events = [e for e in self.events if e.action in ANIMATION_ACTIONS]
        self.total_frames = total_frames(self.events)
        self.total_steps = sum(1 for e in self.anim_events if e.step_label is not None)

        self.fade_out_frames = to_frames(FADE_OUT_S, fps)
        self.settle_frames = to_frames(DEFAULT_DRAW_DURATION, fps)
        self.group_triggers = group_fade_out_triggers(self.anim_events)
        self.fade_out_starts = [
            resolve_fade_out_start(self.anim_events, i, self.group_triggers)
            for i in range(len(self.anim_events))
        ]

        if self.anim_events:
            self.flow_end = self.anim_events[-1].end_frame + to_frames(SETTLE_GRACE_S, fps)
        else:
            self.flow_end = self.total_frames

        # (action, target) -> indexes into anim_events
        self._by_target: dict[tuple[EventAction, str], list[int]] = defaultdict(list)
        for i, evt in enumerate(self.anim_events):
            self._by_target[(evt.action, evt.target)].append(i)

        self._warn_unknown_targets()
        logger.debug(
            "Timeline ready: %d events (%d animated, %d labelled steps), %d frames at %s fps",
            len(self.events),
            len(self.anim_events),
            self.total_steps,
            self.total_frames,
            fps,
        )

    @classmethod
    def from_config(cls, config: DiagramConfig, fps: float) -> TimelineEvaluator:
        """Build from a DiagramConfig."""
        return cls(config.timeline, fps, config.nodes, config.connections, config.containers)

    def _warn_unknown_targets(self) -> None:
        known = {
            EventAction.FILL_BOX: set(self.node_ids),
            EventAction.DIM_BOX: set(self.node_ids),
            EventAction.DRAW_LINE: set(self.connection_ids),
            EventAction.SHOW_CONTAINER: set(self.container_ids),
        }
        for action, target in self._by_target:
            if target not in known[action]:
                logger.warning("Timeline %s step targets unknown id '%s'", action.value, target)

    def _events_for(self, action: EventAction, target: str) -> list[int]:
        return self._by_target.get((action, target), [])

    def _envelope(self, index: int, frame: float) -> float:
        return event_envelope(
            self.anim_events[index], frame, self.fade_out_starts[index], self.fade_out_frames
        )

    def _lit_and_drawn(self, action: EventAction, target: str, frame: float) -> tuple[float, float]:
        bright = 0.0
        drawn = 0.0
        for i in self._events_for(action, target):
            bright = max(bright, self._envelope(i, frame))
            drawn = max(drawn, draw_progress(self.anim_events[i], frame))
        return bright, drawn

    def evaluate(self, frame: float) -> TimelineState | None:
        """Animation state at ``frame``.

        Returns:
            TimelineState, or None in still-image mode (no phases or
            fps <= 1); callers then render every element with
            ``STATIC_ANIM_STATE``.
        """
        if self.static:
            return None

        floor, global_opacity = compute_globals(self.events, frame)

        nodes: dict[str, ElementAnimState] = {}
        for node_id in self.node_ids:
            bright, drawn = self._lit_and_drawn(EventAction.FILL_BOX, node_id, frame)
            dim_amount = 0.0
            for i in self._events_for(EventAction.DIM_BOX, node_id):
                dim_amount = max(dim_amount, draw_progress(self.anim_events[i], frame))
            brightness = max(max(bright, floor) - dim_amount, 0.0)
            nodes[node_id] = ElementAnimState(
                brightness=brightness,
                draw_progress=max(drawn, floor),
                opacity=_opacity(DIM_NODE, brightness),
            )

        # Safety net: every connection ends fully drawn, even without a drawLine step.
        settle = ramp(frame, self.flow_end - self.settle_frames, self.flow_end)
        connections: dict[str, ElementAnimState] = {}
        for conn_id in self.connection_ids:
            bright, drawn = self._lit_and_drawn(EventAction.DRAW_LINE, conn_id, frame)
            brightness = max(bright, settle, floor)
            connections[conn_id] = ElementAnimState(
                brightness=brightness,
                draw_progress=max(drawn, floor, settle),
                opacity=_opacity(DIM_ARROW, brightness),
            )

        containers: dict[str, ElementAnimState] = {}
        for container_id in self.container_ids:
            bright = 0.0
            for i in self._events_for(EventAction.SHOW_CONTAINER, container_id):
                bright = max(bright, self._envelope(i, frame))
            for member in self.container_members.get(container_id, []):
                bright = max(bright, nodes[member].brightness)
            brightness = max(bright, floor)
            containers[container_id] = ElementAnimState(
                brightness=brightness,
                draw_progress=1.0,
                opacity=_opacity(DIM_CONTAINER, brightness),
            )

        indicator_opacity = self._indicator_opacity(frame, floor)
        current_step = self._current_step(frame) if indicator_opacity > VISIBILITY_EPSILON else None

        return TimelineState(
            nodes=nodes,
            connections=connections,
            containers=containers,
            current_step=current_step,
            total_steps=self.total_steps,
            indicator_opacity=indicator_opacity,
            global_opacity=global_opacity,
            global_floor=floor,
        )

    def _current_step(self, frame: float) -> StepIndicatorState | None:
        """Latest labelled event that has started, with its fade-in progress."""
        for evt in reversed(self.anim_events):
            if evt.step_label is not None and frame >= evt.start_frame:
                return StepIndicatorState(
                    num=evt.step_label.num,
                    text=evt.step_label.text,
                    progress=ramp(frame, evt.start_frame, evt.end_frame),
                )
        return None

    def _indicator_opacity(self, frame: float, floor: float) -> float:
        # Hidden during bookends
        if floor > VISIBILITY_EPSILON or frame >= self.flow_end:
            return 0.0
        return interpolate(
            frame, (self.flow_end - self.fade_out_frames * 2, self.flow_end), (1.0, 0.0)
        )


def evaluate_timeline(
    timeline: Timeline,
    frame: float,
    fps: float,
    nodes: list[NodeSpec],
    connections: list[ConnectionSpec],
    containers: list[ContainerSpec] | None = None,
) -> TimelineState | None:
    """Functional entry point: animation state at ``frame``, or None when static."""
    return TimelineEvaluator(timeline, fps, nodes, connections, containers).evaluate(frame)
