"""Diagram scene: one configuration, geometry resolved once, frames on demand."""

from __future__ import annotations

import logging

from archflow.core.layout import LayoutSpacing, ResolvedLayout, resolve_layout
from archflow.core.models import DiagramConfig
from archflow.core.scene.models import (
    FrameState,
    SceneConnection,
    SceneContainer,
    SceneNode,
    StepDotState,
)
from archflow.core.timeline import (
    STATIC_ANIM_STATE,
    ElementAnimState,
    TimelineEvaluator,
    TimelineState,
)

logger = logging.getLogger(__name__)


def step_dots(current: int | None, total: int) -> list[StepDotState]:
    """Progress dot states for steps 1..total relative to the current step."""
    dots: list[StepDotState] = []
    for num in range(1, total + 1):
        if current is not None and num == current:
            dots.append("current")
        elif current is not None and num < current:
            dots.append("done")
        else:
            dots.append("pending")
    return dots


class DiagramScene:
    """Joins resolved geometry with per-frame animation state.

    The configuration is read, never mutated; ``frame`` is a pure function of
    the frame index, so frames can be produced in any order or in parallel.

    Args:
        config: Diagram configuration.
        fps: Frames per second (<= 1 renders a still).
        spacing: Layout spacing (defaults to LayoutSpacing()).

    Raises:
        LayoutReferenceError: If the configuration references unknown ids.
    """

    def __init__(
        self,
        config: DiagramConfig,
        fps: float = 30.0,
        spacing: LayoutSpacing | None = None,
    ) -> None:
        self.config = config
        self.fps = fps
        self.layout: ResolvedLayout = resolve_layout(
            config.grid, config.nodes, config.containers, config.connections, spacing
        )
        self.evaluator = TimelineEvaluator.from_config(config, fps)

    @property
    def animated(self) -> bool:
        return not self.evaluator.static

    @property
    def duration_frames(self) -> int:
        """Frames to render: the timeline length, or 1 for a still."""
        if not self.animated:
            return 1
        return max(self.evaluator.total_frames, 1)

    def frame(self, frame: float) -> FrameState:
        return self._build(frame, self.evaluator.evaluate(frame))

    def _build(self, frame: float, state: TimelineState | None) -> FrameState:
        def anim(states: dict[str, ElementAnimState] | None, element_id: str) -> ElementAnimState:
            if states is None:
                return STATIC_ANIM_STATE
            return states.get(element_id, STATIC_ANIM_STATE)

        nodes = [
            SceneNode(
                id=node_id,
                center=node.center,
                width=node.width,
                height=node.height,
                is_inner=node.is_inner,
                anim=anim(state.nodes if state else None, node_id),
            )
            for node_id, node in self.layout.nodes.items()
        ]
        containers = [
            SceneContainer(
                id=container_id,
                left=container.left,
                top=container.top,
                width=container.width,
                height=container.height,
                anim=anim(state.containers if state else None, container_id),
            )
            for container_id, container in self.layout.containers.items()
        ]
        connections = [
            SceneConnection(
                id=conn.id,
                points=conn.points,
                drawable=conn.drawable,
                label=conn.label,
                label_position=conn.label_position,
                anim=anim(state.connections if state else None, conn.id),
            )
            for conn in self.layout.connections
        ]

        if state is None:
            return FrameState(
                frame=frame,
                animated=False,
                nodes=nodes,
                containers=containers,
                connections=connections,
            )

        visible = state.indicator_opacity > 0 and state.current_step is not None
        return FrameState(
            frame=frame,
            animated=True,
            nodes=nodes,
            containers=containers,
            connections=connections,
            global_opacity=state.global_opacity,
            global_floor=state.global_floor,
            indicator_opacity=state.indicator_opacity,
            current_step=state.current_step,
            total_steps=state.total_steps,
            step_dots=(
                step_dots(state.current_step.num, state.total_steps) if visible else []
            ),
        )
