"""Frame state models: resolved geometry joined with animation state."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from archflow.core.models import Point
from archflow.core.timeline.models import ElementAnimState, StepIndicatorState

StepDotState = Literal["done", "current", "pending"]


class SceneNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    center: Point
    width: float
    height: float
    is_inner: bool
    anim: ElementAnimState


class SceneContainer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    left: float
    top: float
    width: float
    height: float
    anim: ElementAnimState


class SceneConnection(BaseModel):
    """A routed connection with its animation state.

    Adapters skip connections that are not ``drawable`` (fewer than two
    points).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    points: list[Point]
    drawable: bool
    label: str | None = None
    label_position: Point | None = None
    anim: ElementAnimState


class FrameState(BaseModel):
    """Everything a renderer needs for one frame.

    Attributes:
        frame: Frame index that was evaluated.
        animated: False in still-image mode (all elements static).
        nodes: Nodes in declaration order.
        containers: Containers in declaration order.
        connections: Connections in declaration order.
        global_opacity: Opacity of the diagram area.
        global_floor: Bookend brightness floor.
        indicator_opacity: Step indicator opacity.
        current_step: Active step, when the indicator is visible.
        total_steps: Number of labelled steps.
        step_dots: Progress dot per labelled step (empty when hidden).
    """

    model_config = ConfigDict(frozen=True)

    frame: float
    animated: bool
    nodes: list[SceneNode]
    containers: list[SceneContainer]
    connections: list[SceneConnection]
    global_opacity: float = 1.0
    global_floor: float = 1.0
    indicator_opacity: float = 0.0
    current_step: StepIndicatorState | None = None
    total_steps: int = 0
    step_dots: list[StepDotState] = []
