"""Timeline engine models: flattened events and resolved animation state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from archflow.core.models import StepLabel
from archflow.core.vocabulary import EventAction, EventSource


class FlatEvent(BaseModel):
    """One absolute-time interval produced by flattening the timeline.

    Attributes:
        action: Action kind.
        source: Top-level phase or nested sequence step.
        target: Element id for node/connection/container actions.
        start_frame: Absolute start frame.
        duration_frames: Duration in frames.
        step_label: Step indicator label, if the step carries one.
        group: Fade-out synchronization key.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    action: EventAction
    source: EventSource
    target: str | None = None
    start_frame: int = Field(ge=0)
    duration_frames: int = Field(ge=0)
    step_label: StepLabel | None = None
    group: str | None = None

    @property
    def end_frame(self) -> int:
        return self.start_frame + self.duration_frames


class ElementAnimState(BaseModel):
    """Per-element animation values at one instant.

    Attributes:
        brightness: 0-1 highlight level (drives glow and accent colour).
        draw_progress: 0-1 border/stroke draw-in progress; never retracts.
        opacity: Resolved opacity, from the element kind's dim level up to 1.
    """

    model_config = ConfigDict(frozen=True)

    brightness: float
    draw_progress: float
    opacity: float


# Renderers use this when there is no timeline state (still image mode).
STATIC_ANIM_STATE = ElementAnimState(brightness=0.0, draw_progress=1.0, opacity=1.0)


class StepIndicatorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    num: int
    text: str
    progress: float


class TimelineState(BaseModel):
    """Complete animation state for one frame.

    Attributes:
        nodes: Node id -> state.
        connections: Connection id -> state.
        containers: Container id -> state.
        current_step: Active step label (only while the indicator is visible).
        total_steps: Number of labelled animation steps.
        indicator_opacity: Opacity of the step indicator area.
        global_opacity: Opacity of the whole diagram area (dim transitions).
        global_floor: Brightness/draw minimum (1 during bookends, 0 inside
            the walkthrough).
    """

    model_config = ConfigDict(frozen=True)

    nodes: dict[str, ElementAnimState]
    connections: dict[str, ElementAnimState]
    containers: dict[str, ElementAnimState]
    current_step: StepIndicatorState | None = None
    total_steps: int = 0
    indicator_opacity: float = 0.0
    global_opacity: float = 1.0
    global_floor: float = 1.0
