"""Timeline configuration models.

The timeline is an ordered list of phases; a ``sequence`` phase holds an
ordered list of steps, and a ``parallel`` step holds children that all start
at the same instant. Phases are discriminated on ``type`` and steps on
``action``, so each variant only carries its own fields.

Durations are in seconds.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_STEP_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class StepLabel(BaseModel):
    """Ordinal and caption shown by the step indicator."""

    model_config = _STEP_CONFIG

    num: int
    text: str


class _TargetedStep(BaseModel):
    model_config = _STEP_CONFIG

    target: str = Field(min_length=1)
    duration: float | None = Field(default=None, ge=0.0)
    step_label: StepLabel | None = Field(default=None, alias="step")
    group: str | None = None


class FillBoxStep(_TargetedStep):
    """Draw a node's border and highlight it."""

    action: Literal["fillBox"] = "fillBox"


class DimBoxStep(_TargetedStep):
    """Ramp a node's brightness back down."""

    action: Literal["dimBox"] = "dimBox"


class DrawLineStep(_TargetedStep):
    """Draw a connection; ``target`` is the connection id."""

    action: Literal["drawLine"] = "drawLine"


class ShowContainerStep(_TargetedStep):
    action: Literal["showContainer"] = "showContainer"


class HoldStep(BaseModel):
    model_config = _STEP_CONFIG

    action: Literal["hold"] = "hold"
    duration: float = Field(ge=0.0)


class ParallelStep(BaseModel):
    """Children start together; the sequence resumes after the longest one.

    Children without their own ``group`` inherit this step's group.
    """

    model_config = _STEP_CONFIG

    action: Literal["parallel"] = "parallel"
    steps: list[AnimationStep] = Field(default_factory=list)
    group: str | None = None


AnimationStep = Annotated[
    FillBoxStep | DimBoxStep | DrawLineStep | ShowContainerStep | HoldStep | ParallelStep,
    Field(discriminator="action"),
]

ParallelStep.model_rebuild()


class HoldPhase(BaseModel):
    """Pause at the current state."""

    model_config = _STEP_CONFIG

    type: Literal["hold"] = "hold"
    duration: float = Field(ge=0.0)


class DimPhase(BaseModel):
    """Ramp everything from fully lit to the dimmed walkthrough state."""

    model_config = _STEP_CONFIG

    type: Literal["dim"] = "dim"
    duration: float = Field(ge=0.0)


class RevealPhase(BaseModel):
    """Ramp everything back to fully lit."""

    model_config = _STEP_CONFIG

    type: Literal["reveal"] = "reveal"
    duration: float = Field(ge=0.0)


class SequencePhase(BaseModel):
    """Ordered walkthrough steps."""

    model_config = _STEP_CONFIG

    type: Literal["sequence"] = "sequence"
    steps: list[AnimationStep] = Field(default_factory=list)


Phase = Annotated[
    HoldPhase | DimPhase | RevealPhase | SequencePhase,
    Field(discriminator="type"),
]

Timeline = list[Phase]
