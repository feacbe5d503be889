"""Declarative diagram configuration models."""

from archflow.core.models.diagram import (
    CanvasSize,
    CellSpan,
    ConnectionSpec,
    ConnectionTarget,
    ContainerRef,
    ContainerSpec,
    ContainerStyle,
    DiagramConfig,
    GridPosition,
    GridSpec,
    HeaderSpec,
    InnerColumnRef,
    InnerGridSpec,
    LabelOffset,
    NodeSpec,
    Point,
    connection_id,
    endpoint_id,
)
from archflow.core.models.timeline import (
    AnimationStep,
    DimBoxStep,
    DimPhase,
    DrawLineStep,
    FillBoxStep,
    HoldPhase,
    HoldStep,
    ParallelStep,
    Phase,
    RevealPhase,
    SequencePhase,
    ShowContainerStep,
    StepLabel,
    Timeline,
)

__all__ = [
    "AnimationStep",
    "CanvasSize",
    "CellSpan",
    "ConnectionSpec",
    "ConnectionTarget",
    "ContainerRef",
    "ContainerSpec",
    "ContainerStyle",
    "DiagramConfig",
    "DimBoxStep",
    "DimPhase",
    "DrawLineStep",
    "FillBoxStep",
    "GridPosition",
    "GridSpec",
    "HeaderSpec",
    "HoldPhase",
    "HoldStep",
    "InnerColumnRef",
    "InnerGridSpec",
    "LabelOffset",
    "NodeSpec",
    "ParallelStep",
    "Phase",
    "Point",
    "RevealPhase",
    "SequencePhase",
    "ShowContainerStep",
    "StepLabel",
    "Timeline",
    "connection_id",
    "endpoint_id",
]
