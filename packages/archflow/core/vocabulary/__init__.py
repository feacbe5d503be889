"""Diagram vocabulary - controlled enums for layout and timeline configuration.

Single source of truth for all enums used across the diagram models,
the geometry resolver and the timeline engine.
"""

from archflow.core.vocabulary.geometry import (
    ContainerEdge,
    DrawOrigin,
    Edge,
    PlacementMode,
)
from archflow.core.vocabulary.timeline import (
    ANIMATION_ACTIONS,
    BOOKEND_ACTIONS,
    EventAction,
    EventSource,
    PhaseType,
    StepAction,
)

__all__ = [
    "ANIMATION_ACTIONS",
    "BOOKEND_ACTIONS",
    "ContainerEdge",
    "DrawOrigin",
    "Edge",
    "EventAction",
    "EventSource",
    "PhaseType",
    "PlacementMode",
    "StepAction",
]
