"""Frame composition: resolved geometry plus animation state."""

from archflow.core.scene.models import (
    FrameState,
    SceneConnection,
    SceneContainer,
    SceneNode,
)
from archflow.core.scene.scene import DiagramScene, step_dots

__all__ = [
    "DiagramScene",
    "FrameState",
    "SceneConnection",
    "SceneContainer",
    "SceneNode",
    "step_dots",
]
