"""Geometry resolver: grid specs to absolute positions and routed paths."""

from archflow.core.layout.errors import LayoutReferenceError
from archflow.core.layout.models import (
    InnerGrid,
    LayoutSpacing,
    ResolvedConnection,
    ResolvedContainer,
    ResolvedLayout,
    ResolvedNode,
)
from archflow.core.layout.resolver import resolve_layout
from archflow.core.layout.routing import (
    auto_route,
    infer_edge,
    label_anchor,
    node_edge_point,
    path_length,
)

__all__ = [
    "InnerGrid",
    "LayoutReferenceError",
    "LayoutSpacing",
    "ResolvedConnection",
    "ResolvedContainer",
    "ResolvedLayout",
    "ResolvedNode",
    "auto_route",
    "infer_edge",
    "label_anchor",
    "node_edge_point",
    "path_length",
    "resolve_layout",
]
