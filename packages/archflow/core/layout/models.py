"""Resolved geometry models produced by the layout resolver.

All coordinates are absolute pixels in the diagram-local space (the canvas
after page padding, origin at its top-left corner).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from archflow.core.layout.routing import node_edge_point
from archflow.core.models import ConnectionSpec, ContainerSpec, NodeSpec, Point
from archflow.core.vocabulary import Edge


class LayoutSpacing(BaseModel):
    """Spacing values the geometry depends on.

    Attributes:
        page: Padding around the whole canvas.
        element: Padding inside a container, around its inner grid.
        container_label: Height of the label strip at the top of a container.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    page: float = Field(default=48.0, ge=0.0)
    element: float = Field(default=16.0, ge=0.0)
    container_label: float = Field(default=24.0, ge=0.0)


class InnerGrid(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: float
    top: float
    cell_width: float
    cell_height: float

    def cell_center(self, col: int) -> Point:
        return Point(
            x=self.left + self.cell_width * col + self.cell_width / 2,
            y=self.top + self.cell_height / 2,
        )


class ResolvedContainer(BaseModel):
    model_config = ConfigDict(frozen=True)

    spec: ContainerSpec
    left: float
    top: float
    width: float
    height: float
    label_height: float
    inner_grid: InnerGrid

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


class ResolvedNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    spec: NodeSpec
    center: Point
    width: float
    height: float
    is_inner: bool

    def edge_point(self, edge: Edge) -> Point:
        """Midpoint of one of the node's four edges."""
        return node_edge_point(self.center, self.width, self.height, edge)


class ResolvedConnection(BaseModel):
    """A routed connection.

    Attributes:
        spec: Source connection spec.
        id: Stable connection id (timeline join key).
        from_edge: Edge the route leaves the source from.
        to_edge: Edge the route enters the target on.
        points: Polyline, anchor to anchor.
        label: Optional label text.
        label_position: Anchor for the label (None without a label).
    """

    model_config = ConfigDict(frozen=True)

    spec: ConnectionSpec
    id: str
    from_edge: Edge
    to_edge: Edge
    points: list[Point]
    label: str | None = None
    label_position: Point | None = None

    @property
    def drawable(self) -> bool:
        return len(self.points) >= 2


class ResolvedLayout(BaseModel):
    """Absolute geometry for a whole diagram."""

    model_config = ConfigDict(frozen=True)

    nodes: dict[str, ResolvedNode]
    containers: dict[str, ResolvedContainer]
    connections: list[ResolvedConnection]
    container_width: float
    container_height: float
    grid_top: float
    grid_bottom: float
    cell_width: float
    cell_height: float

    def connection(self, connection_id: str) -> ResolvedConnection:
        for conn in self.connections:
            if conn.id == connection_id:
                return conn
        raise KeyError(connection_id)
