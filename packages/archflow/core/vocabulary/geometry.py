"""Geometry enums - edges, anchors and node placement modes."""

from enum import Enum


class Edge(str, Enum):
    """Compass edge of a node used as a connection anchor.

    Attributes:
        LEFT: Midpoint of the left edge.
        RIGHT: Midpoint of the right edge.
        TOP: Midpoint of the top edge.
        BOTTOM: Midpoint of the bottom edge.
    """

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def is_horizontal(self) -> bool:
        """True for left/right edges (connections leave sideways)."""
        return self in (Edge.LEFT, Edge.RIGHT)


class ContainerEdge(str, Enum):
    """Container border a connection can attach to.

    Containers only expose their vertical borders.
    """

    LEFT = "left"
    RIGHT = "right"

    def as_edge(self) -> Edge:
        return Edge(self.value)


class DrawOrigin(str, Enum):
    """Edge a box's border draw-in animation starts from."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class PlacementMode(str, Enum):
    """How a node's position is derived.

    Attributes:
        OUTER: Cell (or cell span) of the outer grid.
        INNER: Column of a container's inner grid.
        ALIGNED: X of a container's inner column, Y of its own outer row.
    """

    OUTER = "outer"
    INNER = "inner"
    ALIGNED = "aligned"
