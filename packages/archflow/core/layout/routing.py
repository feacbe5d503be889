"""Edge inference and orthogonal auto-routing for connections."""

from __future__ import annotations

import math

from archflow.core.models import LabelOffset, Point
from archflow.core.vocabulary import Edge

# Endpoints closer than this on an axis are treated as aligned.
ALIGN_TOLERANCE = 1.0

# Label placement relative to the path midpoint
LABEL_ABOVE_OFFSET = 16.0
LABEL_RIGHT_OFFSET = 20.0


def infer_edge(source: Point, target: Point) -> Edge:
    """Pick the edge of ``source`` that faces ``target``.

    The dominant axis of the delta decides between left/right and top/bottom;
    ties go to the vertical edges.

    Example:
        >>> infer_edge(Point(x=0, y=0), Point(x=100, y=10))
        <Edge.RIGHT: 'right'>
    """
    dx = target.x - source.x
    dy = target.y - source.y
    if abs(dx) > abs(dy):
        return Edge.RIGHT if dx > 0 else Edge.LEFT
    return Edge.BOTTOM if dy > 0 else Edge.TOP


def node_edge_point(center: Point, width: float, height: float, edge: Edge) -> Point:
    """Midpoint of one edge of a box centred on ``center``."""
    hw = width / 2
    hh = height / 2
    if edge == Edge.RIGHT:
        return Point(x=center.x + hw, y=center.y)
    if edge == Edge.LEFT:
        return Point(x=center.x - hw, y=center.y)
    if edge == Edge.TOP:
        return Point(x=center.x, y=center.y - hh)
    return Point(x=center.x, y=center.y + hh)


def auto_route(source: Point, source_edge: Edge, target: Point, target_edge: Edge) -> list[Point]:
    """Compute an orthogonal route between two anchors.

    Args:
        source: Start anchor.
        source_edge: Edge the route leaves from.
        target: End anchor.
        target_edge: Edge the route enters on.

    Returns:
        Polyline points: a straight 2-point line when the anchors share an
        axis or both edges are vertical-type, a horizontal-midpoint jog when
        both edges are horizontal-type, otherwise a vertical-midpoint jog.
    """
    if abs(source.y - target.y) < ALIGN_TOLERANCE:
        return [source, target]
    if abs(source.x - target.x) < ALIGN_TOLERANCE:
        return [source, target]

    if source_edge.is_horizontal and target_edge.is_horizontal:
        mid_x = (source.x + target.x) / 2
        return [source, Point(x=mid_x, y=source.y), Point(x=mid_x, y=target.y), target]

    if not source_edge.is_horizontal and not target_edge.is_horizontal:
        return [source, target]

    mid_y = (source.y + target.y) / 2
    return [source, Point(x=source.x, y=mid_y), Point(x=target.x, y=mid_y), target]


def segment_lengths(points: list[Point]) -> list[float]:
    return [math.hypot(b.x - a.x, b.y - a.y) for a, b in zip(points, points[1:])]


def path_length(points: list[Point]) -> float:
    """Total polyline length."""
    return sum(segment_lengths(points))


def label_anchor(points: list[Point], offset: LabelOffset | None = None) -> Point | None:
    """Anchor point for a connection label.

    The label sits at the arc-length midpoint of the path: above it when the
    midpoint falls on a horizontal segment, to its right on a vertical one.
    ``offset`` is added last.

    Returns:
        The anchor, or None for paths with fewer than two points.
    """
    if len(points) < 2:
        return None

    segs = segment_lengths(points)
    half = sum(segs) / 2
    x, y = points[0].x, points[0].y
    accum = 0.0
    for i, seg in enumerate(segs):
        if accum + seg >= half:
            a, b = points[i], points[i + 1]
            t = (half - accum) / seg if seg > 0 else 0.0
            mx = a.x + t * (b.x - a.x)
            my = a.y + t * (b.y - a.y)
            if abs(b.x - a.x) > abs(b.y - a.y):
                x, y = mx, my - LABEL_ABOVE_OFFSET
            else:
                x, y = mx + LABEL_RIGHT_OFFSET, my
            break
        accum += seg

    if offset is not None:
        x += offset.x
        y += offset.y
    return Point(x=x, y=y)
