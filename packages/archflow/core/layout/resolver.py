"""Grid geometry and position resolution.

Derivation chain:
    canvas size -> page padding -> header/footer/step-indicator fractions ->
    grid area -> cell size -> containers -> node centers -> edge anchors ->
    connection routes

Containers resolve before nodes (inner placement needs them) and nodes before
connections (anchors need them). Nothing else depends on evaluation order.
"""

from __future__ import annotations

import logging

from archflow.core.layout.errors import LayoutReferenceError
from archflow.core.layout.models import (
    InnerGrid,
    LayoutSpacing,
    ResolvedConnection,
    ResolvedContainer,
    ResolvedLayout,
    ResolvedNode,
)
from archflow.core.layout.routing import auto_route, infer_edge, label_anchor
from archflow.core.models import (
    ConnectionSpec,
    ConnectionTarget,
    ContainerRef,
    ContainerSpec,
    GridSpec,
    NodeSpec,
    Point,
    connection_id,
)
from archflow.core.utils.logging import log_performance
from archflow.core.vocabulary import ContainerEdge, Edge, PlacementMode

logger = logging.getLogger(__name__)

# Box size as fraction of cell
OUTER_BOX_W_FRAC = 0.62
OUTER_BOX_H_FRAC = 0.32
INNER_BOX_W_FRAC = 0.58
INNER_BOX_H_FRAC = 0.55

# Multi-cell spans
SPAN_W_FRAC_PER_COL = 0.92
SPAN_H_FRAC_PER_ROW = 0.72
WIDE_BAR_H_FRAC = 0.52

# Containers extend this fraction of a cell above and below their row center.
CONTAINER_HALF_HEIGHT_FRAC = 0.52


class _Grid:
    """Outer grid metrics derived from a GridSpec and page padding."""

    def __init__(self, grid: GridSpec, spacing: LayoutSpacing) -> None:
        self.width = grid.canvas.width - spacing.page * 2
        self.height = grid.canvas.height - spacing.page * 2
        self.top = self.height * grid.header_frac
        self.bottom = self.height * (1 - grid.footer_frac - grid.step_indicator_frac)
        self.cell_w = self.width / grid.cols
        self.cell_h = (self.bottom - self.top) / grid.rows

    def cell_center(self, row: int, col: int) -> Point:
        return Point(
            x=self.cell_w * col + self.cell_w / 2,
            y=self.top + self.cell_h * row + self.cell_h / 2,
        )

    def row_center_y(self, row: int) -> float:
        return self.top + self.cell_h * row + self.cell_h / 2


def _resolve_container(
    spec: ContainerSpec, grid: _Grid, spacing: LayoutSpacing
) -> ResolvedContainer:
    left = grid.cell_w * spec.span.from_col + grid.cell_w * spec.inset_frac
    right = grid.cell_w * (spec.span.to_col + 1) - grid.cell_w * spec.inset_frac
    # Only the first spanned row positions the container vertically.
    row_mid = grid.row_center_y(spec.span.from_row)
    top = row_mid - grid.cell_h * CONTAINER_HALF_HEIGHT_FRAC
    bottom = row_mid + grid.cell_h * CONTAINER_HALF_HEIGHT_FRAC

    inner_left = left + spacing.element
    inner_right = right - spacing.element
    inner_top = top + spacing.element + spacing.container_label
    inner_bottom = bottom - spacing.element

    return ResolvedContainer(
        spec=spec,
        left=left,
        top=top,
        width=right - left,
        height=bottom - top,
        label_height=spacing.container_label,
        inner_grid=InnerGrid(
            left=inner_left,
            top=inner_top,
            cell_width=(inner_right - inner_left) / spec.inner_grid.cols,
            cell_height=inner_bottom - inner_top,
        ),
    )


def _resolve_node(
    spec: NodeSpec, grid: _Grid, containers: dict[str, ResolvedContainer]
) -> ResolvedNode:
    mode = spec.placement

    if mode == PlacementMode.INNER:
        container = _lookup_container(containers, spec.container, f"node '{spec.id}'")
        _check_inner_col(container, spec.inner_col, spec.id)
        inner = container.inner_grid
        return ResolvedNode(
            spec=spec,
            center=inner.cell_center(spec.inner_col),
            width=inner.cell_width * INNER_BOX_W_FRAC,
            height=inner.cell_height * INNER_BOX_H_FRAC,
            is_inner=True,
        )

    if mode == PlacementMode.ALIGNED:
        ref = spec.align_to_inner_col
        container = _lookup_container(containers, ref.container_id, f"node '{spec.id}'")
        _check_inner_col(container, ref.inner_col, spec.id)
        return ResolvedNode(
            spec=spec,
            center=Point(
                x=container.inner_grid.cell_center(ref.inner_col).x,
                y=grid.row_center_y(spec.position.row),
            ),
            width=grid.cell_w * OUTER_BOX_W_FRAC,
            height=grid.cell_h * (spec.box_height_frac or OUTER_BOX_H_FRAC),
            is_inner=False,
        )

    w_cols = spec.width_cols
    h_rows = spec.height_rows
    start = grid.cell_center(spec.position.row, spec.position.col)
    center = Point(
        x=start.x + grid.cell_w * (w_cols - 1) / 2,
        y=start.y + grid.cell_h * (h_rows - 1) / 2,
    )

    width = grid.cell_w * (w_cols * SPAN_W_FRAC_PER_COL if w_cols > 1 else OUTER_BOX_W_FRAC)
    # explicit override > multi-row > wide bar > default
    if h_rows > 1:
        default_h_frac = h_rows * SPAN_H_FRAC_PER_ROW
    elif w_cols > 1:
        default_h_frac = WIDE_BAR_H_FRAC
    else:
        default_h_frac = OUTER_BOX_H_FRAC
    height = grid.cell_h * (spec.box_height_frac or default_h_frac)

    return ResolvedNode(spec=spec, center=center, width=width, height=height, is_inner=False)


def _check_inner_col(container: ResolvedContainer, inner_col: int, node_id: str) -> None:
    cols = container.spec.inner_grid.cols
    if not 0 <= inner_col < cols:
        raise ValueError(
            f"Node '{node_id}' uses inner column {inner_col} of container "
            f"'{container.spec.id}', which has {cols} inner columns"
        )


def _lookup_container(
    containers: dict[str, ResolvedContainer], container_id: str, referrer: str
) -> ResolvedContainer:
    try:
        return containers[container_id]
    except KeyError:
        raise LayoutReferenceError("container", container_id, referrer) from None


def _lookup_node(nodes: dict[str, ResolvedNode], node_id: str, referrer: str) -> ResolvedNode:
    try:
        return nodes[node_id]
    except KeyError:
        raise LayoutReferenceError("node", node_id, referrer) from None


def _container_edge_point(container: ResolvedContainer, edge: ContainerEdge, y: float) -> Point:
    return Point(x=container.left if edge == ContainerEdge.LEFT else container.right, y=y)


def _endpoint_center(
    target: ConnectionTarget,
    grid: _Grid,
    nodes: dict[str, ResolvedNode],
    containers: dict[str, ResolvedContainer],
    referrer: str,
) -> Point:
    """Reference point used for edge inference.

    For a container border this is the border point at the container's
    first-row center height.
    """
    if isinstance(target, ContainerRef):
        container = _lookup_container(containers, target.container, referrer)
        y = grid.row_center_y(container.spec.span.from_row)
        return _container_edge_point(container, target.edge, y)
    return _lookup_node(nodes, target, referrer).center


def _anchor(
    target: ConnectionTarget,
    edge: Edge,
    center: Point,
    nodes: dict[str, ResolvedNode],
    containers: dict[str, ResolvedContainer],
) -> Point:
    if isinstance(target, ContainerRef):
        return _container_edge_point(containers[target.container], target.edge, center.y)
    return nodes[target].edge_point(edge)


def _resolve_connection(
    spec: ConnectionSpec,
    grid: _Grid,
    nodes: dict[str, ResolvedNode],
    containers: dict[str, ResolvedContainer],
) -> ResolvedConnection:
    conn_id = connection_id(spec)
    referrer = f"connection '{conn_id}'"
    source_center = _endpoint_center(spec.source, grid, nodes, containers, referrer)
    target_center = _endpoint_center(spec.target, grid, nodes, containers, referrer)

    from_edge = spec.from_edge
    if from_edge is None:
        if isinstance(spec.source, ContainerRef):
            from_edge = spec.source.edge.as_edge()
        else:
            from_edge = infer_edge(source_center, target_center)

    to_edge = spec.to_edge
    if to_edge is None:
        if isinstance(spec.target, ContainerRef):
            to_edge = spec.target.edge.as_edge()
        else:
            to_edge = infer_edge(target_center, source_center)

    start = _anchor(spec.source, from_edge, source_center, nodes, containers)
    end = _anchor(spec.target, to_edge, target_center, nodes, containers)

    if spec.waypoints is not None:
        points = [start, *spec.waypoints, end]
    else:
        points = auto_route(start, from_edge, end, to_edge)

    return ResolvedConnection(
        spec=spec,
        id=conn_id,
        from_edge=from_edge,
        to_edge=to_edge,
        points=points,
        label=spec.label,
        label_position=label_anchor(points, spec.label_offset) if spec.label else None,
    )


@log_performance
def resolve_layout(
    grid: GridSpec,
    nodes: list[NodeSpec],
    containers: list[ContainerSpec],
    connections: list[ConnectionSpec],
    spacing: LayoutSpacing | None = None,
) -> ResolvedLayout:
    """Resolve a declarative diagram into absolute geometry.

    Args:
        grid: Outer grid specification.
        nodes: Node specs.
        containers: Container specs.
        connections: Connection specs.
        spacing: Page/element padding (defaults to LayoutSpacing()).

    Returns:
        ResolvedLayout with nodes and containers keyed by id and connections
        in declaration order.

    Raises:
        LayoutReferenceError: If a node or connection references an unknown
            node or container id.
        ValueError: If a node uses an inner column its container does not have.
    """
    spacing = spacing or LayoutSpacing()
    metrics = _Grid(grid, spacing)

    resolved_containers = {
        spec.id: _resolve_container(spec, metrics, spacing) for spec in containers
    }
    resolved_nodes = {
        spec.id: _resolve_node(spec, metrics, resolved_containers) for spec in nodes
    }
    resolved_connections = [
        _resolve_connection(spec, metrics, resolved_nodes, resolved_containers)
        for spec in connections
    ]

    logger.debug(
        "Resolved layout: %d nodes, %d containers, %d connections (cell %.1fx%.1f)",
        len(resolved_nodes),
        len(resolved_containers),
        len(resolved_connections),
        metrics.cell_w,
        metrics.cell_h,
    )

    return ResolvedLayout(
        nodes=resolved_nodes,
        containers=resolved_containers,
        connections=resolved_connections,
        container_width=metrics.width,
        container_height=metrics.height,
        grid_top=metrics.top,
        grid_bottom=metrics.bottom,
        cell_width=metrics.cell_w,
        cell_height=metrics.cell_h,
    )
