"""Diagram configuration models.

A diagram is pure data: an outer grid, nodes placed on it (directly, inside a
container's inner grid, or aligned to a container's inner column), containers
spanning outer cells, and connections between nodes and container borders.

All models accept the camelCase keys used by diagram documents
(``headerFrac``, ``innerCol``, ``fromEdge``...) as well as snake_case
field names.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from archflow.core.models.timeline import Timeline
from archflow.core.vocabulary import ContainerEdge, DrawOrigin, Edge, PlacementMode

_SPEC_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class Point(BaseModel):
    """Absolute point in diagram-local pixel coordinates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float
    y: float


class CanvasSize(BaseModel):
    """Canvas dimensions in pixels."""

    model_config = _SPEC_CONFIG

    width: float = Field(default=1920.0, gt=0.0)
    height: float = Field(default=1080.0, gt=0.0)


class GridSpec(BaseModel):
    """Outer grid specification.

    Attributes:
        rows: Number of outer grid rows.
        cols: Number of outer grid columns.
        canvas: Canvas size before page padding.
        header_frac: Fraction of the padded height reserved for the header.
        footer_frac: Fraction reserved for the footer.
        step_indicator_frac: Fraction reserved for the step indicator.
    """

    model_config = _SPEC_CONFIG

    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    canvas: CanvasSize = Field(default_factory=CanvasSize)
    header_frac: float = Field(default=0.06, ge=0.0, lt=1.0)
    footer_frac: float = Field(default=0.03, ge=0.0, lt=1.0)
    step_indicator_frac: float = Field(default=0.05, ge=0.0, lt=1.0)

    @model_validator(mode="after")
    def _validate_fractions(self) -> GridSpec:
        total = self.header_frac + self.footer_frac + self.step_indicator_frac
        if total >= 1.0:
            raise ValueError(
                f"header/footer/step-indicator fractions must sum to < 1, got {total:.3f}"
            )
        return self


class GridPosition(BaseModel):
    """Outer grid cell (0-indexed)."""

    model_config = _SPEC_CONFIG

    row: int = Field(ge=0)
    col: int = Field(ge=0)


class InnerColumnRef(BaseModel):
    """Reference to one column of a container's inner grid."""

    model_config = _SPEC_CONFIG

    container_id: str
    inner_col: int = Field(ge=0)


class NodeSpec(BaseModel):
    """A box on the diagram.

    Exactly one placement mode is active, decided by which fields are set:
    ``container`` + ``inner_col`` places the node in a container's inner grid,
    ``align_to_inner_col`` takes X from an inner column and Y from
    ``position.row``, otherwise ``position`` (optionally spanning
    ``width_cols`` x ``height_rows`` cells) places it on the outer grid.
    """

    model_config = _SPEC_CONFIG

    id: str = Field(min_length=1)
    label: str = ""
    sublabel: str | None = None
    icon: str | None = Field(default=None, description="Icon name, resolved by renderers")

    position: GridPosition | None = None
    container: str | None = None
    inner_col: int | None = Field(default=None, ge=0)
    align_to_inner_col: InnerColumnRef | None = None

    width_cols: int = Field(default=1, ge=1)
    height_rows: int = Field(default=1, ge=1)
    box_height_frac: float | None = Field(default=None, gt=0.0)

    draw_origin: DrawOrigin = DrawOrigin.LEFT
    label_font_size: float | None = Field(default=None, gt=0.0)
    sublabel_font_size: float | None = Field(default=None, gt=0.0)
    icon_size: float | None = Field(default=None, gt=0.0)
    highlight_color: str | None = None

    @model_validator(mode="after")
    def _validate_placement(self) -> NodeSpec:
        if self.container is not None:
            if self.inner_col is None:
                raise ValueError(f"Node '{self.id}': container requires innerCol")
            if self.align_to_inner_col is not None:
                raise ValueError(
                    f"Node '{self.id}': container and alignToInnerCol are mutually exclusive"
                )
        elif self.inner_col is not None:
            raise ValueError(f"Node '{self.id}': innerCol requires container")
        elif self.position is None:
            raise ValueError(f"Node '{self.id}': position is required outside a container")
        return self

    @property
    def placement(self) -> PlacementMode:
        if self.container is not None:
            return PlacementMode.INNER
        if self.align_to_inner_col is not None:
            return PlacementMode.ALIGNED
        return PlacementMode.OUTER


class CellSpan(BaseModel):
    """Inclusive range of outer grid cells."""

    model_config = _SPEC_CONFIG

    from_row: int = Field(ge=0)
    to_row: int = Field(ge=0)
    from_col: int = Field(ge=0)
    to_col: int = Field(ge=0)

    @model_validator(mode="after")
    def _validate_order(self) -> CellSpan:
        if self.to_row < self.from_row:
            raise ValueError("toRow must be >= fromRow")
        if self.to_col < self.from_col:
            raise ValueError("toCol must be >= fromCol")
        return self


class InnerGridSpec(BaseModel):
    """Single-row inner grid of a container."""

    model_config = _SPEC_CONFIG

    cols: int = Field(ge=1)


class ContainerStyle(BaseModel):
    model_config = _SPEC_CONFIG

    border_style: Literal["dashed", "solid"] = "dashed"
    background_color: str | None = None


class ContainerSpec(BaseModel):
    """A labelled box spanning outer cells, holding an inner 1-row grid."""

    model_config = _SPEC_CONFIG

    id: str = Field(min_length=1)
    label: str = ""
    span: CellSpan
    inner_grid: InnerGridSpec
    inset_frac: float = Field(default=0.06, ge=0.0, lt=0.5)
    style: ContainerStyle | None = None


class ContainerRef(BaseModel):
    """Connection endpoint on a container's left or right border."""

    model_config = _SPEC_CONFIG

    container: str
    edge: ContainerEdge

    @property
    def endpoint_id(self) -> str:
        return f"container:{self.container}:{self.edge.value}"


ConnectionTarget = str | ContainerRef


class LabelOffset(BaseModel):
    model_config = _SPEC_CONFIG

    x: float = 0.0
    y: float = 0.0


class ConnectionSpec(BaseModel):
    """An arrow between two endpoints.

    Endpoints are node ids or container border references. Edges are
    inferred from the endpoints' relative positions unless overridden,
    and the route is auto-computed unless ``waypoints`` are given.
    """

    model_config = _SPEC_CONFIG

    id: str | None = None
    source: ConnectionTarget = Field(alias="from")
    target: ConnectionTarget = Field(alias="to")
    from_edge: Edge | None = None
    to_edge: Edge | None = None
    label: str | None = None
    label_offset: LabelOffset | None = None
    stroke_width: float | None = Field(default=None, gt=0.0)
    color: str | None = None
    label_font_size: float | None = Field(default=None, gt=0.0)
    waypoints: list[Point] | None = None

    @property
    def connection_id(self) -> str:
        return connection_id(self)


class HeaderSpec(BaseModel):
    model_config = _SPEC_CONFIG

    title: str
    subtitle: str | None = None


class DiagramConfig(BaseModel):
    """Complete declarative diagram: geometry plus animation timeline."""

    model_config = _SPEC_CONFIG

    grid: GridSpec
    nodes: list[NodeSpec] = Field(default_factory=list)
    connections: list[ConnectionSpec] = Field(default_factory=list)
    containers: list[ContainerSpec] = Field(default_factory=list)
    timeline: Timeline = Field(default_factory=list)
    header: HeaderSpec | None = None
    footer: str | Literal[False] | None = None

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> DiagramConfig:
        for kind, ids in (
            ("node", [n.id for n in self.nodes]),
            ("container", [c.id for c in self.containers]),
            ("connection", [connection_id(c) for c in self.connections]),
        ):
            seen: set[str] = set()
            for element_id in ids:
                if element_id in seen:
                    raise ValueError(f"Duplicate {kind} id: '{element_id}'")
                seen.add(element_id)
        return self


def endpoint_id(target: ConnectionTarget) -> str:
    """Identity of a connection endpoint (node id or ``container:<id>:<edge>``)."""
    if isinstance(target, ContainerRef):
        return target.endpoint_id
    return target


def connection_id(spec: ConnectionSpec) -> str:
    """Derive the stable id for a connection.

    This is the join key between resolved geometry and timeline events, so
    both the layout resolver and the timeline evaluator call this function.

    Example:
        >>> connection_id(ConnectionSpec.model_validate({"from": "a", "to": "b"}))
        'a->b'
    """
    if spec.id:
        return spec.id
    return f"{endpoint_id(spec.source)}->{endpoint_id(spec.target)}"
