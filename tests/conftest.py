"""Shared pytest fixtures for archflow tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from archflow.core.models import DiagramConfig

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


# ============================================================================
# Diagram Fixtures
# ============================================================================


@pytest.fixture
def three_node_raw() -> dict[str, Any]:
    """1x3 grid, three default-sized nodes, one inferred connection."""
    return {
        "grid": {"rows": 1, "cols": 3, "canvas": {"width": 1920, "height": 1080}},
        "nodes": [
            {"id": "a", "label": "A", "position": {"row": 0, "col": 0}},
            {"id": "b", "label": "B", "position": {"row": 0, "col": 1}},
            {"id": "c", "label": "C", "position": {"row": 0, "col": 2}},
        ],
        "connections": [{"from": "a", "to": "b"}],
        "timeline": [],
    }


@pytest.fixture
def three_node_config(three_node_raw: dict[str, Any]) -> DiagramConfig:
    return DiagramConfig.model_validate(three_node_raw)


@pytest.fixture
def container_raw() -> dict[str, Any]:
    """2x4 grid with a container over row 0, cols 1-2 holding two inner nodes."""
    return {
        "grid": {"rows": 2, "cols": 4},
        "containers": [
            {
                "id": "cluster",
                "label": "Cluster",
                "span": {"fromRow": 0, "toRow": 0, "fromCol": 1, "toCol": 2},
                "innerGrid": {"cols": 2},
            }
        ],
        "nodes": [
            {"id": "client", "label": "Client", "position": {"row": 0, "col": 0}},
            {"id": "api", "label": "API", "container": "cluster", "innerCol": 0},
            {"id": "worker", "label": "Worker", "container": "cluster", "innerCol": 1},
            {
                "id": "image",
                "label": "Image",
                "position": {"row": 1, "col": 1},
                "alignToInnerCol": {"containerId": "cluster", "innerCol": 0},
            },
            {"id": "store", "label": "Store", "position": {"row": 0, "col": 3}},
            {"id": "bus", "label": "Bus", "position": {"row": 1, "col": 2}, "widthCols": 2},
        ],
        "connections": [
            {"from": "client", "to": {"container": "cluster", "edge": "left"}},
            {"from": {"container": "cluster", "edge": "right"}, "to": "store"},
            {"from": "api", "to": "worker", "label": "jobs"},
        ],
    }


@pytest.fixture
def container_config(container_raw: dict[str, Any]) -> DiagramConfig:
    return DiagramConfig.model_validate(container_raw)


@pytest.fixture
def walkthrough_raw(container_raw: dict[str, Any]) -> dict[str, Any]:
    """Container diagram with hold -> dim -> sequence -> reveal -> hold.

    At 30 fps: hold 0-30, dim 30-45, client 45-69, client->cluster 69-81,
    api 81-105, api->worker 105-117, worker 117-141, reveal 141-156,
    hold 156-186.
    """
    raw = dict(container_raw)
    raw["timeline"] = [
        {"type": "hold", "duration": 1.0},
        {"type": "dim", "duration": 0.5},
        {
            "type": "sequence",
            "steps": [
                {"action": "fillBox", "target": "client", "step": {"num": 1, "text": "Request"}},
                {"action": "drawLine", "target": "client->container:cluster:left"},
                {"action": "fillBox", "target": "api", "step": {"num": 2, "text": "Handle"}},
                {"action": "drawLine", "target": "api->worker"},
                {"action": "fillBox", "target": "worker", "step": {"num": 3, "text": "Process"}},
            ],
        },
        {"type": "reveal", "duration": 0.5},
        {"type": "hold", "duration": 1.0},
    ]
    return raw


@pytest.fixture
def walkthrough_config(walkthrough_raw: dict[str, Any]) -> DiagramConfig:
    return DiagramConfig.model_validate(walkthrough_raw)
