"""Tests for DiagramScene frame assembly."""

from __future__ import annotations

import pytest

from archflow.core.layout import LayoutReferenceError, LayoutSpacing
from archflow.core.models import DiagramConfig
from archflow.core.scene import DiagramScene, step_dots
from archflow.core.timeline import STATIC_ANIM_STATE


class TestStepDots:
    def test_dots_relative_to_current(self) -> None:
        """Earlier steps are done, later ones pending."""
        assert step_dots(2, 3) == ["done", "current", "pending"]

    def test_no_current_step(self) -> None:
        """Without a current step every dot is pending."""
        assert step_dots(None, 2) == ["pending", "pending"]

    def test_no_steps(self) -> None:
        """No labelled steps means no dots."""
        assert step_dots(1, 0) == []


class TestStillScene:
    """Tests for scenes rendered as a single still."""

    def test_no_timeline_is_static(self, container_config: DiagramConfig) -> None:
        """An empty timeline renders every element static."""
        scene = DiagramScene(container_config)
        assert not scene.animated
        assert scene.duration_frames == 1

        state = scene.frame(0)
        assert state.animated is False
        assert state.global_floor == 1.0
        assert state.step_dots == []
        assert all(n.anim == STATIC_ANIM_STATE for n in state.nodes)
        assert all(c.anim == STATIC_ANIM_STATE for c in state.connections)

    def test_low_fps_is_static(self, walkthrough_config: DiagramConfig) -> None:
        """fps <= 1 renders a single still frame."""
        scene = DiagramScene(walkthrough_config, fps=1)
        assert scene.duration_frames == 1
        assert scene.frame(0).animated is False


class TestAnimatedScene:
    """Tests for scenes with a timeline."""

    @pytest.fixture
    def scene(self, walkthrough_config: DiagramConfig) -> DiagramScene:
        return DiagramScene(walkthrough_config, fps=30)

    def test_duration(self, scene: DiagramScene) -> None:
        """Render length equals the flattened timeline length."""
        assert scene.animated
        assert scene.duration_frames == 186

    def test_elements_in_declaration_order(self, scene: DiagramScene) -> None:
        """Nodes, containers and connections keep document order."""
        state = scene.frame(0)
        assert [n.id for n in state.nodes] == ["client", "api", "worker", "image", "store", "bus"]
        assert [c.id for c in state.containers] == ["cluster"]
        assert [c.id for c in state.connections] == [
            "client->container:cluster:left",
            "container:cluster:right->store",
            "api->worker",
        ]

    def test_geometry_matches_layout(self, scene: DiagramScene) -> None:
        """Frame geometry comes straight from the resolved layout."""
        state = scene.frame(0)
        api = next(n for n in state.nodes if n.id == "api")
        assert api.center == scene.layout.nodes["api"].center
        assert api.is_inner is True
        jobs = next(c for c in state.connections if c.id == "api->worker")
        assert jobs.drawable
        assert jobs.label == "jobs"
        assert jobs.label_position is not None

    def test_step_dots_mid_walkthrough(self, scene: DiagramScene) -> None:
        """Dots track the active step while the indicator shows."""
        state = scene.frame(90)
        assert state.animated
        assert state.current_step.num == 2
        assert state.total_steps == 3
        assert state.step_dots == ["done", "current", "pending"]

    def test_step_dots_hidden_in_bookends(self, scene: DiagramScene) -> None:
        """No dots while the bookend floor is up."""
        state = scene.frame(10)
        assert state.indicator_opacity == 0.0
        assert state.step_dots == []

    def test_frames_are_independent(self, scene: DiagramScene) -> None:
        """Querying other frames does not change a frame's state."""
        later = scene.frame(120)
        scene.frame(5)
        assert scene.frame(120) == later


def test_custom_spacing(three_node_config: DiagramConfig) -> None:
    """Spacing overrides reach the layout."""
    scene = DiagramScene(three_node_config, spacing=LayoutSpacing(page=0))
    assert scene.layout.container_width == 1920


def test_unknown_reference_raises(three_node_raw: dict) -> None:
    """Unknown ids fail when the scene is built."""
    three_node_raw["connections"] = [{"from": "a", "to": "ghost"}]
    with pytest.raises(LayoutReferenceError):
        DiagramScene(DiagramConfig.model_validate(three_node_raw))
