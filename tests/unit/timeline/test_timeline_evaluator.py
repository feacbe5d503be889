"""Tests for per-frame timeline evaluation."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from archflow.core.models import DiagramConfig
from archflow.core.timeline import TimelineEvaluator, evaluate_timeline

FPS = 30


def _config(steps: list[dict[str, Any]], phases_before: list[dict[str, Any]] | None = None) -> DiagramConfig:
    """1x5 grid with nodes a-e and a single a->b connection."""
    return DiagramConfig.model_validate(
        {
            "grid": {"rows": 1, "cols": 5},
            "nodes": [
                {"id": n, "label": n.upper(), "position": {"row": 0, "col": i}}
                for i, n in enumerate("abcde")
            ],
            "connections": [{"from": "a", "to": "b"}],
            "timeline": [*(phases_before or []), {"type": "sequence", "steps": steps}],
        }
    )


def _fill(target: str, **extra: Any) -> dict[str, Any]:
    return {"action": "fillBox", "target": target, **extra}


class TestStillMode:
    """Tests for static evaluation."""

    def test_fps_one_is_static(self, walkthrough_config: DiagramConfig) -> None:
        """fps of 1 yields no timeline state."""
        evaluator = TimelineEvaluator.from_config(walkthrough_config, 1)
        assert evaluator.static
        assert evaluator.evaluate(0) is None

    def test_empty_timeline_is_static(self, three_node_config: DiagramConfig) -> None:
        """An empty timeline yields no timeline state."""
        state = evaluate_timeline(
            three_node_config.timeline, 10, FPS, three_node_config.nodes, three_node_config.connections
        )
        assert state is None


class TestNodeEnvelopes:
    """Tests for node brightness and opacity."""

    def test_fade_in_sets_opacity(self) -> None:
        """Opacity rises from the node dim level with brightness."""
        config = _config([_fill("a"), {"action": "drawLine", "target": "a->b"}, _fill("b")])
        state = TimelineEvaluator.from_config(config, FPS).evaluate(12)
        assert state.nodes["a"].brightness == pytest.approx(0.5)
        assert state.nodes["a"].draw_progress == pytest.approx(0.5)
        assert state.nodes["a"].opacity == pytest.approx(0.65)

    def test_untouched_node_rests_at_dim_level(self) -> None:
        """Nodes never targeted sit at the dim level."""
        config = _config([_fill("a")])
        state = TimelineEvaluator.from_config(config, FPS).evaluate(12)
        assert state.nodes["e"].brightness == 0.0
        assert state.nodes["e"].opacity == pytest.approx(0.3)

    def test_fade_out_three_events_later(self) -> None:
        """A node fades out after the third later event, border intact."""
        config = _config(
            [_fill("a"), {"action": "drawLine", "target": "a->b"}, _fill("b"), _fill("c")]
        )
        evaluator = TimelineEvaluator.from_config(config, FPS)
        assert evaluator.evaluate(90).nodes["a"].brightness == pytest.approx(0.5)
        # border stays drawn after the fade-out
        assert evaluator.evaluate(120).nodes["a"].draw_progress == 1.0

    def test_group_fades_together(self) -> None:
        """Grouped nodes fade out at the same frame."""
        config = _config(
            [
                _fill("a", group="g"),
                {"action": "drawLine", "target": "a->b"},
                _fill("b", group="g"),
                _fill("c"),
                _fill("d"),
                _fill("e"),
            ]
        )
        evaluator = TimelineEvaluator.from_config(config, FPS)
        assert evaluator.group_triggers == {"g": 132}
        assert evaluator.evaluate(100).nodes["a"].brightness == pytest.approx(1.0)
        state = evaluator.evaluate(138)
        assert state.nodes["a"].brightness == pytest.approx(0.5)
        assert state.nodes["b"].brightness == pytest.approx(0.5)

    def test_dim_box_subtracts(self) -> None:
        """dimBox progress is subtracted from brightness."""
        config = _config([_fill("a"), {"action": "dimBox", "target": "a"}])
        state = TimelineEvaluator.from_config(config, FPS).evaluate(36)
        assert state.nodes["a"].brightness == pytest.approx(0.5)

    def test_parallel_children_light_together(self) -> None:
        """Parallel children animate from the same start frame."""
        config = _config(
            [
                _fill("a"),
                {
                    "action": "parallel",
                    "group": "g",
                    "steps": [{"action": "drawLine", "target": "a->b"}, _fill("b")],
                },
                _fill("c"),
            ]
        )
        state = TimelineEvaluator.from_config(config, FPS).evaluate(30)
        assert state.connections["a->b"].draw_progress == pytest.approx(0.5)
        assert state.nodes["b"].brightness == pytest.approx(0.25)
        assert state.nodes["c"].brightness == 0.0


class TestConnections:
    """Tests for connection settlement."""

    def test_undrawn_connection_settles(self) -> None:
        """Connections without drawLine settle fully drawn after the grace period."""
        evaluator = TimelineEvaluator.from_config(_config([_fill("a")]), FPS)
        assert evaluator.flow_end == 84
        early = evaluator.evaluate(50).connections["a->b"]
        assert early.draw_progress == 0.0
        assert early.opacity == pytest.approx(0.15)
        assert evaluator.evaluate(78).connections["a->b"].draw_progress == pytest.approx(0.5)
        settled = evaluator.evaluate(84).connections["a->b"]
        assert settled.brightness == 1.0
        assert settled.draw_progress == 1.0


class TestStepIndicator:
    """Tests for the step indicator."""

    def test_visible_then_fades_before_flow_end(self) -> None:
        """The indicator shows the step and fades out before settlement."""
        evaluator = TimelineEvaluator.from_config(
            _config([_fill("a", step={"num": 1, "text": "Start"})]), FPS
        )
        state = evaluator.evaluate(10)
        assert state.total_steps == 1
        assert state.indicator_opacity == pytest.approx(1.0)
        assert state.current_step.num == 1
        assert state.current_step.text == "Start"
        assert state.current_step.progress == pytest.approx(10 / 24)

        assert evaluator.evaluate(72).indicator_opacity == pytest.approx(0.5)
        done = evaluator.evaluate(84)
        assert done.indicator_opacity == 0.0
        assert done.current_step is None

    def test_hidden_during_bookends(self, walkthrough_config: DiagramConfig) -> None:
        """The indicator is hidden while the floor is up."""
        evaluator = TimelineEvaluator.from_config(walkthrough_config, FPS)
        assert evaluator.total_steps == 3
        state = evaluator.evaluate(10)
        assert state.indicator_opacity == 0.0
        assert state.current_step is None

    def test_tracks_latest_started_step(self, walkthrough_config: DiagramConfig) -> None:
        """The latest started labelled step is current."""
        state = TimelineEvaluator.from_config(walkthrough_config, FPS).evaluate(90)
        assert state.current_step.num == 2
        assert state.current_step.text == "Handle"


class TestWalkthrough:
    """Tests for a complete hold/dim/sequence/reveal walkthrough."""

    def test_everything_lit_in_opening_hold(self, walkthrough_config: DiagramConfig) -> None:
        """Every element is fully lit and drawn in the opening hold."""
        state = TimelineEvaluator.from_config(walkthrough_config, FPS).evaluate(10)
        assert state.global_floor == 1.0
        assert all(n.brightness == 1.0 for n in state.nodes.values())
        assert all(n.draw_progress == 1.0 for n in state.nodes.values())
        assert all(n.opacity == pytest.approx(1.0) for n in state.nodes.values())
        assert all(c.brightness == 1.0 for c in state.connections.values())
        assert all(c.draw_progress == 1.0 for c in state.connections.values())
        assert all(c.brightness == 1.0 for c in state.containers.values())
        assert all(c.draw_progress == 1.0 for c in state.containers.values())

    def test_container_follows_member_nodes(self, walkthrough_config: DiagramConfig) -> None:
        """Containers light up with their member nodes."""
        state = TimelineEvaluator.from_config(walkthrough_config, FPS).evaluate(93)
        assert state.nodes["api"].brightness == pytest.approx(0.5)
        assert state.containers["cluster"].brightness == pytest.approx(0.5)
        assert state.containers["cluster"].draw_progress == 1.0

    def test_reveal_restores_full_diagram(self, walkthrough_config: DiagramConfig) -> None:
        """After the reveal every node is at full opacity."""
        state = TimelineEvaluator.from_config(walkthrough_config, FPS).evaluate(170)
        assert state.global_floor == 1.0
        assert state.global_opacity == 1.0
        assert all(n.opacity == pytest.approx(1.0) for n in state.nodes.values())

    def test_total_frames(self, walkthrough_config: DiagramConfig) -> None:
        """Evaluator length matches the flattened timeline."""
        assert TimelineEvaluator.from_config(walkthrough_config, FPS).total_frames == 186

    def test_deterministic(self, walkthrough_config: DiagramConfig) -> None:
        """The same frame evaluates to the same state."""
        evaluator = TimelineEvaluator.from_config(walkthrough_config, FPS)
        assert evaluator.evaluate(100) == evaluator.evaluate(100)


class TestUnknownTargets:
    def test_unknown_target_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown step targets are logged, not raised."""
        config = _config([_fill("ghost")])
        with caplog.at_level(logging.WARNING, logger="archflow.core.timeline.evaluator"):
            state = TimelineEvaluator.from_config(config, FPS).evaluate(10)
        assert "ghost" in caplog.text
        assert "ghost" not in state.nodes
