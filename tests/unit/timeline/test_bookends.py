"""Tests for global floor and opacity from bookend phases."""

from __future__ import annotations

from pydantic import TypeAdapter
import pytest

from archflow.core.models import Timeline
from archflow.core.timeline import compute_globals, flatten_timeline
from archflow.core.timeline.bookends import sequence_start_frame

FPS = 30

_timeline = TypeAdapter(Timeline)


def _events(raw: list[dict]):
    return flatten_timeline(_timeline.validate_python(raw), FPS)


@pytest.fixture
def dim_reveal_events():
    """hold 0-30, dim 30-45, fillBox a 45-69, reveal 69-84."""
    return _events(
        [
            {"type": "hold", "duration": 1.0},
            {"type": "dim", "duration": 0.5},
            {"type": "sequence", "steps": [{"action": "fillBox", "target": "a"}]},
            {"type": "reveal", "duration": 0.5},
        ]
    )


class TestDimAndReveal:
    """Tests for compute_globals with dim and reveal phases."""

    def test_fully_lit_during_hold(self, dim_reveal_events) -> None:
        """Floor and opacity are both 1 in the opening hold."""
        levels = compute_globals(dim_reveal_events, 10)
        assert levels.floor == 1.0
        assert levels.opacity == 1.0

    def test_opacity_fades_across_dim(self, dim_reveal_events) -> None:
        """Opacity ramps down across the dim while the floor stays up."""
        levels = compute_globals(dim_reveal_events, 37.5)
        assert levels.floor == 1.0
        assert levels.opacity == pytest.approx(0.5)

    def test_walkthrough_starts_after_dim(self, dim_reveal_events) -> None:
        """Floor drops and opacity snaps back once the sequence starts."""
        levels = compute_globals(dim_reveal_events, 45)
        assert levels.floor == 0.0
        assert levels.opacity == 1.0

    def test_reveal_ramps_floor(self, dim_reveal_events) -> None:
        """Reveal ramps the floor back to 1 and holds it."""
        assert compute_globals(dim_reveal_events, 76.5).floor == pytest.approx(0.5)
        assert compute_globals(dim_reveal_events, 90).floor == 1.0


class TestWithoutDim:
    """Tests for compute_globals without a dim phase."""

    def test_floor_cuts_at_sequence_start(self) -> None:
        """Without a dim the floor cuts hard where the sequence starts."""
        events = _events(
            [
                {"type": "hold", "duration": 1.0},
                {"type": "sequence", "steps": [{"action": "fillBox", "target": "a"}]},
            ]
        )
        assert sequence_start_frame(events) == 30
        assert compute_globals(events, 29).floor == 1.0
        assert compute_globals(events, 30).floor == 0.0
        assert compute_globals(events, 30).opacity == 1.0

    def test_sequence_only_starts_dark(self) -> None:
        """A timeline that opens with a sequence has no floor."""
        events = _events([{"type": "sequence", "steps": [{"action": "fillBox", "target": "a"}]}])
        assert compute_globals(events, 0).floor == 0.0
