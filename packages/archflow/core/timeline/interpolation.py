"""Frame conversion and clamped piecewise-linear interpolation."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def to_frames(seconds: float, fps: float) -> int:
    """Convert seconds to a whole number of frames.

    Halves round up (2.5 -> 3), unlike Python's banker's rounding, so a
    duration maps to the same frame count regardless of parity.

    Example:
        >>> to_frames(0.4, 30)
        12
    """
    return int(math.floor(seconds * fps + 0.5))


def interpolate(x: float, input_range: Sequence[float], output_range: Sequence[float]) -> float:
    """Piecewise-linear interpolation clamped at both ends.

    Args:
        x: Query value (frame).
        input_range: Non-decreasing breakpoints. A zero-width segment acts
            as a step to the later value.
        output_range: Values at each breakpoint.

    Raises:
        ValueError: If the ranges differ in length, have fewer than two
            points, or ``input_range`` decreases anywhere.
    """
    if len(input_range) != len(output_range):
        raise ValueError("input_range and output_range must have the same length")
    if len(input_range) < 2:
        raise ValueError("input_range must have at least 2 points")
    if any(b < a for a, b in zip(input_range, input_range[1:])):
        raise ValueError(f"input_range must be non-decreasing, got {list(input_range)}")
    return float(np.interp(x, input_range, output_range))


def ramp(x: float, start: float, end: float) -> float:
    """0 -> 1 ramp across [start, end], clamped outside it."""
    return interpolate(x, (start, end), (0.0, 1.0))
