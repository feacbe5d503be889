"""Timeline enums - phase kinds, step actions and flattened event tags."""

from enum import Enum


class PhaseType(str, Enum):
    """Top-level timeline phase kind.

    Attributes:
        HOLD: Pause at the current state.
        SEQUENCE: Ordered list of animation steps (the walkthrough).
        DIM: Ramp global visibility down (bookend transition).
        REVEAL: Ramp global visibility back up (bookend transition).
    """

    HOLD = "hold"
    SEQUENCE = "sequence"
    DIM = "dim"
    REVEAL = "reveal"


class StepAction(str, Enum):
    """Action of a step inside a sequence phase."""

    FILL_BOX = "fillBox"
    DIM_BOX = "dimBox"
    DRAW_LINE = "drawLine"
    SHOW_CONTAINER = "showContainer"
    HOLD = "hold"
    PARALLEL = "parallel"


class EventAction(str, Enum):
    """Action kind of a flattened timeline event.

    Parallel steps never produce events of their own; their children do.
    """

    FILL_BOX = "fillBox"
    DIM_BOX = "dimBox"
    DRAW_LINE = "drawLine"
    SHOW_CONTAINER = "showContainer"
    HOLD = "hold"
    DIM = "dim"
    REVEAL = "reveal"


class EventSource(str, Enum):
    """Where a flattened event came from.

    Attributes:
        PHASE: A top-level hold/dim/reveal phase.
        STEP: A step nested inside a sequence phase.
    """

    PHASE = "phase"
    STEP = "step"


# Events that only frame the walkthrough; everything else animates an element.
BOOKEND_ACTIONS: frozenset[EventAction] = frozenset(
    {EventAction.HOLD, EventAction.DIM, EventAction.REVEAL}
)

ANIMATION_ACTIONS: frozenset[EventAction] = frozenset(
    {
        EventAction.FILL_BOX,
        EventAction.DIM_BOX,
        EventAction.DRAW_LINE,
        EventAction.SHOW_CONTAINER,
    }
)
