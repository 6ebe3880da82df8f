"""Data models for the story workflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StoryType(str, Enum):
    """Story type as reported by the tracker."""

    BUG = "bug"
    FEATURE = "feature"
    CHORE = "chore"


class StoryState(str, Enum):
    """Story lifecycle state as reported by the tracker."""

    UNSCHEDULED = "unscheduled"
    UNSTARTED = "unstarted"
    PLANNED = "planned"
    STARTED = "started"
    FINISHED = "finished"
    DELIVERED = "delivered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class TransitionStyle:
    """Colors for the action control."""

    fg: str
    bg: str


@dataclass(frozen=True)
class Transition:
    """The single next lifecycle action for a story.

    Attributes:
        label: Text shown on the action control.
        style: Visual hint for the control.
        target_state: State to move the story to, or None when nothing can be done.
    """

    label: str
    style: TransitionStyle
    target_state: StoryState | None = None

    @property
    def actionable(self) -> bool:
        """Whether invoking this transition issues a state change."""
        return self.target_state is not None
