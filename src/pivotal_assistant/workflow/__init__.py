"""Workflow - Next legal lifecycle transition for a story."""

from pivotal_assistant.workflow.models import (
    StoryState,
    StoryType,
    Transition,
    TransitionStyle,
)
from pivotal_assistant.workflow.transitions import (
    DELIVER_STYLE,
    FINISH_STYLE,
    INERT_STYLE,
    START_STYLE,
    STARTABLE_STATES,
    next_transition,
    transition_for,
)

__all__ = [
    "DELIVER_STYLE",
    "FINISH_STYLE",
    "INERT_STYLE",
    "START_STYLE",
    "STARTABLE_STATES",
    "StoryState",
    "StoryType",
    "Transition",
    "TransitionStyle",
    "next_transition",
    "transition_for",
]
