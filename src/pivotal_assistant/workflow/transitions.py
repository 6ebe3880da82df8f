"""Story workflow state machine.

Rules are checked in order and the first match wins:

1. unscheduled/unstarted/planned bugs, chores and estimated features start
2. started chores are accepted directly, started bugs and features are finished
3. finished bugs and features are delivered
4. anything else gets an inert control
"""

from __future__ import annotations

from typing import Protocol

from pivotal_assistant.workflow.models import (
    StoryState,
    StoryType,
    Transition,
    TransitionStyle,
)

START_STYLE = TransitionStyle(fg="black", bg="white")
FINISH_STYLE = TransitionStyle(fg="white", bg="#213F63")
DELIVER_STYLE = TransitionStyle(fg="black", bg="#FF9225")
INERT_STYLE = TransitionStyle(fg="grey", bg="white")

# Membership is by value against raw API strings, so no sets of enums
STARTABLE_STATES = (StoryState.UNSCHEDULED, StoryState.UNSTARTED, StoryState.PLANNED)
WORKFLOW_TYPES = (StoryType.BUG, StoryType.FEATURE, StoryType.CHORE)
DELIVERABLE_TYPES = (StoryType.BUG, StoryType.FEATURE)


class Transitionable(Protocol):
    """Anything carrying the fields the state machine reads."""

    story_type: str
    current_state: str
    estimate: float | None


def next_transition(
    story_type: str,
    current_state: str,
    estimate: float | None = None,
) -> Transition:
    """Compute the next legal transition for a story.

    Args:
        story_type: bug, feature or chore. Other types (e.g. release) only get an
            inert control.
        current_state: Current lifecycle state.
        estimate: Story points; only meaningful for features.

    Returns:
        The transition to offer. A transition without target state is inert.
    """
    unestimated_feature = story_type == StoryType.FEATURE and estimate is None
    in_workflow = story_type in WORKFLOW_TYPES

    if in_workflow and current_state in STARTABLE_STATES and not unestimated_feature:
        return Transition("Start", START_STYLE, StoryState.STARTED)

    if in_workflow and current_state == StoryState.STARTED:
        # Chores skip finished/delivered
        if story_type == StoryType.CHORE:
            return Transition("Finish", FINISH_STYLE, StoryState.ACCEPTED)
        return Transition("Finish", FINISH_STYLE, StoryState.FINISHED)

    if current_state == StoryState.FINISHED and story_type in DELIVERABLE_TYPES:
        return Transition("Deliver", DELIVER_STYLE, StoryState.DELIVERED)

    if current_state == StoryState.ACCEPTED:
        label = "Accepted"
    elif unestimated_feature:
        label = "Unestimated"
    else:
        label = "Start"
    return Transition(label, INERT_STYLE)


def transition_for(story: Transitionable) -> Transition:
    """Compute the next transition from a story snapshot."""
    return next_transition(story.story_type, story.current_state, story.estimate)
