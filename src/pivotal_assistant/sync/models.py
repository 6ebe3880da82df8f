"""Data models for the sync loop."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pivotal_assistant.tracker import Story, Task
    from pivotal_assistant.workflow import Transition


class ChangeTrigger(str, Enum):
    """Which trigger woke the loop."""

    FILESYSTEM = "filesystem"
    MANUAL = "manual"
    IDLE_TIMEOUT = "idle_timeout"


@dataclass
class NavigationState:
    """Where the operator is in the story view.

    Owned by the view layer and handed to every rebuild unchanged, so a
    refresh keeps the current tab and selection.
    """

    tab: str = "tasks"
    selected_task: int = 0


@dataclass
class ViewCallbacks:
    """Actions a story view can invoke."""

    refresh: Callable[[], None]
    advance_state: Callable[[Transition], Awaitable[None]]
    save_task: Callable[[int, str], Awaitable[None]]
    toggle_task: Callable[[Task], Awaitable[None]]
    add_task: Callable[[str], Awaitable[None]]
    delete_task: Callable[[int], Awaitable[None]]
    post_comment: Callable[[str], Awaitable[None]]


@dataclass
class LoopState:
    """Everything the sync loop owns between iterations.

    Attributes:
        snapshot: Last successfully fetched story, None when nothing is shown.
        story_id: Story id resolved in the latest iteration.
        view: Handle of the currently displayed view.
    """

    snapshot: Story | None = None
    story_id: str | None = None
    view: Any = None
