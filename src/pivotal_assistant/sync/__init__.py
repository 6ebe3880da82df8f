"""Sync - Change detection and the story synchronization loop."""

from pivotal_assistant.sync.actions import StoryActions
from pivotal_assistant.sync.diff import EMPTY, snapshots_differ
from pivotal_assistant.sync.exceptions import SyncError
from pivotal_assistant.sync.loop import NO_STORY_MESSAGE, SyncLoop, fetch_error_message
from pivotal_assistant.sync.models import (
    ChangeTrigger,
    LoopState,
    NavigationState,
    ViewCallbacks,
)
from pivotal_assistant.sync.signals import (
    DEFAULT_IDLE_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    ChangeEventSource,
)
from pivotal_assistant.sync.view import StoryView

__all__ = [
    "DEFAULT_IDLE_TIMEOUT",
    "DEFAULT_POLL_INTERVAL",
    "EMPTY",
    "NO_STORY_MESSAGE",
    "ChangeEventSource",
    "ChangeTrigger",
    "LoopState",
    "NavigationState",
    "StoryActions",
    "StoryView",
    "SyncError",
    "SyncLoop",
    "ViewCallbacks",
    "fetch_error_message",
    "snapshots_differ",
]
