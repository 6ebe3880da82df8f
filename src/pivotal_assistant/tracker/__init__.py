"""Tracker - Pivotal Tracker REST client and story models."""

from pivotal_assistant.tracker.client import DEFAULT_BASE_URL, STORY_FIELDS, TrackerClient
from pivotal_assistant.tracker.exceptions import TrackerError, TrackerRequestError
from pivotal_assistant.tracker.models import (
    Comment,
    FileAttachment,
    Label,
    Project,
    Story,
    Task,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "STORY_FIELDS",
    "Comment",
    "FileAttachment",
    "Label",
    "Project",
    "Story",
    "Task",
    "TrackerClient",
    "TrackerError",
    "TrackerRequestError",
]
