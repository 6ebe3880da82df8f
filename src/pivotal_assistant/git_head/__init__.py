"""Git Head - Resolves the tracked story from the checked-out branch."""

from pivotal_assistant.git_head.exceptions import GitHeadError, NotAWorkingTreeError
from pivotal_assistant.git_head.resolver import (
    HEAD_FILE,
    head_path,
    read_head,
    resolve_story_id,
)

__all__ = [
    "HEAD_FILE",
    "GitHeadError",
    "NotAWorkingTreeError",
    "head_path",
    "read_head",
    "resolve_story_id",
]
