"""Head reference reading and story id extraction."""

from __future__ import annotations

import re
from pathlib import Path

from pivotal_assistant.git_head.exceptions import NotAWorkingTreeError
from pivotal_assistant.logging import get_logger

logger = get_logger("git_head")

HEAD_FILE = Path(".git") / "HEAD"

NOT_A_WORKING_TREE_MESSAGE = "Please run this from the git root of your project"

# Non-greedy prefix so the captured digits are the trailing run of the branch name
_STORY_BRANCH = re.compile(r"^ref: refs/heads/.*?(\d{8,})\s*$", re.MULTILINE)


def head_path(repo_path: str | Path = ".") -> Path:
    """Return the path of the head reference file for a repository root."""
    return Path(repo_path) / HEAD_FILE


def read_head(repo_path: str | Path = ".") -> str:
    """Read the raw head reference text.

    Args:
        repo_path: Root of the git working tree.

    Returns:
        Content of .git/HEAD.

    Raises:
        NotAWorkingTreeError: If the file cannot be read.
    """
    path = head_path(repo_path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise NotAWorkingTreeError(NOT_A_WORKING_TREE_MESSAGE) from e


def resolve_story_id(head_text: str) -> str | None:
    """Extract the story id from head reference text.

    A story branch is a symbolic ref whose name ends in 8 or more digits,
    e.g. ``ref: refs/heads/feature/add-login-183456789``.

    Args:
        head_text: Raw head reference content.

    Returns:
        The trailing digit run, or None when not on a story branch.
    """
    match = _STORY_BRANCH.search(head_text)
    if match is None:
        return None
    return match.group(1)
