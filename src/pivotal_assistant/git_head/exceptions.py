"""Custom exceptions for Git Head."""


class GitHeadError(Exception):
    """Base exception for Git Head errors."""


class NotAWorkingTreeError(GitHeadError):
    """The head reference could not be read; not run from a git root."""
