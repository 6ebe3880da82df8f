"""Pivotal Assistant - terminal companion for the story on the current branch."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
