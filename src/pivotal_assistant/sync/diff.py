"""Snapshot comparison used to skip redundant view rebuilds."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pivotal_assistant.tracker import Story

# Nothing fetched yet, or the last fetch was discarded
EMPTY = None


def snapshots_differ(previous: Story | None, current: Story | None) -> bool:
    """Whether the displayed snapshot must be replaced.

    Deep structural equality: every field counts and sequence order matters.
    The empty sentinel never matches anything.
    """
    if previous is EMPTY or current is EMPTY:
        return True
    return previous != current
