"""StoryActions - Mutating operations offered by the story view."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pivotal_assistant.sync.models import ViewCallbacks

if TYPE_CHECKING:
    from collections.abc import Callable

    from pivotal_assistant.tracker import Task, TrackerClient
    from pivotal_assistant.workflow import Transition

logger = logging.getLogger(__name__)


class StoryActions:
    """Issues mutations for one story, then asks the loop to re-sync.

    Each action performs its own request immediately; it never touches the
    loop's snapshot. Failures propagate to the caller as TrackerError and
    do not trigger a refresh. The story id is bound when the view is built,
    so an action finishing after a branch switch still targets the old story.
    """

    def __init__(
        self,
        client: TrackerClient,
        project_id: int,
        story_id: str,
        on_change: Callable[[], None],
    ) -> None:
        self.client = client
        self.project_id = project_id
        self.story_id = story_id
        self.on_change = on_change

    async def advance_state(self, transition: Transition) -> None:
        """Apply a transition. Inert transitions are ignored."""
        if transition.target_state is None:
            logger.debug("Transition %s is not actionable", transition.label)
            return
        await self.client.update_story_state(
            self.project_id, self.story_id, transition.target_state.value
        )
        self.on_change()

    async def save_task(self, task_id: int, description: str) -> None:
        await self.client.update_task(
            self.project_id, self.story_id, task_id, description=description
        )
        self.on_change()

    async def toggle_task(self, task: Task) -> None:
        await self.client.update_task(
            self.project_id, self.story_id, task.id, complete=not task.complete
        )
        self.on_change()

    async def add_task(self, description: str) -> None:
        await self.client.create_task(self.project_id, self.story_id, description)
        self.on_change()

    async def delete_task(self, task_id: int) -> None:
        await self.client.delete_task(self.project_id, self.story_id, task_id)
        self.on_change()

    async def post_comment(self, text: str) -> None:
        """Post a comment. Blank text is not sent."""
        if not text.strip():
            return
        await self.client.post_comment(self.project_id, self.story_id, text)
        self.on_change()

    def as_callbacks(self) -> ViewCallbacks:
        """Bundle the actions for a view."""
        return ViewCallbacks(
            refresh=self.on_change,
            advance_state=self.advance_state,
            save_task=self.save_task,
            toggle_task=self.toggle_task,
            add_task=self.add_task,
            delete_task=self.delete_task,
            post_comment=self.post_comment,
        )
