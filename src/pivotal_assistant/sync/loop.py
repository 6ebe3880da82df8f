"""SyncLoop - Keeps the displayed story in step with the branch and the tracker."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pivotal_assistant.git_head import read_head, resolve_story_id
from pivotal_assistant.sync.diff import EMPTY, snapshots_differ
from pivotal_assistant.sync.models import LoopState
from pivotal_assistant.tracker import TrackerError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pivotal_assistant.sync.models import NavigationState, ViewCallbacks
    from pivotal_assistant.sync.signals import ChangeEventSource
    from pivotal_assistant.sync.view import StoryView
    from pivotal_assistant.tracker import Story

logger = logging.getLogger(__name__)

NO_STORY_MESSAGE = "Not on a story branch"


def fetch_error_message(story_id: str, error: Exception) -> str:
    """Text of the view shown when a story cannot be loaded."""
    return f"Story #{story_id} could not be loaded: {error}"


class SyncLoop:
    """Resolves, fetches, diffs and redisplays the current story, forever.

    Each iteration reads the head reference, resolves the story id, fetches
    the story and rebuilds the view only when the snapshot changed. It then
    sleeps until the change event source fires. Iterations never overlap.
    """

    def __init__(
        self,
        fetch_story: Callable[[str], Awaitable[Story]],
        view: StoryView,
        events: ChangeEventSource,
        navigation: NavigationState,
        actions_factory: Callable[[str], ViewCallbacks],
        repo_path: str | Path = ".",
    ) -> None:
        """Initialize the loop.

        Args:
            fetch_story: Coroutine function fetching a story by id.
            view: Rendering layer.
            events: Source of change signals.
            navigation: View navigation context, passed unchanged to every rebuild.
            actions_factory: Builds the view callbacks for a story id.
            repo_path: Root of the git working tree.
        """
        self.fetch_story = fetch_story
        self.view = view
        self.events = events
        self.navigation = navigation
        self.actions_factory = actions_factory
        self.repo_path = Path(repo_path)
        self.state = LoopState()

    async def run(self) -> None:
        """Loop until cancelled.

        Raises:
            NotAWorkingTreeError: If the head reference cannot be read.
        """
        logger.info("Sync loop started in %s", self.repo_path.resolve())
        while True:
            await self.step()
            trigger = await self.events.wait()
            logger.debug("Woken by %s", trigger.value)

    async def step(self) -> LoopState:
        """Run one iteration up to and including rendering.

        Returns:
            The loop state after the iteration.

        Raises:
            NotAWorkingTreeError: If the head reference cannot be read.
        """
        head_text = await asyncio.to_thread(read_head, self.repo_path)
        story_id = resolve_story_id(head_text)
        if story_id != self.state.story_id:
            logger.info("Tracking story %s", story_id or "(none)")
        self.state.story_id = story_id

        if story_id is None:
            self._show_message(NO_STORY_MESSAGE)
        else:
            await self._sync_story(story_id)

        self.view.render()
        return self.state

    async def _sync_story(self, story_id: str) -> None:
        try:
            story = await self.fetch_story(story_id)
        except TrackerError as e:
            logger.warning("Failed to fetch story #%s: %s", story_id, e)
            self._show_message(fetch_error_message(story_id, e))
            return

        if not snapshots_differ(self.state.snapshot, story):
            logger.debug("Story #%s unchanged", story_id)
            return

        logger.info("Story #%s changed, rebuilding view", story_id)
        self.state.snapshot = story
        self._teardown()
        self.state.view = self.view.show_story(
            story, self.navigation, self.actions_factory(story_id)
        )

    def _show_message(self, text: str) -> None:
        self.state.snapshot = EMPTY
        self._teardown()
        self.state.view = self.view.show_message(text)

    def _teardown(self) -> None:
        if self.state.view is not None:
            self.view.destroy(self.state.view)
            self.state.view = None
