"""AssistantApp - Terminal UI running the sync loop."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header

from pivotal_assistant.git_head import NotAWorkingTreeError, head_path
from pivotal_assistant.logging import get_logger
from pivotal_assistant.sync import (
    ChangeEventSource,
    NavigationState,
    StoryActions,
    SyncLoop,
    ViewCallbacks,
)
from pivotal_assistant.tracker import TrackerClient, TrackerError
from pivotal_assistant.tui.theme import CSS as THEME_CSS
from pivotal_assistant.tui.view import TextualStoryView

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from pivotal_assistant.config import UserConfig

logger = get_logger("tui")


class AssistantApp(App[None]):
    """Shows the story of the checked-out branch and keeps it current."""

    CSS = THEME_CSS
    TITLE = "Pivotal assistant"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("r", "sync_now", "Refresh"),
    ]

    def __init__(
        self,
        user_config: UserConfig,
        project_id: int,
        repo_path: str | Path = ".",
    ) -> None:
        super().__init__()
        self.project_id = project_id
        self.repo_path = Path(repo_path)
        self.tracker = TrackerClient(user_config.token, base_url=user_config.api_url)
        self.navigation = NavigationState()
        self.change_events = ChangeEventSource(
            head_path(self.repo_path),
            idle_timeout=user_config.idle_timeout,
            poll_interval=user_config.poll_interval,
        )
        self.story_view = TextualStoryView(self)
        self.sync_loop = SyncLoop(
            fetch_story=partial(self.tracker.fetch_story, project_id),
            view=self.story_view,
            events=self.change_events,
            navigation=self.navigation,
            actions_factory=self._callbacks_for,
            repo_path=self.repo_path,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(id="main")
        yield Footer()

    def on_mount(self) -> None:
        self.run_sync_loop()

    def _callbacks_for(self, story_id: str) -> ViewCallbacks:
        actions = StoryActions(self.tracker, self.project_id, story_id, self.change_events.trigger)
        return actions.as_callbacks()

    @work(exclusive=True, group="sync")
    async def run_sync_loop(self) -> None:
        try:
            await self.sync_loop.run()
        except NotAWorkingTreeError as e:
            self.exit(return_code=1, message=str(e))
        finally:
            await self.tracker.aclose()

    @work(group="mutations")
    async def run_mutation(self, action: Awaitable[None], success: str) -> None:
        """Await a story mutation, reporting the outcome as a notification."""
        try:
            await action
        except TrackerError as e:
            logger.warning("Mutation failed: %s", e)
            self.notify(f"Update failed: {e}", severity="error")
            return
        self.notify(success)

    def action_sync_now(self) -> None:
        self.change_events.trigger()
