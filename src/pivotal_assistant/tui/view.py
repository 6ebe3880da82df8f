"""TextualStoryView - StoryView implementation mounting panels into a container."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widget import Widget

from pivotal_assistant.tui.widgets import MessagePanel, StoryPanel

if TYPE_CHECKING:
    from textual.app import App

    from pivotal_assistant.sync import NavigationState, ViewCallbacks
    from pivotal_assistant.tracker import Story


class TextualStoryView:
    """Mounts one panel at a time into the container matching ``selector``."""

    def __init__(self, app: App, selector: str = "#main") -> None:
        self.app = app
        self.selector = selector

    def _mount(self, panel: Widget) -> Widget:
        self.app.query_one(self.selector).mount(panel)
        return panel

    def show_story(
        self,
        story: Story,
        navigation: NavigationState,
        callbacks: ViewCallbacks,
    ) -> Widget:
        self.app.sub_title = f"#{story.id} {story.name}"
        return self._mount(StoryPanel(story, navigation, callbacks))

    def show_message(self, text: str) -> Widget:
        self.app.sub_title = ""
        return self._mount(MessagePanel(text))

    def destroy(self, handle: Widget) -> None:
        handle.remove()

    def render(self) -> None:
        self.app.refresh()
