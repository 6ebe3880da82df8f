"""Story and message panels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Button,
    Input,
    Label,
    ListItem,
    ListView,
    Static,
    TabbedContent,
    TabPane,
)

from pivotal_assistant.tui.formatting import (
    format_comment,
    format_details,
    format_task,
    format_title,
)
from pivotal_assistant.tui.modals import ConfirmModal, TextPromptModal
from pivotal_assistant.workflow import transition_for

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from pivotal_assistant.sync import NavigationState, ViewCallbacks
    from pivotal_assistant.tracker import Story, Task

TABS = ("tasks", "comments", "details")


class MessagePanel(Vertical):
    """Full-size centered message (no story, fetch errors)."""

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield Static(self.message, id="message", markup=False)


class StoryPanel(Vertical):
    """Story header, lifecycle action and tabbed tasks/comments/details.

    Navigation changes are written back to the shared NavigationState so
    the next rebuild opens on the same tab and task.
    """

    BINDINGS = [
        Binding("space", "toggle_task", "Toggle task"),
        Binding("e", "edit_task", "Edit task"),
        Binding("a", "add_task", "Add task"),
        Binding("d", "delete_task", "Delete task"),
    ]

    def __init__(
        self,
        story: Story,
        navigation: NavigationState,
        callbacks: ViewCallbacks,
    ) -> None:
        super().__init__()
        self.story = story
        self.navigation = navigation
        self.callbacks = callbacks
        self.transition = transition_for(story)

    def compose(self) -> ComposeResult:
        with Horizontal(id="story-header"):
            yield Static(format_title(self.story), id="story-title")
            button = Button(
                self.transition.label,
                id="transition",
                disabled=not self.transition.actionable,
            )
            button.styles.color = self.transition.style.fg
            button.styles.background = self.transition.style.bg
            yield button
        initial = self.navigation.tab if self.navigation.tab in TABS else TABS[0]
        with TabbedContent(initial=initial, id="story-tabs"):
            with TabPane("Tasks", id="tasks"):
                yield ListView(
                    *[ListItem(Label(format_task(task))) for task in self.story.tasks],
                    id="task-list",
                    initial_index=self._initial_task_index(),
                )
            with TabPane("Comments", id="comments"):
                with VerticalScroll(id="comment-list"):
                    for comment in self.story.comments:
                        yield Static(format_comment(comment), classes="comment")
                yield Input(placeholder="Write a comment, Enter to post", id="comment-input")
            with TabPane("Details", id="details"):
                with VerticalScroll():
                    yield Static(format_details(self.story))

    def _initial_task_index(self) -> int | None:
        if not self.story.tasks:
            return None
        return min(max(self.navigation.selected_task, 0), len(self.story.tasks) - 1)

    def _selected_task(self) -> Task | None:
        index = self.query_one("#task-list", ListView).index
        if index is None or not 0 <= index < len(self.story.tasks):
            return None
        return self.story.tasks[index]

    def _mutate(self, action: Awaitable[None], success: str) -> None:
        self.app.run_mutation(action, success)  # type: ignore[attr-defined]

    @on(TabbedContent.TabActivated)
    def remember_tab(self, event: TabbedContent.TabActivated) -> None:
        self.navigation.tab = event.tabbed_content.active

    @on(ListView.Highlighted, "#task-list")
    def remember_task(self, event: ListView.Highlighted) -> None:
        if event.list_view.index is not None:
            self.navigation.selected_task = event.list_view.index

    @on(Button.Pressed, "#transition")
    def advance(self) -> None:
        if not self.transition.actionable:
            return
        self._mutate(
            self.callbacks.advance_state(self.transition),
            f"Story moved to {self.transition.target_state.value}",  # type: ignore[union-attr]
        )

    @on(Input.Submitted, "#comment-input")
    def post_comment(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        if not text:
            return
        event.input.value = ""
        self._mutate(self.callbacks.post_comment(text), "Comment posted")

    def action_toggle_task(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        self._mutate(self.callbacks.toggle_task(task), "Task updated")

    def action_edit_task(self) -> None:
        task = self._selected_task()
        if task is None:
            return

        def handle_description(description: str | None) -> None:
            if description and description != task.description:
                self._mutate(self.callbacks.save_task(task.id, description), "Task saved")

        self.app.push_screen(TextPromptModal("Task:", task.description), handle_description)

    def action_add_task(self) -> None:
        def handle_description(description: str | None) -> None:
            if description:
                self._mutate(self.callbacks.add_task(description), "Task added")

        self.app.push_screen(TextPromptModal("New task:"), handle_description)

    def action_delete_task(self) -> None:
        task = self._selected_task()
        if task is None:
            return

        def handle_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._mutate(self.callbacks.delete_task(task.id), "Task deleted")

        prompt = f"Delete task '{escape(task.description)}'?"
        self.app.push_screen(ConfirmModal(prompt), handle_confirm)
