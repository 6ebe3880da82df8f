"""TUI - Textual front end for the sync loop."""

from pivotal_assistant.tui.app import AssistantApp
from pivotal_assistant.tui.view import TextualStoryView

__all__ = [
    "AssistantApp",
    "TextualStoryView",
]
