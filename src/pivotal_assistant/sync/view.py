"""Interface the sync loop expects from the rendering layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pivotal_assistant.sync.models import NavigationState, ViewCallbacks
    from pivotal_assistant.tracker import Story


class StoryView(Protocol):
    """Builds and tears down views. Handles are opaque to the loop."""

    def show_story(
        self,
        story: Story,
        navigation: NavigationState,
        callbacks: ViewCallbacks,
    ) -> Any: ...

    def show_message(self, text: str) -> Any: ...

    def destroy(self, handle: Any) -> None: ...

    def render(self) -> None: ...
