"""Unit tests for StoryActions."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from pivotal_assistant.sync import StoryActions, ViewCallbacks
from pivotal_assistant.tracker import Task, TrackerRequestError
from pivotal_assistant.workflow import next_transition


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock TrackerClient."""
    return AsyncMock()


@pytest.fixture
def on_change() -> MagicMock:
    """Stand-in for the manual trigger."""
    return MagicMock()


@pytest.fixture
def actions(mock_client: AsyncMock, on_change: MagicMock) -> StoryActions:
    return StoryActions(mock_client, project_id=7, story_id="183456789", on_change=on_change)


@pytest.mark.unit
class TestAdvanceState:
    """Tests for advance_state."""

    @pytest.mark.asyncio
    async def test_sends_target_state_then_triggers(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.advance_state(next_transition("bug", "started"))

        mock_client.update_story_state.assert_awaited_once_with(7, "183456789", "finished")
        on_change.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_inert_transition_is_ignored(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.advance_state(next_transition("feature", "accepted", 2))

        mock_client.update_story_state.assert_not_awaited()
        on_change.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_propagates_without_refresh(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        mock_client.update_story_state.side_effect = TrackerRequestError(500, "boom")

        with pytest.raises(TrackerRequestError):
            await actions.advance_state(next_transition("chore", "unstarted"))

        on_change.assert_not_called()


@pytest.mark.unit
class TestTaskActions:
    """Tests for checklist actions."""

    @pytest.mark.asyncio
    async def test_toggle_flips_completion(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.toggle_task(Task(id=11, description="Design", complete=True))

        mock_client.update_task.assert_awaited_once_with(7, "183456789", 11, complete=False)
        on_change.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_save_task(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.save_task(11, "Design v2")

        mock_client.update_task.assert_awaited_once_with(
            7, "183456789", 11, description="Design v2"
        )
        on_change.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_add_task(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.add_task("Write tests")

        mock_client.create_task.assert_awaited_once_with(7, "183456789", "Write tests")
        on_change.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_delete_task(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.delete_task(11)

        mock_client.delete_task.assert_awaited_once_with(7, "183456789", 11)
        on_change.assert_called_once_with()


@pytest.mark.unit
class TestPostComment:
    """Tests for post_comment."""

    @pytest.mark.asyncio
    async def test_posts_and_triggers(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.post_comment("Ready for review")

        mock_client.post_comment.assert_awaited_once_with(7, "183456789", "Ready for review")
        on_change.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_blank_comment_not_sent(
        self, actions: StoryActions, mock_client: AsyncMock, on_change: MagicMock
    ) -> None:
        await actions.post_comment("   ")

        mock_client.post_comment.assert_not_awaited()
        on_change.assert_not_called()


@pytest.mark.unit
class TestAsCallbacks:
    """Tests for as_callbacks."""

    def test_bundles_actions(self, actions: StoryActions, on_change: MagicMock) -> None:
        callbacks = actions.as_callbacks()

        assert isinstance(callbacks, ViewCallbacks)
        assert callbacks.refresh is on_change
        assert callbacks.post_comment == actions.post_comment
        assert callbacks.toggle_task == actions.toggle_task
