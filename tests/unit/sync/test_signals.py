"""Unit tests for ChangeEventSource."""

import asyncio
from pathlib import Path

import pytest

from pivotal_assistant.sync import ChangeEventSource, ChangeTrigger, SyncError


@pytest.fixture
def head_file(tmp_path: Path) -> Path:
    path = tmp_path / "HEAD"
    path.write_text("ref: refs/heads/main\n")
    return path


def _other_tasks() -> set[asyncio.Task]:
    return asyncio.all_tasks() - {asyncio.current_task()}


@pytest.mark.unit
class TestManualTrigger:
    """Tests for the manual trigger."""

    @pytest.mark.asyncio
    async def test_manual_trigger_resolves_wait(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=60)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0)

        source.trigger()
        trigger = await asyncio.wait_for(waiter, timeout=1.0)

        assert trigger == ChangeTrigger.MANUAL

    @pytest.mark.asyncio
    async def test_losers_are_torn_down(self, head_file: Path) -> None:
        """No watcher or timer survives a manual wake-up."""
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=0.01)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0.05)

        source.trigger()
        await asyncio.wait_for(waiter, timeout=1.0)

        assert _other_tasks() == set()
        assert not source.waiting

    @pytest.mark.asyncio
    async def test_trigger_outside_wait_is_noop(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=0.05, poll_interval=60)

        source.trigger()
        trigger = await asyncio.wait_for(source.wait(), timeout=1.0)

        # The early trigger was dropped, so the idle timer decided
        assert trigger == ChangeTrigger.IDLE_TIMEOUT

    @pytest.mark.asyncio
    async def test_slot_rebound_per_wait(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=60)

        for _ in range(2):
            waiter = asyncio.create_task(source.wait())
            await asyncio.sleep(0)
            assert source.waiting
            source.trigger()
            assert await asyncio.wait_for(waiter, timeout=1.0) == ChangeTrigger.MANUAL


@pytest.mark.unit
class TestFilesystemTrigger:
    """Tests for the head file watch."""

    @pytest.mark.asyncio
    async def test_file_write_resolves_wait(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=0.01)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0.03)

        head_file.write_text("ref: refs/heads/feature/add-login-183456789\n")
        trigger = await asyncio.wait_for(waiter, timeout=1.0)

        assert trigger == ChangeTrigger.FILESYSTEM
        assert _other_tasks() == set()

    @pytest.mark.asyncio
    async def test_file_removal_resolves_wait(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=0.01)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0.03)

        head_file.unlink()

        assert await asyncio.wait_for(waiter, timeout=1.0) == ChangeTrigger.FILESYSTEM

    @pytest.mark.asyncio
    async def test_file_creation_resolves_wait(self, tmp_path: Path) -> None:
        path = tmp_path / "HEAD"
        source = ChangeEventSource(path, idle_timeout=60, poll_interval=0.01)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0.03)

        path.write_text("ref: refs/heads/main\n")

        assert await asyncio.wait_for(waiter, timeout=1.0) == ChangeTrigger.FILESYSTEM

    @pytest.mark.asyncio
    async def test_untouched_file_does_not_fire(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=0.2, poll_interval=0.01)

        trigger = await asyncio.wait_for(source.wait(), timeout=1.0)

        assert trigger == ChangeTrigger.IDLE_TIMEOUT


@pytest.mark.unit
class TestIdleTimeout:
    """Tests for the idle timer."""

    @pytest.mark.asyncio
    async def test_idle_timeout_fires(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=0.01, poll_interval=60)

        trigger = await asyncio.wait_for(source.wait(), timeout=1.0)

        assert trigger == ChangeTrigger.IDLE_TIMEOUT
        assert _other_tasks() == set()

    def test_default_idle_timeout(self, head_file: Path) -> None:
        assert ChangeEventSource(head_file).idle_timeout == 120.0


@pytest.mark.unit
class TestSingleWait:
    """Only one wait may be outstanding."""

    @pytest.mark.asyncio
    async def test_concurrent_wait_rejected(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=60)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0)

        with pytest.raises(SyncError):
            await source.wait()

        source.trigger()
        await asyncio.wait_for(waiter, timeout=1.0)

    @pytest.mark.asyncio
    async def test_cancelled_wait_cleans_up(self, head_file: Path) -> None:
        source = ChangeEventSource(head_file, idle_timeout=60, poll_interval=0.01)
        waiter = asyncio.create_task(source.wait())
        await asyncio.sleep(0.02)

        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        assert not source.waiting
        assert _other_tasks() == set()
