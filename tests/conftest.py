"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pivotal_assistant.tracker import Story


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the real home directory and environment."""
    monkeypatch.setenv("PIVOTAL_ASSISTANT_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("PIVOTAL_ASSISTANT_CONFIG", str(tmp_path / "user-config.yaml"))
    monkeypatch.delenv("PIVOTAL_TRACKER_TOKEN", raising=False)
    monkeypatch.delenv("PIVOTAL_ASSISTANT_LOG_LEVEL", raising=False)


@pytest.fixture
def story_payload() -> dict[str, Any]:
    """A story as returned by GET /projects/:id/stories/:id with nested fields."""
    return {
        "kind": "story",
        "id": 183456789,
        "name": "Add login form",
        "description": "Users can log in with email and password.",
        "story_type": "feature",
        "current_state": "started",
        "estimate": 3,
        "url": "https://www.pivotaltracker.com/story/show/183456789",
        "labels": [{"id": 1, "name": "auth"}, {"id": 2, "name": "frontend"}],
        "tasks": [
            {"id": 11, "description": "Design form", "complete": True, "position": 1},
            {"id": 12, "description": "Wire up API", "complete": False, "position": 2},
        ],
        "comments": [
            {
                "id": 21,
                "text": "Mockups attached",
                "created_at": "2024-03-01T10:15:00Z",
                "person": {"id": 5, "name": "Sam Rivera"},
                "file_attachments": [
                    {"id": 31, "filename": "login.png", "download_url": "/file/31"},
                ],
            },
            {
                "id": 22,
                "text": "Looks good",
                "created_at": "2024-03-02T08:00:00Z",
                "person": {"id": 6, "name": "Alex Kim"},
                "file_attachments": [],
            },
        ],
    }


@pytest.fixture
def make_story(story_payload: dict[str, Any]) -> Callable[..., Story]:
    """Build a Story from the sample payload with top-level overrides."""

    def _make(**overrides: Any) -> Story:
        return Story.from_api({**story_payload, **overrides})

    return _make


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A directory with a .git/HEAD on a story branch."""
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)
    (repo / ".git" / "HEAD").write_text("ref: refs/heads/feature/add-login-183456789\n")
    return repo
