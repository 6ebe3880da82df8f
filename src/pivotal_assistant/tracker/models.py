"""Data models for Tracker resources.

Snapshots are frozen and use tuples for ordered collections, so two
snapshots compare equal only when every field and every sequence order match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pivotal_assistant.tracker.exceptions import TrackerError


@dataclass(frozen=True)
class Label:
    """A story label."""

    name: str
    id: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Label:
        try:
            return cls(name=data["name"], id=data.get("id"))
        except (KeyError, TypeError) as e:
            raise TrackerError(f"Malformed label: {data!r}") from e


@dataclass(frozen=True)
class Task:
    """A checklist task on a story."""

    id: int
    description: str
    complete: bool = False
    position: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Task:
        try:
            return cls(
                id=data["id"],
                description=data["description"],
                complete=bool(data.get("complete", False)),
                position=data.get("position"),
            )
        except (KeyError, TypeError) as e:
            raise TrackerError(f"Malformed task: {data!r}") from e


@dataclass(frozen=True)
class FileAttachment:
    """A file attached to a comment."""

    filename: str
    download_url: str | None = None
    id: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> FileAttachment:
        try:
            return cls(
                filename=data["filename"],
                download_url=data.get("download_url"),
                id=data.get("id"),
            )
        except (KeyError, TypeError) as e:
            raise TrackerError(f"Malformed file attachment: {data!r}") from e


@dataclass(frozen=True)
class Comment:
    """A story comment."""

    id: int
    created_at: str
    author: str
    text: str = ""
    attachments: tuple[FileAttachment, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Comment:
        try:
            person = data.get("person") or {}
            return cls(
                id=data["id"],
                created_at=data["created_at"],
                author=person.get("name") or "Unknown",
                text=data.get("text") or "",
                attachments=tuple(
                    FileAttachment.from_api(item) for item in data.get("file_attachments") or []
                ),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise TrackerError(f"Malformed comment: {data!r}") from e


@dataclass(frozen=True)
class Story:
    """Full snapshot of a story with its nested resources."""

    id: int
    name: str
    story_type: str
    current_state: str
    estimate: float | None = None
    description: str = ""
    url: str | None = None
    labels: tuple[Label, ...] = ()
    tasks: tuple[Task, ...] = ()
    comments: tuple[Comment, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Story:
        """Decode a story payload fetched with nested labels, tasks and comments.

        Raises:
            TrackerError: If required fields are missing.
        """
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                story_type=data["story_type"],
                current_state=data["current_state"],
                estimate=data.get("estimate"),
                description=data.get("description") or "",
                url=data.get("url"),
                labels=tuple(Label.from_api(item) for item in data.get("labels") or []),
                tasks=tuple(Task.from_api(item) for item in data.get("tasks") or []),
                comments=tuple(Comment.from_api(item) for item in data.get("comments") or []),
            )
        except (KeyError, TypeError) as e:
            raise TrackerError(f"Malformed story payload: {e}") from e


@dataclass(frozen=True)
class Project:
    """A project the token's owner is a member of."""

    id: int
    name: str
    role: str | None = field(default=None, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Project:
        """Decode a membership summary from /me."""
        try:
            return cls(id=data["project_id"], name=data["project_name"], role=data.get("role"))
        except (KeyError, TypeError) as e:
            raise TrackerError(f"Malformed project: {data!r}") from e
