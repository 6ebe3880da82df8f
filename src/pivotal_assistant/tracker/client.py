"""TrackerClient - Async client for the Pivotal Tracker v5 REST API."""

from __future__ import annotations

from typing import Any

import httpx

from pivotal_assistant.logging import get_logger, sanitize_for_log
from pivotal_assistant.tracker.exceptions import TrackerError, TrackerRequestError
from pivotal_assistant.tracker.models import Project, Story, Task

logger = get_logger("tracker")

DEFAULT_BASE_URL = "https://www.pivotaltracker.com/services/v5"

# One request returns the whole snapshot, nested resources included
STORY_FIELDS = ",".join(
    [
        "id",
        "name",
        "description",
        "story_type",
        "current_state",
        "estimate",
        "url",
        "labels(id,name)",
        "tasks(id,description,complete,position)",
        "comments(id,text,created_at,person(id,name),file_attachments(id,filename,download_url))",
    ]
)


class TrackerClient:
    """Client for the Pivotal Tracker REST API.

    Every failure is raised as a TrackerError: error statuses as
    TrackerRequestError, transport and decoding problems as plain TrackerError.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            token: Pivotal Tracker API token
            base_url: API root (for testing)
            timeout: Request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "X-TrackerToken": self.token,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> TrackerClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON answer.

        Returns:
            Decoded body, or None when the body is empty.

        Raises:
            TrackerRequestError: If the tracker answers with status >= 400
            TrackerError: On network failure or an undecodable body
        """
        logger.debug("%s %s", method, path)
        try:
            response = await self.client.request(method, path, json=body, params=params)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, sanitize_for_log(str(e)))
            raise TrackerError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            message = f"Request returned {response.status_code}"
            detail = _error_detail(response)
            if detail:
                message = f"{message}: {detail}"
            logger.warning("%s %s -> %s", method, path, sanitize_for_log(message))
            raise TrackerRequestError(response.status_code, message)

        if not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TrackerError(f"Malformed response from {path}: {e}") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self._request("POST", path, body=body)

    async def put(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self._request("PUT", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def fetch_story(self, project_id: int, story_id: str) -> Story:
        """Fetch a full story snapshot.

        Args:
            project_id: Tracker project id
            story_id: Story id

        Returns:
            Story with labels, tasks and comments
        """
        data = await self.get(
            f"/projects/{project_id}/stories/{story_id}",
            params={"fields": STORY_FIELDS},
        )
        if not isinstance(data, dict):
            raise TrackerError(f"Story #{story_id} returned no data")
        return Story.from_api(data)

    async def list_projects(self) -> list[Project]:
        """List the projects the token's owner belongs to."""
        data = await self.get("/me", params={"fields": "projects"})
        if not isinstance(data, dict):
            raise TrackerError("Profile returned no data")
        projects = [Project.from_api(item) for item in data.get("projects") or []]
        logger.info("Found %d project(s)", len(projects))
        return projects

    async def update_story_state(self, project_id: int, story_id: str, state: str) -> None:
        """Move a story to a new lifecycle state."""
        logger.info("Moving story #%s to %s", story_id, state)
        await self.put(
            f"/projects/{project_id}/stories/{story_id}",
            {"current_state": state},
        )

    async def create_task(self, project_id: int, story_id: str, description: str) -> Task:
        """Append a task to a story's checklist."""
        logger.info("Adding task to story #%s", story_id)
        data = await self.post(
            f"/projects/{project_id}/stories/{story_id}/tasks",
            {"description": description},
        )
        if not isinstance(data, dict):
            raise TrackerError(f"Task creation on story #{story_id} returned no data")
        return Task.from_api(data)

    async def update_task(
        self,
        project_id: int,
        story_id: str,
        task_id: int,
        description: str | None = None,
        complete: bool | None = None,
    ) -> None:
        """Change a task's description and/or completion flag."""
        body: dict[str, Any] = {}
        if description is not None:
            body["description"] = description
        if complete is not None:
            body["complete"] = complete
        logger.info("Updating task %s on story #%s", task_id, story_id)
        await self.put(f"/projects/{project_id}/stories/{story_id}/tasks/{task_id}", body)

    async def delete_task(self, project_id: int, story_id: str, task_id: int) -> None:
        logger.info("Deleting task %s on story #%s", task_id, story_id)
        await self.delete(f"/projects/{project_id}/stories/{story_id}/tasks/{task_id}")

    async def post_comment(self, project_id: int, story_id: str, text: str) -> None:
        logger.info("Posting comment on story #%s", story_id)
        await self.post(
            f"/projects/{project_id}/stories/{story_id}/comments",
            {"text": text},
        )


def _error_detail(response: httpx.Response) -> str:
    """Pull the human readable part out of a tracker error body."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    return str(data.get("general_problem") or data.get("error") or "")
