"""CLI entry point for Pivotal Assistant.

Run from the root of a git repository whose branch names end in a story id:

    pivotal-assistant            interactive view of the current story
    pivotal-assistant status     one-shot summary for scripts
    pivotal-assistant setup      re-enter the API token and project
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import replace
from pathlib import Path

import click

from pivotal_assistant import __version__
from pivotal_assistant.config import (
    ConfigError,
    ProjectConfig,
    UserConfig,
    load_project_config,
    load_user_config,
    save_project_config,
    save_user_config,
)
from pivotal_assistant.git_head import NotAWorkingTreeError, read_head, resolve_story_id
from pivotal_assistant.logging import get_logger, setup_logging
from pivotal_assistant.sync import NO_STORY_MESSAGE, fetch_error_message
from pivotal_assistant.tracker import Project, Story, TrackerClient, TrackerError
from pivotal_assistant.workflow import transition_for

logger = get_logger("cli")


async def _list_projects(user_config: UserConfig) -> list[Project]:
    async with TrackerClient(user_config.token, base_url=user_config.api_url) as client:
        return await client.list_projects()


async def _fetch_story(user_config: UserConfig, project_id: int, story_id: str) -> Story:
    async with TrackerClient(user_config.token, base_url=user_config.api_url) as client:
        return await client.fetch_story(project_id, story_id)


def ask_user_config(force: bool = False) -> UserConfig:
    """Load the user configuration, prompting for the token when needed.

    Args:
        force: Prompt even if a token is already configured.

    Returns:
        Usable user configuration (saved if a token was entered).
    """
    existing: UserConfig | None = None
    try:
        existing = load_user_config()
    except ConfigError as e:
        logger.info("No usable user configuration: %s", e)

    if existing is not None and not force:
        return existing

    token = click.prompt("Pivotal tracker API key", hide_input=True).strip()
    config = replace(existing, token=token) if existing else UserConfig(token=token)
    path = save_user_config(config)
    click.echo(f"Saved token to {path}")
    return config


def choose_project(user_config: UserConfig, repo_path: Path, force: bool = False) -> int:
    """Resolve the project for this repository, prompting when needed.

    A configured project is only accepted if the token can still see it.

    Returns:
        Project id.

    Raises:
        click.ClickException: If projects cannot be listed or none exist.
    """
    try:
        projects = asyncio.run(_list_projects(user_config))
    except TrackerError as e:
        raise click.ClickException(
            f"Could not list projects: {e}. Run 'pivotal-assistant setup' to change the token."
        ) from e

    if not force:
        try:
            configured = load_project_config(repo_path)
        except ConfigError as e:
            logger.info("No usable project configuration: %s", e)
        else:
            if any(project.id == configured.project_id for project in projects):
                return configured.project_id
            click.echo(f"Project {configured.project_id} is not available with this token.")

    if not projects:
        raise click.ClickException("No projects available for this token")

    click.echo("Choose your project for this repo")
    for index, project in enumerate(projects, start=1):
        click.echo(f"  {index}. {project.name}")
    choice = click.prompt("Project", type=click.IntRange(1, len(projects)))
    project = projects[choice - 1]
    save_project_config(ProjectConfig(project_id=project.id), repo_path)
    click.echo(f"Using project {project.name}")
    return project.id


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pivotal-assistant")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root of the git working tree",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@click.pass_context
def main(ctx: click.Context, repo_path: Path, verbose: bool) -> None:
    """Pivotal Tracker companion for the story on the current git branch."""
    setup_logging(level="DEBUG" if verbose else None)
    ctx.obj = {"repo_path": repo_path}

    try:
        read_head(repo_path)
    except NotAWorkingTreeError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if ctx.invoked_subcommand is not None:
        return

    user_config = ask_user_config()
    project_id = choose_project(user_config, repo_path)

    from pivotal_assistant.tui import AssistantApp  # noqa: PLC0415

    app = AssistantApp(user_config, project_id, repo_path)
    app.run()
    sys.exit(app.return_code or 0)


@main.command()
@click.pass_context
def setup(ctx: click.Context) -> None:
    """Enter the API token and choose the project again."""
    repo_path: Path = ctx.obj["repo_path"]
    user_config = ask_user_config(force=True)
    choose_project(user_config, repo_path, force=True)


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Print the current story and its next transition."""
    repo_path: Path = ctx.obj["repo_path"]
    try:
        user_config = load_user_config()
        project_config = load_project_config(repo_path)
    except ConfigError as e:
        raise click.ClickException(f"{e}. Run 'pivotal-assistant setup' first.") from e

    try:
        story_id = resolve_story_id(read_head(repo_path))
    except NotAWorkingTreeError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if story_id is None:
        click.echo(NO_STORY_MESSAGE)
        return

    try:
        story = asyncio.run(_fetch_story(user_config, project_config.project_id, story_id))
    except TrackerError as e:
        click.echo(fetch_error_message(story_id, e), err=True)
        sys.exit(2)

    transition = transition_for(story)
    done = sum(1 for task in story.tasks if task.complete)
    click.echo(f"#{story.id} {story.name}")
    click.echo(f"Type: {story.story_type}")
    click.echo(f"State: {story.current_state}")
    if story.estimate is not None:
        click.echo(f"Estimate: {story.estimate}")
    click.echo(f"Tasks: {done}/{len(story.tasks)}")
    click.echo(f"Comments: {len(story.comments)}")
    next_action = transition.label if transition.actionable else f"{transition.label} (unavailable)"
    click.echo(f"Next: {next_action}")


if __name__ == "__main__":
    main()
