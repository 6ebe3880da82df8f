"""Rich markup for story content."""

from __future__ import annotations

from datetime import datetime

from rich.markup import escape

from pivotal_assistant.tracker import Comment, Story, Task


def format_timestamp(value: str) -> str:
    """Shorten an ISO-8601 timestamp for display; unparseable values pass through."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M")


def format_estimate(story: Story) -> str:
    if story.estimate is None:
        return "unestimated" if story.story_type == "feature" else ""
    points = int(story.estimate) if float(story.estimate).is_integer() else story.estimate
    return f"{points} pt" if points == 1 else f"{points} pts"


def format_title(story: Story) -> str:
    details = [story.story_type, story.current_state, format_estimate(story)]
    return f"[b]#{story.id} {escape(story.name)}[/b]\n" + " · ".join(
        escape(part) for part in details if part
    )


def format_task(task: Task) -> str:
    mark = "✔" if task.complete else "○"
    return f"{mark} {escape(task.description)}"


def format_comment(comment: Comment) -> str:
    lines = [f"[b]{escape(comment.author)}[/b] [dim]{format_timestamp(comment.created_at)}[/dim]"]
    if comment.text:
        lines.append(escape(comment.text))
    for attachment in comment.attachments:
        lines.append(f"[i]attachment:[/i] {escape(attachment.filename)}")
    return "\n".join(lines)


def format_details(story: Story) -> str:
    """Description, labels and link of a story."""
    lines = []
    if story.labels:
        lines.append("[b]Labels:[/b] " + ", ".join(escape(label.name) for label in story.labels))
    if story.url:
        lines.append(f"[b]URL:[/b] {escape(story.url)}")
    lines.append("")
    lines.append(escape(story.description) if story.description else "[dim]No description[/dim]")
    return "\n".join(lines)
