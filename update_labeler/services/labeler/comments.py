"""Rendering of the update-request comment posted on stale issues."""

from collections.abc import Iterable
from datetime import datetime
from importlib.resources import files
from pathlib import Path
from string import Template
from zoneinfo import ZoneInfo

DEFAULT_TEMPLATE = "update_instructions.md"


def load_template(path: str | None = None) -> str:
    """Read the comment template from path, or the packaged default."""
    if path:
        return Path(path).read_text(encoding="utf-8")
    return (files("update_labeler") / "templates" / DEFAULT_TEMPLATE).read_text(encoding="utf-8")


def format_assignees(assignees: Iterable[str]) -> str:
    """Format logins as GitHub mentions: "@alice, @bob"."""
    return ", ".join(f"@{login}" for login in assignees)


def format_cutoff(cutoff: datetime, timezone: str) -> str:
    """Format a cutoff like "Friday, October 9, 2026 at 4:30 PM PDT"."""
    local = cutoff.astimezone(ZoneInfo(timezone))
    hour = local.hour % 12 or 12
    return (
        f"{local:%A, %B} {local.day}, {local.year} "
        f"at {hour}:{local:%M %p} {local.tzname()}"
    )


def render_update_comment(
    assignees: Iterable[str],
    label: str,
    cutoff: datetime,
    template: str | None = None,
    timezone: str = "America/Los_Angeles",
) -> str:
    """
    Fill the update-request template.

    Placeholders: $assignees, $label, $cutoff_time. Unknown placeholders are
    left as-is.
    """
    text = template if template is not None else load_template()
    return Template(text).safe_substitute(
        assignees=format_assignees(assignees),
        label=label,
        cutoff_time=format_cutoff(cutoff, timezone),
    )
