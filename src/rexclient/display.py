"""Plain-text tables for users and projects, as printed by the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rexclient.models import Project, ProjectSummary, User

_USER_RULE = "|" + "-" * 79 + "|"
_PROJECT_RULE = "|" + "-" * 90 + "|"
MAX_FILE_NAME = 35


def format_user(user: User) -> str:
    rows = [
        ("UserId", user.user_id),
        ("Username", user.username),
        ("Firstname", user.first_name),
        ("Lastname", user.last_name),
        ("Email", user.email),
        ("LastLogin", user.last_login),
        ("Self", user.self_link),
    ]
    lines = [_USER_RULE]
    lines.extend(f"| {label:<9} | {value:<65} |" for label, value in rows)
    lines.append(_USER_RULE)
    return "\n".join(lines) + "\n"


def format_project(project: Project) -> str:
    """Render a project summary followed by one row per file.

    File sizes are reported in KB; file names are cut to 35 characters.
    """
    rows = [
        ("Name", project.name),
        ("Owner", project.owner),
        ("Type", project.type),
        ("Has root ref", str(project.has_root_reference).lower()),
        ("Total files", str(len(project.files))),
        ("Total refs", str(len(project.references))),
        ("Total size (KB)", str(project.total_size // 1024)),
    ]
    lines = [_PROJECT_RULE]
    lines.extend(f"| {label:<15}| {value:<71} |" for label, value in rows)
    lines.append(_PROJECT_RULE)
    for i, f in enumerate(project.files):
        lines.append(
            f"| {i:>3} | {f.name[:MAX_FILE_NAME]:<35} | {f.file_size:>8} (kb) | {f.last_modified} |"
        )
    lines.append(_PROJECT_RULE)
    return "\n".join(lines) + "\n"


def format_project_list(projects: Iterable[ProjectSummary]) -> str:
    lines = [f"| {'ID':>6} | {'Name':<20} | {'Owner':<15} | {'Self Link':<65} |"]
    lines.extend(
        f"| {p.id:>6} | {p.name:<20} | {p.owner:<15} | {p.self_link:>65} |" for p in projects
    )
    return "\n".join(lines) + "\n"
