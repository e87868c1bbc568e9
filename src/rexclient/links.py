"""Hyperlink helpers for REX's HAL-style response envelopes.

REX responses identify resources by URL (``_links.<rel>.href``) rather than
by ID. The functions here are the only place that parses those links.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any

DEFAULT_FILENAME = "default.dat"

# RFC 6570 template suffix, e.g. ".../projects/1020{?projection}"
_TEMPLATE_RE = re.compile(r"\{[^}]*\}")
_QUOTED_FILENAME_RE = re.compile(r'filename="([^"]*)"', re.IGNORECASE)
_BARE_FILENAME_RE = re.compile(r"filename=([^;\s]+)", re.IGNORECASE)


def strip_template(link: str) -> str:
    """Remove URI template expressions from a link."""
    return _TEMPLATE_RE.sub("", link)


def href(payload: Any, rel: str) -> str:
    """Return ``payload["_links"][rel]["href"]`` or "" if it is not there.

    Templated links are returned with their template part removed.
    """
    if not isinstance(payload, dict):
        return ""
    links = payload.get("_links")
    if not isinstance(links, dict):
        return ""
    entry = links.get(rel)
    if not isinstance(entry, dict):
        return ""
    value = entry.get("href")
    if not isinstance(value, str):
        return ""
    return strip_template(value)


def links_map(payload: Any) -> dict[str, str]:
    """Collect every ``_links`` relation of a payload into a rel -> href map."""
    if not isinstance(payload, dict) or not isinstance(payload.get("_links"), dict):
        return {}
    return {rel: href(payload, rel) for rel in payload["_links"] if href(payload, rel)}


def resource_id(link: Any, collection: str) -> str:
    """Extract the ID segment following ``/<collection>/`` in a link.

    Examples:
        >>> resource_id("https://rex.example.com/api/v2/projects/1020", "projects")
        '1020'
        >>> resource_id("https://rex.example.com/api/v2/users/current", "projects")
        ''

    Returns:
        The ID, or "" when the link is not a string or has no such segment.
    """
    if not isinstance(link, str) or not link:
        return ""
    path = strip_template(link).split("#", 1)[0].split("?", 1)[0]
    match = re.search(rf"/{re.escape(collection)}/([^/]+)/?$", path)
    if not match:
        return ""
    return match.group(1)


def project_id(link: Any) -> str:
    """Extract the project ID from a project self link."""
    return resource_id(link, "projects")


def filename_from_disposition(header: str | None, default: str = DEFAULT_FILENAME) -> str:
    """Return the file name suggested by a Content-Disposition header.

    Directory components are dropped so the name is always a plain file name.
    """
    if not header:
        return default
    match = _QUOTED_FILENAME_RE.search(header) or _BARE_FILENAME_RE.search(header)
    if not match:
        return default
    name = PureWindowsPath(PurePosixPath(match.group(1)).name).name
    if name in ("", ".", ".."):
        return default
    return name
