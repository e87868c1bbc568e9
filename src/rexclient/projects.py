"""Project listing, retrieval, creation and file download."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

from rexclient.exceptions import APIError, TransportError
from rexclient.links import filename_from_disposition, href
from rexclient.models import (
    DownloadResult,
    Project,
    ProjectAddress,
    ProjectSummary,
    ProjectTransformation,
)
from rexclient.references import ReferenceClient
from rexclient.transport import decode_json, expect_status, json_request

if TYPE_CHECKING:
    from rexclient.config import Settings
    from rexclient.transport import Executor

logger = logging.getLogger(__name__)

PROJECTS_PATH = "/api/v2/projects"
FIND_BY_OWNER_PATH = "/api/v2/projects/search/findAllByOwner"

# Download links serve arbitrary content, not only JSON
DOWNLOAD_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
CHUNK_SIZE = 64 * 1024


class ProjectClient:
    """Lists, reads and creates projects."""

    def __init__(
        self,
        executor: Executor,
        settings: Settings,
        references: ReferenceClient | None = None,
    ) -> None:
        self._executor = executor
        self._settings = settings
        self._references = references or ReferenceClient(executor, settings)

    def project_link(self, project_id: str) -> str:
        """Build the self link of a project from its ID."""
        return f"{self._settings.url(PROJECTS_PATH)}/{project_id}"

    def list_projects(self, owner_id: str) -> list[ProjectSummary]:
        """List the projects of an owner.

        Only names and links are returned; use get_project for the content.
        """
        response = self._executor.execute(
            httpx.Request(
                "GET",
                self._settings.url(FIND_BY_OWNER_PATH),
                params={"owner": owner_id},
            )
        )
        expect_status(response, 200)
        embedded = decode_json(response).get("_embedded") or {}
        return [ProjectSummary.from_dict(p) for p in embedded.get("projects") or ()]

    def get_project(self, project_id: str) -> Project:
        """Fetch a project with its embedded files and references."""
        response = self._executor.execute(httpx.Request("GET", self.project_link(project_id)))
        expect_status(response, 200)
        return Project.from_dict(decode_json(response))

    def create_project(
        self,
        owner_id: str,
        name: str,
        address: ProjectAddress | None = None,
        absolute_transformation: ProjectTransformation | None = None,
    ) -> str:
        """Create a project together with its root reference.

        The project is created first; its self link then anchors a new root
        reference carrying the optional address and transformation. If the
        second call fails the project stays on the server.

        Returns:
            Self link of the new project.

        Raises:
            APIError: Either call did not answer 201.
        """
        response = self._executor.execute(
            json_request(
                "POST",
                self._settings.url(PROJECTS_PATH),
                {"name": name, "owner": owner_id},
            )
        )
        expect_status(response, 201, message="Cannot create project")

        project_link = href(decode_json(response), "self")
        if not project_link:
            raise APIError(response.status_code, message="Created project has no self link")
        logger.debug("Created project %s (%s)", name, project_link)

        self._references.create_reference(
            project_link,
            root=True,
            address=address,
            absolute_transformation=absolute_transformation,
        )
        return project_link

    def download_file(self, link: str, directory: str | Path = ".") -> DownloadResult:
        """Download a file link (e.g. a project file's download link).

        The local file name is the one suggested by the server's
        Content-Disposition header, or ``default.dat``. The body is streamed
        to disk.

        Args:
            link: Absolute download URL.
            directory: Where to create the file.

        Returns:
            DownloadResult with the written path and its size.
        """
        request = httpx.Request("GET", link, headers={"Accept": DOWNLOAD_ACCEPT})
        response = self._executor.execute(request, stream=True)
        try:
            expect_status(response, 200, message="Cannot download file")

            file_name = filename_from_disposition(response.headers.get("Content-Disposition"))
            path = Path(directory) / file_name
            written = 0
            try:
                with path.open("wb") as output:
                    for chunk in response.iter_bytes(CHUNK_SIZE):
                        output.write(chunk)
                        written += len(chunk)
            except httpx.TransportError as e:
                # Never leave a truncated file behind
                path.unlink(missing_ok=True)
                raise TransportError(f"Download of {link} interrupted: {e}") from e
        finally:
            response.close()

        logger.debug("%d bytes downloaded and stored in %s", written, path)
        return DownloadResult(path=path, bytes_written=written)
