"""Project file records and content upload."""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

import httpx

from rexclient.exceptions import APIError
from rexclient.models import ProjectFile, ProjectTransformation
from rexclient.references import ReferenceClient
from rexclient.transport import decode_json, expect_status, json_request

if TYPE_CHECKING:
    from rexclient.config import Settings
    from rexclient.transport import Executor

logger = logging.getLogger(__name__)

PROJECT_FILES_PATH = "/api/v2/projectFiles/"
PROJECTS_PATH = "/api/v2/projects"

# Multipart form field the upload endpoint reads the content from
UPLOAD_FIELD = "file"


class ProjectFileClient:
    """Creates project files and uploads their content."""

    def __init__(
        self,
        executor: Executor,
        settings: Settings,
        references: ReferenceClient | None = None,
    ) -> None:
        self._executor = executor
        self._settings = settings
        self._references = references or ReferenceClient(executor, settings)

    def create_project_file(self, project_link: str, reference_link: str, name: str) -> ProjectFile:
        """Create the record of a project file attached to a reference.

        Raises:
            APIError: The server did not answer 201.
        """
        payload = {"name": name, "project": project_link, "rexReference": reference_link}
        response = self._executor.execute(
            json_request("POST", self._settings.url(PROJECT_FILES_PATH), payload)
        )
        expect_status(response, 201, message="Cannot create project file")
        return ProjectFile.from_dict(decode_json(response))

    def upload_content(self, upload_link: str, file_name: str, source: IO[bytes] | bytes) -> None:
        """Send file content as multipart/form-data to an upload link.

        A file object is streamed by httpx chunk by chunk rather than read
        into memory first. ``file_name`` is used by the server to detect the
        content type.
        """
        request = httpx.Request("POST", upload_link, files={UPLOAD_FIELD: (file_name, source)})
        response = self._executor.execute(request)
        expect_status(response, message="Cannot upload file content")

    def upload_project_file(
        self,
        project_id: str,
        name: str,
        file_name: str,
        source: IO[bytes] | bytes,
        transformation: ProjectTransformation | None = None,
    ) -> ProjectFile:
        """Add a file to a project.

        Steps, each depending on the previous one:

        1. Look up the project's root reference.
        2. Create a child reference of the root carrying ``transformation``.
        3. Create the project-file record attached to that reference.
        4. Upload the content to the record's upload link.

        The first failing step aborts the sequence. Records created by
        earlier steps are not removed.

        Args:
            project_id: The project ID (e.g. "1020").
            name: Display name of the file.
            file_name: File name including suffix, used for mimetype detection.
            source: Binary file object or bytes with the content.
            transformation: Placement of the file relative to the root reference.

        Returns:
            The created project file.

        Raises:
            NotFoundError: The project has no root reference.
            APIError: Any step was answered with an unexpected status.
        """
        root = self._references.get_root_reference(project_id)
        project_link = f"{self._settings.url(PROJECTS_PATH)}/{project_id}"

        reference = self._references.create_reference(
            project_link,
            parent_link=root.self_link,
            file_transformation=transformation,
        )
        if not reference.self_link:
            raise APIError(201, message="Created reference has no self link")

        project_file = self.create_project_file(project_link, reference.self_link, name)
        if not project_file.upload_link:
            raise APIError(201, message="Created project file has no upload link")

        logger.debug("Uploading %s to %s", file_name, project_file.upload_link)
        self.upload_content(project_file.upload_link, file_name, source)
        return project_file
