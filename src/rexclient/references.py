"""Spatial reference (anchor) records."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

import httpx

from rexclient.exceptions import APIError, NotFoundError
from rexclient.models import ProjectAddress, ProjectTransformation, Reference
from rexclient.transport import decode_json, expect_status, json_request

if TYPE_CHECKING:
    from rexclient.config import Settings
    from rexclient.transport import Executor

logger = logging.getLogger(__name__)

REFERENCES_PATH = "/api/v2/rexReferences"
PROJECTS_PATH = "/api/v2/projects"


class ReferenceClient:
    """Creates and reads references."""

    def __init__(self, executor: Executor, settings: Settings) -> None:
        self._executor = executor
        self._settings = settings

    def create_reference(
        self,
        project_link: str,
        *,
        root: bool = False,
        parent_link: str = "",
        key: str | None = None,
        address: ProjectAddress | None = None,
        absolute_transformation: ProjectTransformation | None = None,
        relative_transformation: ProjectTransformation | None = None,
        file_transformation: ProjectTransformation | None = None,
    ) -> Reference:
        """Create a reference inside a project.

        Args:
            project_link: Self link of the owning project.
            root: Mark this as the project's root reference. A root reference
                must not have a parent; this is not checked.
            parent_link: Self link of the parent reference (non-root only).
            key: Reference key; a random UUID when omitted.
            address: Optional site address.
            absolute_transformation: Optional absolute transformation.
            relative_transformation: Optional transformation relative to the parent.
            file_transformation: Optional transformation of an attached file.

        Returns:
            The created reference, including its self link.

        Raises:
            APIError: The server did not answer 201.
        """
        reference = Reference(
            key=key or str(uuid.uuid4()),
            project_link=project_link,
            root_reference=root,
            parent_link=parent_link,
            address=address,
            absolute_transformation=absolute_transformation,
            relative_transformation=relative_transformation,
            file_transformation=file_transformation,
        )
        response = self._executor.execute(
            json_request("POST", self._settings.url(REFERENCES_PATH), reference.to_dict())
        )
        expect_status(response, 201, message="Cannot create reference")

        created = Reference.from_dict(decode_json(response))
        logger.debug("Created reference %s (%s)", reference.key, created.self_link)
        # Echo what we sent when the server omits it from the response
        return Reference(
            key=created.key or reference.key,
            project_link=created.project_link or project_link,
            root_reference=created.root_reference or root,
            parent_link=created.parent_link or parent_link,
            self_link=created.self_link,
            address=created.address or address,
            absolute_transformation=created.absolute_transformation or absolute_transformation,
            relative_transformation=created.relative_transformation or relative_transformation,
            file_transformation=created.file_transformation or file_transformation,
        )

    def get_root_reference(self, project_id: str) -> Reference:
        """Fetch the root reference of a project.

        Raises:
            NotFoundError: The project has no root reference (404).
            APIError: Any other non-200 answer.
        """
        url = f"{self._settings.url(PROJECTS_PATH)}/{project_id}/rootRexReference"
        response = self._executor.execute(httpx.Request("GET", url))
        if response.status_code == 404:
            raise NotFoundError("No project reference is set", body=response.text.strip())
        expect_status(response, 200, message="No project reference is set")

        data = decode_json(response)
        reference = Reference.from_dict(data)
        if not reference.self_link:
            raise APIError(response.status_code, message="Root reference has no self link")
        return reference
