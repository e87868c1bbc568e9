"""RexClient - Main API for the REX cloud.

Ties together authentication, the authenticated executor and the resource
clients.

Example:
    >>> with RexClient() as client:
    ...     client.login("<ClientId>", "<ClientSecret>")
    ...     for project in client.list_projects():
    ...         print(project.id, project.name)
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import certifi
import httpx

from rexclient.auth import AccessToken, TokenProvider
from rexclient.config import Settings, get_settings
from rexclient.exceptions import AuthenticationError
from rexclient.files import ProjectFileClient
from rexclient.projects import ProjectClient
from rexclient.references import ReferenceClient
from rexclient.transport import HttpExecutor
from rexclient.users import UserClient

if TYPE_CHECKING:
    from rexclient.models import (
        ProjectAddress,
        ProjectFile,
        ProjectSummary,
        ProjectTransformation,
        User,
    )


class RexClient:
    """Client for one REX installation.

    One instance holds one access token. It is not meant to be shared
    between threads that may log in concurrently; use one client per worker.

    Attributes:
        user: The logged-in user, set by login() and with_token().
        users: User lookups.
        projects: Project operations.
        references: Reference operations.
        files: Project file operations.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection settings; defaults to the REX_* environment.
            http_client: Client to send requests with. A client passed in is
                not closed by close().
        """
        self.settings = settings or get_settings()
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            verify=certifi.where(),
            timeout=self.settings.timeout,
        )
        self._token_provider = TokenProvider(self.settings, self._http)
        self._executor = HttpExecutor(self._http)

        self.user: User | None = None
        self.references = ReferenceClient(self._executor, self.settings)
        self.users = UserClient(self._executor, self.settings)
        self.projects = ProjectClient(self._executor, self.settings, self.references)
        self.files = ProjectFileClient(self._executor, self.settings, self.references)

    @classmethod
    def with_token(
        cls,
        token: AccessToken,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> RexClient:
        """Create a client from an existing token and load the current user.

        Raises:
            AuthenticationError: The token has already expired.
            APIError: The token is no longer accepted.
        """
        client = cls(settings, http_client)
        client.token = token
        client.user = client.users.get_current_user()
        return client

    @property
    def token(self) -> AccessToken | None:
        return self._executor.token

    @token.setter
    def token(self, token: AccessToken | None) -> None:
        self._executor.token = token

    def login(self, client_id: str | None = None, client_secret: str | None = None) -> User:
        """Fetch a new access token and load the current user.

        Credentials default to the configured ``client_id``/``client_secret``.
        If the token request fails, the user endpoint is not called.

        Returns:
            The user the credentials belong to.

        Raises:
            AuthenticationError: The credentials were rejected.
        """
        token = self._token_provider.authenticate(
            client_id or self.settings.client_id,
            client_secret or self.settings.client_secret,
        )
        self.token = token
        self.user = self.users.get_current_user()
        return self.user

    def _require_user(self) -> User:
        if self.user is None:
            raise AuthenticationError("Not logged in. Call login() first.")
        return self.user

    def list_projects(self) -> list[ProjectSummary]:
        """List the projects owned by the logged-in user."""
        return self.projects.list_projects(self._require_user().user_id)

    def create_project(
        self,
        name: str,
        address: ProjectAddress | None = None,
        absolute_transformation: ProjectTransformation | None = None,
    ) -> str:
        """Create a project owned by the logged-in user."""
        return self.projects.create_project(
            self._require_user().user_id, name, address, absolute_transformation
        )

    def upload_project_file(
        self,
        project_id: str,
        name: str,
        file_name: str,
        source: IO[bytes] | bytes,
        transformation: ProjectTransformation | None = None,
    ) -> ProjectFile:
        return self.files.upload_project_file(
            project_id, name, file_name, source, transformation
        )

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> RexClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
