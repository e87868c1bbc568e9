"""Client library for the REX augmented-reality cloud API."""

from rexclient.auth import AccessToken, TokenProvider
from rexclient.client import RexClient
from rexclient.config import Settings, get_settings
from rexclient.exceptions import (
    APIError,
    AuthenticationError,
    DecodeError,
    NotFoundError,
    RexError,
    TransportError,
)
from rexclient.files import ProjectFileClient
from rexclient.links import filename_from_disposition, href, project_id, resource_id
from rexclient.models import (
    DownloadResult,
    FileSummary,
    Position,
    Project,
    ProjectAddress,
    ProjectFile,
    ProjectSummary,
    ProjectTransformation,
    Reference,
    ReferenceSummary,
    Rotation,
    User,
)
from rexclient.projects import ProjectClient
from rexclient.references import ReferenceClient
from rexclient.transport import Executor, HttpExecutor
from rexclient.users import UserClient

__all__ = [
    # Client
    "RexClient",
    "Settings",
    "get_settings",
    # Auth and transport
    "AccessToken",
    "TokenProvider",
    "Executor",
    "HttpExecutor",
    # Resource clients
    "UserClient",
    "ProjectClient",
    "ReferenceClient",
    "ProjectFileClient",
    # Models
    "User",
    "Project",
    "ProjectSummary",
    "ProjectAddress",
    "ProjectTransformation",
    "Rotation",
    "Position",
    "Reference",
    "ReferenceSummary",
    "ProjectFile",
    "FileSummary",
    "DownloadResult",
    # Links
    "href",
    "resource_id",
    "project_id",
    "filename_from_disposition",
    # Exceptions
    "RexError",
    "TransportError",
    "AuthenticationError",
    "APIError",
    "NotFoundError",
    "DecodeError",
]
