"""Data classes for REX resources.

Wire payloads use camelCase keys and HAL ``_links``/``_embedded`` envelopes;
the classes here expose snake_case fields and plain link strings instead.
``from_dict`` tolerates missing keys (REX omits empty fields), ``to_dict``
produces the shape the API accepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rexclient.links import href, links_map, project_id


@dataclass(frozen=True)
class Rotation:
    """Rotation around the three axes."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rotation:
        return cls(
            x=float(data.get("x") or 0.0),
            y=float(data.get("y") or 0.0),
            z=float(data.get("z") or 0.0),
        )


@dataclass(frozen=True)
class Position:
    """GeoJSON-like point position."""

    coordinates: tuple[float, ...] = (0.0, 0.0, 0.0)
    type: str = "Point"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "coordinates": list(self.coordinates)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Position:
        return cls(
            coordinates=tuple(float(c or 0.0) for c in data.get("coordinates") or ()),
            type=data.get("type") or "Point",
        )


@dataclass(frozen=True)
class ProjectTransformation:
    """Rotation plus position.

    Used for the absolute, relative and file transformation of a reference.
    """

    rotation: Rotation = field(default_factory=Rotation)
    position: Position = field(default_factory=Position)

    def to_dict(self) -> dict[str, Any]:
        return {"rotation": self.rotation.to_dict(), "position": self.position.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectTransformation:
        return cls(
            rotation=Rotation.from_dict(data.get("rotation") or {}),
            position=Position.from_dict(data.get("position") or {}),
        )


@dataclass(frozen=True)
class ProjectAddress:
    """Postal address of a project site."""

    address_line1: str = ""
    address_line2: str = ""
    address_line3: str = ""
    address_line4: str = ""
    postcode: str = ""
    city: str = ""
    region: str = ""
    country: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "addressLine1": self.address_line1,
            "addressLine2": self.address_line2,
            "addressLine3": self.address_line3,
            "addressLine4": self.address_line4,
            "postcode": self.postcode,
            "city": self.city,
            "region": self.region,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectAddress:
        return cls(
            address_line1=data.get("addressLine1") or "",
            address_line2=data.get("addressLine2") or "",
            address_line3=data.get("addressLine3") or "",
            address_line4=data.get("addressLine4") or "",
            postcode=data.get("postcode") or "",
            city=data.get("city") or "",
            region=data.get("region") or "",
            country=data.get("country") or "",
        )


def _optional(data: dict[str, Any], key: str, factory: Any) -> Any:
    value = data.get(key)
    if isinstance(value, dict):
        return factory(value)
    return None


@dataclass(frozen=True)
class User:
    """Snapshot of a REX user record.

    The self link is needed by other operations (e.g. as project owner
    reference) and is taken from the ``user`` relation, falling back to
    ``self``.
    """

    user_id: str
    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    last_login: str = ""
    roles: tuple[str, ...] = ()
    self_link: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            user_id=data.get("userId") or "",
            username=data.get("username") or "",
            email=data.get("email") or "",
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            last_login=data.get("lastLogin") or "",
            roles=tuple(data.get("roles") or ()),
            self_link=href(data, "user") or href(data, "self"),
        )


@dataclass(frozen=True)
class ProjectSummary:
    """Entry of a project list; ``id`` is derived from the self link."""

    id: str
    name: str
    owner: str
    self_link: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectSummary:
        self_link = href(data, "self")
        return cls(
            id=project_id(self_link),
            name=data.get("name") or "",
            owner=data.get("owner") or "",
            self_link=self_link,
        )


@dataclass(frozen=True)
class FileSummary:
    """A project file as embedded in a project."""

    name: str
    type: str = ""
    file_size: int = 0
    last_modified: str = ""
    self_link: str = ""
    project_link: str = ""
    reference_link: str = ""
    download_link: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileSummary:
        return cls(
            name=data.get("name") or "",
            type=data.get("type") or "",
            file_size=int(data.get("fileSize") or 0),
            last_modified=str(data.get("lastModified") or ""),
            self_link=href(data, "self"),
            project_link=href(data, "project"),
            reference_link=href(data, "rexReference"),
            download_link=href(data, "file.download"),
        )


@dataclass(frozen=True)
class ReferenceSummary:
    """A reference as embedded in a project."""

    key: str
    root_reference: bool = False
    self_link: str = ""
    project_link: str = ""
    parent_link: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReferenceSummary:
        return cls(
            key=data.get("key") or "",
            root_reference=bool(data.get("rootReference", False)),
            self_link=href(data, "self"),
            project_link=href(data, "project"),
            parent_link=href(data, "parentReference"),
        )


@dataclass(frozen=True)
class Project:
    """Full representation of a project including its files and references."""

    name: str
    owner: str
    type: str = ""
    tag_line: str = ""
    description: str = ""
    date_created: str = ""
    created_by: str = ""
    last_updated: str = ""
    updated_by: str = ""
    root_reference: ReferenceSummary | None = None
    files: tuple[FileSummary, ...] = ()
    references: tuple[ReferenceSummary, ...] = ()
    links: dict[str, str] = field(default_factory=dict)

    @property
    def self_link(self) -> str:
        return self.links.get("self", "")

    @property
    def id(self) -> str:
        return project_id(self.self_link)

    @property
    def has_root_reference(self) -> bool:
        return self.root_reference is not None and self.root_reference.root_reference

    @property
    def total_size(self) -> int:
        return sum(f.file_size for f in self.files)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        embedded = data.get("_embedded") or {}
        root = embedded.get("rootRexReference")
        return cls(
            name=data.get("name") or "",
            owner=data.get("owner") or "",
            type=data.get("type") or "",
            tag_line=data.get("tagLine") or "",
            description=data.get("description") or "",
            date_created=str(data.get("dateCreated") or ""),
            created_by=data.get("createdBy") or "",
            last_updated=str(data.get("lastUpdated") or ""),
            updated_by=data.get("updatedBy") or "",
            root_reference=ReferenceSummary.from_dict(root) if isinstance(root, dict) else None,
            files=tuple(FileSummary.from_dict(f) for f in embedded.get("projectFiles") or ()),
            references=tuple(
                ReferenceSummary.from_dict(r) for r in embedded.get("rexReferences") or ()
            ),
            links=links_map(data),
        )


@dataclass(frozen=True)
class Reference:
    """A spatial anchor.

    A project has exactly one root reference (``root_reference`` set, no
    parent); every project file hangs off a non-root reference whose parent
    chain leads back to the root. The two conditions are not checked here.
    """

    key: str
    project_link: str
    root_reference: bool = False
    parent_link: str = ""
    self_link: str = ""
    address: ProjectAddress | None = None
    absolute_transformation: ProjectTransformation | None = None
    relative_transformation: ProjectTransformation | None = None
    file_transformation: ProjectTransformation | None = None

    def to_dict(self) -> dict[str, Any]:
        """Build the create payload; unset optional fields are left out."""
        payload: dict[str, Any] = {
            "project": self.project_link,
            "rootReference": self.root_reference,
            "key": self.key,
        }
        if self.parent_link:
            payload["parentReference"] = self.parent_link
        if self.address is not None:
            payload["address"] = self.address.to_dict()
        if self.absolute_transformation is not None:
            payload["absoluteTransformation"] = self.absolute_transformation.to_dict()
        if self.relative_transformation is not None:
            payload["relativeTransformation"] = self.relative_transformation.to_dict()
        if self.file_transformation is not None:
            payload["fileTransformation"] = self.file_transformation.to_dict()
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reference:
        return cls(
            key=data.get("key") or "",
            project_link=href(data, "project"),
            root_reference=bool(data.get("rootReference", False)),
            parent_link=href(data, "parentReference"),
            self_link=href(data, "self"),
            address=_optional(data, "address", ProjectAddress.from_dict),
            absolute_transformation=_optional(
                data, "absoluteTransformation", ProjectTransformation.from_dict
            ),
            relative_transformation=_optional(
                data, "relativeTransformation", ProjectTransformation.from_dict
            ),
            file_transformation=_optional(
                data, "fileTransformation", ProjectTransformation.from_dict
            ),
        )


@dataclass(frozen=True)
class ProjectFile:
    """A project file record as returned by the project-file endpoint."""

    name: str
    type: str = ""
    file_size: int = 0
    last_modified: str = ""
    self_link: str = ""
    project_link: str = ""
    reference_link: str = ""
    download_link: str = ""
    upload_link: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectFile:
        return cls(
            name=data.get("name") or "",
            type=data.get("type") or "",
            file_size=int(data.get("fileSize") or 0),
            last_modified=str(data.get("lastModified") or ""),
            self_link=href(data, "self"),
            project_link=href(data, "project"),
            reference_link=href(data, "rexReference"),
            download_link=href(data, "file.download"),
            upload_link=href(data, "file.upload"),
        )


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of a file download."""

    path: Path
    bytes_written: int
