"""Domain entities for GitHub repositories and the apps catalog."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class AccountKind(str, Enum):
    """Kind of GitHub account that owns repositories."""

    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"


@dataclass(frozen=True)
class Account:
    """GitHub account whose Pages repositories are discovered."""

    name: str
    kind: AccountKind
    token: str

    @property
    def root_site_name(self) -> str:
        """Name of the repository that hosts the account's root Pages site."""
        return f"{self.name}.github.io"

    @property
    def pages_domain(self) -> str:
        return f"https://{self.name.lower()}.github.io"


@dataclass(frozen=True)
class RepositorySummary:
    """Repository as returned by the listing call."""

    name: str
    has_pages: bool
    updated_at: str
    html_url: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RepositorySummary":
        return cls(
            name=data["name"],
            has_pages=bool(data.get("has_pages")),
            updated_at=data.get("updated_at") or "",
            html_url=data.get("html_url") or "",
        )


@dataclass(frozen=True)
class RepositoryDetail:
    """Immutable snapshot of a single repository."""

    name: str
    description: Optional[str]
    language: Optional[str]
    topics: List[str]
    stars: int
    forks: int
    updated_at: str
    html_url: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RepositoryDetail":
        return cls(
            name=data["name"],
            description=data.get("description"),
            language=data.get("language"),
            topics=list(data.get("topics") or []),
            stars=data.get("stargazers_count", 0),
            forks=data.get("forks_count", 0),
            updated_at=data.get("updated_at") or "",
            html_url=data["html_url"],
        )


class ManifestParseError(ValueError):
    """Raised when a package.json cannot be read as a JSON object."""
    pass


@dataclass(frozen=True)
class PackageManifest:
    """Typed view over the dependency maps of a package.json."""

    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> "PackageManifest":
        """
        Parse package.json text.

        Raises:
            ManifestParseError: If the text is not valid JSON or not an object
        """
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ManifestParseError(f"Invalid package.json: {e}") from e

        if not isinstance(data, dict):
            raise ManifestParseError("package.json is not a JSON object")

        return cls(
            dependencies=_dependency_map(data.get("dependencies")),
            dev_dependencies=_dependency_map(data.get("devDependencies")),
        )

    def has_dependency(self, name: str) -> bool:
        """Whether `name` is a runtime or development dependency."""
        return name in self.dependencies or name in self.dev_dependencies


def _dependency_map(value: Any) -> Dict[str, str]:
    # Malformed sections are treated as empty rather than as a parse failure
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


@dataclass(frozen=True)
class AppEntry:
    """A single app in the catalog."""

    name: str
    description: str
    url: str
    repository: str
    screenshot: str
    tags: List[str]
    language: str
    stars: int
    forks: int
    updated_at: str
    contributors: int
    is_electron_app: bool
    organization: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the catalog's camelCase field names."""
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "repository": self.repository,
            "screenshot": self.screenshot,
            "tags": list(self.tags),
            "language": self.language,
            "stars": self.stars,
            "forks": self.forks,
            "updatedAt": self.updated_at,
            "contributors": self.contributors,
            "isElectronApp": self.is_electron_app,
            "organization": self.organization,
        }

    @property
    def updated_at_datetime(self) -> datetime:
        return parse_timestamp(self.updated_at)


@dataclass(frozen=True)
class Catalog:
    """The apps catalog written by discovery."""

    last_updated: str
    apps: List[AppEntry]

    @property
    def total_apps(self) -> int:
        return len(self.apps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lastUpdated": self.last_updated,
            "totalApps": self.total_apps,
            "apps": [app.to_dict() for app in self.apps],
        }


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp as returned by GitHub.

    Naive values (e.g. a bare date) are taken to be UTC so they compare
    against GitHub's zone-aware timestamps. Empty values sort oldest.
    """
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)

    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a UTC datetime the way the catalog stores `lastUpdated`."""
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
