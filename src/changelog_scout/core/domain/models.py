from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO-8601 timestamp (``2024-05-01T12:00:00Z``) into an aware datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class RepoRef:
    """Identifies a repository on the forge.

    Namespace and project are kept exactly as the user typed them; the API
    handles case folding.
    """
    namespace: str
    project: str

    @property
    def slug(self) -> str:
        """Returns namespace/project format."""
        return f"{self.namespace}/{self.project}"

    @property
    def url(self) -> str:
        """Returns GitHub HTTPS URL."""
        return f"https://github.com/{self.slug}"


@dataclass(frozen=True)
class Release:
    """A published version of a repository, either a real release or a normalized tag.

    ``is_breaking`` is always derived locally by the classifier and never
    taken from upstream data.
    """
    id: int
    display_name: str
    version_tag: str
    published_at: datetime
    body: str = ""
    is_draft: bool = False
    is_prerelease: bool = False
    detail_url: str = ""
    is_breaking: bool = False

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Release":
        """Create from a GitHub release API record."""
        published = parse_timestamp(data.get("published_at")) or parse_timestamp(data.get("created_at"))
        tag = data.get("tag_name") or ""
        return cls(
            id=int(data.get("id") or 0),
            display_name=data.get("name") or tag,
            version_tag=tag,
            published_at=published or EPOCH,
            body=data.get("body") or "",
            is_draft=bool(data.get("draft", False)),
            is_prerelease=bool(data.get("prerelease", False)),
            detail_url=data.get("html_url") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "version_tag": self.version_tag,
            "published_at": self.published_at.isoformat(),
            "body": self.body,
            "is_draft": self.is_draft,
            "is_prerelease": self.is_prerelease,
            "detail_url": self.detail_url,
            "is_breaking": self.is_breaking,
        }


@dataclass(frozen=True)
class RawTag:
    """A tag record as listed by the forge, before normalization."""
    name: str
    commit_sha: str
    commit_url: str
    zipball_url: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "RawTag":
        commit = data.get("commit") or {}
        return cls(
            name=data.get("name") or "",
            commit_sha=commit.get("sha") or "",
            commit_url=commit.get("url") or "",
            zipball_url=data.get("zipball_url") or "",
        )


@dataclass
class AggregationResult:
    releases: list[Release] = field(default_factory=list)
    has_meaningful_notes: bool = False
    sourced_from_tags: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "releases": [r.to_dict() for r in self.releases],
            "has_meaningful_notes": self.has_meaningful_notes,
            "sourced_from_tags": self.sourced_from_tags,
        }


@dataclass(frozen=True)
class ReleaseContext:
    """Structured per-release summary handed to the LLM instead of flat text."""
    version_tag: str
    display_name: str
    published_at: str
    is_breaking: bool
    is_prerelease: bool
    detail_url: str
    body: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "version_tag": self.version_tag,
            "display_name": self.display_name,
            "published_at": self.published_at,
            "is_breaking": self.is_breaking,
            "is_prerelease": self.is_prerelease,
            "detail_url": self.detail_url,
            "body": self.body,
        }


@dataclass
class UpgradeReport:
    repo: str
    from_tag: str
    to_tag: str
    provider: str
    model: str
    markdown: str
    release_count: int


@dataclass
class VersionRange:
    """An inclusive slice of release history plus its assembled changelog."""
    from_tag: str
    to_tag: str
    releases: list[Release]
    changelog: str

    @property
    def is_empty(self) -> bool:
        return not self.releases
