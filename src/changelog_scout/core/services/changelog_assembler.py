from __future__ import annotations

from ..domain.models import Release, ReleaseContext

NO_RELEASES_SELECTED = "No releases selected."
NO_NOTES_PLACEHOLDER = "No release notes provided."
CHANGELOG_SEPARATOR = "---\n\n"


def _format_entry(release: Release) -> str:
    title = release.display_name or release.version_tag
    body = release.body or NO_NOTES_PLACEHOLDER
    return f"## {title} ({release.version_tag})\n\n{body}\n\n"


def assemble_changelog(releases: list[Release]) -> str:
    """Concatenate releases into one markdown changelog, keeping input order."""
    if not releases:
        return NO_RELEASES_SELECTED
    return CHANGELOG_SEPARATOR.join(_format_entry(r) for r in releases)


def build_release_context(releases: list[Release]) -> list[ReleaseContext]:
    """Structured counterpart of assemble_changelog for LLM consumption."""
    return [
        ReleaseContext(
            version_tag=r.version_tag,
            display_name=r.display_name or r.version_tag,
            published_at=r.published_at.isoformat(),
            is_breaking=r.is_breaking,
            is_prerelease=r.is_prerelease,
            detail_url=r.detail_url,
            body=r.body,
        )
        for r in releases
    ]
