"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from ..core.domain.models import AggregationResult, RepoRef, UpgradeReport


def format_release_list(ref: RepoRef, result: AggregationResult, *, breaking_only: bool = False) -> str:
    """Format a release history as an aligned table with breaking/pre-release markers.

    Args:
        ref: Repository the history belongs to
        result: Aggregated release history, newest first
        breaking_only: Whether ``result`` was filtered to breaking releases

    Returns:
        Formatted string for display
    """
    lines = []
    noun = "breaking releases" if breaking_only else "releases"
    lines.append(f"{ref.slug}: {len(result.releases)} {noun}")

    if result.sourced_from_tags:
        lines.append("Note: no GitHub releases published; showing the most recent tags instead.")
    if not result.has_meaningful_notes:
        lines.append("Note: release notes are sparse; breaking-change detection may miss changes.")

    if not result.releases:
        return "\n".join(lines)

    width = max(len(r.version_tag) for r in result.releases)
    lines.append("")
    for r in result.releases:
        markers = []
        if r.is_breaking:
            markers.append("BREAKING")
        if r.is_prerelease:
            markers.append("pre-release")
        if r.is_draft:
            markers.append("draft")
        suffix = f"  [{', '.join(markers)}]" if markers else ""

        title = r.display_name if r.display_name != r.version_tag else ""
        line = f"  {r.version_tag:<{width}}  {r.published_at:%Y-%m-%d}  {title}".rstrip()
        lines.append(line + suffix)

    return "\n".join(lines)


def format_report(report: UpgradeReport) -> str:
    lines = []
    lines.append("=" * 80)
    lines.append(f"UPGRADE REPORT: {report.repo} {report.from_tag} -> {report.to_tag}")
    lines.append(f"Provider: {report.provider} | Model: {report.model} | Releases: {report.release_count}")
    lines.append("=" * 80)
    lines.append("")
    lines.append(report.markdown.rstrip())
    return "\n".join(lines)
