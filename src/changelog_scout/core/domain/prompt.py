from __future__ import annotations

import json

from .models import ReleaseContext

SYSTEM_INSTRUCTIONS = (
    "You are a specialized assistant that analyzes software release changelogs "
    "to identify breaking changes and generate tech-debt specifications.\n"
    "Your role is to help engineering teams upgrade dependencies confidently and safely, "
    "especially for major version bumps, complex migrations, or large codebases.\n\n"
    "When given a set of changelogs between two versions:\n\n"
    "1. Identify all **breaking changes** that require code modifications.\n"
    "   - Look for removed functions, changed APIs, behavioral shifts, deprecated features, "
    "or dropped platform support.\n"
    "   - Classify each breaking change by category: `API`, `Behavior`, `Dependencies`, "
    "`Security`, or `Tooling`.\n\n"
    "2. Write a **tech-debt specification markdown document** that includes:\n"
    "   - An overview of the upgrade scope and risks\n"
    "   - Clear action items for developers\n"
    "   - Code examples showing before/after usage where applicable\n"
    "   - A **complexity rating** (Low, Medium, High) based on the number and severity of "
    "breaking changes and the integration surface area\n\n"
    "3. Make **context-aware recommendations**:\n"
    "   - If an intermediate version already ships security fixes and later versions add more "
    "breaking changes, suggest stopping at the intermediate version first.\n"
    "   - If the upgrade is too large for a single sprint, recommend an iterative upgrade path "
    "(e.g. v1 -> v2 -> v3) in manageable phases.\n"
    "   - Point out when dependency updates can be decoupled or done in parallel.\n\n"
    "4. When applicable, note common pitfalls and opportunities to remove deprecated code.\n\n"
    "Respond with a single markdown document suitable for team handoff."
)


def build_upgrade_prompt(
    *,
    repo_slug: str,
    from_tag: str,
    to_tag: str,
    changelog: str | None = None,
    release_context: list[ReleaseContext] | None = None,
) -> str:
    """Build the user prompt for an upgrade report.

    Structured release context is preferred over the flat changelog when both
    are supplied.
    """
    header = (
        f"I need to analyze breaking changes between versions {from_tag} and {to_tag} "
        f"of the GitHub repository {repo_slug}.\n\n"
    )

    if release_context:
        payload = json.dumps([c.to_dict() for c in release_context], ensure_ascii=False, indent=2)
        return (
            header
            + "Here are the releases between these versions, with their metadata and content:\n\n"
            + payload
            + "\n\nPlease analyze this structured data and provide a comprehensive tech-debt "
            "specification document. Focus on identifying breaking changes and what actions "
            "developers need to take to upgrade successfully.\n"
        )

    if changelog:
        return (
            header
            + "Here are the changelogs for the versions between (and including) these releases:\n\n"
            + changelog
            + "\n\nPlease identify breaking changes and provide a tech-debt specification document.\n"
        )

    raise ValueError("build_upgrade_prompt requires a changelog or a release context")
