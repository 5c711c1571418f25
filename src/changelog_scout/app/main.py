from __future__ import annotations

from .config import AppConfig, LLMConfig
from .container import Container
from ..core.domain.models import AggregationResult, RepoRef, UpgradeReport, VersionRange
from ..core.domain.url_parser import parse_repo_url
from ..core.services import build_release_context


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def with_llm_overrides(
    config: AppConfig,
    *,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
) -> AppConfig:
    """Return a copy of ``config`` with the given LLM settings replaced."""
    update = {
        key: value
        for key, value in (("provider_name", provider), ("model_name", model), ("api_key", api_key))
        if value
    }
    if not update:
        return config
    # Revalidate so an unsupported provider is rejected here.
    llm = LLMConfig.model_validate({**config.llm.model_dump(), **update})
    return config.model_copy(update={"llm": llm})


def build_report(
    container: Container,
    *,
    ref: RepoRef,
    from_tag: str,
    to_tag: str,
    structured: bool = True,
) -> UpgradeReport:
    """Select the tag range and hand it to the report use case.

    An empty range reaches the use case with no data and raises NoReleaseDataError.
    """
    selection = container.changelog_uc().execute(ref=ref, from_tag=from_tag, to_tag=to_tag)

    changelog_text: str | None = None
    release_context = None
    if not selection.is_empty:
        if structured:
            release_context = build_release_context(selection.releases)
        else:
            changelog_text = selection.changelog

    return container.report_uc().execute(
        ref=ref,
        from_tag=from_tag,
        to_tag=to_tag,
        changelog=changelog_text,
        release_context=release_context,
    )


def fetch_releases(
    url: str,
    *,
    breaking_only: bool = False,
    config: AppConfig | None = None,
) -> AggregationResult:
    """Fetch the release history of a GitHub repository, newest first.

    Falls back to tags when the repository publishes no releases.

    Args:
        url: Repository URL, e.g. https://github.com/owner/repo
        breaking_only: Keep only releases flagged as breaking
        config: Optional config for testing. If None, loads from env vars.

    Raises:
        InvalidUrlError: If ``url`` is not a GitHub repository URL
        ForgeError: If the GitHub API rejects a listing request
    """
    ref = parse_repo_url(url)
    container = _create_container(config)
    try:
        return container.fetch_releases_uc().execute(ref=ref, breaking_only=breaking_only)
    finally:
        container.shutdown_resources()


def changelog(
    url: str,
    from_tag: str,
    to_tag: str,
    *,
    config: AppConfig | None = None,
) -> VersionRange:
    """Select the releases between two tags (inclusive) and assemble their changelog."""
    ref = parse_repo_url(url)
    container = _create_container(config)
    try:
        return container.changelog_uc().execute(ref=ref, from_tag=from_tag, to_tag=to_tag)
    finally:
        container.shutdown_resources()


def generate_report(
    url: str,
    from_tag: str,
    to_tag: str,
    *,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    structured: bool = True,
    config: AppConfig | None = None,
) -> UpgradeReport:
    """Generate a markdown upgrade report for moving from ``from_tag`` to ``to_tag``.

    Args:
        url: Repository URL
        from_tag: Version currently in use
        to_tag: Target version
        provider: LLM provider override (optional)
        model: LLM model override (optional)
        api_key: LLM API key override (optional, otherwise from config/env)
        structured: Send per-release structured context instead of flat changelog text
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        UpgradeReport with the model's markdown

    Raises:
        ValueError: If no LLM API key is available
        NoReleaseDataError: If the tag range selects no releases
    """
    ref = parse_repo_url(url)
    config = with_llm_overrides(config or AppConfig(), provider=provider, model=model, api_key=api_key)
    if not config.llm.api_key:
        raise ValueError("API key required via CHANGELOG_SCOUT_LLM__API_KEY")

    container = _create_container(config)
    try:
        return build_report(container, ref=ref, from_tag=from_tag, to_tag=to_tag, structured=structured)
    finally:
        container.shutdown_resources()
