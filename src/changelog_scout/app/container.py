from __future__ import annotations

from dependency_injector import containers, providers

from ..core.services import ReleaseAggregator, TagNormalizer
from ..core.usecases.changelog import ChangelogUseCase
from ..core.usecases.fetch_releases import FetchReleasesUseCase
from ..core.usecases.report import UpgradeReportUseCase
from ..infra.forge_client import GitHubForgeClient
from ..infra.llm import LLM
from ..infra.logging import ScoutLogger


class Container(containers.DeclarativeContainer):
    """DI container; populate with ``container.config.from_pydantic(AppConfig())``."""

    config = providers.Configuration()

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        ScoutLogger,
        logs_dir=config.directories.logs_dir,
        run_id=config.runtime.run_id,
        json_file=config.logging.json_file,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    # One session per client; pagination and commit lookups share it.
    forge = providers.Singleton(
        GitHubForgeClient,
        token=config.forge.token,
        api_url=config.forge.api_url,
        api_version=config.forge.api_version,
        timeout=config.forge.timeout,
    )

    llm = providers.Factory(
        LLM,
        provider=config.llm.provider_name,
        model=config.llm.model_name,
        api_key=config.llm.api_key,
        max_output_tokens=config.llm.max_output_tokens,
        logger=logger,
    )

    # Domain services
    tag_normalizer = providers.Factory(
        TagNormalizer,
        forge=forge,
        logger=logger,
        tag_limit=config.forge.tag_limit,
        max_workers=config.forge.max_workers,
    )

    aggregator = providers.Factory(
        ReleaseAggregator,
        forge=forge,
        tag_normalizer=tag_normalizer,
        logger=logger,
        per_page=config.forge.per_page,
    )

    # Use cases
    fetch_releases_uc = providers.Factory(
        FetchReleasesUseCase,
        aggregator=aggregator,
    )

    changelog_uc = providers.Factory(
        ChangelogUseCase,
        aggregator=aggregator,
        logger=logger,
    )

    report_uc = providers.Factory(
        UpgradeReportUseCase,
        llm=llm,
        logger=logger,
    )
