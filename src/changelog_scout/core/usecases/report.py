from __future__ import annotations

from ..domain.exceptions import NoReleaseDataError
from ..domain.models import ReleaseContext, RepoRef, UpgradeReport
from ..domain.prompt import SYSTEM_INSTRUCTIONS, build_upgrade_prompt
from ..ports import LLMPort, LoggerPort
from ..services import CHANGELOG_SEPARATOR


class UpgradeReportUseCase:
    """Use case for turning a changelog into a markdown upgrade report.

    The LLM's answer is returned as opaque text; nothing in it is parsed or
    validated.
    """

    def __init__(self, *, llm: LLMPort, logger: LoggerPort) -> None:
        self._llm = llm
        self._logger = logger

    def execute(
        self,
        *,
        ref: RepoRef,
        from_tag: str,
        to_tag: str,
        changelog: str | None = None,
        release_context: list[ReleaseContext] | None = None,
    ) -> UpgradeReport:
        """Execute the use case.

        Args:
            ref: Repository the releases belong to
            from_tag: Version currently in use
            to_tag: Version to upgrade to
            changelog: Assembled changelog text
            release_context: Structured per-release data, preferred when given

        Returns:
            UpgradeReport carrying the generated markdown

        Raises:
            NoReleaseDataError: If neither a changelog nor a release context is supplied
        """
        if not changelog and not release_context:
            raise NoReleaseDataError()

        prompt = build_upgrade_prompt(
            repo_slug=ref.slug,
            from_tag=from_tag,
            to_tag=to_tag,
            changelog=changelog,
            release_context=release_context,
        )
        self._logger.info(
            "report_requested",
            type="report_requested",
            repo=ref.slug,
            from_tag=from_tag,
            to_tag=to_tag,
            structured=bool(release_context),
        )

        markdown = self._llm.generate(system=SYSTEM_INSTRUCTIONS, prompt=prompt)

        report = UpgradeReport(
            repo=ref.slug,
            from_tag=from_tag,
            to_tag=to_tag,
            provider=self._llm.provider,
            model=self._llm.model,
            markdown=markdown,
            release_count=len(release_context) if release_context else len(changelog.split(CHANGELOG_SEPARATOR)),
        )
        self._logger.info(
            "report_ready",
            type="report_ready",
            repo=ref.slug,
            markdown_len=len(markdown),
        )
        return report
