from __future__ import annotations

from ..domain.models import RepoRef, VersionRange
from ..ports import LoggerPort
from ..services import ReleaseAggregator, assemble_changelog, select_range


class ChangelogUseCase:
    """Use case for assembling the changelog between two versions."""

    def __init__(self, *, aggregator: ReleaseAggregator, logger: LoggerPort) -> None:
        self._aggregator = aggregator
        self._logger = logger

    def execute(self, *, ref: RepoRef, from_tag: str, to_tag: str) -> VersionRange:
        result = self._aggregator.aggregate(ref)
        selected = select_range(result.releases, from_tag, to_tag)

        if not selected:
            self._logger.warning(
                "range_empty",
                type="range_empty",
                repo=ref.slug,
                from_tag=from_tag,
                to_tag=to_tag,
            )

        return VersionRange(
            from_tag=from_tag,
            to_tag=to_tag,
            releases=selected,
            changelog=assemble_changelog(selected),
        )
