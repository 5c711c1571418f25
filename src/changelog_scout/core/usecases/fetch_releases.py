from __future__ import annotations

from ..domain.models import AggregationResult, RepoRef
from ..services import ReleaseAggregator


class FetchReleasesUseCase:
    """Use case for loading the release history of a repository.

    Thin orchestration layer that delegates to ReleaseAggregator.
    """

    def __init__(self, *, aggregator: ReleaseAggregator) -> None:
        self._aggregator = aggregator

    def execute(self, *, ref: RepoRef, breaking_only: bool = False) -> AggregationResult:
        """Execute the use case.

        Args:
            ref: Target repository
            breaking_only: If True, drop releases not flagged as breaking.
                ``has_meaningful_notes`` and ``sourced_from_tags`` still
                describe the full history.

        Returns:
            Aggregated release history, newest first
        """
        result = self._aggregator.aggregate(ref)
        if breaking_only:
            result.releases = [r for r in result.releases if r.is_breaking]
        return result
