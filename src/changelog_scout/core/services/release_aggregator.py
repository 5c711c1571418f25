from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from ..domain.classifier import detect_breaking_change
from ..domain.models import AggregationResult, RawTag, Release, RepoRef
from ..ports import ForgePage, ForgePort, LoggerPort
from .tag_normalizer import TagNormalizer, is_tag_placeholder

MAX_PER_PAGE = 100
MEANINGFUL_NOTES_MIN_CHARS = 20


def has_meaningful_notes(releases: list[Release]) -> bool:
    """True if at least one release carries real, non-trivial notes."""
    for release in releases:
        body = release.body or ""
        if not body.strip():
            continue
        if is_tag_placeholder(body):
            continue
        if len(body.strip()) < MEANINGFUL_NOTES_MIN_CHARS:
            continue
        return True
    return False


def sort_newest_first(releases: list[Release]) -> list[Release]:
    return sorted(releases, key=lambda r: r.published_at, reverse=True)


class ReleaseAggregator:
    """Builds the complete, sorted and annotated release history of a repository.

    Releases are paged through first. Only when that succeeds with no results
    does the aggregator fall back to tags. Any forge error aborts the whole
    aggregation.
    """

    def __init__(
        self,
        *,
        forge: ForgePort,
        tag_normalizer: TagNormalizer,
        logger: LoggerPort,
        per_page: int = MAX_PER_PAGE,
    ) -> None:
        self._forge = forge
        self._tag_normalizer = tag_normalizer
        self._logger = logger
        self._per_page = per_page

    def aggregate(self, ref: RepoRef) -> AggregationResult:
        raw_releases = self._collect(self._forge.list_releases, ref)
        self._logger.info(
            "releases_fetched",
            type="releases_fetched",
            repo=ref.slug,
            count=len(raw_releases),
        )

        if not raw_releases:
            return self._aggregate_tags(ref)

        releases = sort_newest_first([Release.from_api_response(r) for r in raw_releases])
        releases = [self._classify(r) for r in releases]

        result = AggregationResult(
            releases=releases,
            has_meaningful_notes=has_meaningful_notes(releases),
            sourced_from_tags=False,
        )
        self._log_done(ref, result)
        return result

    def _aggregate_tags(self, ref: RepoRef) -> AggregationResult:
        self._logger.info("tags_fallback", type="tags_fallback", repo=ref.slug)

        raw_tags = [RawTag.from_api_response(t) for t in self._collect(self._forge.list_tags, ref)]
        releases = sort_newest_first(self._tag_normalizer.normalize_all(raw_tags))

        result = AggregationResult(
            releases=releases,
            has_meaningful_notes=has_meaningful_notes(releases),
            sourced_from_tags=True,
        )
        self._log_done(ref, result)
        return result

    def _collect(
        self,
        fetch_page: Callable[[RepoRef, int, int], ForgePage],
        ref: RepoRef,
    ) -> list[dict[str, Any]]:
        # Strictly sequential: the next request depends on this page's Link header.
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            result = fetch_page(ref, page, self._per_page)
            self._logger.debug(
                "page_fetched",
                type="page_fetched",
                repo=ref.slug,
                page=page,
                size=len(result.items),
                has_next=result.has_next,
            )
            if not result.items:
                break
            items.extend(result.items)
            if not result.has_next:
                break
            page += 1
        return items

    @staticmethod
    def _classify(release: Release) -> Release:
        return replace(release, is_breaking=detect_breaking_change(release.body))

    def _log_done(self, ref: RepoRef, result: AggregationResult) -> None:
        self._logger.info(
            "aggregation_done",
            type="aggregation_done",
            repo=ref.slug,
            releases=len(result.releases),
            breaking=sum(1 for r in result.releases if r.is_breaking),
            sourced_from_tags=result.sourced_from_tags,
            has_meaningful_notes=result.has_meaningful_notes,
        )
