from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable

from ..domain.models import RawTag, Release, parse_timestamp
from ..ports import ForgePort, LoggerPort

TAG_PLACEHOLDER_PREFIX = "This is a tag ("
TAG_PLACEHOLDER_SUFFIX = "without release notes."
TAG_PLACEHOLDER_TEMPLATE = TAG_PLACEHOLDER_PREFIX + "{name}) " + TAG_PLACEHOLDER_SUFFIX

PRERELEASE_MARKERS = ("alpha", "beta", "rc")


def tag_placeholder(name: str) -> str:
    return TAG_PLACEHOLDER_TEMPLATE.format(name=name)


def is_tag_placeholder(body: str) -> bool:
    """True if ``body`` is the synthesized text of a tag-derived release."""
    return body.startswith(TAG_PLACEHOLDER_PREFIX) and body.endswith(TAG_PLACEHOLDER_SUFFIX)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _id_from_sha(sha: str) -> int:
    try:
        value = int(sha[:8], 16)
    except ValueError:
        value = 0
    # A zero or unparsable prefix gets a random id; collisions are possible.
    return value or random.randint(1, 99_999)


def _detail_url(tag: RawTag) -> str:
    base = tag.zipball_url.split("/zipball")[0]
    return f"{base}/releases/tag/{tag.name}"


class TagNormalizer:
    """Turns raw tags into Release records.

    Each tag costs one commit-detail request to learn its date. A failed or
    malformed lookup falls back to the current time for that tag only.
    """

    def __init__(
        self,
        *,
        forge: ForgePort,
        logger: LoggerPort,
        tag_limit: int = 50,
        max_workers: int = 8,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._forge = forge
        self._logger = logger
        self._tag_limit = tag_limit
        self._max_workers = max_workers
        self._clock = clock

    def normalize(self, tag: RawTag) -> Release:
        return Release(
            id=_id_from_sha(tag.commit_sha),
            display_name=tag.name,
            version_tag=tag.name,
            published_at=self._resolve_date(tag),
            body=tag_placeholder(tag.name),
            is_draft=False,
            is_prerelease=any(marker in tag.name for marker in PRERELEASE_MARKERS),
            detail_url=_detail_url(tag),
            is_breaking=False,
        )

    def normalize_all(self, tags: list[RawTag]) -> list[Release]:
        """Normalize the most recently listed tags, preserving listing order."""
        selected = tags[: self._tag_limit]
        if len(tags) > len(selected):
            self._logger.info(
                "tags_truncated",
                type="tags_truncated",
                total=len(tags),
                kept=len(selected),
            )
        if not selected:
            return []

        workers = max(1, min(self._max_workers, len(selected)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.normalize, selected))

    def _resolve_date(self, tag: RawTag) -> datetime:
        try:
            detail = self._forge.get_commit(tag.commit_url)
            resolved = self._extract_date(detail)
        except Exception as e:
            self._logger.warning(
                "commit_date_unavailable",
                type="commit_date_unavailable",
                tag=tag.name,
                error=str(e),
            )
            return self._clock()

        if resolved is None:
            self._logger.warning(
                "commit_date_missing",
                type="commit_date_missing",
                tag=tag.name,
            )
            return self._clock()
        return resolved

    @staticmethod
    def _extract_date(detail: Any) -> datetime | None:
        if not isinstance(detail, dict):
            return None
        commit = detail.get("commit")
        if not isinstance(commit, dict):
            return None
        for role in ("committer", "author"):
            person = commit.get(role)
            if isinstance(person, dict):
                parsed = parse_timestamp(person.get("date"))
                if parsed is not None:
                    return parsed
        return None
