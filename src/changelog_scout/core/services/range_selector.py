from __future__ import annotations

from ..domain.models import Release
from .release_aggregator import sort_newest_first


def _index_of(releases: list[Release], tag: str) -> int:
    for i, release in enumerate(releases):
        if release.version_tag == tag:
            return i
    return -1


def select_range(releases: list[Release], from_tag: str, to_tag: str) -> list[Release]:
    """Return the inclusive slice of history between two version tags, newest first.

    The two tags may be given in either order. If either tag is not present
    the result is empty.
    """
    ordered = sort_newest_first(releases)

    a = _index_of(ordered, from_tag)
    b = _index_of(ordered, to_tag)
    if a == -1 or b == -1:
        return []

    start, end = min(a, b), max(a, b)
    return ordered[start:end + 1]
