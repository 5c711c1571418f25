from __future__ import annotations

from .tag_normalizer import TagNormalizer, is_tag_placeholder, tag_placeholder
from .release_aggregator import ReleaseAggregator, has_meaningful_notes, sort_newest_first
from .range_selector import select_range
from .changelog_assembler import (
    CHANGELOG_SEPARATOR,
    NO_RELEASES_SELECTED,
    assemble_changelog,
    build_release_context,
)

__all__ = [
    "TagNormalizer",
    "is_tag_placeholder",
    "tag_placeholder",
    "ReleaseAggregator",
    "has_meaningful_notes",
    "sort_newest_first",
    "select_range",
    "CHANGELOG_SEPARATOR",
    "NO_RELEASES_SELECTED",
    "assemble_changelog",
    "build_release_context",
]
