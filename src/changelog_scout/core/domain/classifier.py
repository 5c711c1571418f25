from __future__ import annotations

import re

# "BREAKING CHANGE" stays case-sensitive: it is the Conventional Commits footer token.
BREAKING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"breaking changes?", re.IGNORECASE),
    re.compile(r"\*\*breaking\*\*", re.IGNORECASE),
    re.compile(r"BREAKING CHANGE"),
    re.compile(r"incompatible", re.IGNORECASE),
    re.compile(r"not backward compatible", re.IGNORECASE),
    re.compile(r"dropped support", re.IGNORECASE),
    re.compile(r"deprecat(ed|ion)", re.IGNORECASE),
)


def detect_breaking_change(body: str | None) -> bool:
    """Return True when release notes look like they announce a breaking change.

    Heuristic only: the same body always yields the same verdict, but false
    positives and negatives are expected.
    """
    if not body:
        return False
    return any(p.search(body) for p in BREAKING_PATTERNS)
