from __future__ import annotations

from urllib.parse import urlsplit

from .exceptions import InvalidUrlError
from .models import RepoRef

GITHUB_HOST = "github.com"


def parse_repo_url(url: str, *, expected_host: str = GITHUB_HOST) -> RepoRef:
    """Extract (namespace, project) from a repository URL.

    Accepts ``https://github.com/owner/repo`` with an optional trailing slash,
    ``.git`` suffix or extra path segments (``/tree/main`` etc.).

    Raises:
        InvalidUrlError: If the URL is malformed, not on the expected host,
            or has fewer than two path segments.
    """
    raw = (url or "").strip()
    try:
        parts = urlsplit(raw)
        hostname = parts.hostname
    except ValueError as e:
        raise InvalidUrlError(url) from e

    if parts.scheme not in ("http", "https") or hostname != expected_host:
        raise InvalidUrlError(url)

    path = parts.path
    if path.endswith(".git"):
        path = path[:-4]
    path = path.rstrip("/")

    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        raise InvalidUrlError(url)

    return RepoRef(namespace=segments[0], project=segments[1])
