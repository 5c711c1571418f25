from .app.main import changelog, fetch_releases, generate_report
from .core.services import assemble_changelog, build_release_context, select_range
from .core.domain.exceptions import (
    ChangelogScoutError,
    ForgeError,
    InvalidUrlError,
    NoReleaseDataError,
    RateLimitedError,
    RepoNotFoundError,
    UpstreamError,
)

__all__ = [
    "fetch_releases",
    "select_range",
    "assemble_changelog",
    "build_release_context",
    "changelog",
    "generate_report",
    "ChangelogScoutError",
    "ForgeError",
    "InvalidUrlError",
    "NoReleaseDataError",
    "RateLimitedError",
    "RepoNotFoundError",
    "UpstreamError",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
