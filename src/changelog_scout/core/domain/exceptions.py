"""Domain exceptions for changelog_scout."""

from __future__ import annotations

from datetime import datetime

from .models import RepoRef


class ChangelogScoutError(Exception):
    """Base class for all errors raised by changelog_scout."""


class InvalidUrlError(ChangelogScoutError, ValueError):
    """Raised when a repository URL cannot be parsed into a RepoRef."""

    def __init__(self, url: str, message: str | None = None) -> None:
        self.url = url
        if message is None:
            message = f"Invalid GitHub repository URL: {url!r}"
        super().__init__(message)


class ForgeError(ChangelogScoutError):
    """Base class for failures reported by the forge API."""


class RepoNotFoundError(ForgeError):
    """Raised when the forge answers 404 for a repository listing."""

    def __init__(self, ref: RepoRef, message: str | None = None) -> None:
        self.ref = ref
        if message is None:
            message = f"Repository not found: {ref.slug}"
        super().__init__(message)


class RateLimitedError(ForgeError):
    """Raised when the forge rejects a request because the quota is exhausted."""

    def __init__(self, reset_at: datetime | None = None) -> None:
        self.reset_at = reset_at
        message = "GitHub API rate limit exceeded. Please try again later or add a GitHub token."
        if reset_at is not None:
            message += f" The limit resets at {reset_at.isoformat()}."
        super().__init__(message)


class UpstreamError(ForgeError):
    """Raised for any other non-success forge response or transport failure."""

    def __init__(self, status_code: int | None, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            message = f"GitHub API error: {reason}"
        else:
            message = f"GitHub API error: {status_code} {reason}"
        super().__init__(message)


class NoReleaseDataError(ChangelogScoutError, ValueError):
    """Raised when an upgrade report is requested without any release data."""

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "No release data provided for analysis: supply a changelog or a release context"
        super().__init__(message)
