from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from .domain.models import RepoRef


@dataclass
class ForgePage:
    """One page of a forge listing endpoint."""
    items: list[dict[str, Any]] = field(default_factory=list)
    has_next: bool = False


class ForgePort(Protocol):
    """Port for the forge REST API (GitHub).

    Implementations raise the ForgeError taxonomy on non-success responses:
    RepoNotFoundError, RateLimitedError, UpstreamError.
    """

    def list_releases(self, ref: RepoRef, page: int, per_page: int) -> ForgePage:
        """Fetch one page of releases."""
        ...

    def list_tags(self, ref: RepoRef, page: int, per_page: int) -> ForgePage:
        """Fetch one page of tags."""
        ...

    def get_commit(self, url: str) -> dict[str, Any]:
        """Fetch the commit detail record a tag points to."""
        ...


class LLMPort(Protocol):
    """Port for text generation."""

    @property
    def provider(self) -> str:
        ...

    @property
    def model(self) -> str:
        ...

    def generate(self, *, system: str, prompt: str) -> str:
        """Return the model's text answer for the prompt."""
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword arguments are attached to the record as structured fields.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        ...

    def exception(self, message: str, **kwargs: Any) -> None:
        ...
