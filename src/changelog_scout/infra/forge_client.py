"""GitHub REST client for release and tag listings."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any

import requests

from ..core.domain.exceptions import RateLimitedError, RepoNotFoundError, UpstreamError
from ..core.domain.models import RepoRef
from ..core.ports import ForgePage

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
USER_AGENT = "changelog-scout"
LOW_QUOTA_THRESHOLD = 10


def _parse_reset(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None


def _has_next(link_header: str | None) -> bool:
    return bool(link_header) and 'rel="next"' in link_header


class GitHubForgeClient:
    """Thin wrapper over the GitHub REST API.

    Every call is a single request: no retries, no backoff. Non-success
    responses are mapped onto the ForgeError taxonomy.

    Example:
        client = GitHubForgeClient(token=None)
        page = client.list_releases(RepoRef("octocat", "hello-world"), page=1, per_page=100)
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._shared_session = session
        self._local = threading.local()

        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
            "User-Agent": USER_AGENT,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    @property
    def _session(self) -> requests.Session:
        # Tag commit lookups run on worker threads; each thread gets its own session.
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def list_releases(self, ref: RepoRef, page: int, per_page: int) -> ForgePage:
        url = f"{self._api_url}/repos/{ref.namespace}/{ref.project}/releases"
        return self._list(url, ref=ref, page=page, per_page=per_page)

    def list_tags(self, ref: RepoRef, page: int, per_page: int) -> ForgePage:
        url = f"{self._api_url}/repos/{ref.namespace}/{ref.project}/tags"
        return self._list(url, ref=ref, page=page, per_page=per_page)

    def get_commit(self, url: str) -> dict[str, Any]:
        response = self._request(url)
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise UpstreamError(response.status_code, "unexpected commit payload")
        return payload

    def _list(self, url: str, *, ref: RepoRef, page: int, per_page: int) -> ForgePage:
        response = self._request(url, params={"per_page": per_page, "page": page}, ref=ref)
        payload = self._json(response)
        if not isinstance(payload, list):
            raise UpstreamError(response.status_code, "unexpected listing payload")
        return ForgePage(items=payload, has_next=_has_next(response.headers.get("Link")))

    def _request(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        ref: RepoRef | None = None,
    ) -> requests.Response:
        try:
            response = self._session.get(url, headers=self._headers, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamError(None, str(e)) from e

        remaining = response.headers.get("X-RateLimit-Remaining")
        logger.debug(
            "GET %s -> %s (rate limit remaining=%s, reset=%s)",
            url,
            response.status_code,
            remaining,
            response.headers.get("X-RateLimit-Reset"),
        )
        if remaining is not None and remaining.isdigit() and int(remaining) < LOW_QUOTA_THRESHOLD:
            logger.warning("GitHub API rate limit low: %s requests remaining", remaining)

        if not response.ok:
            self._raise_for_status(response, ref)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, ref: RepoRef | None) -> None:
        status = response.status_code
        if status == 404 and ref is not None:
            raise RepoNotFoundError(ref)
        if status == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            raise RateLimitedError(reset_at=_parse_reset(response.headers.get("X-RateLimit-Reset")))
        raise UpstreamError(status, response.reason or "")

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(response.status_code, f"invalid JSON body: {e}") from e
