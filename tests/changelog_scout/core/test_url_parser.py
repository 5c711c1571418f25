"""Tests for repository URL parsing."""
import pytest

from changelog_scout.core.domain.exceptions import InvalidUrlError
from changelog_scout.core.domain.models import RepoRef
from changelog_scout.core.domain.url_parser import parse_repo_url


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/facebook/react",
        "https://github.com/facebook/react/",
        "https://github.com/facebook/react.git",
        "http://github.com/facebook/react",
        "https://github.com/facebook/react/tree/main/packages",
        "  https://github.com/facebook/react  ",
    ],
)
def test_parse_accepts_common_forms(url):
    assert parse_repo_url(url) == RepoRef("facebook", "react")


def test_parse_keeps_case_as_given():
    ref = parse_repo_url("https://github.com/Octo-Org/My.Repo")

    assert ref.namespace == "Octo-Org"
    assert ref.project == "My.Repo"
    assert ref.slug == "Octo-Org/My.Repo"
    assert ref.url == "https://github.com/Octo-Org/My.Repo"


@pytest.mark.parametrize(
    "url",
    [
        "",
        "not a url",
        "github.com/facebook/react",
        "https://gitlab.com/facebook/react",
        "https://github.com/facebook",
        "https://github.com/",
        "ftp://github.com/facebook/react",
        "https://api.github.com/repos/facebook/react",
    ],
)
def test_parse_rejects_invalid_urls(url):
    with pytest.raises(InvalidUrlError) as exc_info:
        parse_repo_url(url)

    assert exc_info.value.url == url


def test_invalid_url_error_is_value_error():
    with pytest.raises(ValueError):
        parse_repo_url("https://example.com/a/b")


def test_parse_with_custom_host():
    ref = parse_repo_url("https://github.example.com/team/app", expected_host="github.example.com")

    assert ref == RepoRef("team", "app")
