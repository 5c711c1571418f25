"""Tests for the changelog-scout CLI."""
import json

from typer.testing import CliRunner

from changelog_scout.app.cli import app
from changelog_scout.core.domain.exceptions import RateLimitedError, RepoNotFoundError
from changelog_scout.core.domain.models import RepoRef

from fakes import FakeForge, make_container_factory, tags_only_forge

runner = CliRunner()

URL = "https://github.com/octo/widgets"


def _use_forge(monkeypatch, forge, llm=None):
    monkeypatch.setattr("changelog_scout.app.cli.Container", make_container_factory(forge, llm))


def test_no_args_shows_help():
    result = runner.invoke(app, [])

    assert "releases" in result.output
    assert "report" in result.output


class TestReleasesCommand:
    def test_lists_releases_with_markers(self, mock_container):
        result = runner.invoke(app, ["releases", URL])

        assert result.exit_code == 0
        assert "octo/widgets: 4 releases" in result.stdout
        lines = result.stdout.splitlines()
        v2 = next(line for line in lines if "v2.0.0" in line)
        v11 = next(line for line in lines if "v1.1.0" in line)
        assert "[BREAKING]" in v2
        assert "[pre-release]" in v11
        assert "2024-01-04" in v2
        assert lines.index(v2) < lines.index(v11)

    def test_breaking_only(self, mock_container):
        result = runner.invoke(app, ["releases", URL, "--breaking-only"])

        assert result.exit_code == 0
        assert "1 breaking releases" in result.stdout
        assert "v2.0.0" in result.stdout
        assert "v1.1.0" not in result.stdout

    def test_json_output(self, mock_container):
        result = runner.invoke(app, ["releases", URL, "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["repo"] == "octo/widgets"
        assert payload["sourced_from_tags"] is False
        assert payload["has_meaningful_notes"] is True
        assert [r["version_tag"] for r in payload["releases"]] == ["v2.1.0", "v2.0.0", "v1.1.0", "v1.0.0"]

    def test_tag_fallback_notice(self, monkeypatch):
        _use_forge(monkeypatch, tags_only_forge())

        result = runner.invoke(app, ["releases", URL])

        assert result.exit_code == 0
        assert "most recent tags" in result.stdout
        assert "release notes are sparse" in result.stdout

    def test_invalid_url_exits_2(self):
        result = runner.invoke(app, ["releases", "https://gitlab.com/octo/widgets"])

        assert result.exit_code == 2
        assert "Invalid GitHub repository URL" in result.output

    def test_repo_not_found_exits_1(self, monkeypatch):
        _use_forge(monkeypatch, FakeForge(error=RepoNotFoundError(RepoRef("octo", "widgets"))))

        result = runner.invoke(app, ["releases", URL])

        assert result.exit_code == 1
        assert "Repository not found: octo/widgets" in result.output

    def test_rate_limited_exits_1(self, monkeypatch):
        _use_forge(monkeypatch, FakeForge(error=RateLimitedError()))

        result = runner.invoke(app, ["releases", URL])

        assert result.exit_code == 1
        assert "rate limit exceeded" in result.output


class TestChangelogCommand:
    def test_prints_assembled_changelog(self, mock_container):
        result = runner.invoke(app, ["changelog", URL, "v1.1.0", "v2.0.0"])

        assert result.exit_code == 0
        assert "## Release v2.0.0 (v2.0.0)" in result.stdout
        assert "## Release v1.1.0 (v1.1.0)" in result.stdout
        assert "v2.1.0" not in result.stdout
        assert result.stdout.index("v2.0.0") < result.stdout.index("v1.1.0")

    def test_json_context(self, mock_container):
        result = runner.invoke(app, ["changelog", URL, "v2.0.0", "v1.1.0", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert [r["version_tag"] for r in payload["releases"]] == ["v2.0.0", "v1.1.0"]
        assert payload["releases"][0]["is_breaking"] is True

    def test_unknown_tag_prints_sentinel(self, mock_container):
        result = runner.invoke(app, ["changelog", URL, "v1.0.0", "v9.9.9"])

        assert result.exit_code == 0
        assert "No releases selected." in result.stdout


class TestReportCommand:
    def test_requires_api_key(self, mock_container):
        result = runner.invoke(app, ["report", URL, "v1.0.0", "v2.0.0"])

        assert result.exit_code == 2
        assert "API key required" in result.output

    def test_unknown_provider_exits_2(self, mock_container, monkeypatch):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")
        _, llm = mock_container

        result = runner.invoke(app, ["report", URL, "v1.0.0", "v2.0.0", "--provider", "mistral"])

        assert result.exit_code == 2
        assert "invalid LLM settings" in result.output
        assert llm.calls == []

    def test_prints_report(self, mock_container, monkeypatch):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")
        _, llm = mock_container

        result = runner.invoke(app, ["report", URL, "v1.0.0", "v2.0.0"])

        assert result.exit_code == 0
        assert "UPGRADE REPORT: octo/widgets v1.0.0 -> v2.0.0" in result.stdout
        assert "Rename gadgets to gizmos." in result.stdout
        assert len(llm.calls) == 1
        assert '"version_tag": "v1.1.0"' in llm.calls[0]["prompt"]

    def test_flat_mode_sends_changelog(self, mock_container, monkeypatch):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")
        _, llm = mock_container

        result = runner.invoke(app, ["report", URL, "v1.0.0", "v2.0.0", "--flat"])

        assert result.exit_code == 0
        assert "## Release v2.0.0 (v2.0.0)" in llm.calls[0]["prompt"]

    def test_output_file(self, mock_container, monkeypatch, tmp_path):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")
        target = tmp_path / "out" / "report.md"

        result = runner.invoke(app, ["report", URL, "v1.0.0", "v2.1.0", "--output", str(target)])

        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "# Upgrade report\n\nRename gadgets to gizmos."
        assert f"Report written to {target}" in result.stdout

    def test_writes_run_log(self, mock_container, monkeypatch, tmp_path):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")

        result = runner.invoke(app, ["report", URL, "v1.0.0", "v2.0.0"])

        assert result.exit_code == 0
        logs = list((tmp_path / "home" / "logs").glob("octo_widgets_v1.0.0_v2.0.0_*.jsonl"))
        assert len(logs) == 1
        events = [json.loads(line)["message"] for line in logs[0].read_text(encoding="utf-8").splitlines()]
        assert "releases_fetched" in events
        assert "report_ready" in events

    def test_empty_range_exits_1(self, mock_container, monkeypatch):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")
        _, llm = mock_container

        result = runner.invoke(app, ["report", URL, "v1.0.0", "v9.9.9"])

        assert result.exit_code == 1
        assert "No release data" in result.output
        assert llm.calls == []

    def test_invalid_url_exits_2(self, monkeypatch):
        monkeypatch.setenv("CHANGELOG_SCOUT_LLM__API_KEY", "sk-test")

        result = runner.invoke(app, ["report", "not-a-url", "v1", "v2"])

        assert result.exit_code == 2
