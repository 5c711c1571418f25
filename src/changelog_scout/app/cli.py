from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .config import AppConfig
from .container import Container
from .cli_formatter import format_release_list, format_report
from .main import build_report, with_llm_overrides
from ..core.domain.exceptions import ForgeError, InvalidUrlError, NoReleaseDataError
from ..core.domain.models import RepoRef
from ..core.domain.url_parser import parse_repo_url
from ..core.services import build_release_context

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _parse_ref(url: str) -> RepoRef:
    try:
        return parse_repo_url(url)
    except InvalidUrlError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


def _run_id(ref: RepoRef, *parts: str) -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    raw = "_".join([ref.namespace, ref.project, *parts, stamp])
    return re.sub(r"[^A-Za-z0-9._-]", "_", raw)


def _configure(config: AppConfig, *, verbose: bool, run_id: str | None = None) -> AppConfig:
    update: dict[str, object] = {}
    if verbose:
        # Library modules log through stdlib loggers; send them to stderr too.
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(name)s: %(message)s", force=True)
        update["logging"] = config.logging.model_copy(update={"console_output": True, "level": "DEBUG"})
    if run_id:
        update["runtime"] = config.runtime.model_copy(update={"run_id": run_id})
    return config.model_copy(update=update) if update else config


def _build_container(config: AppConfig) -> Container:
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


@app.command()
def releases(
    url: str = typer.Argument(..., help="Repository URL, e.g. https://github.com/owner/repo"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
    breaking_only: bool = typer.Option(False, "--breaking-only", "-b", help="Show only releases flagged as breaking"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API activity to stderr"),
):
    """List the release history of a repository, newest first."""
    ref = _parse_ref(url)
    config = _configure(AppConfig(), verbose=verbose)

    container = _build_container(config)
    try:
        result = container.fetch_releases_uc().execute(ref=ref, breaking_only=breaking_only)
    except ForgeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()

    if json_output:
        payload = {"repo": ref.slug, **result.to_dict()}
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        typer.echo(format_release_list(ref, result, breaking_only=breaking_only))


@app.command()
def changelog(
    url: str = typer.Argument(..., help="Repository URL"),
    from_tag: str = typer.Argument(..., help="Version currently in use"),
    to_tag: str = typer.Argument(..., help="Version to upgrade to"),
    json_output: bool = typer.Option(False, "--json", help="Output structured per-release context as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API activity to stderr"),
):
    """Print the combined release notes between two tags (inclusive)."""
    ref = _parse_ref(url)
    config = _configure(AppConfig(), verbose=verbose)

    container = _build_container(config)
    try:
        selection = container.changelog_uc().execute(ref=ref, from_tag=from_tag, to_tag=to_tag)
    except ForgeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()

    if json_output:
        payload = {
            "repo": ref.slug,
            "from_tag": from_tag,
            "to_tag": to_tag,
            "releases": [c.to_dict() for c in build_release_context(selection.releases)],
        }
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        typer.echo(selection.changelog)


@app.command()
def report(
    url: str = typer.Argument(..., help="Repository URL"),
    from_tag: str = typer.Argument(..., help="Version currently in use"),
    to_tag: str = typer.Argument(..., help="Version to upgrade to"),
    provider: str | None = typer.Option(None, "--provider", case_sensitive=False, help="LLM provider (openai, anthropic)"),
    model: str | None = typer.Option(None, "--model", help="Model name"),
    structured: bool = typer.Option(True, "--structured/--flat", help="Send structured release context or the flat changelog"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the markdown report to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API and LLM activity to stderr"),
):
    """Generate a markdown upgrade report for moving between two versions."""
    ref = _parse_ref(url)
    try:
        config = with_llm_overrides(AppConfig(), provider=provider and provider.lower(), model=model)
    except ValidationError as e:
        typer.echo(f"Error: invalid LLM settings: {e.errors()[0]['msg']}", err=True)
        raise typer.Exit(code=2)

    if not config.llm.api_key:
        typer.echo("Error: API key required via CHANGELOG_SCOUT_LLM__API_KEY", err=True)
        raise typer.Exit(code=2)

    config = _configure(config, verbose=verbose, run_id=_run_id(ref, from_tag, to_tag))

    typer.echo(f"Generating report: {ref.slug} {from_tag} -> {to_tag}", err=True)
    typer.echo(f"Provider: {config.llm.provider_name}, Model: {config.llm.model_name}", err=True)
    if config.logging.json_file:
        log_file = config.directories.logs_dir / f"{config.runtime.run_id}.jsonl"
        typer.echo(f"Log file: {log_file}", err=True)

    container = _build_container(config)
    try:
        result = build_report(container, ref=ref, from_tag=from_tag, to_tag=to_tag, structured=structured)
    except (ForgeError, NoReleaseDataError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        # Always shutdown resources to close file handles
        container.shutdown_resources()

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.markdown, encoding="utf-8")
        typer.echo(f"Report written to {output}")
    else:
        typer.echo(format_report(result))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
