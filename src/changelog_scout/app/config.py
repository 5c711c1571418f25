from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infra.llm_adapters import Provider


APP_NAME = "changelog_scout"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_cache_dir)


# Sections are plain models: only CHANGELOG_SCOUT_-prefixed variables reach them.
class DirectoryConfig(BaseModel):
    """Directory configuration with computed paths."""

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all changelog_scout data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Directory for per-run JSONL logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class ForgeConfig(BaseModel):
    """GitHub REST API access."""

    token: str | None = Field(
        default=None,
        description="GitHub token; anonymous access when unset (lower rate limit)",
    )

    api_url: str = Field(
        default="https://api.github.com",
        description="REST API base URL",
    )

    api_version: str = Field(
        default="2022-11-28",
        description="Value of the X-GitHub-Api-Version header",
    )

    per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Page size for release and tag listings (GitHub caps it at 100)",
    )

    tag_limit: int = Field(
        default=50,
        ge=1,
        description="Most recent tags normalized when a repository has no releases",
    )

    max_workers: int = Field(
        default=8,
        ge=1,
        description="Concurrent commit lookups during tag normalization",
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )


class LLMConfig(BaseModel):
    """LLM configuration."""

    api_key: str | None = Field(
        default=None,
        description="LLM API key (OpenAI or Anthropic)",
    )

    provider_name: Provider = Field(
        default="openai",
        description="LLM provider (openai, anthropic)",
    )

    model_name: str = Field(
        default="gpt-4o",
        description="LLM model name",
    )

    max_output_tokens: int = Field(
        default=4096,
        ge=1,
        description="Upper bound on the generated report length",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    logger_name: str = Field(default=f"{APP_NAME}.events", description="Logger for structured run events")
    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    console_output: bool = Field(default=False, description="Human-readable logs on stderr")
    json_file: bool = Field(default=True, description="Write <run_id>.jsonl when a run id is set")


class RuntimeConfig(BaseModel):
    """Values decided per invocation rather than per environment."""

    run_id: str | None = Field(
        default=None,
        description="Names the JSONL log file of this run",
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with CHANGELOG_SCOUT_ prefix.
    Use double underscore for nested config: CHANGELOG_SCOUT_LLM__API_KEY

    Example env vars:
        # Optional, raises the GitHub rate limit
        export CHANGELOG_SCOUT_FORGE__TOKEN=ghp_xxxxxxxxxxxxx

        # Required for upgrade reports
        export CHANGELOG_SCOUT_LLM__API_KEY=sk-xxxxxxxxxxxxx

        # Optional (with defaults)
        export CHANGELOG_SCOUT_LLM__PROVIDER_NAME=anthropic
        export CHANGELOG_SCOUT_LLM__MODEL_NAME=claude-sonnet-4-5
        export CHANGELOG_SCOUT_FORGE__TAG_LIMIT=50
        export CHANGELOG_SCOUT_DIRECTORIES__HOME=/custom/path
        export CHANGELOG_SCOUT_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="CHANGELOG_SCOUT_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    forge: ForgeConfig = Field(default_factory=ForgeConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
