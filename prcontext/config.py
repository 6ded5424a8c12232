"""Configuration loading from YAML and environment.

Values in config.yaml may reference environment variables as ${VAR}. The
GitHub token comes from github.token (GITHUB_TOKEN) or from the file named
by github.token_file (GITHUB_TOKEN_FILE, e.g. a Docker secret). Never put
real tokens in config files committed to the repo.
"""

import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_REF = re.compile(r"\$\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token")
    token_file: Path | None = Field(default=None, description="File holding the token (Docker secret)")
    api_url: str = Field(default="https://api.github.com", description="API base URL (GitHub Enterprise: .../api/v3)")
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")
    per_page: int = Field(default=100, ge=1, le=100, description="Page size for list endpoints")
    target_commits_limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Number of recent target branch commits returned by target_commits",
    )


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Configured token, else the contents of token_file.

        A token still holding an unresolved ${VAR} counts as unset.
        """
        t = self.github.token
        if t and not _ENV_REF.search(t):
            return t.strip()
        if self.github.token_file:
            return self.github.token_file.read_text().strip()
        return None


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Expand ${VAR} references in every string; unknown variables are left as is."""
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: env.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Missing file yields defaults (still overridable by GITHUB_* and LOGGING_*).
    """
    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw, os.environ)

    github = GitHubConfig(**(raw.get("github") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))
    return AppConfig(github=github, logging=logging)
