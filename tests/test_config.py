"""Tests for prcontext.config (YAML + env loading)."""

from pathlib import Path

import pytest

from prcontext.config import AppConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("GITHUB_TOKEN", "GITHUB_TOKEN_FILE", "GITHUB_API_URL", "LOGGING_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.yaml")
    assert isinstance(config, AppConfig)
    assert config.github.api_url == "https://api.github.com"
    assert config.github.target_commits_limit == 100
    assert config.logging.level == "INFO"


def test_yaml_values_loaded(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "github:\n"
        "  api_url: https://ghe.example.com/api/v3\n"
        "  target_commits_limit: 25\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    config = load_config(path)
    assert config.github.api_url == "https://ghe.example.com/api/v3"
    assert config.github.target_commits_limit == 25
    assert config.logging.level == "DEBUG"


def test_env_substitution_for_token(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """${VAR} in YAML is replaced from the environment."""
    monkeypatch.setenv("MY_TOKEN", "secret-from-env")
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${MY_TOKEN}\n")
    config = load_config(path)
    assert config.github_token_resolved == "secret-from-env"


def test_token_from_secret_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """GITHUB_TOKEN_FILE is read when no token is configured."""
    secret = tmp_path / "token"
    secret.write_text("file-token\n")
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    config = load_config(tmp_path / "absent.yaml")
    assert config.github_token_resolved == "file-token"


def test_unresolved_placeholder_falls_back_to_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${UNSET_TOKEN_VAR}\n")
    config = load_config(path)
    assert config.github_token_resolved is None


def test_env_reference_inside_string(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """${VAR} is expanded anywhere in a value, e.g. a GitHub Enterprise host."""
    monkeypatch.setenv("GHE_HOST", "ghe.example.com")
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  api_url: https://${GHE_HOST}/api/v3\n")
    assert load_config(path).github.api_url == "https://ghe.example.com/api/v3"


def test_token_file_from_yaml(tmp_path: Path) -> None:
    secret = tmp_path / "token"
    secret.write_text("yaml-file-token\n")
    path = tmp_path / "config.yaml"
    path.write_text(f"github:\n  token_file: {secret}\n")
    assert load_config(path).github_token_resolved == "yaml-file-token"
