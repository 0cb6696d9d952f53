"""Unit tests for provider settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from githubrepos.config import ProviderSettings


def test_settings_defaults() -> None:
    settings = ProviderSettings()

    assert settings.github_token == ""
    assert settings.github_owner == ""
    assert settings.github_base_url == "https://api.github.com"
    assert settings.log_level == "INFO"


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "GITHUB_TOKEN=dotenv-token",
                "GITHUB_OWNER=octo-org",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ProviderSettings()

    assert settings.github_token == "dotenv-token"
    assert settings.github_owner == "octo-org"
    assert settings.log_level == "DEBUG"


def test_environment_overrides_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("GITHUB_OWNER=from-file\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_OWNER", "from-env")
    monkeypatch.setenv("GITHUB_BASE_URL", "https://ghe.example.com/api/v3")

    settings = ProviderSettings()

    assert settings.github_owner == "from-env"
    assert settings.github_base_url == "https://ghe.example.com/api/v3"
