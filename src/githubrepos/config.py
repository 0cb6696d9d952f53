"""Provider configuration: settings, fallbacks and resolution.

Fallback values are loaded from:
- environment variables
- and a local `.env` file (if present)

Explicit provider configuration always wins over a fallback. Required-ness is
enforced by `resolve` rather than by the settings model, so a run with both
the token and the owner missing reports both problems at once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from githubrepos.client import DEFAULT_BASE_URL, GitHubClient
from githubrepos.errors import (
    ClientConstructionError,
    ConfigurationError,
    Diagnostic,
    MissingValueError,
    UnknownValueError,
)
from githubrepos.logging import mask_secret

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR: Final = "GITHUB_TOKEN"
OWNER_ENV_VAR: Final = "GITHUB_OWNER"


class ProviderSettings(BaseSettings):
    """Environment fallbacks for the provider.

    Environment variables:
    - GITHUB_TOKEN      (fallback for `token`)
    - GITHUB_OWNER      (fallback for `owner`)
    - GITHUB_BASE_URL   (optional)
    - LOG_LEVEL         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ProviderSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=TOKEN_ENV_VAR,
        description="GitHub token used when the provider config leaves `token` unset",
    )
    github_owner: str = Field(
        default="",
        validation_alias=OWNER_ENV_VAR,
        description="GitHub owner used when the provider config leaves `owner` unset",
    )
    github_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )


class _Unknown:
    """Marker for a configuration value that is not known yet."""

    _instance: _Unknown | None = None

    def __new__(cls) -> _Unknown:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __bool__(self) -> bool:
        return False


UNKNOWN: Final = _Unknown()

ConfigValue = str | None | _Unknown


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """Provider configuration as supplied by the caller.

    Each field is None (unset), `UNKNOWN`, or a concrete string.
    """

    token: ConfigValue = None
    owner: ConfigValue = None


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Validated credentials plus the client built from them."""

    token: str = field(repr=False)
    owner: str
    client: GitHubClient = field(repr=False, compare=False)


def _unknown_diagnostic(
    attribute: str, label: str, noun: str, env_var: str
) -> UnknownValueError:
    return UnknownValueError(
        f"Unknown GitHub {label}",
        "The provider cannot create the GitHub API client as there is an unknown "
        f"configuration value for the GitHub {noun}. Either target apply the "
        "source of the value first, set the value statically in the configuration, "
        f"or use the {env_var} environment variable.",
        attribute=attribute,
    )


def _missing_diagnostic(
    attribute: str, label: str, noun: str, env_var: str
) -> MissingValueError:
    return MissingValueError(
        f"Missing GitHub {label}",
        "The provider cannot create the GitHub API client as there is a missing or "
        f"empty value for the GitHub {noun}. Set the {attribute} value in the "
        f"configuration or use the {env_var} environment variable. If either is "
        "already set, ensure the value is not empty.",
        attribute=attribute,
    )


def resolve(
    config: ConnectionConfig,
    token_fallback: str,
    owner_fallback: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    client_factory: Callable[..., GitHubClient] = GitHubClient,
) -> ResolvedConfig:
    """Resolve provider configuration into credentials and a GitHub client.

    Stages run in order and diagnostics accumulate within a stage, so every
    problem of that stage is reported in one pass:

    1. unknown values (resolution stops here if any)
    2. defaulting: a non-None config value overrides its fallback
    3. emptiness of the resulting token and owner
    4. client construction

    Raises:
        ConfigurationError: Carrying every diagnostic produced.
    """

    logger.debug("Resolving provider configuration")

    diagnostics: list[Diagnostic] = []
    if config.token is UNKNOWN:
        diagnostics.append(_unknown_diagnostic("token", "API Token", "token", TOKEN_ENV_VAR))
    if config.owner is UNKNOWN:
        diagnostics.append(
            _unknown_diagnostic("owner", "Organization", "organization name", OWNER_ENV_VAR)
        )
    if diagnostics:
        raise ConfigurationError(diagnostics)

    token = token_fallback or ""
    owner = owner_fallback or ""
    if isinstance(config.token, str):
        token = config.token
    if isinstance(config.owner, str):
        owner = config.owner

    if token == "":
        diagnostics.append(_missing_diagnostic("token", "Token", "token", TOKEN_ENV_VAR))
    if owner == "":
        diagnostics.append(
            _missing_diagnostic("owner", "Organization", "organization name", OWNER_ENV_VAR)
        )
    if diagnostics:
        raise ConfigurationError(diagnostics)

    log_fields = {"github_token": mask_secret(token), "github_owner": owner}
    logger.debug("Creating GitHub client", extra=log_fields)

    try:
        client = client_factory(token=token, base_url=base_url)
    except ValueError as e:
        raise ConfigurationError(
            [
                ClientConstructionError(
                    "Unable to Create GitHub API Client",
                    "An unexpected error occurred when creating the GitHub API client. "
                    "If the error is not clear, please contact the provider developers.\n\n"
                    f"GitHub Client Error: {e}",
                )
            ]
        ) from e

    logger.info("Configured GitHub client", extra={**log_fields, "success": True})
    return ResolvedConfig(token=token, owner=owner, client=client)
