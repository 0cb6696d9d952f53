"""Provider entry point: configuration and the resources it serves."""

from __future__ import annotations

from collections.abc import Callable

from githubrepos import __version__
from githubrepos.config import ConnectionConfig, ProviderSettings, ResolvedConfig, resolve
from githubrepos.resource import AllRepositoriesResource

DESCRIPTIONS: dict[str, str] = {
    "token": "The OAuth token used to connect to GitHub. Falls back to the "
    "GITHUB_TOKEN environment variable.",
    "owner": "The GitHub owner name to manage. Falls back to the GITHUB_OWNER "
    "environment variable.",
    "repos": "Repositories to track, keyed by name.",
    "repo_id": "The GitHub repository id.",
}


class Provider:
    """The `githubrepos` provider."""

    type_name = "githubrepos"

    def __init__(self, version: str = __version__) -> None:
        # "dev" when run locally, "test" under acceptance tests.
        self.version = version

    def configure(
        self,
        config: ConnectionConfig,
        settings: ProviderSettings | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration, falling back to environment settings.

        Raises:
            ConfigurationError: If the configuration cannot be resolved.
        """

        settings = settings or ProviderSettings()
        return resolve(
            config,
            settings.github_token,
            settings.github_owner,
            base_url=settings.github_base_url,
        )

    def resources(self) -> list[Callable[[], AllRepositoriesResource]]:
        return [lambda: AllRepositoriesResource(self.type_name)]
