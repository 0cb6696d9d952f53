"""The `<provider>_all` resource: a named set of an owner's repositories.

Create, read and update all perform the same refresh against GitHub; delete
has no remote effect because the resource never mutates repositories.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from githubrepos.config import ResolvedConfig
from githubrepos.errors import ConfigurationError, Diagnostic, FetchError, RepositoryReadError
from githubrepos.reconcile import RepoState, reconcile

logger = logging.getLogger(__name__)


class RepositoriesState(BaseModel):
    """Persisted state of the resource."""

    repos: dict[str, RepoState] = Field(
        default_factory=dict,
        description="Tracked repositories keyed by name",
    )

    @classmethod
    def from_names(cls, names: list[str]) -> RepositoriesState:
        return cls(repos={name: RepoState() for name in names})


class StateStore:
    """JSON-file backed store for the resource state."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> RepositoriesState:
        if not self._path.exists():
            return RepositoriesState()

        raw = json.loads(self._path.read_text(encoding="utf-8"))
        if raw is None:
            return RepositoriesState()
        return RepositoriesState.model_validate(raw)

    def save(self, state: RepositoriesState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(state.model_dump(mode="json"), indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        tmp.replace(self._path)

    def delete(self) -> None:
        self._path.unlink(missing_ok=True)


class AllRepositoriesResource:
    """Tracks repository ids for a set of repository names."""

    def __init__(self, provider_type_name: str = "githubrepos") -> None:
        self.type_name = f"{provider_type_name}_all"
        self._config: ResolvedConfig | None = None

    def configure(self, provider_data: object) -> None:
        """Attach the provider's resolved configuration.

        None leaves the resource unconfigured (the provider has not been
        configured yet).
        """

        if provider_data is None:
            return

        if not isinstance(provider_data, ResolvedConfig):
            raise ConfigurationError(
                [
                    Diagnostic(
                        "Unexpected Resource Configure Type",
                        f"Expected ResolvedConfig, got: {type(provider_data).__name__}. "
                        "Please report this issue to the provider developers.",
                    )
                ]
            )

        self._config = provider_data

    def _refresh(self, state: RepositoriesState) -> RepositoriesState:
        if self._config is None:
            raise ConfigurationError(
                [
                    Diagnostic(
                        "Unconfigured Provider",
                        f"The {self.type_name} resource was used before the provider was "
                        "configured.",
                    )
                ]
            )

        try:
            reconcile(self._config.owner, self._config.client, state.repos)
        except FetchError as e:
            raise RepositoryReadError(
                "Error Reading GitHub Repositories",
                f"Could not read GitHub repositories: {e}",
            ) from e
        return state

    def create(self, plan: RepositoriesState) -> RepositoriesState:
        """Create the resource and return the initial state."""

        return self._refresh(plan)

    def read(self, state: RepositoriesState) -> RepositoriesState:
        """Refresh the stored state with the latest ids from GitHub."""

        return self._refresh(state)

    def update(self, plan: RepositoriesState) -> RepositoriesState:
        return self._refresh(plan)

    def delete(self, state: RepositoriesState) -> None:
        logger.debug(
            "Removing repositories from state", extra={"count": len(state.repos)}
        )
