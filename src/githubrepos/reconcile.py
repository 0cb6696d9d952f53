"""Merge observed repository ids into a desired-state mapping.

The desired mapping decides *which* repositories are tracked; GitHub decides
*their ids*. Reconciliation never adds or removes keys, and only the `id` of
matching entries changes.
"""

from __future__ import annotations

import logging
from typing import Protocol

import requests
from pydantic import BaseModel, Field

from githubrepos.client import DEFAULT_PER_PAGE, RepositoryPage, RepositoryRecord
from githubrepos.errors import FetchError

logger = logging.getLogger(__name__)


class RepoState(BaseModel):
    """Observed state of one tracked repository."""

    id: int | None = Field(default=None, description="GitHub repository id")


class RepositoryLister(Protocol):
    """The part of `GitHubClient` the reconciler needs."""

    def list_owner_repositories(
        self,
        owner: str,
        *,
        sort: str = ...,
        per_page: int = ...,
        page: int = ...,
    ) -> RepositoryPage: ...


def fetch_all_repositories(owner: str, client: RepositoryLister) -> list[RepositoryRecord]:
    """Fetch every page of the owner's repositories, ordered by full name.

    Pages are requested one after another until GitHub signals no next page.

    Raises:
        FetchError: If any page request fails; no partial listing is returned.
    """

    records: list[RepositoryRecord] = []
    page = 1
    while True:
        try:
            result = client.list_owner_repositories(
                owner, sort="full_name", per_page=DEFAULT_PER_PAGE, page=page
            )
        except (requests.RequestException, ValueError) as e:
            logger.debug(
                "Failed to read GitHub repositories page",
                extra={"owner": owner, "page": page, "error": str(e)},
            )
            raise FetchError(e) from e

        records.extend(result.records)
        if result.next_page is None:
            return records
        page = result.next_page


def reconcile(owner: str, client: RepositoryLister, desired: dict[str, RepoState]) -> None:
    """Overwrite the ids of tracked repositories with the ids GitHub reports.

    The full listing is fetched before anything in `desired` is touched, so a
    failed fetch leaves it exactly as it was.

    Raises:
        FetchError: If the listing could not be fetched.
    """

    logger.debug("Reading GitHub repositories", extra={"owner": owner})
    repos = fetch_all_repositories(owner, client)
    logger.debug("GitHub repos are read", extra={"owner": owner, "count": len(repos)})

    logger.debug("Setting repos to state")
    for repo in repos:
        state = desired.get(repo.name)
        if state is None:
            continue
        state.id = repo.id

    logger.debug("Finished reading GitHub repositories")
