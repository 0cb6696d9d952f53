"""GitHub REST client for repository listings.

This intentionally wraps a `requests.Session` to keep GitHub calls out of the
reconciliation and CLI code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 100
REQUEST_TIMEOUT_SECONDS = 30


@dataclass(frozen=True, slots=True)
class RepositoryRecord:
    """Minimal repository metadata read from a listing."""

    name: str
    id: int


@dataclass(frozen=True, slots=True)
class RepositoryPage:
    """One page of a repository listing.

    `next_page` is None when GitHub signals no further page.
    """

    records: list[RepositoryRecord] = field(default_factory=list)
    next_page: int | None = None


def _normalize_base_url(base_url: str) -> str:
    value = (base_url or "").strip().rstrip("/")
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"Invalid GitHub API base URL: {base_url!r}")
    return value


def _next_page(response: requests.Response) -> int | None:
    next_link = response.links.get("next")
    if not next_link:
        return None
    url = next_link.get("url", "")
    values = parse_qs(urlparse(url).query).get("page")
    try:
        page = int(values[0]) if values else 0
    except ValueError:
        page = 0
    if page <= 0:
        raise ValueError(f"Unparseable next link: {url!r}")
    return page


class GitHubClient:
    """Small wrapper around the GitHub REST API for listing an owner's repositories."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = _normalize_base_url(base_url)
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "githubrepos",
            }
        )

    @property
    def base_url(self) -> str:
        """Return the normalized REST base URL."""

        return self._rest_base_url

    def _owner_repos_url(self, owner: str) -> str:
        owner = owner.strip().strip("/")
        if not owner:
            raise ValueError("owner must be a non-empty string")
        return f"{self._rest_base_url}/orgs/{owner}/repos"

    def list_owner_repositories(
        self,
        owner: str,
        *,
        sort: str = "full_name",
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> RepositoryPage:
        """Fetch a single page of the owner's repositories.

        Raises:
            requests.RequestException: On transport or HTTP errors.
            ValueError: If the response body is not a JSON list of repositories.
        """

        url = self._owner_repos_url(owner)
        logger.debug(
            "Listing repositories",
            extra={"owner": owner, "page": page, "per_page": per_page},
        )
        resp = self._session.get(
            url,
            params={"sort": sort, "per_page": per_page, "page": page},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        resp.raise_for_status()

        payload: Any = resp.json()
        if not isinstance(payload, list):
            raise ValueError(
                f"Unexpected repository listing payload for {owner!r}: "
                f"expected a list, got {type(payload).__name__}"
            )

        records: list[RepositoryRecord] = []
        for item in payload:
            name = item.get("name") if isinstance(item, dict) else None
            repo_id = item.get("id") if isinstance(item, dict) else None
            if not isinstance(name, str) or not isinstance(repo_id, int):
                raise ValueError(f"Repository entry is missing a name or id: {item!r}")
            records.append(RepositoryRecord(name=name, id=repo_id))

        return RepositoryPage(records=records, next_page=_next_page(resp))

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self._session.close()
        logger.debug("GitHub client closed")
