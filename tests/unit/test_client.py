"""Unit tests for the GitHub REST client (mocked session)."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
import requests

from githubrepos.client import GitHubClient, RepositoryRecord


def _response(payload: Any, links: dict[str, dict[str, str]] | None = None) -> Mock:
    resp = Mock()
    resp.json.return_value = payload
    resp.links = links or {}
    resp.raise_for_status.return_value = None
    return resp


def _client(*responses: Mock) -> tuple[GitHubClient, Mock]:
    session = Mock()
    session.headers = {}
    session.get.side_effect = list(responses)
    client = GitHubClient(token="test-token", base_url="https://api.github.com/", session=session)
    return client, session


def test_client_sets_auth_headers() -> None:
    _, session = _client()

    assert session.headers["Authorization"] == "Bearer test-token"
    assert session.headers["Accept"] == "application/vnd.github+json"


@pytest.mark.parametrize("base_url", ["", "api.github.com", "ftp://example.com", "https://"])
def test_client_rejects_malformed_base_url(base_url: str) -> None:
    with pytest.raises(ValueError):
        GitHubClient(token="test-token", base_url=base_url, session=Mock())


def test_client_requires_token() -> None:
    with pytest.raises(ValueError):
        GitHubClient(token="", session=Mock())


def test_list_owner_repositories_parses_page_and_next_link() -> None:
    client, session = _client(
        _response(
            [{"name": "alpha", "id": 1, "full_name": "octo-org/alpha"}, {"name": "beta", "id": 2}],
            links={
                "next": {
                    "url": "https://api.github.com/organizations/9/repos?sort=full_name&per_page=100&page=2",
                    "rel": "next",
                },
                "last": {"url": "https://api.github.com/organizations/9/repos?page=3", "rel": "last"},
            },
        )
    )

    page = client.list_owner_repositories("octo-org")

    assert page.records == [RepositoryRecord(name="alpha", id=1), RepositoryRecord(name="beta", id=2)]
    assert page.next_page == 2
    session.get.assert_called_once_with(
        "https://api.github.com/orgs/octo-org/repos",
        params={"sort": "full_name", "per_page": 100, "page": 1},
        timeout=30,
    )


def test_list_owner_repositories_last_page_has_no_next() -> None:
    client, _ = _client(_response([{"name": "gamma", "id": 3}]))

    page = client.list_owner_repositories("octo-org", page=3)

    assert page.records == [RepositoryRecord(name="gamma", id=3)]
    assert page.next_page is None


def test_list_owner_repositories_propagates_http_errors() -> None:
    resp = _response([])
    resp.raise_for_status.side_effect = requests.HTTPError("401 Client Error: Unauthorized")
    client, _ = _client(resp)

    with pytest.raises(requests.HTTPError, match="Unauthorized"):
        client.list_owner_repositories("octo-org")


def test_list_owner_repositories_rejects_non_list_payload() -> None:
    client, _ = _client(_response({"message": "Not Found"}))

    with pytest.raises(ValueError, match="expected a list"):
        client.list_owner_repositories("octo-org")


def test_list_owner_repositories_rejects_entry_without_id() -> None:
    client, _ = _client(_response([{"name": "alpha"}]))

    with pytest.raises(ValueError, match="missing a name or id"):
        client.list_owner_repositories("octo-org")


def test_list_owner_repositories_rejects_non_dict_entries() -> None:
    client, _ = _client(_response([{"name": "alpha", "id": 1}, "garbage", None]))

    with pytest.raises(ValueError, match="missing a name or id"):
        client.list_owner_repositories("octo-org")


@pytest.mark.parametrize(
    "next_url",
    [
        "https://api.github.com/orgs/octo-org/repos?cursor=abc",
        "https://api.github.com/orgs/octo-org/repos?page=two",
        "https://api.github.com/orgs/octo-org/repos?page=0",
    ],
)
def test_list_owner_repositories_rejects_unusable_next_link(next_url: str) -> None:
    client, _ = _client(
        _response([{"name": "alpha", "id": 1}], links={"next": {"url": next_url, "rel": "next"}})
    )

    with pytest.raises(ValueError, match="Unparseable next link"):
        client.list_owner_repositories("octo-org")


def test_close_closes_session() -> None:
    client, session = _client()

    client.close()

    session.close.assert_called_once_with()
