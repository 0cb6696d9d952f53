"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from githubrepos.client import RepositoryPage, RepositoryRecord


class FakeRepositoryLister:
    """Serves pre-built pages and records every page requested."""

    def __init__(self, pages: list[RepositoryPage | Exception]) -> None:
        self._pages = pages
        self.calls: list[dict[str, Any]] = []

    def list_owner_repositories(
        self,
        owner: str,
        *,
        sort: str = "full_name",
        per_page: int = 100,
        page: int = 1,
    ) -> RepositoryPage:
        self.calls.append({"owner": owner, "sort": sort, "per_page": per_page, "page": page})
        result = self._pages[page - 1]
        if isinstance(result, Exception):
            raise result
        return result


def _build_pages(sizes: list[int]) -> list[RepositoryPage]:
    """Split a listing of `sum(sizes)` repositories named repo-0000.. into pages."""

    pages: list[RepositoryPage] = []
    start = 0
    for index, size in enumerate(sizes):
        records = [
            RepositoryRecord(name=f"repo-{n:04d}", id=n + 1) for n in range(start, start + size)
        ]
        next_page = index + 2 if index + 1 < len(sizes) else None
        pages.append(RepositoryPage(records=records, next_page=next_page))
        start += size
    return pages


@pytest.fixture
def build_pages() -> Callable[[list[int]], list[RepositoryPage]]:
    """Provide a builder for paginated listings."""
    return _build_pages


@pytest.fixture
def make_lister() -> Callable[[list[RepositoryPage | Exception]], FakeRepositoryLister]:
    """Provide a factory for fake repository listers."""
    return FakeRepositoryLister


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real credentials and `.env` files out of every test."""
    for name in ("GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_BASE_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
