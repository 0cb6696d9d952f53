#!/usr/bin/env python3
"""Programmatic reconciliation example.

This demonstrates using the provider components directly:

* resolve the token and owner from `.env` / environment
* fetch the owner's repositories
* print the ids of the requested repositories

Repository names are passed as arguments (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from githubrepos.config import ConnectionConfig, ProviderSettings, resolve
from githubrepos.errors import ConfigurationError, FetchError
from githubrepos.logging import configure_logging
from githubrepos.reconcile import RepoState, reconcile


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Look up GitHub repository ids (example).")
    parser.add_argument("names", nargs="+", help="Repository names to look up")
    parser.add_argument("--owner", default=None, help="Owner (defaults to GITHUB_OWNER)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ProviderSettings()
    configure_logging(settings.log_level)

    try:
        resolved = resolve(
            ConnectionConfig(owner=args.owner),
            settings.github_token,
            settings.github_owner,
            base_url=settings.github_base_url,
        )
    except ConfigurationError as exc:
        for diagnostic in exc.diagnostics:
            print(f"{diagnostic.summary}: {diagnostic.detail}")
        return 1

    desired = {name: RepoState() for name in args.names}
    try:
        reconcile(resolved.owner, resolved.client, desired)
    except FetchError as exc:
        print(f"Could not read GitHub repositories: {exc}")
        return 1
    finally:
        resolved.client.close()

    for name, state in sorted(desired.items()):
        print(f"{name}: {state.id if state.id is not None else 'not found'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
