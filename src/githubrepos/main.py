"""CLI entrypoint for driving the `githubrepos_all` resource against a local state file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from githubrepos import __version__
from githubrepos.config import ConnectionConfig, ProviderSettings
from githubrepos.errors import ConfigurationError, Diagnostic
from githubrepos.logging import configure_logging
from githubrepos.provider import DESCRIPTIONS, Provider
from githubrepos.reconcile import RepoState
from githubrepos.resource import RepositoriesState, StateStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="githubrepos",
        description="Track the ids of a named set of an owner's GitHub repositories",
    )
    parser.add_argument("--version", action="version", version=f"githubrepos {__version__}")
    parser.add_argument("--token", default=None, help=DESCRIPTIONS["token"])
    parser.add_argument("--owner", default=None, help=DESCRIPTIONS["owner"])
    parser.add_argument(
        "--state",
        default=str(Path("githubrepos.state.json")),
        help="Path of the JSON state file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Start tracking repositories")
    create.add_argument(
        "--repo", dest="repos", action="append", required=True, help=DESCRIPTIONS["repos"]
    )

    subparsers.add_parser("read", help="Refresh repository ids in the state file")

    update = subparsers.add_parser("update", help="Replace the tracked repository set")
    update.add_argument(
        "--repo", dest="repos", action="append", required=True, help=DESCRIPTIONS["repos"]
    )

    subparsers.add_parser("delete", help="Stop tracking and remove the state file")

    return parser


def _report(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        where = f" (attribute: {diagnostic.attribute})" if diagnostic.attribute else ""
        print(f"Error: {diagnostic.summary}{where}\n\n{diagnostic.detail}\n", file=sys.stderr)


def _plan(names: list[str], prior: RepositoriesState) -> RepositoriesState:
    return RepositoriesState(
        repos={
            name: prior.repos[name].model_copy() if name in prior.repos else RepoState()
            for name in names
        }
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ProviderSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    provider = Provider()
    store = StateStore(Path(args.state))

    try:
        if args.command == "delete":
            resource = provider.resources()[0]()
            resource.delete(store.load())
            store.delete()
            print(f"Removed {store.path}")
            return 0

        resolved = provider.configure(
            ConnectionConfig(token=args.token, owner=args.owner), settings
        )
        resource = provider.resources()[0]()
        resource.configure(resolved)

        try:
            if args.command == "create":
                state = resource.create(RepositoriesState.from_names(args.repos))
            elif args.command == "read":
                state = resource.read(store.load())
            elif args.command == "update":
                state = resource.update(_plan(args.repos, store.load()))
            else:
                logger.error("Unknown command", extra={"command": args.command})
                return 2
        finally:
            resolved.client.close()

        store.save(state)
        logger.info(
            "State persisted",
            extra={"path": str(store.path), "count": len(state.repos)},
        )
        print(json.dumps(state.model_dump(mode="json"), indent=2, sort_keys=True))
        return 0

    except ConfigurationError as e:
        _report(e.diagnostics)
        return 1

    except Diagnostic as e:
        _report([e])
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
