from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from launchdb.config import load_config
from launchdb.errors import ConfigError, StoreUnavailable
from launchdb.handler import LaunchDB, open_launch_db
from launchdb.paths import canonicalize
from launchdb.query import applications_for_mime

EXIT_OK = 0
EXIT_NEGATIVE = 1
EXIT_UNAVAILABLE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="launchdb")
    parser.add_argument("--config", required=False)
    parser.add_argument("--database", required=False)
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("handle")
    p.add_argument("paths", nargs="+")
    sub.add_parser("list")
    p = sub.add_parser("exists")
    p.add_argument("path")
    p = sub.add_parser("can-open")
    p.add_argument("path")
    p = sub.add_parser("apps-for")
    p.add_argument("mime")
    sub.add_parser("clear")
    return parser


def _run(db: LaunchDB, args: argparse.Namespace) -> int:
    if args.command == "handle":
        for r in db.handler.handle_many(args.paths):
            outcome = r.capability.value if r.capability is not None else "-"
            print(f"{r.event.value}\t{outcome}\t{r.path}")
        return EXIT_OK

    if args.command == "list":
        for path in db.registry.list_all():
            print(path)
        return EXIT_OK

    if args.command == "exists":
        return EXIT_OK if db.registry.exists(canonicalize(args.path)) else EXIT_NEGATIVE

    if args.command == "can-open":
        value = db.resolver.can_open(canonicalize(args.path))
        if value is None:
            return EXIT_NEGATIVE
        print(value.strip())
        return EXIT_OK

    if args.command == "apps-for":
        apps = applications_for_mime(db.registry, db.resolver, args.mime)
        for path in apps:
            print(path)
        return EXIT_OK if apps else EXIT_NEGATIVE

    if args.command == "clear":
        return EXIT_OK if db.registry.remove_all() else EXIT_UNAVAILABLE

    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"invalid config: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    if args.database:
        config = replace(config, database_path=Path(args.database))

    try:
        db = open_launch_db(config)
    except StoreUnavailable as e:
        print(f"launch database unavailable: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE

    with db:
        return _run(db, args)


if __name__ == "__main__":
    sys.exit(main())
