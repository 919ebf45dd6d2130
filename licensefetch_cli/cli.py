#!/usr/bin/env python3
"""Command-line front-ends: ``get-license``, ``install-license`` and ``licensefetch``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from . import __version__
from .config import load_settings
from .errors import LicenseFetchError
from .identity import IdentityProvider
from .installer import DEFAULT_TARGET, InstallRequest, install
from .query import collect_records, format_record, format_summaries, get_one, list_all
from .registry import HttpLicenseRegistry, LicenseRegistry

RegistryFactory = Callable[[argparse.Namespace], LicenseRegistry]

OVERRIDE_OPTIONS = ("author", "year", "company", "project")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def default_registry(args: argparse.Namespace) -> LicenseRegistry:
    settings = load_settings().with_base_url(getattr(args, "base_url", None))
    return HttpLicenseRegistry(settings)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--base-url", help="Registry base address (default: $LICENSEFETCH_BASE_URL or GitHub)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests and substitutions to stderr")


def add_get_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("keys", nargs="*", metavar="KEY", help="License identifiers (e.g. mit, gpl-3.0)")
    parser.add_argument("--list", action="store_true", help="List every license the registry offers")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Print the licenses that were found even when some keys fail",
    )
    add_common_arguments(parser)


def add_install_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("key", help="License identifier to install (e.g. mit, apache-2.0)")
    parser.add_argument("-p", "--path", default=DEFAULT_TARGET, help=f"Destination file (default: {DEFAULT_TARGET})")
    parser.add_argument("--author", help="Author name (default: git user.name, then the system user)")
    parser.add_argument("--year", help="Copyright year (default: '<current year>-present')")
    parser.add_argument("--company", help="Copyright owner for Apache, MIT and BSD licenses")
    parser.add_argument("--project", help="Program name for GNU licenses")
    parser.add_argument(
        "--base",
        action="store_true",
        help="Write the license text as published, without filling placeholders",
    )
    add_common_arguments(parser)


def check_install_arguments(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if not args.base:
        return
    conflicts = [f"--{name}" for name in OVERRIDE_OPTIONS if getattr(args, name) is not None]
    if conflicts:
        parser.error(f"--base cannot be combined with {', '.join(conflicts)}")


def run_get(args: argparse.Namespace, registry: LicenseRegistry) -> int:
    try:
        if args.list or not args.keys:
            sys.stdout.write(format_summaries(list_all(registry)))
            return 0
        if args.keep_going:
            result = collect_records(registry, args.keys)
            sys.stdout.write("\n".join(format_record(record) for record in result.records))
            for error in result.failures.values():
                print(str(error), file=sys.stderr)
            return 0 if result.ok else 1
        records = get_one(registry, args.keys)
    except LicenseFetchError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    sys.stdout.write("\n".join(format_record(record) for record in records))
    return 0


def run_install(
    args: argparse.Namespace,
    registry: LicenseRegistry,
    identity: Optional[IdentityProvider] = None,
) -> int:
    request = InstallRequest(
        key=args.key,
        target_path=args.path,
        author=args.author,
        year=args.year,
        company=args.company,
        project=args.project,
        raw=args.base,
    )
    try:
        target = install(request, registry, identity=identity)
    except LicenseFetchError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Wrote {request.key.lower()} license to {target}")
    return 0


def get_license_main(
    argv: Optional[Sequence[str]] = None,
    registry_factory: RegistryFactory = default_registry,
) -> int:
    parser = argparse.ArgumentParser(
        prog="get-license",
        description="List registry licenses or show the full record for specific ones.",
    )
    add_get_arguments(parser)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return run_get(args, registry_factory(args))


def install_license_main(
    argv: Optional[Sequence[str]] = None,
    registry_factory: RegistryFactory = default_registry,
) -> int:
    parser = argparse.ArgumentParser(
        prog="install-license",
        description="Download a license and write it with your name, year and project filled in.",
    )
    add_install_arguments(parser)
    args = parser.parse_args(argv)
    check_install_arguments(parser, args)
    configure_logging(args.verbose)
    return run_install(args, registry_factory(args))


def main(
    argv: Optional[Sequence[str]] = None,
    registry_factory: RegistryFactory = default_registry,
) -> int:
    parser = argparse.ArgumentParser(
        prog="licensefetch",
        description="Fetch open source licenses from a license registry.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)
    get_parser = commands.add_parser("get", help="List licenses or show license records")
    add_get_arguments(get_parser)
    install_parser = commands.add_parser("install", help="Write a license file")
    add_install_arguments(install_parser)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if args.command == "get":
        return run_get(args, registry_factory(args))
    check_install_arguments(install_parser, args)
    return run_install(args, registry_factory(args))


if __name__ == "__main__":
    raise SystemExit(main())
