#!/usr/bin/env python3
"""CLI to provision or remove local Laravel and WordPress sites.

Inputs: framework subcommand, project name and an optional mode flag.
Side effects: clones or scaffolds the project under the projects root,
creates the MySQL schema, writes an Apache vhost with a mkcert certificate,
updates /etc/hosts and restarts Apache. --delete removes the directory,
vhost and hosts entries after confirmation.
"""
import argparse
import sys
from typing import Callable

from config import VERSION
from provisioner.frameworks import FRAMEWORKS
from provisioner.project import derive_names
from provisioner.utils import init_logging, log, status_fail
from provisioner.workflow import MODE_CLONE, MODE_DELETE, MODE_NEW, MODE_UPDATE, provision


# ─── Commands ────────────────────────────────────────────────────────────
def _run_framework(key: str, args: argparse.Namespace) -> int:
    try:
        names = derive_names(args.name)
    except ValueError as err:
        status_fail(str(err))
        return 1
    ok = provision(FRAMEWORKS[key], names, args.mode)
    return 0 if ok else 1


def cmd_laravel(args: argparse.Namespace) -> int:
    return _run_framework("laravel", args)


def cmd_wp(args: argparse.Namespace) -> int:
    return _run_framework("wp", args)


COMMANDS: dict[str, Callable[[argparse.Namespace], int]] = {
    "laravel": cmd_laravel,
    "wp": cmd_wp,
}


# ─── CLI ─────────────────────────────────────────────────────────────────
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="provision",
        description="Provision local Laravel and WordPress development sites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  provision laravel api.example.com        # clone example's api repo
  provision laravel api.example.com --new  # fresh Laravel install
  provision wp blog.example.com -n         # fresh WordPress install
  provision wp blog.example.com --delete   # remove site (keeps database)
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--debug", action="store_true", help="Show debug logging on the console")
    subparsers = parser.add_subparsers(dest="command", metavar="{laravel,wp}", required=True)

    for key, adapter in FRAMEWORKS.items():
        sub = subparsers.add_parser(
            key,
            help=f"Provision a {adapter.label} project",
            description=f"Clone, create or delete a local {adapter.label} project",
        )
        sub.add_argument("name", help="Domain-like project name, e.g. api.example.com")
        modes = sub.add_mutually_exclusive_group()
        modes.add_argument("-n", "--new", dest="mode", action="store_const", const=MODE_NEW,
                           help="Create a fresh project instead of cloning")
        modes.add_argument("-d", "--delete", dest="mode", action="store_const", const=MODE_DELETE,
                           help="Remove the project directory, vhost and hosts entries")
        modes.add_argument("-u", "--update", dest="mode", action="store_const", const=MODE_UPDATE,
                           help="Refresh the local database from remote (not implemented)")
        sub.set_defaults(mode=MODE_CLONE)
    return parser


def main(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    init_logging(None, debug=args.debug)
    log(f"argv={argv}")
    handler = COMMANDS[args.command]
    return handler(args)


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
