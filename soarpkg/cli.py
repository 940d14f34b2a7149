"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from soarpkg.config import generate_default_config
from soarpkg.errors import SoarError
from soarpkg.logsetup import LOGGER_NAME, setup_logging
from soarpkg.paths import (
    bin_path,
    cache_path,
    db_path,
    packages_path,
    repositories_path,
    root_path,
    setup_required_paths,
)

logger = logging.getLogger(LOGGER_NAME)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``soar`` command."""
    parser = argparse.ArgumentParser(prog="soar", description="Package manager")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("-j", "--json", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")
    commands.add_parser("defconfig", help="Generate default config")
    commands.add_parser("env", help="View env")

    self_cmd = commands.add_parser("self", help="Modify the soar installation")
    actions = self_cmd.add_subparsers(dest="action", required=True, metavar="ACTION")
    actions.add_parser("uninstall", help="Uninstall soar")
    return parser


def expand_stdin_args(args: Sequence[str], stdin: TextIO) -> list[str]:
    """Replace each ``-`` argument with the whitespace-separated words read from ``stdin``.

    Standard input is read to its end on the first ``-``, so any later ``-``
    expands to nothing. If reading fails, the ``-`` is kept as it is.
    """
    result = list(args)
    pos = 0
    while pos < len(result):
        if result[pos] != "-":
            pos += 1
            continue
        try:
            content = stdin.read()
        except OSError:
            pos += 1
            continue
        result[pos : pos + 1] = content.split()
    return result


def interactive_ask(question: str) -> str:
    """Print ``question``, read one line from standard input and return it stripped."""
    try:
        sys.stdout.write(question)
        sys.stdout.flush()
        response = sys.stdin.readline()
    except OSError as exc:
        raise SoarError(f"IO error: {exc}") from exc
    return response.strip()


def show_env() -> list[str]:
    """Log the directories in use as ``NAME=path`` lines and return those lines."""
    lines = [
        f"SOAR_ROOT={root_path()}",
        f"SOAR_BIN={bin_path()}",
        f"SOAR_DB={db_path()}",
        f"SOAR_CACHE={cache_path()}",
        f"SOAR_PACKAGE={packages_path()}",
        f"SOAR_REPOSITORIES={repositories_path()}",
    ]
    for line in lines:
        logger.info(line)
    return lines


def uninstall_self(self_bin: str | os.PathLike) -> bool:
    """Delete the program's own executable; return whether that succeeded."""
    try:
        os.remove(self_bin)
    except OSError as exc:
        logger.error("%s\nFailed to uninstall soar.", exc)
        return False
    logger.info("Soar has been uninstalled successfully.")
    logger.info("You should remove soar config and data files manually.")
    return True


def _dispatch(args: argparse.Namespace, self_bin: str) -> bool:
    if args.command == "defconfig":
        generate_default_config()
        return True
    if args.command == "env":
        show_env()
        return True
    if args.command == "self" and args.action == "uninstall":
        uninstall_self(self_bin)
        return True
    raise SoarError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    self_bin = sys.argv[0] if sys.argv else "soar"

    setup_required_paths()

    parser = build_parser()
    arguments = expand_stdin_args(argv, sys.stdin)
    if not arguments:
        parser.print_help(sys.stderr)
        return 2

    args = parser.parse_args(arguments)
    setup_logging(args.verbose, args.quiet, args.json)

    try:
        _dispatch(args, self_bin)
    except SoarError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())