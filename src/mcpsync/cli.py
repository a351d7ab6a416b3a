# CLI interface for mcpsync
import argparse
import logging
import os
import sys
from typing import TextIO

from mcpsync import __version__
from mcpsync.clients import CLIENT_ALIASES, resolve_client_name
from mcpsync.config import get_project_root
from mcpsync.sync import NoConfigsError, SourceNotFoundError, SyncReport, sync_project

# ABOUTME: Exit codes
# 0 = success (including partial per-client failures), 1 = nothing could be synced
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# ABOUTME: Terminal codes for coloured output
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}

LOG_FORMAT = "%(levelname)s: %(message)s"


class Console:
    """Writes human-readable output, coloured only on a terminal.

    ABOUTME: Colour is off when stdout is not a TTY or NO_COLOR is set
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.color = self.out.isatty() and "NO_COLOR" not in os.environ

    def c(self, color: str, text: str) -> str:
        if not self.color:
            return text
        return f"{COLORS[color]}{text}{COLORS['reset']}"

    def print(self, text: str = "") -> None:
        print(text, file=self.out)

    def error(self, text: str) -> None:
        print(text, file=self.err)


def _configure_logging(verbose: bool) -> logging.Handler:
    """Route mcpsync warnings to stderr for the duration of a run."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger("mcpsync")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sync-project-mcps",
        description="Sync project-level MCP configurations across AI coding assistants",
        epilog=(
            "examples:\n"
            "  sync-project-mcps                     Merge all configs (add-only)\n"
            "  sync-project-mcps -s cursor           Use Cursor as source of truth\n"
            "  sync-project-mcps -s cursor --dry-run Preview changes"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"sync-project-mcps v{__version__}",
    )
    parser.add_argument(
        "-s", "--source",
        metavar="CLIENT",
        help=f"Use specific client as source of truth ({', '.join(CLIENT_ALIASES)})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be synced without writing files",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed information",
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Do not back up config files before rewriting them",
    )
    parser.add_argument(
        "-C", "--project-root",
        metavar="DIR",
        help="Project directory to sync (default: current directory)",
    )

    return parser


def print_report(console: Console, report: SyncReport, verbose: bool) -> None:
    """Print found configs, merged result and per-client sync status."""
    c = console.c

    console.print(c("cyan", "Found configurations:"))
    for client in report.found:
        servers = client.servers or {}
        console.print(f"  {c('green', '+')} {client.name}: {len(servers)} server(s)")
        if verbose:
            for name in servers:
                console.print(c("dim", f"      - {name}"))

    if report.unreadable:
        console.print()
        console.print(c("yellow", "Found but unreadable (skipped):"))
        for client in report.unreadable:
            console.print(f"  {c('yellow', '!')} {client.name}: {client.path}")

    if report.missing and verbose:
        console.print()
        console.print(c("dim", "Not found (skipped):"))
        for client in report.missing:
            console.print(c("dim", f"  - {client.name}"))

    console.print()
    console.print(f"{c('cyan', 'Merged result:')} {len(report.merged)} unique server(s)")
    for name in sorted(report.merged):
        console.print(f"  {c('blue', '-')} {name}")

    console.print()
    console.print(c("cyan", "Syncing to clients..."))
    for result in report.results:
        parts: list[str] = []
        if result.added:
            parts.append(c("green", f"+{len(result.added)}"))
        if result.removed:
            parts.append(c("red", f"-{len(result.removed)}"))
        change_info = f" ({', '.join(parts)})" if parts else ""

        if result.status == "failed":
            status = c("red", "fail")
        elif result.status == "skipped":
            status = c("dim", "skip")
        else:
            status = c("green", "sync")

        console.print(f"  [{status}] {result.name}{change_info}")

        if verbose:
            for name in result.added:
                console.print(c("green", f"      + {name}"))
            for name in result.removed:
                console.print(c("red", f"      - {name}"))

    if report.errors:
        console.print()
        for error_msg in report.errors:
            console.print(f"  {c('red', 'Error:')} {error_msg}")

    console.print()
    console.print(f"{c('green', 'Done!')}{' (dry run)' if report.dry_run else ''}")
    console.print()


def run(args: argparse.Namespace, console: Console) -> int:
    """Execute a sync run for parsed arguments.

    ABOUTME: Unknown --source fails before any file is read
    ABOUTME: Returns exit code based on results
    """
    c = console.c

    source_name = None
    if args.source:
        source_name = resolve_client_name(args.source)
        if source_name is None:
            console.error(c("red", f"Unknown source: {args.source}"))
            console.error(f"Valid sources: {', '.join(CLIENT_ALIASES)}")
            return EXIT_FAILURE

    console.print()
    console.print(c("bold", "Sync MCP Configurations"))
    console.print()

    if source_name:
        console.print(c("cyan", f"Source: {source_name}"))
        console.print()

    if args.dry_run:
        console.print(c("yellow", "DRY RUN - no files will be modified"))
        console.print()

    project_root = get_project_root(args.project_root)

    try:
        report = sync_project(
            project_root,
            source=args.source,
            dry_run=args.dry_run,
            backup=not args.no_backup,
        )
    except NoConfigsError as e:
        console.print(c("red", "No MCP configurations found."))
        console.print()
        console.print("Expected locations:")
        for client in e.clients:
            console.print(c("dim", f"  {client.name}: {client.path}"))
        console.print()
        console.print("Create at least one MCP config file to get started.")
        return EXIT_FAILURE
    except SourceNotFoundError as e:
        console.error(c("red", f'Source "{e.name}" not found in project.'))
        console.error("Available configs:")
        for name in e.available:
            console.error(c("dim", f"  - {name}"))
        return EXIT_FAILURE

    print_report(console, report, args.verbose)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and runs the sync
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = _configure_logging(args.verbose)
    try:
        return run(args, Console())
    finally:
        logging.getLogger("mcpsync").removeHandler(handler)


if __name__ == "__main__":
    sys.exit(main())
