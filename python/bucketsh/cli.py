"""bucketsh CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from .commands import CommandRegistry, build_registry
from .context import DEFAULT_PAGE_SIZE, ShellConfig, ShellContext, default_history_path
from .history import DEFAULT_MAX_LINES
from .reader import create_reader
from .repl import ShellREPL
from .store import BucketStore, StoreError

LOG = logging.getLogger("bucketsh.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bucketsh",
        description="Inspect and edit a bucket database file",
        usage="%(prog)s [OPTION] <database-filename> [command ...]",
    )
    parser.add_argument("database", help="Database file to open")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Run a single command non-interactively instead of starting the shell",
    )
    parser.add_argument(
        "--history",
        type=Path,
        default=Path(os.environ["BUCKETSH_HISTORY"]) if os.environ.get("BUCKETSH_HISTORY") else default_history_path(),
        help="Path to command history file",
    )
    parser.add_argument(
        "--max-history",
        type=int,
        default=DEFAULT_MAX_LINES,
        help=f"Maximum number of history lines kept (default {DEFAULT_MAX_LINES})",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Rows printed before asking to continue (default {DEFAULT_PAGE_SIZE})",
    )
    parser.add_argument("--timeout", type=float, default=1.0, help="Seconds to wait for a locked database")
    parser.add_argument("--create", action="store_true", help="Create the database file, or add the bucket tables to an existing SQLite file")
    parser.add_argument("-s", "--script", type=Path, help="Run commands from a file, one per line")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("BUCKETSH_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        store = BucketStore.open(args.database, create=args.create, timeout=args.timeout)
    except StoreError as exc:
        print(exc)
        return 1
    config = ShellConfig(
        history_file=args.history,
        max_lines=args.max_history,
        page_size=args.page_size,
    )
    ctx = ShellContext(config=config, store=store, reader=create_reader(interactive=not args.script))
    registry = build_registry()
    try:
        if args.script:
            return _run_script(ctx, registry, args.script)
        if args.command:
            registry.execute(ctx, " ".join(args.command))
            return 0
        ctx.prompt = f"{args.database} >> "
        return ShellREPL(ctx, registry).run()
    except KeyboardInterrupt:
        print()
        return 0
    finally:
        ctx.close()
        store.close()


def _run_script(ctx: ShellContext, registry: CommandRegistry, path: Path) -> int:
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        print(f"cannot read script {path}: {exc}")
        return 1
    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        LOG.debug("%s:%d: %s", path, number, stripped)
        registry.execute(ctx, stripped)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
