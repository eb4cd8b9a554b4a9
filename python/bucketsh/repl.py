"""Interactive REPL for bucketsh."""

from __future__ import annotations

import logging

from .commands import CommandRegistry
from .commands.help import HelpCommand
from .completion import ShellCompleter
from .context import ShellContext
from .reader import PromptReader

LOGGER = logging.getLogger("bucketsh.repl")


class ShellREPL:
    """Reads lines until end of input or ``exit``; keeps history across runs."""

    def __init__(self, ctx: ShellContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry
        help_command = self.registry.get("help")
        if isinstance(help_command, HelpCommand):
            help_command.bind(registry)
        if isinstance(ctx.reader, PromptReader):
            ctx.reader.set_completer(ShellCompleter(ctx, registry))

    def run(self) -> int:
        self._read_history()
        try:
            while self.ctx.next():
                self.ctx.do(self.registry)
        finally:
            self._write_history()
            self.ctx.close()
        err = self.ctx.err
        if err is not None and not isinstance(err, EOFError):
            LOGGER.warning("input closed: %s", err)
        return 0

    def _read_history(self) -> None:
        try:
            count = self.ctx.read_history()
        except (OSError, UnicodeError) as exc:
            self.ctx.echo(f"read history fails: {exc}")
            return
        LOGGER.debug("history: %d entries", count)

    def _write_history(self) -> None:
        try:
            self.ctx.write_history()
        except OSError as exc:
            self.ctx.echo(f"write history fails: {exc}")
