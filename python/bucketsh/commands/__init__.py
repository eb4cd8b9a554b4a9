"""Command registry and dispatcher for bucketsh."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .base import Command, CommandError, unknown_command_message
from .buckets import BucketsCommand
from .copy_bucket import CopyBucketCommand
from .exit import ExitCommand
from .get import GetCommand
from .help import HelpCommand
from .keys import KeysCommand
from .merge import MergeAllBucketsCommand
from .remove import RemoveCommand
from .set_value import SetCommand
from .stat import StatCommand
from ..context import ShellContext
from ..output import emit_error
from ..parser import split_command
from ..store import StoreError
from ..validate import ValidationError

LOGGER = logging.getLogger("bucketsh.commands")


class DuplicateAliasError(ValueError):
    """Raised when two commands claim the same name or alias."""


class CommandRegistry:
    """Stores the known commands in registration order and resolves aliases."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._ordered: List[Command] = []

    def register(self, command: Command) -> None:
        names = command.names
        if len(set(names)) != len(names):
            raise DuplicateAliasError(f"command '{command.name}' repeats an alias: {', '.join(names)}")
        for name in names:
            existing = self._commands.get(name)
            if existing is not None:
                raise DuplicateAliasError(f"alias '{name}' of '{command.name}' is already used by '{existing.name}'")
        self._ordered.append(command)
        for name in names:
            self._commands[name] = command

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def list_commands(self) -> Iterable[Command]:
        return tuple(self._ordered)

    def execute(self, ctx: ShellContext, line: str) -> bool:
        """Dispatch one command line.

        Every failure is reported on the context output; the return value only
        tells whether the command ran to completion.
        """
        argv = split_command(line)
        if not argv:
            return True
        cmd_name, *cmd_args = argv
        command = self.get(cmd_name)
        if command is None:
            ctx.echo(unknown_command_message(cmd_name))
            return False
        try:
            command.check(ctx, cmd_args)
        except ValidationError as exc:
            emit_error(ctx, str(exc))
            return False
        try:
            command.run(ctx, cmd_args)
        except SystemExit:
            raise
        except (CommandError, StoreError) as exc:
            emit_error(ctx, str(exc))
            return False
        except Exception as exc:
            LOGGER.exception("command %s failed", command.name)
            emit_error(ctx, str(exc) or exc.__class__.__name__)
            return False
        return True


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    commands = [
        HelpCommand(),
        ExitCommand(),
        StatCommand(),
        GetCommand(),
        BucketsCommand(),
        KeysCommand(),
        RemoveCommand(),
        CopyBucketCommand(),
        SetCommand(),
        MergeAllBucketsCommand(),
    ]
    for command in commands:
        registry.register(command)
        bind = getattr(command, "bind", None)
        if callable(bind):
            bind(registry)
    return registry


__all__ = ["Command", "CommandError", "CommandRegistry", "DuplicateAliasError", "build_registry"]
