"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .base import Command, CommandError, unknown_command_message
from ..context import ShellContext
from ..validate import Validates

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "help",
            "Print command help text. Specify a command name for more information about it",
            aliases=("h", "?"),
            validates=Validates().max_args(1),
        )
        self._registry: CommandRegistry | None = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        registry = self._registry
        if registry is None:
            raise CommandError("help is not bound to a command registry")
        if argv:
            command = registry.get(argv[0])
            if command is None:
                ctx.echo(unknown_command_message(argv[0]))
                return 0
            ctx.echo(command.format_usage())
            return 0
        for command in registry.list_commands():
            ctx.echo(command.format_help())
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv) -> List[str]:
        if position != 0 or self._registry is None:
            return []
        return [name for command in self._registry.list_commands() for name in command.names]
