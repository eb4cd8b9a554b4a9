"""Command base classes for bucketsh."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..codec import bytes_to_string
from ..context import ShellContext
from ..errors import CommandError
from ..store import StoreError
from ..validate import Validates

LOGGER = logging.getLogger("bucketsh.commands")

HELP_COLUMN = 24
MAX_COMPLETIONS = 64


def unknown_command_message(name: str) -> str:
    return f"unknown command: '{name}', press ?/h for help"


@dataclass
class Command:
    """Abstract command description."""

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)
    usage: Optional[str] = None
    validates: Validates = field(default_factory=Validates)

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)

    def check(self, ctx: ShellContext, argv: List[str]) -> None:
        self.validates.finish()(argv)

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        return f"{', '.join(self.names):<{HELP_COLUMN}} {self.description}"

    def format_usage(self) -> str:
        if self.usage:
            return f"{self.description}.\nUsage: {self.usage}"
        return f"{', '.join(self.names)}    {self.description}"

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        """Candidates for the argument at *position* (used by tab completion)."""
        return []


def bucket_names(ctx: ShellContext) -> List[str]:
    """Top-level bucket names in display form, for completion."""
    store = ctx.store
    if store is None or store.closed:
        return []
    names: List[str] = []
    try:
        with store.view() as tx:
            for name, _bucket in tx.buckets():
                names.append(bytes_to_string(name))
                if len(names) >= MAX_COMPLETIONS:
                    break
    except StoreError as exc:
        LOGGER.debug("bucket completion failed: %s", exc)
        return []
    return names


__all__ = ["Command", "CommandError", "bucket_names", "unknown_command_message"]
