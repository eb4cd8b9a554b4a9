"""Exit command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ShellContext
from ..validate import Validates


class ExitCommand(Command):
    def __init__(self) -> None:
        super().__init__("exit", "Exit", aliases=("q",), validates=Validates().num_args(0))

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        ctx.close()
        raise SystemExit(0)
