"""Database summary command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ShellContext
from ..output import render_table
from ..validate import Validates


class StatCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "stat",
            "Print database basic information",
            aliases=("st",),
            validates=Validates().num_args(0),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        store = ctx.require_store()
        total = buckets = max_depth = 0
        with store.view() as tx:
            for _name, bucket in tx.buckets():
                stats = bucket.stats()
                total += stats.key_n
                buckets += 1
                max_depth = max(max_depth, stats.depth)
        render_table(ctx, ["keys", "buckets", "max-depth"], [[str(total), str(buckets), str(max_depth)]])
        return 0
