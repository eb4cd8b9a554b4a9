"""Key assignment command."""

from __future__ import annotations

from typing import List, Sequence

from .base import Command, bucket_names
from ..codec import string_to_bytes
from ..context import ShellContext
from ..validate import Validates


class SetCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "set",
            "Set key-value pairs",
            aliases=("s",),
            usage="set <bucket> <key> <value>",
            validates=Validates().num_args(3),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        bucket_name, key, value = (string_to_bytes(arg) for arg in argv)
        store = ctx.require_store()
        with store.update() as tx:
            tx.create_bucket_if_not_exists(bucket_name).put(key, value)
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        return bucket_names(ctx) if position == 0 else []
