"""Key lookup command."""

from __future__ import annotations

from typing import List, Sequence

from .base import Command, bucket_names
from ..codec import bytes_to_string, string_to_bytes
from ..context import ShellContext
from ..validate import Validates


class GetCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "get",
            "Get key-value pairs",
            aliases=("g",),
            usage="get <bucket-name> [nest-bucket-name...] <key>",
            validates=Validates().min_args(2).max_args(1024),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        store = ctx.require_store()
        *path, key = argv
        with store.view() as tx:
            bucket = tx.bucket(string_to_bytes(path[0]))
            if bucket is None:
                ctx.echo("err: bucket not found")
                return 0
            for name in path[1:]:
                bucket = bucket.bucket(string_to_bytes(name))
                if bucket is None:
                    ctx.echo(f"err: bucket {name} not found")
                    return 0
            value = bucket.get(string_to_bytes(key))
        if value is None:
            ctx.echo("err: key-value not found")
        else:
            ctx.echo(bytes_to_string(value))
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        return bucket_names(ctx) if position == 0 else []
