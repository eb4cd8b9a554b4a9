"""Bucket and key removal command."""

from __future__ import annotations

from typing import List, Sequence

from .base import Command, CommandError, bucket_names
from ..codec import string_to_bytes
from ..context import ShellContext
from ..validate import Validates

MODES = ("bucket", "key")


class RemoveCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "remove",
            "Remove bucket or keys",
            aliases=("rm",),
            usage="remove bucket <bucket-name...> | remove key <bucket-name> <key...>",
            validates=Validates().min_args(2).choices(0, MODES),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        mode, *rest = argv
        if mode == "key":
            return self._remove_keys(ctx, rest)
        return self._remove_buckets(ctx, rest)

    def _remove_keys(self, ctx: ShellContext, rest: List[str]) -> int:
        if len(rest) < 2:
            raise CommandError("remove a key must provide bucket and key")
        store = ctx.require_store()
        with store.update() as tx:
            bucket = tx.bucket(string_to_bytes(rest[0]))
            if bucket is None:
                return 0
            for key in rest[1:]:
                bucket.delete(string_to_bytes(key))
        return 0

    def _remove_buckets(self, ctx: ShellContext, rest: List[str]) -> int:
        if not rest:
            raise CommandError("remove a bucket must provide bucket name")
        store = ctx.require_store()
        with store.update() as tx:
            for name in rest:
                tx.delete_bucket(string_to_bytes(name))
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        if position == 0:
            return list(MODES)
        mode = argv[0] if argv else ""
        if mode == "bucket" or (mode == "key" and position == 1):
            return bucket_names(ctx)
        return []
