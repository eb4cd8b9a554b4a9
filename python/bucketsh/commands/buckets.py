"""Bucket listing command."""

from __future__ import annotations

from typing import Iterator, List

from .base import Command
from ..codec import bytes_to_string
from ..context import ShellContext
from ..matcher import Matcher
from ..pager import paginate
from ..store import Transaction
from ..validate import Validates


def iter_bucket_rows(tx: Transaction, matcher: Matcher) -> Iterator[List[str]]:
    for name, bucket in tx.buckets():
        if not matcher.match(name):
            continue
        stats = bucket.stats()
        yield [bytes_to_string(name), str(stats.key_n), str(stats.depth)]


class BucketsCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "buckets",
            "List all buckets",
            aliases=("b",),
            usage="buckets [pattern]",
            validates=Validates().max_args(1),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        matcher = Matcher(argv[0] if argv else "")
        store = ctx.require_store()
        with store.view() as tx:
            paginate(ctx, ["bucket", "keys", "depth"], iter_bucket_rows(tx, matcher))
        return 0
