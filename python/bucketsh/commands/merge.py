"""Merge every bucket into one."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .base import Command, bucket_names
from .copy_bucket import copy_bucket_contents
from ..codec import string_to_bytes
from ..context import ShellContext
from ..validate import Validates

LOGGER = logging.getLogger("bucketsh.commands.merge")


class MergeAllBucketsCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "merge-all-buckets-into-one",
            "Merges all buckets data into one bucket, keep only one bucket when this command success",
            usage="merge-all-buckets-into-one <bucket-name>",
            validates=Validates().num_args(1),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        dest = string_to_bytes(argv[0])
        store = ctx.require_store()
        with store.view() as tx:
            names = [name for name, _bucket in tx.buckets()]
        with store.update() as tx:
            target = tx.create_bucket_if_not_exists(dest)
            for name in names:
                if name == dest:
                    continue
                source = tx.bucket(name)
                if source is None:
                    continue
                copied = copy_bucket_contents(source, target)
                tx.delete_bucket(name)
                LOGGER.debug("merged %d entries from %r into %r", copied, name, dest)
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        return bucket_names(ctx) if position == 0 else []
