"""Bucket copy command."""

from __future__ import annotations

from typing import List, Sequence

from .base import Command, bucket_names
from ..codec import string_to_bytes
from ..context import ShellContext
from ..store import Bucket
from ..validate import Validates


def copy_bucket_contents(src: Bucket, dst: Bucket) -> int:
    """Copy every entry and nested bucket of *src* into *dst*; returns entries copied."""
    copied = 0
    for key, value in src.items():
        dst.put(key, value)
        copied += 1
    for name, nested in src.buckets():
        copied += copy_bucket_contents(nested, dst.create_bucket_if_not_exists(name))
    return copied


class CopyBucketCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "copy-bucket",
            "Copy bucket to another bucket",
            aliases=("cpbkt",),
            usage="copy-bucket <dst> <src>",
            validates=Validates().num_args(2),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        dst_name, src_name = (string_to_bytes(arg) for arg in argv)
        store = ctx.require_store()
        with store.update() as tx:
            src = tx.bucket(src_name)
            if src is None:
                return 0
            dst = tx.create_bucket_if_not_exists(dst_name)
            copy_bucket_contents(src, dst)
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        return bucket_names(ctx) if position in (0, 1) else []
