"""Key listing command."""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from .base import Command, bucket_names
from ..codec import bytes_to_string, string_to_bytes
from ..context import ShellContext
from ..matcher import Matcher
from ..pager import paginate
from ..store import Bucket
from ..validate import Validates

WITH_VALUE = "withvalue"


def parse_keys_args(argv: Sequence[str]) -> Tuple[str, str, bool]:
    """Split ``keys`` arguments into (bucket, pattern, with_value).

    The optional pattern and the ``withvalue`` flag may come in either order.
    Two extra tokens always show values; when neither is the flag both are
    ignored and every key is listed.
    """
    bucket = argv[0]
    extra = list(argv[1:])
    if not extra:
        return bucket, "", False
    if len(extra) == 1:
        if extra[0] == WITH_VALUE:
            return bucket, "", True
        return bucket, extra[0], False
    if extra[0] == WITH_VALUE:
        return bucket, extra[1], True
    if extra[1] == WITH_VALUE:
        return bucket, extra[0], True
    return bucket, "", True


def iter_key_rows(bucket: Bucket, matcher: Matcher, with_value: bool) -> Iterator[List[str]]:
    for key, value in bucket.items():
        if not matcher.match(key):
            continue
        row = [bytes_to_string(key)]
        if with_value:
            row.append(bytes_to_string(value))
        yield row


class KeysCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "keys",
            "List a bucket all keys",
            aliases=("k",),
            usage=f"keys <bucket-name> [pattern] [{WITH_VALUE}]",
            validates=Validates().min_args(1).max_args(3),
        )

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        name, pattern, with_value = parse_keys_args(argv)
        matcher = Matcher(pattern)
        headers = ["key", "value"] if with_value else ["key"]
        store = ctx.require_store()
        with store.view() as tx:
            bucket = tx.bucket(string_to_bytes(name))
            if bucket is None:
                ctx.echo("err: bucket not found")
                return 0
            paginate(ctx, headers, iter_key_rows(bucket, matcher, with_value))
        return 0

    def complete_argument(self, ctx: ShellContext, position: int, argv: Sequence[str]) -> List[str]:
        if position == 0:
            return bucket_names(ctx)
        return [WITH_VALUE] if WITH_VALUE not in argv[1:position] else []
