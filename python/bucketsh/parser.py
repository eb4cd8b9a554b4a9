"""Command line tokenizing for bucketsh."""

from __future__ import annotations

from typing import List


def split_command(line: str) -> List[str]:
    """Split a command line on whitespace.

    Quoting is not interpreted; arbitrary bytes are entered with ``\\xHH``
    escapes instead (see :mod:`bucketsh.codec`).
    """
    if not line:
        return []
    return line.split()


__all__ = ["split_command"]
