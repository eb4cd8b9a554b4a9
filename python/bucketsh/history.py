"""Persistent command history helpers."""

from __future__ import annotations

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional

LOGGER = logging.getLogger("bucketsh.history")

DEFAULT_MAX_LINES = 65536
HISTORY_MODE = 0o600


def compact_lines(lines: Iterable[str], max_lines: int) -> List[str]:
    """Fold duplicate lines and keep only the newest *max_lines* entries.

    A line seen again moves to the most recent position, so the result holds
    every distinct line once, ordered by last use.  When over budget the oldest
    entries are dropped first.
    """
    ordered: Dict[str, None] = {}
    for line in lines:
        if line in ordered:
            del ordered[line]
        ordered[line] = None
    result = list(ordered)
    limit = max(0, int(max_lines))
    if len(result) > limit:
        result = result[len(result) - limit :]
    return result


def _read_lines(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8", errors="surrogateescape") as handle:
        return [line.rstrip("\r\n") for line in handle if line.strip()]


def keep_max_lines(path: Path, max_lines: int) -> int:
    """Rewrite *path* in compacted form; returns the number of lines kept.

    The new content goes to a temporary file in the same directory that carries
    the original permission bits and then replaces the original atomically.
    """
    path = Path(path)
    mode = stat.S_IMODE(path.stat().st_mode)
    kept = compact_lines(_read_lines(path), max_lines)
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", dir=str(path.parent))
    try:
        os.chmod(tmp_name, mode)
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as tmp:
            for line in kept:
                tmp.write(line)
                tmp.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise
    return len(kept)


class HistoryFile:
    """File-backed history: loaded once per session, written back at the end."""

    def __init__(self, path: Optional[str | Path], *, max_lines: int = DEFAULT_MAX_LINES) -> None:
        self.max_lines = max(0, int(max_lines))
        self.path = Path(path).expanduser() if path else None
        self.entries: List[str] = []
        self.pending: List[str] = []

    def load(self) -> List[str]:
        """Read prior entries. A missing file is not an error."""
        if not self.path:
            return []
        try:
            self.entries = _read_lines(self.path)
        except FileNotFoundError:
            self.entries = []
        LOGGER.debug("loaded %d history entries from %s", len(self.entries), self.path)
        return list(self.entries)

    def append(self, line: str) -> None:
        text = line.strip()
        if not text:
            return
        self.pending.append(text)

    def snapshot(self) -> List[str]:
        return compact_lines(self.entries + self.pending, self.max_lines)

    def write(self) -> int:
        """Append this session's lines, then compact the file."""
        if not self.path:
            return 0
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, HISTORY_MODE)
        with os.fdopen(fd, "a", encoding="utf-8", errors="surrogateescape", newline="\n") as handle:
            for line in self.pending:
                handle.write(line)
                handle.write("\n")
        written = len(self.pending)
        self.entries.extend(self.pending)
        self.pending = []
        kept = keep_max_lines(self.path, self.max_lines)
        LOGGER.debug("wrote %d history entries, %d kept in %s", written, kept, self.path)
        return written


__all__ = ["DEFAULT_MAX_LINES", "HistoryFile", "compact_lines", "keep_max_lines"]
