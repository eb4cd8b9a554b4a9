"""Paged table output for long listings.

Row producers are plain iterators; :func:`paginate` consumes them, prints one
page at a time and asks the user whether to keep going between pages.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .context import ShellContext
from .output import render_table

CONTINUE_PROMPT = "continue [Y/n]?"
YES_ANSWERS = frozenset({"y", "yes", "Y", "YES", "Yes", ""})
NO_ANSWERS = frozenset({"n", "no", "N", "No", "NO"})


def ask_continue(ctx: ShellContext) -> bool:
    while True:
        try:
            line = ctx.read_line(CONTINUE_PROMPT)
        except (EOFError, KeyboardInterrupt, OSError):
            return False
        if line in YES_ANSWERS:
            return True
        if line in NO_ANSWERS:
            return False
        ctx.echo("Invalid input")


class TablePrinter:
    """Accumulates numbered rows and flushes them one page at a time."""

    def __init__(self, ctx: ShellContext, headers: Sequence[str], *, page_size: Optional[int] = None) -> None:
        self.ctx = ctx
        self.headers: List[str] = ["id", *headers]
        self.page_size = ctx.config.page_size if page_size is None else page_size
        self.rows: List[List[str]] = []
        self.total = 0
        self.pages = 0

    def add(self, row: Sequence[str]) -> bool:
        """Queue *row*; returns False when the user asked to stop."""
        self.total += 1
        self.rows.append([str(self.total), *row])
        if self.page_size > 0 and self.total % self.page_size == 0:
            self.flush()
            return ask_continue(self.ctx)
        return True

    def flush(self) -> None:
        if not self.rows:
            return
        render_table(self.ctx, self.headers, self.rows)
        self.rows = []
        self.pages += 1


def paginate(
    ctx: ShellContext,
    headers: Sequence[str],
    rows: Iterable[Sequence[str]],
    *,
    page_size: Optional[int] = None,
) -> int:
    """Print *rows* page by page; returns how many rows were consumed."""
    printer = TablePrinter(ctx, headers, page_size=page_size)
    try:
        for row in rows:
            if not printer.add(row):
                break
    finally:
        printer.flush()
    return printer.total


__all__ = ["CONTINUE_PROMPT", "TablePrinter", "ask_continue", "paginate"]
