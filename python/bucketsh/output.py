"""Output helpers for bucketsh."""

from __future__ import annotations

from typing import Sequence

from tabulate import tabulate

from .context import ShellContext

TABLE_FORMAT = "simple"


def render_table(ctx: ShellContext, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    # cells are already escaped text; keep "007" as a key, not the number 7
    ctx.echo(tabulate(rows, headers=list(headers), tablefmt=TABLE_FORMAT, disable_numparse=True))


def emit_error(ctx: ShellContext, message: str) -> None:
    ctx.echo(f"error: {message}")


__all__ = ["TABLE_FORMAT", "emit_error", "render_table"]
