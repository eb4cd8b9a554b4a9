"""Shell context and configuration."""

from __future__ import annotations

import logging
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TextIO

from .errors import CommandError
from .history import DEFAULT_MAX_LINES, HistoryFile
from .reader import LineReader, PlainReader
from .store import BucketStore

if TYPE_CHECKING:  # pragma: no cover
    from .commands import CommandRegistry

LOGGER = logging.getLogger("bucketsh.context")

DEFAULT_PROMPT = ">> "
DEFAULT_PAGE_SIZE = 32
HISTORY_FILENAME = ".bucketsh.history"


def default_history_path() -> Path:
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(tempfile.gettempdir())
    return home / HISTORY_FILENAME


@dataclass
class ShellConfig:
    """Settings fixed when the session is built."""

    history_file: Optional[Path] = field(default_factory=default_history_path)
    max_lines: int = DEFAULT_MAX_LINES
    prompt: str = DEFAULT_PROMPT
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class ShellContext:
    """Holds the state shared by every command of one shell session."""

    config: ShellConfig = field(default_factory=ShellConfig)
    store: Optional[BucketStore] = None
    output: TextIO = field(default_factory=lambda: sys.stdout)
    reader: Optional[LineReader] = None
    prompt: str = ""
    command: str = field(default="", init=False)
    err: Optional[BaseException] = field(default=None, init=False)
    history: HistoryFile = field(init=False, repr=False)
    closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not self.prompt:
            self.prompt = self.config.prompt
        if self.reader is None:
            self.reader = PlainReader()
        self.history = HistoryFile(self.config.history_file, max_lines=self.config.max_lines)

    def require_store(self) -> BucketStore:
        if self.store is None or self.store.closed:
            raise CommandError("no database open")
        return self.store

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def next(self) -> bool:
        """Read the next non-blank line into ``command``.

        Returns False once input ends; the reason is kept in ``err``.
        """
        while True:
            try:
                line = self.reader.prompt(self.prompt)
            except KeyboardInterrupt:
                self.echo("")
                continue
            except (EOFError, OSError) as exc:
                self.err = exc
                return False
            if not line.strip():
                continue
            self.command = line
            return True

    def do(self, registry: "CommandRegistry") -> None:
        registry.execute(self, self.command)
        self.append_history(self.command)

    def read_line(self, prompt: str) -> str:
        return self.reader.ask(prompt)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def echo(self, text: str) -> None:
        if not text.endswith("\n"):
            text += "\n"
        self.output.write(text)
        self.output.flush()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def read_history(self) -> int:
        entries = self.history.load()
        self.reader.load_history(entries)
        return len(entries)

    def append_history(self, line: str) -> None:
        # the line editor already keeps live input for recall
        text = line.strip()
        if text:
            self.history.append(text)

    def write_history(self) -> int:
        return self.history.write()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.reader.close()
        except Exception as exc:  # pragma: no cover
            LOGGER.debug("line reader close failed: %s", exc)


__all__ = ["DEFAULT_PAGE_SIZE", "DEFAULT_PROMPT", "ShellConfig", "ShellContext", "default_history_path"]
