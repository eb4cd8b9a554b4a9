"""Line editors used by the shell context."""

from __future__ import annotations

import sys
from typing import Iterable, Optional, Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer
from prompt_toolkit.history import DummyHistory, InMemoryHistory
from prompt_toolkit.input import Input
from prompt_toolkit.output import Output
from prompt_toolkit.patch_stdout import patch_stdout


class LineReader(Protocol):
    def prompt(self, message: str) -> str: ...

    def ask(self, message: str) -> str: ...

    def load_history(self, lines: Iterable[str]) -> None: ...

    def close(self) -> None: ...


class PromptReader:
    """prompt_toolkit session with in-memory history and optional completion.

    Accepted command lines are recorded by the session itself. Answers read
    through :meth:`ask` go through a second session and never reach recall.
    """

    def __init__(
        self,
        *,
        completer: Optional[Completer] = None,
        input: Optional[Input] = None,
        output: Optional[Output] = None,
    ) -> None:
        self.history = InMemoryHistory()
        self.closed = False
        self._session: PromptSession = PromptSession(
            history=self.history,
            completer=completer,
            complete_while_typing=False,
            input=input,
            output=output,
        )
        self._questions: PromptSession = PromptSession(history=DummyHistory(), input=input, output=output)

    def set_completer(self, completer: Optional[Completer]) -> None:
        self._session.completer = completer

    def prompt(self, message: str) -> str:
        return self._read(self._session, message)

    def ask(self, message: str) -> str:
        return self._read(self._questions, message)

    def _read(self, session: PromptSession, message: str) -> str:
        if self.closed:
            raise EOFError
        # Ctrl-C raises KeyboardInterrupt, Ctrl-D raises EOFError
        with patch_stdout():
            return session.prompt(message)

    def load_history(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.history.append_string(line)

    def close(self) -> None:
        self.closed = True


class PlainReader:
    """input() based reader for pipes and scripted sessions."""

    def prompt(self, message: str) -> str:
        return input(message)

    def ask(self, message: str) -> str:
        return input(message)

    def load_history(self, lines: Iterable[str]) -> None:
        return None

    def close(self) -> None:
        return None


def create_reader(*, interactive: bool = True) -> LineReader:
    """Prefer prompt_toolkit when both ends of the session are a terminal."""
    if interactive and sys.stdin.isatty() and sys.stdout.isatty():
        return PromptReader()
    return PlainReader()


__all__ = ["LineReader", "PlainReader", "PromptReader", "create_reader"]
