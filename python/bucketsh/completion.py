"""prompt_toolkit completer for bucketsh."""

from __future__ import annotations

from typing import Iterable, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .commands import CommandRegistry
from .context import ShellContext


def _normalise_tokens(text: str) -> List[str]:
    if not text:
        return []
    tokens = text.split()
    if text[-1].isspace():
        tokens.append("")
    return tokens


class ShellCompleter(Completer):
    """Completes command names, then whatever the command offers per argument."""

    def __init__(self, ctx: ShellContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        tokens = _normalise_tokens(document.text_before_cursor)
        if not tokens:
            yield from self._emit(self._command_names(), "")
            return
        prefix = tokens[-1]
        if len(tokens) == 1:
            yield from self._emit(self._command_names(), prefix)
            return
        command = self.registry.get(tokens[0])
        if command is None:
            return
        argv = tokens[1:-1]
        candidates = command.complete_argument(self.ctx, len(argv), argv)
        yield from self._emit(candidates, prefix)

    def _command_names(self) -> List[str]:
        names: List[str] = []
        for command in self.registry.list_commands():
            names.extend(command.names)
        return names

    def _emit(self, candidates: Iterable[str], prefix: str) -> Iterable[Completion]:
        for entry in self._format_candidates(candidates, prefix):
            yield Completion(entry, start_position=-len(prefix))

    @staticmethod
    def _format_candidates(candidates: Iterable[str], prefix: str = "") -> List[str]:
        if not prefix:
            return sorted(dict.fromkeys(candidates))
        return sorted(dict.fromkeys(c for c in candidates if c.startswith(prefix)))


__all__ = ["ShellCompleter"]
