"""
Pytest configuration and fixtures for bucketsh tests.
"""
import io
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from bucketsh.commands import build_registry
from bucketsh.context import ShellConfig, ShellContext
from bucketsh.store import BucketStore


class ScriptedReader:
    """Line reader that replays canned answers, then reports end of input."""

    def __init__(self, lines=()):
        self.lines = list(lines)
        self.prompts = []
        self.history = []
        self.closed = False

    def _next(self, message):
        self.prompts.append(message)
        if not self.lines:
            raise EOFError
        item = self.lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def prompt(self, message):
        # like a line editor, keep accepted commands for recall
        line = self._next(message)
        if line.strip():
            self.history.append(line)
        return line

    def ask(self, message):
        return self._next(message)

    def load_history(self, lines):
        self.history.extend(lines)

    def close(self):
        self.closed = True


class Shell:
    """Runs command lines and returns what each one printed."""

    def __init__(self, ctx, registry):
        self.ctx = ctx
        self.registry = registry

    def __call__(self, line):
        start = len(self.ctx.output.getvalue())
        self.registry.execute(self.ctx, line)
        return self.ctx.output.getvalue()[start:]


@pytest.fixture
def store(tmp_path):
    db = BucketStore.open(tmp_path / "test.db", create=True)
    yield db
    db.close()


@pytest.fixture
def make_ctx(store, tmp_path):
    def _make(answers=(), *, page_size=32, history_file=None, max_lines=65536):
        config = ShellConfig(
            history_file=history_file or tmp_path / "history",
            max_lines=max_lines,
            page_size=page_size,
        )
        return ShellContext(config=config, store=store, output=io.StringIO(), reader=ScriptedReader(answers))

    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def shell(ctx, registry):
    return Shell(ctx, registry)
