"""Tests for the prompt_toolkit line reader."""

from __future__ import annotations

import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from bucketsh.pager import CONTINUE_PROMPT
from bucketsh.reader import PromptReader


@pytest.fixture
def pipe():
    with create_pipe_input() as inp:
        yield inp


def test_command_is_recalled_once(make_ctx, registry, pipe):
    reader = PromptReader(input=pipe, output=DummyOutput())
    ctx = make_ctx()
    ctx.reader = reader
    pipe.send_text("stat\r")
    assert ctx.next()
    ctx.do(registry)
    assert reader.history.get_strings() == ["stat"]
    assert ctx.history.pending == ["stat"]


def test_pager_answers_stay_out_of_recall(make_ctx, pipe):
    reader = PromptReader(input=pipe, output=DummyOutput())
    ctx = make_ctx()
    ctx.reader = reader
    pipe.send_text("n\r")
    assert ctx.read_line(CONTINUE_PROMPT) == "n"
    assert reader.history.get_strings() == []


def test_loaded_history_is_recalled(pipe):
    reader = PromptReader(input=pipe, output=DummyOutput())
    reader.load_history(["stat", "buckets"])
    assert reader.history.get_strings() == ["stat", "buckets"]


def test_closed_reader_reports_end_of_input(pipe):
    reader = PromptReader(input=pipe, output=DummyOutput())
    reader.close()
    with pytest.raises(EOFError):
        reader.prompt(">> ")
    with pytest.raises(EOFError):
        reader.ask(CONTINUE_PROMPT)
