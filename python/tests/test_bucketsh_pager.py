"""Tests for paged table output."""

from __future__ import annotations

from bucketsh.output import render_table
from bucketsh.pager import CONTINUE_PROMPT, TablePrinter, ask_continue, paginate


def _rows(count):
    return ([f"key{idx}"] for idx in range(count))


def _printed_ids(ctx):
    ids = []
    for line in ctx.output.getvalue().splitlines():
        first = line.split(" ", 1)[0]
        if first.isdigit():
            ids.append(int(first))
    return ids


def test_two_page_breaks_before_final_flush(make_ctx):
    ctx = make_ctx(["y", "y"])
    printer = TablePrinter(ctx, ["key"])
    for row in _rows(65):
        assert printer.add(row)
    assert printer.pages == 2
    assert ctx.reader.prompts == [CONTINUE_PROMPT, CONTINUE_PROMPT]
    printer.flush()
    assert printer.pages == 3
    assert _printed_ids(ctx) == list(range(1, 66))


def test_answer_no_stops_after_first_page(make_ctx):
    ctx = make_ctx(["n"])
    consumed = paginate(ctx, ["key"], _rows(65))
    assert consumed == 32
    assert _printed_ids(ctx) == list(range(1, 33))
    assert ctx.reader.prompts == [CONTINUE_PROMPT]


def test_empty_input_prints_nothing(make_ctx):
    ctx = make_ctx()
    assert paginate(ctx, ["key"], iter(())) == 0
    assert ctx.output.getvalue() == ""
    assert ctx.reader.prompts == []


def test_short_listing_flushes_once_without_prompt(make_ctx):
    ctx = make_ctx()
    paginate(ctx, ["key"], _rows(3))
    lines = ctx.output.getvalue().splitlines()
    assert lines[0].split() == ["id", "key"]
    assert lines[2].split() == ["1", "key0"]
    assert len(lines) == 5
    assert ctx.reader.prompts == []


def test_page_size_comes_from_config(make_ctx):
    ctx = make_ctx(["", "n"], page_size=2)
    assert paginate(ctx, ["key"], _rows(10)) == 4
    assert _printed_ids(ctx) == [1, 2, 3, 4]


def test_ask_continue_reprompts_on_invalid_input(make_ctx):
    ctx = make_ctx(["maybe", "YES"])
    assert ask_continue(ctx) is True
    assert "Invalid input" in ctx.output.getvalue()
    assert len(ctx.reader.prompts) == 2


def test_ask_continue_treats_read_errors_as_no(make_ctx):
    ctx = make_ctx([KeyboardInterrupt()])
    assert ask_continue(ctx) is False
    assert ask_continue(make_ctx()) is False


def test_table_keeps_cells_as_text(ctx):
    render_table(ctx, ["key", "value"], [["007", "1e3"], ["a", "b"]])
    lines = ctx.output.getvalue().splitlines()
    assert lines[0].split() == ["key", "value"]
    assert set(lines[1].replace(" ", "")) == {"-"}
    assert lines[2].split() == ["007", "1e3"]
    assert lines[3].startswith("a  ")
