"""Tests for bucketsh history helpers."""

from __future__ import annotations

import os
import stat

import pytest

from bucketsh.history import HistoryFile, compact_lines, keep_max_lines


def test_compact_moves_repeated_line_to_end_and_drops_oldest():
    assert compact_lines(["a", "b", "a", "c"], 2) == ["a", "c"]


def test_compact_without_overflow_keeps_last_use_order():
    assert compact_lines(["a", "b", "a", "c"], 10) == ["b", "a", "c"]
    assert compact_lines(["x", "x", "x"], 10) == ["x"]


def test_compact_with_zero_budget():
    assert compact_lines(["a", "b"], 0) == []


def test_keep_max_lines_rewrites_file(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("one\ntwo\none\nthree\nfour\n", encoding="utf-8")
    assert keep_max_lines(path, 3) == 3
    assert path.read_text(encoding="utf-8") == "one\nthree\nfour\n"
    assert [p.name for p in tmp_path.iterdir()] == ["history.txt"]


@pytest.mark.skipif(os.name != "posix", reason="permission bits are POSIX only")
def test_keep_max_lines_preserves_mode(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("one\n", encoding="utf-8")
    os.chmod(path, 0o640)
    keep_max_lines(path, 10)
    assert stat.S_IMODE(path.stat().st_mode) == 0o640


def test_history_file_loads_existing_file(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("one\ntwo\n\n", encoding="utf-8")
    history = HistoryFile(str(path), max_lines=5)
    assert history.load() == ["one", "two"]
    history.append("three")
    assert history.snapshot() == ["one", "two", "three"]


def test_history_file_missing_is_empty(tmp_path):
    history = HistoryFile(tmp_path / "missing.txt")
    assert history.load() == []


def test_history_file_write_appends_and_compacts(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text("get a b\nbuckets\n", encoding="utf-8")
    history = HistoryFile(path, max_lines=3)
    history.load()
    history.append("keys a")
    history.append("get a b")
    history.append("   ")
    assert history.write() == 2
    assert path.read_text(encoding="utf-8").splitlines() == ["buckets", "keys a", "get a b"]
    assert history.pending == []


@pytest.mark.skipif(os.name != "posix", reason="permission bits are POSIX only")
def test_history_file_created_private(tmp_path):
    path = tmp_path / "nested" / "history.txt"
    history = HistoryFile(path)
    history.append("stat")
    history.write()
    assert path.read_text(encoding="utf-8") == "stat\n"
    assert stat.S_IMODE(path.stat().st_mode) & 0o077 == 0


def test_history_file_without_path_is_noop():
    history = HistoryFile(None)
    history.append("stat")
    assert history.load() == []
    assert history.write() == 0
