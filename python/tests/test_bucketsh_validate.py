"""Tests for argument validation chains."""

from __future__ import annotations

import pytest

from bucketsh.validate import ValidationError, Validates


@pytest.mark.parametrize("count", [0, 1, 3, 5])
def test_num_args_rejects_other_counts(count):
    check = Validates().num_args(2).finish()
    with pytest.raises(ValidationError, match="expect 2 arguments"):
        check(["x"] * count)


def test_num_args_accepts_exact_count():
    Validates().num_args(2).finish()(["a", "b"])


def test_min_and_max_are_inclusive():
    check = Validates().min_args(1).max_args(3).finish()
    for count in (1, 2, 3):
        check(["x"] * count)
    with pytest.raises(ValidationError, match="minimum 1"):
        check([])
    with pytest.raises(ValidationError, match="max 3"):
        check(["x"] * 4)


def test_num_args_choice():
    check = Validates().num_args_choice(1, 3).finish()
    check(["a"])
    check(["a", "b", "c"])
    with pytest.raises(ValidationError, match=r"\[1, 3\]"):
        check(["a", "b"])


def test_choices_passes_when_position_absent():
    Validates().choices(0, ["bucket", "key"]).finish()([])


def test_choices_rejects_unknown_value():
    check = Validates().choices(0, ["bucket", "key"]).finish()
    check(["bucket"])
    check(["key", "extra"])
    with pytest.raises(ValidationError, match="argument 1 should be one of"):
        check(["value"])


def test_chain_stops_at_first_failure():
    seen = []

    def record(args):
        seen.append(len(args))

    check = Validates().min_args(2).append(record).finish()
    with pytest.raises(ValidationError):
        check(["a"])
    assert seen == []
    check(["a", "b"])
    assert seen == [2]


def test_builders_do_not_mutate_shared_chain():
    base = Validates().min_args(1)
    strict = base.max_args(1)
    assert len(base) == 1
    assert len(strict) == 2
    base.finish()(["a", "b"])
