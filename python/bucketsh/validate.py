"""Composable argument validation for shell commands."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, Tuple

Check = Callable[[Sequence[str]], None]


class ValidationError(ValueError):
    """Raised when command arguments do not have the expected shape."""


class Validates:
    """Immutable chain of argument checks.

    Every builder method returns a new chain, so a partially built chain can be
    shared between commands.  ``finish()`` turns the chain into one callable that
    raises :class:`ValidationError` on the first failing check.
    """

    def __init__(self, checks: Iterable[Check] = ()) -> None:
        self._checks: Tuple[Check, ...] = tuple(checks)

    def __len__(self) -> int:
        return len(self._checks)

    def append(self, check: Check) -> "Validates":
        return Validates(self._checks + (check,))

    def finish(self) -> Check:
        checks = self._checks

        def validate(args: Sequence[str]) -> None:
            for check in checks:
                check(args)

        return validate

    def num_args(self, n: int) -> "Validates":
        def check(args: Sequence[str]) -> None:
            if len(args) != n:
                raise ValidationError(f"expect {n} arguments, got {len(args)}")

        return self.append(check)

    def max_args(self, n: int) -> "Validates":
        def check(args: Sequence[str]) -> None:
            if len(args) > n:
                raise ValidationError(f"expect max {n} arguments, got {len(args)}")

        return self.append(check)

    def min_args(self, n: int) -> "Validates":
        def check(args: Sequence[str]) -> None:
            if len(args) < n:
                raise ValidationError(f"expect minimum {n} arguments, got {len(args)}")

        return self.append(check)

    def num_args_choice(self, *counts: int) -> "Validates":
        allowed = tuple(counts)

        def check(args: Sequence[str]) -> None:
            if len(args) not in allowed:
                expected = ", ".join(str(c) for c in allowed)
                raise ValidationError(f"expect one of [{expected}] arguments, got {len(args)}")

        return self.append(check)

    def choices(self, pos: int, allowed: Iterable[str]) -> "Validates":
        options = tuple(allowed)

        def check(args: Sequence[str]) -> None:
            # only applies when the argument is present
            if len(args) <= pos:
                return
            if args[pos] not in options:
                raise ValidationError(f"argument {pos + 1} should be one of [{', '.join(options)}], got '{args[pos]}'")

        return self.append(check)


__all__ = ["Check", "ValidationError", "Validates"]
