"""Exceptions shared by command implementations."""

from __future__ import annotations


class CommandError(Exception):
    """A command could not complete because of user input."""


__all__ = ["CommandError"]
