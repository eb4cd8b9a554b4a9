"""Optional regular-expression filter for bucket and key names."""

from __future__ import annotations

import re
from typing import Optional, Pattern

from .errors import CommandError


class Matcher:
    """Matches raw name bytes; an empty pattern matches everything."""

    def __init__(self, pattern: str = "") -> None:
        self.pattern = pattern
        self._regex: Optional[Pattern[bytes]] = None
        if pattern:
            try:
                self._regex = re.compile(pattern.encode("utf-8"))
            except re.error as exc:
                raise CommandError(f"bad pattern syntax: {exc}") from exc

    def match(self, name: bytes) -> bool:
        if self._regex is None:
            return True
        return self._regex.search(name) is not None


__all__ = ["Matcher"]
