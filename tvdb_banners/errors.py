"""Exceptions raised while reading a banner feed."""

from __future__ import annotations

from typing import Optional


class FeedParseError(Exception):
    """The feed document is malformed and cannot be read further."""


class MalformedSeasonField(FeedParseError):
    """A ``<Season>`` element holds a value that is not an integer."""

    def __init__(self, value: str, line: Optional[int] = None) -> None:
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"Invalid season number {value!r}{location}")
        self.value = value
        self.line = line


class Cancelled(Exception):
    """Extraction stopped because the caller asked for cancellation."""
