"""Subtitle entry model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SubtitleEntry:
    """Represents a single timed subtitle line.

    Times are integer milliseconds. ``end`` may transiently precede ``start``
    while a user is editing; the timing advisor reports that case.
    """

    id: int
    start: int
    end: int
    text: str = ""

    @property
    def duration(self) -> int:
        return self.end - self.start
