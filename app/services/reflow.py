"""Splitting of over-long subtitle entries into several timed lines.

An entry whose text exceeds the per-line character budget is greedily
word-wrapped. Each resulting line gets a share of the original duration
proportional to ``len(line) / len(original_text)``. Lines are laid out back
to back from the original start. Neither per-line rounding nor the spaces
dropped between wrapped lines are redistributed, so the last line usually
ends somewhat before the original end.
"""

from collections.abc import Iterable
import math

from app.models.subtitle import SubtitleEntry

# Derived ids are ``entry.id + line_index * LINE_ID_STRIDE``
LINE_ID_STRIDE = 10000


def wrap_words(text: str, max_chars: int) -> list[str]:
    """Greedily pack whitespace-separated words into lines.

    A single word longer than ``max_chars`` is never broken; it ends up on
    a line of its own.

    Args:
        text: Text to wrap
        max_chars: Soft maximum line length

    Returns:
        Wrapped lines in order
    """
    lines = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > max_chars and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    lines.append(current)
    return lines


def reflow_entry(entry: SubtitleEntry, max_chars: int) -> list[SubtitleEntry]:
    """Split an entry whose text exceeds ``max_chars`` into several entries.

    Args:
        entry: Entry to reflow
        max_chars: Maximum characters per line, 0 disables reflow

    Returns:
        ``[entry]`` when no split is needed, otherwise one entry per
        wrapped line with derived ids and proportional timing
    """
    text = entry.text
    # Empty or blank text has no words to wrap and no length to divide by
    if max_chars == 0 or not text.strip() or len(text) <= max_chars:
        return [entry]

    lines = wrap_words(text, max_chars)
    total_length = len(text)
    duration = entry.end - entry.start

    entries = []
    offset = 0
    for index, line in enumerate(lines):
        # Exact halves round up
        line_duration = math.floor(duration * len(line) / total_length + 0.5)
        line_start = entry.start + offset
        entries.append(
            SubtitleEntry(
                id=entry.id + index * LINE_ID_STRIDE,
                start=line_start,
                end=line_start + line_duration,
                text=line,
            )
        )
        offset += line_duration

    return entries


def reflow_entries(entries: Iterable[SubtitleEntry], max_chars: int) -> list[SubtitleEntry]:
    """Reflow every entry, keeping the original order."""
    return [line for entry in entries for line in reflow_entry(entry, max_chars)]
