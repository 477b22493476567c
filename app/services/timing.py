"""Reading-speed and layout checks for subtitle entries."""

from collections.abc import Sequence
from dataclasses import dataclass
import enum
import math

from app.models.subtitle import SubtitleEntry


class WarningKind(str, enum.Enum):
    """Kinds of problems reported for an entry."""

    TIMING_TOO_SHORT = "timing_too_short"
    CHAR_LIMIT_EXCEEDED = "char_limit_exceeded"
    INVALID_RANGE = "invalid_range"
    OUT_OF_ORDER = "out_of_order"


@dataclass(frozen=True)
class EntryWarning:
    entry_id: int
    kind: WarningKind
    message: str
    recommended_end: int | None = None


def required_duration(text: str, chars_per_second: float) -> int:
    """Milliseconds a viewer needs to read ``text`` at the given speed."""
    return math.ceil(len(text) / chars_per_second * 1000)


def is_timing_too_short(text: str, start: int, end: int, chars_per_second: float) -> bool:
    """Check whether an entry is displayed too briefly for its text.

    Zero or negative durations are not reported here; they are a malformed
    range, which ``check_entries`` flags separately.
    """
    duration = end - start
    return 0 < duration < required_duration(text, chars_per_second) and len(text) > 0


def recommended_end(text: str, start: int, chars_per_second: float) -> int:
    """End time that gives the text exactly its required reading time."""
    return start + required_duration(text, chars_per_second)


def is_char_limit_exceeded(text: str, max_chars: int) -> bool:
    return max_chars > 0 and len(text) > max_chars


def check_entries(
    entries: Sequence[SubtitleEntry], max_chars: int, chars_per_second: float
) -> list[EntryWarning]:
    """Collect per-entry warnings for a subtitle collection.

    Args:
        entries: Collection in display order
        max_chars: Maximum characters per line, 0 disables the length check
        chars_per_second: Reading speed

    Returns:
        Warnings in collection order
    """
    warnings = []
    previous_start = None
    for entry in entries:
        if entry.end <= entry.start:
            warnings.append(
                EntryWarning(
                    entry.id,
                    WarningKind.INVALID_RANGE,
                    "End time must be after start time.",
                )
            )
        elif is_timing_too_short(entry.text, entry.start, entry.end, chars_per_second):
            suggested = recommended_end(entry.text, entry.start, chars_per_second)
            warnings.append(
                EntryWarning(
                    entry.id,
                    WarningKind.TIMING_TOO_SHORT,
                    f"Duration may be too short for the text ({entry.duration}ms, "
                    f"needs {suggested - entry.start}ms).",
                    recommended_end=suggested,
                )
            )

        if is_char_limit_exceeded(entry.text, max_chars):
            warnings.append(
                EntryWarning(
                    entry.id,
                    WarningKind.CHAR_LIMIT_EXCEEDED,
                    f"{len(entry.text)}/{max_chars} characters.",
                )
            )

        if previous_start is not None and entry.start < previous_start:
            warnings.append(
                EntryWarning(
                    entry.id,
                    WarningKind.OUT_OF_ORDER,
                    "Starts before the previous subtitle.",
                )
            )
        previous_start = entry.start

    return warnings
