"""Conversion between millisecond offsets and SRT timestamps (HH:MM:SS,mmm).

Neither direction raises on malformed input: formatting falls back to
``00:00:00,000`` and parsing falls back to ``0``. Parsing only recognizes a
two digit hour field, so values of 100 hours or more round-trip through
``format_timestamp`` but not back through ``parse_timestamp``.
"""

import math
import re

from app.core.logging import get_logger

logger = get_logger(__name__)

ZERO_TIMESTAMP = "00:00:00,000"

_TIMESTAMP_PATTERN = re.compile(r"(\d{2}):(\d{2}):(\d{2}),(\d{3})")


def format_timestamp(ms: int | float | None) -> str:
    """Convert milliseconds to SRT timestamp format.

    Args:
        ms: Offset in milliseconds. Fractions are floored.

    Returns:
        Zero-padded ``HH:MM:SS,mmm`` string, or ``00:00:00,000`` for
        negative, NaN or non-numeric input
    """
    if isinstance(ms, bool) or not isinstance(ms, (int, float)):
        return ZERO_TIMESTAMP
    if math.isnan(ms) or math.isinf(ms) or ms < 0:
        return ZERO_TIMESTAMP

    ms = math.floor(ms)
    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    seconds = ms // 1000
    milliseconds = ms % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


def parse_timestamp(time_str: str, warnings: list[str] | None = None) -> int:
    """Convert SRT timestamp to milliseconds.

    Args:
        time_str: Text containing an ``HH:MM:SS,mmm`` timestamp
        warnings: Optional list that receives a message when the text
            cannot be parsed

    Returns:
        Offset in milliseconds, or 0 when no timestamp is found
    """
    match = _TIMESTAMP_PATTERN.search(time_str) if isinstance(time_str, str) else None
    if not match:
        message = f"Unparseable timestamp {time_str!r}, using 0"
        logger.debug(message)
        if warnings is not None:
            warnings.append(message)
        return 0

    hours, minutes, seconds, milliseconds = map(int, match.groups())
    return hours * 3600000 + minutes * 60000 + seconds * 1000 + milliseconds
