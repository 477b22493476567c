"""Conversion of raw transcription output into subtitle entries."""

from collections.abc import Iterable, Mapping
import itertools
import time

from app.core.exceptions import MalformedResponse
from app.core.logging import get_logger
from app.models.subtitle import SubtitleEntry
from app.services.timecode import parse_timestamp

logger = get_logger(__name__)


class EntryIdGenerator:
    """Issues entry ids that are unique for the lifetime of the generator.

    Ids start from the current wall-clock time in milliseconds and increase
    by one per call, so two entries created in the same millisecond still
    get distinct ids.
    """

    def __init__(self, start: int | None = None):
        if start is None:
            start = time.time_ns() // 1_000_000
        self._counter = itertools.count(start)
        self._last = start - 1

    def next_id(self) -> int:
        self._last = next(self._counter)
        return self._last

    def reserve(self, ids: Iterable[int]) -> None:
        """Make sure future ids are greater than every id in ``ids``."""
        highest = max(ids, default=self._last)
        if highest > self._last:
            self._counter = itertools.count(highest + 1)
            self._last = highest


def normalize_transcript(
    raw: object,
    id_generator: EntryIdGenerator | None = None,
    warnings: list[str] | None = None,
) -> list[SubtitleEntry]:
    """Convert transcription service output into subtitle entries.

    Args:
        raw: Decoded JSON payload, expected to be a list of
            ``{"startTime", "endTime", "text"}`` records
        id_generator: Source of entry ids (a fresh one if omitted)
        warnings: Optional list collecting timestamp parse fallbacks

    Returns:
        Entries in input order. Timestamps that cannot be parsed become 0.

    Raises:
        MalformedResponse: If the payload is not a list of records
    """
    if not isinstance(raw, (list, tuple)):
        raise MalformedResponse("API did not return a valid array of subtitles.")

    if id_generator is None:
        id_generator = EntryIdGenerator()

    entries = []
    for position, record in enumerate(raw, start=1):
        if not isinstance(record, Mapping):
            raise MalformedResponse(f"Subtitle record {position} is not an object")

        text = record.get("text", "")
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise MalformedResponse(f"Subtitle record {position} has non-string text")

        entries.append(
            SubtitleEntry(
                id=id_generator.next_id(),
                start=parse_timestamp(record.get("startTime"), warnings),
                end=parse_timestamp(record.get("endTime"), warnings),
                text=text,
            )
        )

    logger.info("Normalized %d transcript segments", len(entries))
    return entries
