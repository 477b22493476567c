"""SRT rendering of a subtitle collection."""

from collections.abc import Iterable
from pathlib import PurePath

from app.models.subtitle import SubtitleEntry
from app.services.timecode import format_timestamp

DEFAULT_EXPORT_STEM = "subtitles"


def serialize_srt(entries: Iterable[SubtitleEntry]) -> str:
    """Render entries as SRT text.

    Sequence numbers come from position (1-based), never from entry ids.
    Blocks are separated by exactly one blank line and there is no trailing
    newline after the last block.

    Args:
        entries: Entries in display order

    Returns:
        SRT formatted string, empty for an empty collection
    """
    return "\n\n".join(
        f"{index}\n{format_timestamp(entry.start)} --> {format_timestamp(entry.end)}\n{entry.text}"
        for index, entry in enumerate(entries, start=1)
    )


def export_filename(source_name: str | None) -> str:
    """Derive the ``.srt`` download name from the audio file name.

    Only the last extension is replaced; a missing name falls back to
    ``subtitles.srt``.
    """
    stem = PurePath(source_name).stem if source_name else ""
    if not stem:
        stem = DEFAULT_EXPORT_STEM
    return f"{stem}.srt"
