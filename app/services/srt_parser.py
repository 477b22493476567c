"""SRT subtitle file import using pysubs2.

Turns an existing SRT file into subtitle entries so it can be edited and
re-exported like a fresh transcription.
"""

import pysubs2

from app.models.subtitle import SubtitleEntry
from app.services.normalizer import EntryIdGenerator


def parse_srt(content: str, id_generator: EntryIdGenerator | None = None) -> list[SubtitleEntry]:
    """Parse SRT content into a list of subtitle entries.

    Args:
        content: Raw SRT file content as string
        id_generator: Source of entry ids (a fresh one if omitted)

    Returns:
        List of SubtitleEntry objects in file order

    Raises:
        ValueError: If SRT content is empty or cannot be parsed
    """
    if not content or not content.strip():
        raise ValueError("SRT content is empty")

    try:
        subs = pysubs2.SSAFile.from_string(content, format_="srt")
    except Exception as e:
        raise ValueError(f"Failed to parse SRT: {e}")

    if id_generator is None:
        id_generator = EntryIdGenerator()

    # pysubs2 stores SRT line breaks as ASS "\N"; plaintext restores them
    return [
        SubtitleEntry(
            id=id_generator.next_id(),
            start=line.start,
            end=line.end,
            text=line.plaintext,
        )
        for line in subs
    ]
