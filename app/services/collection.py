"""Editing operations on an ordered subtitle collection.

A collection is an immutable tuple of entries; position is display order.
Every operation returns a new tuple, or the very same tuple when the target
id does not exist, so callers can detect a no-op with ``is``.
"""

from collections.abc import Sequence
import dataclasses

from app.models.subtitle import SubtitleEntry

Collection = tuple[SubtitleEntry, ...]

# A freshly inserted entry starts 1ms after its anchor and lasts one second
INSERT_GAP_MS = 1
INSERT_DURATION_MS = 1000

_EDITABLE_FIELDS = frozenset({"start", "end", "text"})


def _index_of(entries: Sequence[SubtitleEntry], entry_id: int) -> int | None:
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    return None


def get_entry(entries: Sequence[SubtitleEntry], entry_id: int) -> SubtitleEntry | None:
    index = _index_of(entries, entry_id)
    return None if index is None else entries[index]


def update_entry(entries: Collection, entry_id: int, **fields) -> Collection:
    """Merge ``fields`` into the entry with ``entry_id``.

    Raises:
        TypeError: If a field other than start, end or text is given
    """
    unknown = set(fields) - _EDITABLE_FIELDS
    if unknown:
        raise TypeError(f"Cannot update subtitle fields: {', '.join(sorted(unknown))}")

    index = _index_of(entries, entry_id)
    if index is None:
        return entries

    updated = dataclasses.replace(entries[index], **fields)
    return entries[:index] + (updated,) + entries[index + 1 :]


def insert_after(entries: Collection, after_id: int, new_id: int) -> Collection:
    """Insert an empty one-second entry right after ``after_id``."""
    index = _index_of(entries, after_id)
    if index is None:
        return entries

    anchor_end = entries[index].end
    new_entry = SubtitleEntry(
        id=new_id,
        start=anchor_end + INSERT_GAP_MS,
        end=anchor_end + INSERT_GAP_MS + INSERT_DURATION_MS,
        text="",
    )
    return entries[: index + 1] + (new_entry,) + entries[index + 1 :]


def delete_entry(entries: Collection, entry_id: int) -> Collection:
    index = _index_of(entries, entry_id)
    if index is None:
        return entries
    return entries[:index] + entries[index + 1 :]


def find_active(entries: Sequence[SubtitleEntry], current_ms: int | float) -> SubtitleEntry | None:
    """Return the first entry whose [start, end] range contains ``current_ms``."""
    for entry in entries:
        if entry.start <= current_ms <= entry.end:
            return entry
    return None
