"""Pydantic schemas for subtitle editing API."""

from pydantic import BaseModel, Field, NonNegativeInt, computed_field

from app.models.subtitle import SubtitleEntry
from app.services.timecode import format_timestamp, parse_timestamp


class SubtitleEntrySchema(BaseModel):
    """A single subtitle entry as exchanged with clients."""

    id: int = Field(..., description="Stable entry identifier")
    start: int = Field(..., ge=0, description="Start time in milliseconds")
    end: int = Field(..., description="End time in milliseconds")
    text: str = Field("", description="Subtitle text")

    @computed_field
    @property
    def start_time(self) -> str:
        return format_timestamp(self.start)

    @computed_field
    @property
    def end_time(self) -> str:
        return format_timestamp(self.end)

    @classmethod
    def from_entry(cls, entry: SubtitleEntry) -> "SubtitleEntrySchema":
        return cls(id=entry.id, start=entry.start, end=entry.end, text=entry.text)

    def to_entry(self) -> SubtitleEntry:
        return SubtitleEntry(id=self.id, start=self.start, end=self.end, text=self.text)


class EntryWarningSchema(BaseModel):
    """Warning attached to an entry by the timing advisor."""

    entry_id: int
    kind: str
    message: str
    recommended_end: int | None = None


class SessionCreateRequest(BaseModel):
    """Request model for creating an editing session."""

    max_chars_per_line: int | None = Field(
        None, ge=0, le=100, description="Maximum characters per line (default from settings)"
    )


class SessionSettingsRequest(BaseModel):
    """Request model for changing session settings."""

    max_chars_per_line: int = Field(
        ..., ge=0, le=100, description="Maximum characters per line (0 disables reflow)"
    )


class SessionResponse(BaseModel):
    """Full state of an editing session."""

    session_id: str
    audio_filename: str | None = None
    max_chars_per_line: int
    chars_per_second: float
    is_loading: bool
    error: str | None = None
    entries: list[SubtitleEntrySchema]
    warnings: list[EntryWarningSchema]
    parse_warnings: list[str] = Field(
        default_factory=list, description="Timestamps from the last transcription read as 0"
    )


class EntryUpdateRequest(BaseModel):
    """Partial update of an entry.

    Times accept milliseconds, either as a number or a digit-only string, or
    an ``HH:MM:SS,mmm`` timestamp.
    """

    start: NonNegativeInt | str | None = None
    end: NonNegativeInt | str | None = None
    text: str | None = None

    def to_fields(self) -> dict:
        fields = {}
        for name in ("start", "end"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, str):
                if value.isascii() and value.isdigit():
                    value = int(value)
                else:
                    value = parse_timestamp(value)
            fields[name] = value
        if self.text is not None:
            fields["text"] = self.text
        return fields


class SrtImportRequest(BaseModel):
    """Request model for importing an existing SRT file."""

    srt_content: str = Field(..., description="SRT subtitle file content", min_length=1)


class SrtPreviewResponse(BaseModel):
    """Rendered SRT text of a session."""

    srt_content: str
    filename: str
    entry_count: int


class ActiveEntryResponse(BaseModel):
    """Entry displayed at a playback position, if any."""

    time_ms: int
    entry: SubtitleEntrySchema | None = None


class ReflowRequest(BaseModel):
    """Request model for stateless reflow."""

    entries: list[SubtitleEntrySchema]
    max_chars_per_line: int = Field(
        ..., ge=0, le=100, description="Maximum characters per line (0 disables reflow)"
    )


class EntriesResponse(BaseModel):
    """List of entries."""

    entries: list[SubtitleEntrySchema]


class SerializeRequest(BaseModel):
    """Request model for stateless SRT rendering."""

    entries: list[SubtitleEntrySchema]


class TimingRequest(BaseModel):
    """Request model for reading-speed advice on one entry."""

    text: str
    start: int
    end: int


class TimingResponse(BaseModel):
    """Reading-speed advice for one entry."""

    too_short: bool
    required_duration: int
    recommended_end: int
    chars_per_second: float
