"""Editing sessions: the state of one audio file and its subtitles."""

from dataclasses import dataclass, field
import secrets

from app.core.config import Settings, get_settings
from app.core.exceptions import (
    NoInputSelected,
    ReadFailure,
    SessionNotFound,
    SubtitleServiceError,
    TranscriptionInProgress,
)
from app.core.logging import get_logger
from app.models.subtitle import SubtitleEntry
from app.services import collection
from app.services.normalizer import EntryIdGenerator, normalize_transcript
from app.services.reflow import reflow_entries
from app.services.srt_parser import parse_srt
from app.services.srt_writer import export_filename, serialize_srt
from app.services.timing import EntryWarning, check_entries, is_timing_too_short, recommended_end
from app.services.transcription import transcribe_audio

logger = get_logger(__name__)

MAX_CHARS_LIMIT = 100


@dataclass(frozen=True)
class AudioInput:
    filename: str
    mime_type: str
    data: bytes = field(repr=False)
    duration_seconds: float = 0


@dataclass
class SessionState:
    """Everything a client needs to render one editing session."""

    session_id: str
    max_chars_per_line: int
    audio: AudioInput | None = None
    entries: collection.Collection = ()
    is_loading: bool = False
    error: str | None = None
    parse_warnings: list[str] = field(default_factory=list)


def validate_max_chars(max_chars: int) -> int:
    if not 0 <= max_chars <= MAX_CHARS_LIMIT:
        raise ValueError(f"max_chars_per_line must be between 0 and {MAX_CHARS_LIMIT}")
    return max_chars


class SubtitleSession:
    """Controller owning a single ``SessionState``.

    At most one transcription may be outstanding; the ``is_loading`` flag is
    checked and set before the first await, so concurrent requests on the
    same event loop cannot both pass the gate.
    """

    def __init__(self, session_id: str, max_chars_per_line: int, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.state = SessionState(
            session_id=session_id,
            max_chars_per_line=validate_max_chars(max_chars_per_line),
        )
        self.ids = EntryIdGenerator()

    @property
    def entries(self) -> collection.Collection:
        return self.state.entries

    def _ensure_idle(self) -> None:
        if self.state.is_loading:
            raise TranscriptionInProgress("A transcription is already in progress.")

    def set_max_chars(self, max_chars: int) -> None:
        self.state.max_chars_per_line = validate_max_chars(max_chars)

    def load_audio(
        self, filename: str, mime_type: str, data: bytes, duration_seconds: float = 0
    ) -> None:
        """Attach new audio, discarding the previous subtitles."""
        self._ensure_idle()
        if not data:
            raise ReadFailure("Failed to read the audio file.")

        self.state.audio = AudioInput(filename, mime_type, data, duration_seconds)
        self.state.entries = ()
        self.state.error = None
        self.state.parse_warnings = []
        logger.info(
            "Session %s loaded audio %s (%d bytes)", self.state.session_id, filename, len(data)
        )

    async def transcribe(self) -> collection.Collection:
        """Transcribe the loaded audio and replace the collection.

        The collection is only replaced once the whole response has been
        normalized and reflowed; on failure the previous entries remain.

        Raises:
            NoInputSelected: If no audio has been loaded
            TranscriptionInProgress: If a transcription is already running
            MalformedResponse: If the service output has the wrong shape
            ServiceError: If the service call fails
        """
        audio = self.state.audio
        if audio is None:
            raise NoInputSelected("Please select an audio file first.")
        self._ensure_idle()

        self.state.is_loading = True
        self.state.error = None
        try:
            raw = await transcribe_audio(
                audio.data, audio.mime_type, audio.duration_seconds, settings=self.settings
            )
            warnings: list[str] = []
            entries = normalize_transcript(raw, self.ids, warnings)
            entries = reflow_entries(entries, self.state.max_chars_per_line)
        except SubtitleServiceError as e:
            self.state.error = str(e)
            logger.warning("Session %s transcription failed: %s", self.state.session_id, e)
            raise
        finally:
            self.state.is_loading = False

        self.ids.reserve(entry.id for entry in entries)
        self.state.entries = tuple(entries)
        self.state.parse_warnings = warnings
        if warnings:
            logger.warning(
                "Session %s: %d timestamps could not be parsed",
                self.state.session_id,
                len(warnings),
            )
        return self.state.entries

    def import_srt(self, content: str) -> collection.Collection:
        """Replace the collection with the entries of an SRT file."""
        self._ensure_idle()
        entries = parse_srt(content, self.ids)
        self.state.entries = tuple(entries)
        self.state.error = None
        self.state.parse_warnings = []
        return self.state.entries

    def update(self, entry_id: int, **fields) -> SubtitleEntry | None:
        self.state.entries = collection.update_entry(self.state.entries, entry_id, **fields)
        return collection.get_entry(self.state.entries, entry_id)

    def insert_after(self, after_id: int) -> SubtitleEntry | None:
        if collection.get_entry(self.state.entries, after_id) is None:
            return None
        new_id = self.ids.next_id()
        self.state.entries = collection.insert_after(self.state.entries, after_id, new_id)
        return collection.get_entry(self.state.entries, new_id)

    def delete(self, entry_id: int) -> bool:
        before = self.state.entries
        self.state.entries = collection.delete_entry(before, entry_id)
        return self.state.entries is not before

    def fix_timing(self, entry_id: int) -> SubtitleEntry | None:
        """Move the entry's end to the recommended reading-speed end.

        Only entries flagged as too short are changed; any other entry is
        returned as is.
        """
        entry = collection.get_entry(self.state.entries, entry_id)
        if entry is None:
            return None
        cps = self.settings.chars_per_second
        if not is_timing_too_short(entry.text, entry.start, entry.end, cps):
            return entry
        return self.update(entry_id, end=recommended_end(entry.text, entry.start, cps))

    def find_active(self, current_ms: int | float) -> SubtitleEntry | None:
        return collection.find_active(self.state.entries, current_ms)

    def warnings(self) -> list[EntryWarning]:
        return check_entries(
            self.state.entries, self.state.max_chars_per_line, self.settings.chars_per_second
        )

    def to_srt(self) -> str:
        return serialize_srt(self.state.entries)

    def export_filename(self) -> str:
        return export_filename(self.state.audio.filename if self.state.audio else None)


class SessionStore:
    """In-memory registry of editing sessions."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._sessions: dict[str, SubtitleSession] = {}

    def create(self, max_chars_per_line: int | None = None) -> SubtitleSession:
        if len(self._sessions) >= self.settings.max_sessions:
            # Drop the oldest session (dicts keep insertion order)
            oldest = next(iter(self._sessions))
            logger.info("Session limit reached, discarding session %s", oldest)
            del self._sessions[oldest]

        if max_chars_per_line is None:
            max_chars_per_line = self.settings.default_max_chars_per_line

        session_id = secrets.token_urlsafe(12)
        session = SubtitleSession(session_id, max_chars_per_line, self.settings)
        self._sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session

    def get(self, session_id: str) -> SubtitleSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFound(f"Session {session_id} not found")

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


session_store = SessionStore()
