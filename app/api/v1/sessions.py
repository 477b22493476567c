"""Subtitle editing session endpoints."""

import logging
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, File, Form, HTTPException, Query, Response, UploadFile, status

from app.core.config import settings
from app.core.exceptions import (
    MalformedResponse,
    NoInputSelected,
    ReadFailure,
    ServiceError,
    SessionNotFound,
    TranscriptionInProgress,
)
from app.schemas import (
    ActiveEntryResponse,
    EntryUpdateRequest,
    EntryWarningSchema,
    SessionCreateRequest,
    SessionResponse,
    SessionSettingsRequest,
    SrtImportRequest,
    SrtPreviewResponse,
    SubtitleEntrySchema,
)
from app.services.session import SubtitleSession, session_store

router = APIRouter()
logger = logging.getLogger(__name__)

SRT_MEDIA_TYPE = "application/x-subrip; charset=utf-8"


def _get_session(session_id: str) -> SubtitleSession:
    try:
        return session_store.get(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _entry_not_found(entry_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"Subtitle {entry_id} not found"
    )


def _session_response(session: SubtitleSession) -> SessionResponse:
    state = session.state
    return SessionResponse(
        session_id=state.session_id,
        audio_filename=state.audio.filename if state.audio else None,
        max_chars_per_line=state.max_chars_per_line,
        chars_per_second=session.settings.chars_per_second,
        is_loading=state.is_loading,
        error=state.error,
        entries=[SubtitleEntrySchema.from_entry(entry) for entry in state.entries],
        warnings=[
            EntryWarningSchema(
                entry_id=warning.entry_id,
                kind=warning.kind.value,
                message=warning.message,
                recommended_end=warning.recommended_end,
            )
            for warning in session.warnings()
        ],
        parse_warnings=state.parse_warnings,
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(request: SessionCreateRequest | None = None):
    """Create an empty editing session."""
    max_chars = request.max_chars_per_line if request else None
    session = session_store.create(max_chars)
    return _session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    """Return session state with entries and timing warnings."""
    return _session_response(_get_session(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str):
    """Discard a session and its subtitles."""
    try:
        session_store.delete(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{session_id}/settings", response_model=SessionResponse)
async def update_settings(session_id: str, request: SessionSettingsRequest):
    """Change the maximum characters per line.

    Existing entries are not reflowed; the new budget applies to the next
    transcription and to the length warnings.
    """
    session = _get_session(session_id)
    session.set_max_chars(request.max_chars_per_line)
    return _session_response(session)


@router.post("/{session_id}/audio", response_model=SessionResponse)
async def upload_audio(
    session_id: str,
    file: UploadFile = File(..., description="Audio file to transcribe"),
    duration_seconds: float = Form(0, ge=0, description="Approximate audio duration"),
):
    """Attach an audio file to the session, clearing existing subtitles.

    Raises:
        HTTPException: 400 (invalid format or unreadable file), 404 (unknown
            session), 413 (file too large)
    """
    session = _get_session(session_id)

    file_ext = Path(file.filename or "").suffix.lower()
    if file_ext not in settings.allowed_audio_formats:
        logger.warning(
            "Invalid audio format: %s (allowed: %s)", file_ext, settings.allowed_audio_formats
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Invalid audio format '{file_ext}'. "
                f"Allowed formats: {', '.join(sorted(settings.allowed_audio_formats))}"
            ),
        )

    try:
        data = await file.read()
    except Exception as e:
        logger.error("Error reading uploaded audio: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to read the audio file."
        )

    if len(data) > settings.max_file_size:
        logger.warning(
            "File too large: %d bytes (max: %d bytes)", len(data), settings.max_file_size
        )
        raise HTTPException(
            status_code=413,
            detail=(
                f"File size ({len(data):,} bytes) exceeds maximum allowed "
                f"({settings.max_file_size:,} bytes)"
            ),
        )

    mime_type = file.content_type or "application/octet-stream"
    try:
        session.load_audio(file.filename or "", mime_type, data, duration_seconds)
    except ReadFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TranscriptionInProgress as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return _session_response(session)


@router.post("/{session_id}/transcribe", response_model=SessionResponse)
async def transcribe(session_id: str):
    """Transcribe the session's audio and replace its subtitles.

    Raises:
        HTTPException: 400 (no audio), 404 (unknown session), 409 (already
            transcribing), 502 (transcription service failure)
    """
    session = _get_session(session_id)
    try:
        await session.transcribe()
    except NoInputSelected as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except TranscriptionInProgress as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (MalformedResponse, ServiceError) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Transcription service error: {str(e)}",
        )
    except Exception as e:
        logger.exception("Unexpected transcription failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unexpected error: {str(e)}",
        )
    return _session_response(session)


@router.post("/{session_id}/import", response_model=SessionResponse)
async def import_srt(session_id: str, request: SrtImportRequest):
    """Replace the session's subtitles with an existing SRT file."""
    session = _get_session(session_id)
    try:
        session.import_srt(request.srt_content)
    except TranscriptionInProgress as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid SRT format: {str(e)}"
        )
    return _session_response(session)


@router.patch("/{session_id}/entries/{entry_id}", response_model=SubtitleEntrySchema)
async def update_entry(session_id: str, entry_id: int, request: EntryUpdateRequest):
    """Update start, end or text of an entry."""
    session = _get_session(session_id)
    entry = session.update(entry_id, **request.to_fields())
    if entry is None:
        raise _entry_not_found(entry_id)
    return SubtitleEntrySchema.from_entry(entry)


@router.post(
    "/{session_id}/entries/{entry_id}/insert-after",
    response_model=SubtitleEntrySchema,
    status_code=status.HTTP_201_CREATED,
)
async def insert_after(session_id: str, entry_id: int):
    """Insert an empty one-second entry after the given entry."""
    session = _get_session(session_id)
    entry = session.insert_after(entry_id)
    if entry is None:
        raise _entry_not_found(entry_id)
    return SubtitleEntrySchema.from_entry(entry)


@router.delete("/{session_id}/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(session_id: str, entry_id: int):
    """Remove an entry."""
    session = _get_session(session_id)
    if not session.delete(entry_id):
        raise _entry_not_found(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/entries/{entry_id}/fix-timing", response_model=SubtitleEntrySchema)
async def fix_timing(session_id: str, entry_id: int):
    """Extend a too-short entry to the recommended reading-speed end time."""
    session = _get_session(session_id)
    entry = session.fix_timing(entry_id)
    if entry is None:
        raise _entry_not_found(entry_id)
    return SubtitleEntrySchema.from_entry(entry)


@router.get("/{session_id}/active", response_model=ActiveEntryResponse)
async def active_entry(session_id: str, time_ms: int = Query(..., ge=0)):
    """Return the entry shown at a playback position."""
    session = _get_session(session_id)
    entry = session.find_active(time_ms)
    return ActiveEntryResponse(
        time_ms=time_ms,
        entry=SubtitleEntrySchema.from_entry(entry) if entry else None,
    )


@router.get("/{session_id}/srt", response_model=SrtPreviewResponse)
async def preview_srt(session_id: str):
    """Return the rendered SRT text."""
    session = _get_session(session_id)
    return SrtPreviewResponse(
        srt_content=session.to_srt(),
        filename=session.export_filename(),
        entry_count=len(session.entries),
    )


@router.get("/{session_id}/export")
async def export_srt(session_id: str):
    """Download the session's subtitles as an SRT file."""
    session = _get_session(session_id)
    filename = session.export_filename()
    logger.info("Exporting %d subtitles as %s", len(session.entries), filename)
    quoted = quote(filename)
    if quoted != filename:
        disposition = f"attachment; filename*=utf-8''{quoted}"
    else:
        disposition = f'attachment; filename="{filename}"'
    return Response(
        content=session.to_srt(),
        media_type=SRT_MEDIA_TYPE,
        headers={"Content-Disposition": disposition},
    )
