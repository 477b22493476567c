"""Pydantic schemas for API request/response validation."""

from app.schemas.health import HealthResponse
from app.schemas.subtitle import (
    ActiveEntryResponse,
    EntriesResponse,
    EntryUpdateRequest,
    EntryWarningSchema,
    ReflowRequest,
    SerializeRequest,
    SessionCreateRequest,
    SessionResponse,
    SessionSettingsRequest,
    SrtImportRequest,
    SrtPreviewResponse,
    SubtitleEntrySchema,
    TimingRequest,
    TimingResponse,
)

__all__ = [
    "HealthResponse",
    "ActiveEntryResponse",
    "EntriesResponse",
    "EntryUpdateRequest",
    "EntryWarningSchema",
    "ReflowRequest",
    "SerializeRequest",
    "SessionCreateRequest",
    "SessionResponse",
    "SessionSettingsRequest",
    "SrtImportRequest",
    "SrtPreviewResponse",
    "SubtitleEntrySchema",
    "TimingRequest",
    "TimingResponse",
]
