"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.schemas import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    """Health check endpoint.

    Reports whether the Gemini transcription backend is configured. The
    subtitle editing endpoints work without it, so a missing key degrades
    the status but does not fail the check.

    Returns:
        HealthResponse: Service health status with component details
    """
    gemini_ok = bool(settings.google_api_key)
    components = {
        "gemini": {
            "status": "healthy" if gemini_ok else "unconfigured",
            "message": (
                f"Model {settings.transcription_model}"
                if gemini_ok
                else "GOOGLE_API_KEY not set, transcription unavailable"
            ),
        }
    }

    endpoints = {
        "sessions": [
            "POST /api/v1/sessions - Create editing session",
            "GET /api/v1/sessions/{session_id} - Session state, entries and warnings",
            "POST /api/v1/sessions/{session_id}/audio - Upload audio",
            "POST /api/v1/sessions/{session_id}/transcribe - Transcribe uploaded audio",
            "POST /api/v1/sessions/{session_id}/import - Import SRT file",
            "GET /api/v1/sessions/{session_id}/export - Download SRT file",
        ],
        "subtitles": [
            "POST /api/v1/subtitles/reflow - Split long entries",
            "POST /api/v1/subtitles/serialize - Render entries as SRT",
            "POST /api/v1/subtitles/timing - Reading-speed advice",
        ],
        "health": [
            "GET /api/v1/health - Service health check with component status",
        ],
    }

    return HealthResponse(
        service=settings.app_name,
        status="running" if gemini_ok else "degraded",
        version=settings.app_version,
        authentication="enabled" if settings.api_key else "disabled",
        components=components,
        endpoints=endpoints,
    )
