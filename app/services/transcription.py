"""Google GenAI speech-to-text client returning timed subtitle segments."""

import json

from google import genai
from google.genai import types

from app.core.config import Settings, get_settings
from app.core.exceptions import MalformedResponse, ServiceError
from app.core.logging import get_logger

logger = get_logger(__name__)

SEGMENT_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "startTime": types.Schema(
                type=types.Type.STRING,
                description="The start time of the subtitle segment in HH:MM:SS,ms format.",
            ),
            "endTime": types.Schema(
                type=types.Type.STRING,
                description="The end time of the subtitle segment in HH:MM:SS,ms format.",
            ),
            "text": types.Schema(
                type=types.Type.STRING,
                description="The transcribed text for this segment.",
            ),
        },
        required=["startTime", "endTime", "text"],
    ),
)


def build_prompt(duration_seconds: float) -> str:
    """Build the transcription instructions sent alongside the audio."""
    return f"""Transcribe the following audio recording accurately. The total audio \
duration is approximately {round(duration_seconds)} seconds.
Structure the output as a list of subtitle entries. Each entry must have a start time, \
an end time, and the transcribed text for that segment.
Ensure the timestamps are in HH:MM:SS,ms format and are sequential and logical within \
the audio's duration."""


async def transcribe_audio(
    audio: bytes,
    mime_type: str,
    duration_seconds: float = 0,
    model: str | None = None,
    settings: Settings | None = None,
) -> object:
    """Transcribe audio into timed segments using Gemini structured output.

    Args:
        audio: Raw audio bytes
        mime_type: MIME type of the audio (e.g. "audio/mpeg")
        duration_seconds: Approximate duration, only used as a prompt hint
        model: Google GenAI model ID (default from settings)
        settings: Settings instance (optional, will use get_settings() if not provided)

    Returns:
        Decoded JSON payload, nominally a list of
        ``{"startTime", "endTime", "text"}`` records

    Raises:
        ServiceError: If the API key is missing or the API request fails
        MalformedResponse: If the API returns no text or invalid JSON
    """
    if settings is None:
        settings = get_settings()

    if not settings.google_api_key:
        raise ServiceError(
            "GOOGLE_API_KEY not found in environment. "
            "Please set it in .env file or environment variables."
        )

    model = model or settings.transcription_model

    logger.info(
        "Starting transcription: %d bytes (%s, ~%ds) with %s",
        len(audio),
        mime_type,
        round(duration_seconds),
        model,
    )

    try:
        client = genai.Client(api_key=settings.google_api_key)

        response = await client.aio.models.generate_content(
            model=model,
            contents=[
                build_prompt(duration_seconds),
                types.Part.from_bytes(data=audio, mime_type=mime_type),
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=SEGMENT_SCHEMA,
            ),
        )
    except Exception as e:
        logger.error("Error transcribing audio with timestamps: %s", e)
        raise ServiceError(f"Gemini API Error: {str(e)}")

    if not response.text:
        raise MalformedResponse("No transcription returned from API")

    try:
        payload = json.loads(response.text)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"API returned invalid JSON: {str(e)}")

    logger.info(
        "Transcription complete: %s segments",
        len(payload) if isinstance(payload, list) else "invalid",
    )
    return payload
