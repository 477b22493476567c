"""Pytest configuration and fixtures."""

from io import BytesIO
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient
import pytest

from app.main import create_app
from app.models.subtitle import SubtitleEntry
from app.services.session import session_store

# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clear_sessions():
    """Start every test with an empty session store."""
    session_store.clear()
    yield
    session_store.clear()


@pytest.fixture
def client():
    """Create test client without authentication."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_app()
        yield TestClient(app)


@pytest.fixture
def client_with_auth():
    """Client with API key configured (no default headers)."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = "test_secret_key_12345"
        app = create_app()
        yield TestClient(app)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_srt():
    """Sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello world

2
00:00:05,000 --> 00:00:08,000
How are you?"""


@pytest.fixture
def sample_segments():
    """Raw transcription output as returned by Gemini."""
    return [
        {"startTime": "00:00:00,000", "endTime": "00:00:02,500", "text": "Hello there."},
        {
            "startTime": "00:00:02,500",
            "endTime": "00:00:07,500",
            "text": "This sentence is definitely longer than twenty chars",
        },
    ]


@pytest.fixture
def sample_entries():
    """Three consecutive one-second entries."""
    return (
        SubtitleEntry(id=1, start=0, end=1000, text="A"),
        SubtitleEntry(id=2, start=1000, end=2000, text="B"),
        SubtitleEntry(id=3, start=2000, end=3000, text="C"),
    )


def create_fake_audio_file(size_kb=16):
    """Create fake audio file for testing.

    Args:
        size_kb: Size of fake audio file in kilobytes

    Returns:
        BytesIO: Fake audio file object
    """
    data = b"fake audio data " * (size_kb * 64)
    return BytesIO(data)


# ============================================================================
# Mock Service Fixtures
# ============================================================================


@pytest.fixture
def mock_genai_client():
    """Mock Google GenAI client."""
    with patch("app.services.transcription.genai.Client") as mock_client:
        yield mock_client


@pytest.fixture
def mock_transcribe():
    """Mock transcribe_audio where the session controller imports it."""
    with patch("app.services.session.transcribe_audio", new_callable=AsyncMock) as mock:
        yield mock


def create_genai_response(text):
    """Create a mock Google GenAI API response carrying ``text``.

    Args:
        text: JSON text returned by the model (or None for an empty reply)

    Returns:
        Mock response object matching Google GenAI structure
    """
    response = MagicMock()
    response.text = text
    return response
