"""Tests for sensitive data log filter."""

import logging

import pytest

from app.core.log_filter import SensitiveDataFilter


@pytest.fixture
def log_filter():
    return SensitiveDataFilter()


@pytest.fixture
def log_record():
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="",
        args=None,
        exc_info=None,
    )


class TestSensitiveDataFilter:
    """Tests for SensitiveDataFilter."""

    def test_redact_google_api_key_assignment(self, log_filter, log_record):
        """Test redaction of GOOGLE_API_KEY assignment."""
        log_record.msg = "Loaded GOOGLE_API_KEY=AIzaSyABCDEF1234567890abcdef"
        log_filter.filter(log_record)
        assert "AIzaSyABCDEF1234567890abcdef" not in log_record.msg
        assert "GOOGLE_API_KEY=***REDACTED***" in log_record.msg

    def test_redact_standalone_google_key(self, log_filter, log_record):
        """Test redaction of a bare Google API key."""
        log_record.msg = "Client created with AIzaSyABCDEF1234567890abcdef"
        log_filter.filter(log_record)
        assert "AIzaSyABCDEF1234567890abcdef" not in log_record.msg
        assert "***REDACTED***" in log_record.msg

    def test_redact_x_api_key_header(self, log_filter, log_record):
        """Test redaction of X-API-Key header."""
        log_record.msg = "Headers: X-API-Key: my_service_key"
        log_filter.filter(log_record)
        assert "my_service_key" not in log_record.msg
        assert "X-API-Key: ***REDACTED***" in log_record.msg

    def test_redact_authorization_header(self, log_filter, log_record):
        """Test redaction of Authorization header."""
        log_record.msg = "Request headers: Authorization: Bearer abc123xyz789"
        log_filter.filter(log_record)
        assert "abc123xyz789" not in log_record.msg
        assert "Authorization: ***REDACTED***" in log_record.msg

    def test_redact_bearer_token(self, log_filter, log_record):
        """Test redaction of Bearer token."""
        log_record.msg = "Auth: Bearer eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
        log_filter.filter(log_record)
        assert "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9" not in log_record.msg
        assert "Bearer ***REDACTED***" in log_record.msg

    def test_redact_inline_audio(self, log_filter, log_record):
        """Test base64 audio payloads are not written to logs."""
        log_record.msg = "Payload: data:audio/mpeg;base64,SUQzBAAAAAAAI1RTU0UAAAAPAAADTGF2ZjU4"
        log_filter.filter(log_record)
        assert "SUQzBAAAAAAAI1RTU0UAAAAPAAADTGF2ZjU4" not in log_record.msg
        assert "data:audio/mpeg;base64,***REDACTED***" in log_record.msg

    def test_redact_log_args_tuple(self, log_filter, log_record):
        """Test redaction of log record args (tuple)."""
        log_record.msg = "API call with key: %s"
        log_record.args = ("AIzaSyABCDEF1234567890abcdef",)
        log_filter.filter(log_record)
        assert "AIzaSyABCDEF1234567890abcdef" not in log_record.args[0]
        assert "***REDACTED***" in log_record.args[0]

    def test_numeric_args_preserved(self, log_filter, log_record):
        """Test non-string args keep their type for %d formatting."""
        log_record.msg = "Normalized %d transcript segments"
        log_record.args = (12,)
        log_filter.filter(log_record)
        assert log_record.args == (12,)
        assert log_record.getMessage() == "Normalized 12 transcript segments"

    def test_redact_exception_text(self, log_filter, log_record):
        """Test redaction of exception text."""
        log_record.exc_text = "ValueError: Invalid API_KEY=sk_test_abc123"
        log_filter.filter(log_record)
        assert "sk_test_abc123" not in log_record.exc_text
        assert "API_KEY=***REDACTED***" in log_record.exc_text

    def test_preserve_normal_text(self, log_filter, log_record):
        """Test that normal text is not redacted."""
        log_record.msg = "Exporting 12 subtitles as interview.srt"
        original_msg = log_record.msg
        log_filter.filter(log_record)
        assert log_record.msg == original_msg

    def test_filter_always_returns_true(self, log_filter, log_record):
        """Test that filter always returns True (passes record)."""
        log_record.msg = "Test message with api_key=secret123"
        assert log_filter.filter(log_record) is True

    def test_case_insensitive_patterns(self, log_filter, log_record):
        """Test that patterns are case-insensitive."""
        for test_msg in [
            "API_KEY=secret123",
            "api_key=secret123",
            "authorization: Bearer token123",
            "AUTHORIZATION: Bearer token123",
            "x-api-key: secret123",
        ]:
            log_record.msg = test_msg
            log_filter.filter(log_record)
            assert "***REDACTED***" in log_record.msg
