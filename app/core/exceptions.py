"""Domain exceptions raised by the subtitle services."""


class SubtitleServiceError(Exception):
    """Base class for errors reported back to the client."""

    pass


class NoInputSelected(SubtitleServiceError):
    """Transcription was requested before any audio was loaded."""

    pass


class ReadFailure(SubtitleServiceError):
    """The audio payload could not be read into transmittable form."""

    pass


class MalformedResponse(SubtitleServiceError):
    """The transcription service returned a payload of the wrong shape."""

    pass


class ServiceError(SubtitleServiceError):
    """The transcription service call itself failed."""

    pass


class TranscriptionInProgress(SubtitleServiceError):
    """A transcription is already outstanding for this session."""

    pass


class SessionNotFound(SubtitleServiceError):
    """No editing session exists under the requested id."""

    pass
