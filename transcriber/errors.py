"""Error taxonomy for the transcription pipeline.

Every error carries the HTTP status it maps to. Validation errors are 400;
everything raised after network I/O has started is reported as a 500 with the
original failure text.
"""


class TranscriberError(Exception):
    """Base class for failures that abort a transcription request."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingField(TranscriberError):
    """A required request field is absent or empty."""

    status_code = 400


class InvalidRequest(TranscriberError):
    """The request body could not be read as a transcription request."""

    status_code = 400


class DownloadError(TranscriberError):
    """The audio file could not be fetched."""

    def __init__(self, message: str, upstream_status: int | None = None, reason: str = ""):
        self.upstream_status = upstream_status
        self.reason = reason
        super().__init__(message)

    @classmethod
    def from_response(cls, status: int, reason: str) -> "DownloadError":
        return cls(
            f"Failed to download audio file: {status} {reason}".rstrip(),
            upstream_status=status,
            reason=reason,
        )


class TranscriptionError(TranscriberError):
    """The speech-to-text service call failed."""


class LanguageModelError(TranscriberError):
    """A chat-completion call failed."""


class SummarizationError(LanguageModelError):
    pass


class AttributionError(LanguageModelError):
    pass


class AttributionParseError(Exception):
    """The attribution reply was not the expected JSON object.

    Recoverable: the attribution step falls back to the raw transcript.
    """
