"""Exceptions raised while extracting and summarizing transcripts."""


class SummaryError(Exception):
    """Base class for every failure surfaced to the tool layer."""


class ConfigurationError(SummaryError):
    pass


class TransportTimeoutError(SummaryError):
    pass


class RemoteExtractionError(SummaryError):
    """The page context answered with an error; the message is carried verbatim."""


class TranscriptEmptyError(SummaryError):
    pass


class HostSchemaError(SummaryError):
    """The host page or its private API did not yield a transcript."""


class TranscriptUnavailableError(HostSchemaError):
    pass


class HostAPIError(HostSchemaError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"get_transcript API failed: HTTP {status_code}")


class NoSegmentsError(HostSchemaError):
    pass


class CaptionParseError(SummaryError):
    PREVIEW_CHARS = 300

    def __init__(self, raw: str):
        self.preview = raw[: self.PREVIEW_CHARS]
        super().__init__(f"Could not parse captions. Preview: {self.preview}")


class ProviderError(SummaryError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API error ({status_code}): {message}")
