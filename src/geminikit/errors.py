class GeminiError(Exception):
    """Base class for every error raised by geminikit."""


class ConfigurationError(GeminiError):
    """Invalid client or CLI configuration (API key, base URL, env vars)."""


class ValidationError(GeminiError):
    """Invalid generation parameters. Raised before any network activity."""


class TransportError(GeminiError):
    """The HTTP executor failed to produce a response."""


class RequestTimeoutError(TransportError):
    """The request did not complete before its deadline."""


class RequestCancelledError(TransportError):
    """The HTTP executor reported that the request was cancelled."""


class SizeLimitError(GeminiError):
    """The response body grew past the size limit. Reading stopped there."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"gemini: response exceeds {limit} byte limit")


class HTTPStatusError(GeminiError):
    """The API answered with a status code >= 400.

    ``body`` holds an excerpt of the error body, never the full payload
    when it was longer than the excerpt limit.
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"gemini: HTTP {status_code}: {body}")


class DeserializationError(GeminiError):
    """The response body could not be parsed."""
