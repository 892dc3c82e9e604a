"""geminikit - A small client and CLI for the Gemini generateContent API."""

import logging as python_logging
from importlib import metadata

try:
    __version__ = metadata.version("geminikit")
    __description__ = metadata.metadata("geminikit")["Summary"]
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
    __description__ = "geminikit"

from geminikit.client import Client, GenerateOptions, HTTPExecutor  # noqa: E402
from geminikit.errors import (  # noqa: E402
    ConfigurationError,
    DeserializationError,
    GeminiError,
    HTTPStatusError,
    RequestCancelledError,
    RequestTimeoutError,
    SizeLimitError,
    TransportError,
    ValidationError,
)

__all__ = [
    "Client",
    "ConfigurationError",
    "DeserializationError",
    "GeminiError",
    "GenerateOptions",
    "HTTPExecutor",
    "HTTPStatusError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "SizeLimitError",
    "TransportError",
    "ValidationError",
]

# Set up null handler to avoid "No handler found" warnings.
# See https://docs.python.org/3/howto/logging.html#configuring-logging-for-a-library
python_logging.getLogger(__name__).addHandler(python_logging.NullHandler())
