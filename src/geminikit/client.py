import asyncio
import math
from dataclasses import dataclass
from typing import (
    Protocol,
)

import httpx
import pydantic
import structlog

from geminikit.errors import (
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
from geminikit.types import (
    GenerateContentRequest,
    GenerateContentResponse,
)

logger = structlog.get_logger("geminikit")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-3-pro-preview"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_TOKENS = 32000
DEFAULT_TEMPERATURE = 1.0

MAX_RESPONSE_BYTES = 10 * 1024 * 1024
MAX_ERROR_BODY_BYTES = 1024
TRUNCATION_MARKER = "...(truncated)"

API_KEY_HEADER = "x-goog-api-key"


class HTTPExecutor(Protocol):
    """Anything able to execute one HTTP request.

    ``httpx.AsyncClient`` satisfies this protocol, with or without a
    retrying transport.
    """

    async def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response: ...


@dataclass(frozen=True)
class GenerateOptions:
    """Per-call generation parameters."""

    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float | None = DEFAULT_TEMPERATURE
    google_search: bool = False

    def validate(self) -> None:
        if self.max_tokens <= 0:
            raise ValidationError(f"gemini: max_tokens must be positive, got {self.max_tokens}")
        if self.temperature is not None and not (
            math.isfinite(self.temperature) and self.temperature >= 0
        ):
            raise ValidationError(
                f"gemini: temperature must be a finite non-negative number, got {self.temperature}"
            )


def truncate_error_body(body: bytes, limit: int = MAX_ERROR_BODY_BYTES) -> str:
    if len(body) <= limit:
        return body.decode("utf-8", errors="replace")
    # errors="ignore" drops a multi-byte sequence cut in half by the limit
    return body[:limit].decode("utf-8", errors="ignore") + TRUNCATION_MARKER


async def read_limited(response: httpx.Response, limit: int = MAX_RESPONSE_BYTES) -> bytes:
    """Reads the response body, failing as soon as it grows past ``limit``."""
    buf = bytearray()
    async for chunk in response.aiter_bytes():
        buf.extend(chunk)
        if len(buf) > limit:
            raise SizeLimitError(limit)
    return bytes(buf)


class Client:
    """
    Client for the Gemini ``generateContent`` endpoint.

    Configuration is fixed at construction time. A call only reads it, so
    a single client can serve concurrent ``generate`` calls as long as the
    HTTP executor can.

    When no ``http_client`` is given the client creates and owns an
    ``httpx.AsyncClient``; use ``async with`` or ``aclose()`` to release it.
    Executors passed in are left open.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str | None = None,
        base_url: str | None = None,
        http_client: HTTPExecutor | None = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError("gemini: API key must not be empty")

        base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        if not base_url.startswith("https://"):
            raise ConfigurationError(f"gemini: base URL must use HTTPS, got {base_url!r}")

        if model is None:
            model = DEFAULT_MODEL
        elif not model.strip():
            raise ConfigurationError("gemini: model must not be empty")

        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        self._http_client = http_client

    def __repr__(self) -> str:
        return f"Client(model={self._model!r}, base_url={self._base_url!r})"

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def url(self) -> str:
        return f"{self._base_url}/{self._model}:generateContent"

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def build_request(
        self,
        prompt: str,
        options: GenerateOptions | None = None,
    ) -> httpx.Request:
        """Builds the HTTP request for ``prompt``.

        The JSON payload is serialized once and kept as bytes, so the
        returned request can be sent again with an identical body by a
        retrying executor.
        """
        options = options or GenerateOptions()
        options.validate()

        body = GenerateContentRequest.from_prompt(
            prompt,
            max_output_tokens=options.max_tokens,
            temperature=options.temperature,
            google_search=options.google_search,
        )
        headers = {
            "Content-Type": "application/json",
            API_KEY_HEADER: self._api_key,
        }
        return httpx.Request("POST", self.url, headers=headers, content=body.to_json())

    async def generate(
        self,
        prompt: str,
        options: GenerateOptions | None = None,
        *,
        timeout: float | None = None,
    ) -> GenerateContentResponse:
        """Sends ``prompt`` and returns the parsed response.

        ``timeout`` bounds the whole round trip, body read included.
        Nothing is retried here; wrap the executor for that.
        """
        request = self.build_request(prompt, options)
        logger.debug(
            "sending generateContent request",
            model=self._model,
            payload_size=len(request.content),
        )

        status_code, body = await self._send(request, timeout)

        if status_code >= 400:
            logger.error("generateContent request failed", model=self._model, status_code=status_code)
            raise HTTPStatusError(status_code, truncate_error_body(body))

        try:
            resp = GenerateContentResponse.model_validate_json(body)
        except pydantic.ValidationError as e:
            reason = e.errors(include_url=False, include_input=False)[0]["msg"]
            raise DeserializationError(f"gemini: unmarshal response: {reason}") from e

        logger.debug(
            "received generateContent response",
            model=self._model,
            candidates=len(resp.candidates),
            total_tokens=resp.usage_metadata.total_token_count,
        )
        return resp

    async def _send(self, request: httpx.Request, timeout: float | None) -> tuple[int, bytes]:
        try:
            async with asyncio.timeout(timeout):
                response = await self._http_client.send(request, stream=True)
                try:
                    body = await read_limited(response)
                finally:
                    await response.aclose()
        except GeminiError:
            raise
        except TimeoutError as e:
            if timeout is None:
                raise RequestTimeoutError(f"gemini: do request: {e}") from e
            raise RequestTimeoutError(
                f"gemini: do request: deadline of {timeout}s exceeded"
            ) from e
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"gemini: do request: {e}") from e
        except asyncio.CancelledError as e:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                # The caller cancelled us, let asyncio see it.
                raise
            raise RequestCancelledError("gemini: do request: request cancelled") from e
        except Exception as e:
            raise TransportError(f"gemini: do request: {e}") from e
        return response.status_code, body
