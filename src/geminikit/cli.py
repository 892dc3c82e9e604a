import asyncio
import sys

import httpx
import structlog

from geminikit import __version__
from geminikit.client import Client, GenerateOptions, HTTPExecutor
from geminikit.config import Config
from geminikit.errors import ConfigurationError, GeminiError
from geminikit.geminikit_logging import setup_logging
from geminikit.types import GenerateContentResponse

logger = structlog.get_logger("geminikit")

USAGE = "usage: geminikit <prompt>"

# Transport level retries, on connection failures only.
TRANSPORT_RETRIES = 3
# Overall deadline as a multiple of the per-attempt timeout, leaving room
# for every retry attempt.
DEADLINE_FACTOR = 5


async def run(
    cfg: Config,
    prompt: str,
    http_client: HTTPExecutor | None = None,
) -> GenerateContentResponse:
    owned = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(
            timeout=cfg.timeout,
            transport=httpx.AsyncHTTPTransport(retries=TRANSPORT_RETRIES),
        )

    try:
        client = Client(cfg.api_key, model=cfg.model, http_client=http_client)
        options = GenerateOptions(
            max_tokens=cfg.max_tokens,
            temperature=cfg.temperature,
            google_search=cfg.google_search,
        )
        return await client.generate(prompt, options, timeout=cfg.timeout * DEADLINE_FACTOR)
    finally:
        if owned:
            await http_client.aclose()


def main(argv: list[str] | None = None, http_client: HTTPExecutor | None = None) -> int:
    """Runs the CLI. Every argument is a prompt word, dashes included.

    The only exception is a lone ``--version``.
    """
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print(USAGE, file=sys.stderr)
        return 1
    if argv == ["--version"]:
        print(f"geminikit {__version__}")
        return 0
    prompt = " ".join(argv)

    try:
        cfg = Config.from_env()
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    setup_logging(cfg.log_level, cfg.log_format)
    logger.info("starting", version=__version__)
    logger.debug(
        "request config",
        model=cfg.model,
        max_tokens=cfg.max_tokens,
        temperature=cfg.temperature,
        google_search=cfg.google_search,
    )

    try:
        resp = asyncio.run(run(cfg, prompt, http_client))
    except GeminiError as e:
        logger.error("generate failed", error=str(e), error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(resp.to_json())
    return 0
