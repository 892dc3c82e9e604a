import math
import os
import re
from dataclasses import dataclass, field
from typing import Mapping

from geminikit.client import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT,
)
from geminikit.errors import ConfigurationError
from geminikit.geminikit_logging import LogFormat, LogLevel

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def parse_duration(value: str) -> float:
    """Parses ``"30"``, ``"30s"``, ``"500ms"``, ``"2m"`` or ``"1h"`` into seconds."""
    match = _DURATION_RE.match(value)
    if match is None:
        raise ValueError(f"invalid duration {value!r}")
    amount, unit = match.groups()
    seconds = float(amount) * _DURATION_UNITS[unit or "s"]
    if seconds <= 0:
        raise ValueError(f"duration must be positive, got {value!r}")
    return seconds


def parse_finite_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"must be a finite number, got {value!r}")
    return number


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"invalid boolean {value!r}")


@dataclass(frozen=True)
class Config:
    """CLI configuration, read once at startup from the environment."""

    api_key: str = field(repr=False)
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = DEFAULT_TIMEOUT
    google_search: bool = True
    log_level: LogLevel = LogLevel.ERROR
    log_format: LogFormat = LogFormat.TEXT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        if environ is None:
            environ = os.environ

        api_key = environ.get("GEMINI_API_KEY", "")
        if not api_key.strip():
            raise ConfigurationError("config: GEMINI_API_KEY is required")

        def get(name, parse, default):
            raw = environ.get(name)
            if raw is None or raw == "":
                return default
            try:
                return parse(raw)
            except ValueError as e:
                # The raw value is safe to show, only GEMINI_API_KEY is secret.
                raise ConfigurationError(f"config: invalid {name}: {e}") from e

        return cls(
            api_key=api_key,
            model=get("GEMINI_MODEL", str, DEFAULT_MODEL),
            max_tokens=get("GEMINI_MAX_TOKENS", int, DEFAULT_MAX_TOKENS),
            temperature=get("GEMINI_TEMPERATURE", parse_finite_float, DEFAULT_TEMPERATURE),
            timeout=get("GEMINI_TIMEOUT", parse_duration, DEFAULT_TIMEOUT),
            google_search=get("GEMINI_GOOGLE_SEARCH", parse_bool, True),
            log_level=get("LOG_LEVEL", LogLevel, LogLevel.ERROR),
            log_format=get("LOG_FORMAT", LogFormat, LogFormat.TEXT),
        )
