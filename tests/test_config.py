import pytest

from geminikit.client import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TIMEOUT
from geminikit.config import Config, parse_bool, parse_duration
from geminikit.errors import ConfigurationError
from geminikit.geminikit_logging import LogFormat, LogLevel


def test_config_defaults():
    cfg = Config.from_env({"GEMINI_API_KEY": "key"})

    assert cfg.api_key == "key"
    assert cfg.model == DEFAULT_MODEL
    assert cfg.max_tokens == DEFAULT_MAX_TOKENS
    assert cfg.temperature == 1.0
    assert cfg.timeout == DEFAULT_TIMEOUT
    assert cfg.google_search is True
    assert cfg.log_level == LogLevel.ERROR
    assert cfg.log_format == LogFormat.TEXT


def test_config_from_env():
    cfg = Config.from_env(
        {
            "GEMINI_API_KEY": "key",
            "GEMINI_MODEL": "gemini-flash",
            "GEMINI_MAX_TOKENS": "128",
            "GEMINI_TEMPERATURE": "0",
            "GEMINI_TIMEOUT": "500ms",
            "GEMINI_GOOGLE_SEARCH": "false",
            "LOG_LEVEL": "debug",
            "LOG_FORMAT": "json",
        }
    )

    assert cfg.model == "gemini-flash"
    assert cfg.max_tokens == 128
    assert cfg.temperature == 0.0
    assert cfg.timeout == pytest.approx(0.5)
    assert cfg.google_search is False
    assert cfg.log_level == LogLevel.DEBUG
    assert cfg.log_format == LogFormat.JSON


def test_config_reads_os_environ(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-environ")
    monkeypatch.setenv("GEMINI_MODEL", "env-model")

    cfg = Config.from_env()

    assert cfg.api_key == "from-environ"
    assert cfg.model == "env-model"


@pytest.mark.parametrize("environ", [{}, {"GEMINI_API_KEY": ""}, {"GEMINI_API_KEY": "   "}])
def test_config_missing_api_key(environ):
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        Config.from_env(environ)


@pytest.mark.parametrize(
    "name,value",
    [
        ("GEMINI_MAX_TOKENS", "lots"),
        ("GEMINI_TEMPERATURE", "hot"),
        ("GEMINI_TEMPERATURE", "nan"),
        ("GEMINI_TEMPERATURE", "inf"),
        ("GEMINI_TIMEOUT", "soon"),
        ("GEMINI_TIMEOUT", "0s"),
        ("GEMINI_GOOGLE_SEARCH", "maybe"),
        ("LOG_LEVEL", "verbose"),
        ("LOG_FORMAT", "xml"),
    ],
)
def test_config_invalid_value(name, value):
    with pytest.raises(ConfigurationError, match=name):
        Config.from_env({"GEMINI_API_KEY": "key", name: value})


def test_config_repr_hides_api_key():
    cfg = Config.from_env({"GEMINI_API_KEY": "super-secret-key"})
    assert "super-secret-key" not in repr(cfg)


@pytest.mark.parametrize(
    "value,expected",
    [("30", 30.0), ("30s", 30.0), ("1.5s", 1.5), ("250ms", 0.25), ("2m", 120.0), ("1h", 3600.0)],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("NO", False), ("off", False)])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected
