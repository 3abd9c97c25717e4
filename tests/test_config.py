import pytest

from essaytrace.config import load_settings

_KEYS = ("MIN_MATCH_WORDS", "MAX_TOKENS", "AI_SEPARATOR", "WEB_HOST", "WEB_PORT", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in _KEYS:
        monkeypatch.delenv(k, raising=False)


def test_defaults():
    s = load_settings()
    assert s.min_match_words == 3
    assert s.max_tokens == 5000
    assert s.ai_separator == "\n\n"
    assert s.web_port == 8080
    assert s.log_level == "INFO"


def test_overrides(monkeypatch):
    monkeypatch.setenv("MIN_MATCH_WORDS", "5")
    monkeypatch.setenv("MAX_TOKENS", "0")
    monkeypatch.setenv("AI_SEPARATOR", "\\n---\\n")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.min_match_words == 5
    assert s.max_tokens is None
    assert s.ai_separator == "\n---\n"
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "key, value",
    [
        ("MIN_MATCH_WORDS", "three"),
        ("MIN_MATCH_WORDS", "0"),
        ("MAX_TOKENS", "-1"),
        ("WEB_PORT", "http"),
        ("LOG_LEVEL", "warn"),
        ("LOG_LEVEL", "VERBOSE"),
    ],
)
def test_invalid_values_raise(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(RuntimeError):
        load_settings()


def test_setup_logging_sets_level():
    import logging

    from essaytrace.logging_config import setup_logging

    root = logging.getLogger()
    old = root.level
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        setup_logging("nonsense")
        assert root.level == logging.INFO
        assert root.handlers
    finally:
        root.setLevel(old)


def test_log_level_accepts_uvicorn_names(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert load_settings().log_level == "WARNING"
    monkeypatch.setenv("LOG_LEVEL", "Trace")
    assert load_settings().log_level == "TRACE"
