from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

# names uvicorn.Config accepts for log_level, upper-cased
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")

def _get_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Invalid int for {name}: {v}") from e


def _get_str(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v

@dataclass(frozen=True)
class Settings:
    min_match_words: int
    max_tokens: int | None
    ai_separator: str

    web_host: str
    web_port: int
    log_level: str

def load_settings() -> Settings:
    min_match_words = _get_int("MIN_MATCH_WORDS", 3)
    if min_match_words < 1:
        raise RuntimeError(f"MIN_MATCH_WORDS must be >= 1: {min_match_words}")

    # 0 disables truncation
    max_tokens = _get_int("MAX_TOKENS", 5000)
    if max_tokens < 0:
        raise RuntimeError(f"MAX_TOKENS must be >= 0: {max_tokens}")

    # .env files can't hold raw newlines comfortably, so "\n\n" is accepted
    raw_sep = _get_str("AI_SEPARATOR", "\\n\\n")
    try:
        ai_separator = codecs.decode(raw_sep, "unicode_escape")
    except UnicodeError as e:
        raise RuntimeError(f"Invalid AI_SEPARATOR: {raw_sep}") from e

    web_host = os.getenv("WEB_HOST", "0.0.0.0")
    web_port = _get_int("WEB_PORT", 8080)
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if log_level not in _LOG_LEVELS:
        raise RuntimeError(f"Invalid LOG_LEVEL: {log_level} (expected one of {', '.join(_LOG_LEVELS)})")

    return Settings(
        min_match_words=min_match_words,
        max_tokens=max_tokens or None,
        ai_separator=ai_separator,
        web_host=web_host,
        web_port=web_port,
        log_level=log_level,
    )
