from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List

_WORD_RE = re.compile(r"[A-Za-z0-9']+")


@dataclass(frozen=True)
class Token:
    text: str
    start: int
    end: int


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield lower-cased word tokens with their offsets in the original text."""
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    for m in _WORD_RE.finditer(text):
        yield Token(text=m.group(0).lower(), start=m.start(), end=m.end())


def tokenize(text: str) -> List[Token]:
    return list(iter_tokens(text))


def token_texts(tokens: Iterable[Token]) -> List[str]:
    return [t.text for t in tokens]
