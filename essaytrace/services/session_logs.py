from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from essaytrace.services.overlap import AI_SEPARATOR, OverlapResult, compute_overlap

_SUBMIT_RE = re.compile(r"^(USER_SUBMITTED|TIME_LIMIT_EXPIRED):")
_SUBMIT_PREFIX_RE = re.compile(r"^(USER_SUBMITTED|TIME_LIMIT_EXPIRED):\s*", re.IGNORECASE)


class EventName(str, Enum):
    ESSAY_WRITING = "essay_writing"
    CHAT = "chat"
    SYSTEM = "system"


class EventBy(str, Enum):
    USER = "user"
    AI = "AI"
    SYSTEM = "system"


@dataclass(frozen=True)
class WritingEvent:
    session_id: str
    user_name: str
    event_start_time: int  # ms timestamp
    event_name: EventName
    event_by: EventBy
    event_result: str = ""


@dataclass(frozen=True)
class SessionTexts:
    human_text: str
    ai_text: str


def session_events(events: Iterable[WritingEvent], session_id: str) -> List[WritingEvent]:
    return [e for e in events if e.session_id == session_id]


def ai_outputs(events: Iterable[WritingEvent]) -> List[str]:
    return [
        e.event_result
        for e in events
        if e.event_name == EventName.CHAT and e.event_by == EventBy.AI and e.event_result
    ]


def total_ai_output(events: Iterable[WritingEvent], separator: str = AI_SEPARATOR) -> str:
    return separator.join(ai_outputs(events))


def final_submission(events: Iterable[WritingEvent]) -> str:
    """Text the student handed in.

    Prefers the latest explicit submit / time-out event, falling back to the
    latest essay snapshot.
    """
    events = list(events)
    submits = sorted(
        (
            e for e in events
            if e.event_name == EventName.SYSTEM
            and e.event_by == EventBy.USER
            and _SUBMIT_RE.match(e.event_result or "")
        ),
        key=lambda e: e.event_start_time,
        reverse=True,
    )
    if submits:
        return _SUBMIT_PREFIX_RE.sub("", submits[0].event_result, count=1)

    essays = [e for e in events if e.event_name == EventName.ESSAY_WRITING]
    if not essays:
        return ""
    latest = max(essays, key=lambda e: e.event_start_time)
    return latest.event_result or ""


def session_texts(
    events: Iterable[WritingEvent],
    session_id: str,
    separator: str = AI_SEPARATOR,
) -> SessionTexts:
    own = session_events(events, session_id)
    return SessionTexts(human_text=final_submission(own), ai_text=total_ai_output(own, separator))


def session_overlap(
    events: Iterable[WritingEvent],
    session_id: str,
    min_match_words: int = 3,
    max_tokens: Optional[int] = None,
    separator: str = AI_SEPARATOR,
) -> Tuple[SessionTexts, OverlapResult]:
    texts = session_texts(events, session_id, separator)
    result = compute_overlap(texts.human_text, texts.ai_text, min_match_words, max_tokens)
    return texts, result
