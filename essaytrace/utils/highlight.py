from __future__ import annotations

import html
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from essaytrace.services.spans import CharSpan


class SegmentKind(str, Enum):
    PLAIN = "plain"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    text: str


def render_segments(text: str, ranges: Iterable[CharSpan]) -> List[Segment]:
    """Split text into plain and highlighted pieces.

    ``ranges`` must already be sorted and disjoint (see ``merge_ranges``).
    """
    out: List[Segment] = []
    cursor = 0
    for r in ranges:
        if r.start > cursor:
            out.append(Segment(SegmentKind.PLAIN, text[cursor:r.start]))
        out.append(Segment(SegmentKind.HIGHLIGHT, text[r.start:r.end]))
        cursor = r.end
    if cursor < len(text):
        out.append(Segment(SegmentKind.PLAIN, text[cursor:]))
    return out


def render_html(text: str, ranges: Iterable[CharSpan]) -> str:
    """Escaped HTML with highlighted segments wrapped in <mark>."""
    parts: list[str] = []
    for seg in render_segments(text, ranges):
        esc = html.escape(seg.text, quote=False)
        if seg.kind == SegmentKind.HIGHLIGHT:
            parts.append(f"<mark>{esc}</mark>")
        else:
            parts.append(esc)
    return "".join(parts)
