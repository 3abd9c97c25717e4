from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from essaytrace.services.matcher import MatchBlock
from essaytrace.utils.tokenize import Token

logger = logging.getLogger("essaytrace.services.spans")

_SIDES = {"a": "a", "human": "a", "b": "b", "ai": "b"}


@dataclass(frozen=True)
class CharSpan:
    start: int
    end: int

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


def merge_ranges(ranges: Iterable[CharSpan]) -> List[CharSpan]:
    """Coalesce overlapping or touching spans into sorted, strictly gapped ones."""
    ordered = sorted(ranges, key=lambda r: r.start)
    if not ordered:
        return []

    merged: List[CharSpan] = []
    cur_start, cur_end = ordered[0].start, ordered[0].end
    for r in ordered[1:]:
        if r.start <= cur_end:
            cur_end = max(cur_end, r.end)
        else:
            merged.append(CharSpan(cur_start, cur_end))
            cur_start, cur_end = r.start, r.end
    merged.append(CharSpan(cur_start, cur_end))
    return merged


def blocks_to_char_ranges(
    blocks: Iterable[MatchBlock],
    tokens: Sequence[Token],
    side: str,
) -> List[CharSpan]:
    """Map token-index blocks onto character spans of one side's text."""
    key = _SIDES.get(side)
    if key is None:
        raise ValueError(f"Unknown side: {side!r}")

    out: List[CharSpan] = []
    for block in blocks:
        if block.size <= 0:
            continue
        first = block.a_start if key == "a" else block.b_start
        last = first + block.size - 1
        if first < 0 or last >= len(tokens):
            # token list doesn't match the sequence the block came from
            logger.warning("Skipping block %s outside %d tokens (side=%s)", block, len(tokens), side)
            continue
        out.append(CharSpan(start=tokens[first].start, end=tokens[last].end))
    return out
