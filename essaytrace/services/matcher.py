from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

logger = logging.getLogger("essaytrace.services.matcher")


@dataclass(frozen=True)
class MatchBlock:
    a_start: int
    b_start: int
    size: int


def find_longest_block(
    a: Sequence[str],
    b: Sequence[str],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
) -> MatchBlock:
    """Longest run of equal tokens inside a[a_lo:a_hi] x b[b_lo:b_hi].

    Keeps a single previous row of common-suffix lengths. On equal sizes the
    first end position in row-major order wins (lowest i, then lowest j).
    Returns a size 0 block when the region is empty or nothing matches.
    """
    b_len = b_hi - b_lo
    if a_lo >= a_hi or b_len <= 0:
        return MatchBlock(a_start=a_lo, b_start=b_lo, size=0)

    prev = [0] * (b_len + 1)
    best_size = 0
    best_a_end = a_lo
    best_b_end = b_lo

    for i in range(a_lo, a_hi):
        curr = [0] * (b_len + 1)
        ai = a[i]
        for j in range(b_lo, b_hi):
            if ai == b[j]:
                k = j - b_lo
                val = prev[k] + 1
                curr[k + 1] = val
                if val > best_size:
                    best_size = val
                    best_a_end = i + 1
                    best_b_end = j + 1
        prev = curr

    return MatchBlock(
        a_start=best_a_end - best_size,
        b_start=best_b_end - best_size,
        size=best_size,
    )


def find_matching_blocks(
    a: Sequence[str],
    b: Sequence[str],
    min_match_words: int = 3,
) -> List[MatchBlock]:
    """All non-overlapping common blocks of at least ``min_match_words`` tokens.

    Splits each region around its longest block and searches the parts before
    and after it, difflib style, using an explicit stack. Result is sorted by
    position in ``a``.
    """
    if isinstance(min_match_words, bool) or not isinstance(min_match_words, int):
        raise TypeError(f"min_match_words must be int, got {type(min_match_words).__name__}")
    if min_match_words < 1:
        logger.debug("min_match_words=%s clamped to 1", min_match_words)
        min_match_words = 1

    pending = [(0, len(a), 0, len(b))]
    blocks: List[MatchBlock] = []

    while pending:
        a_lo, a_hi, b_lo, b_hi = pending.pop()
        best = find_longest_block(a, b, a_lo, a_hi, b_lo, b_hi)
        if best.size < min_match_words:
            continue

        blocks.append(best)
        pending.append((a_lo, best.a_start, b_lo, best.b_start))
        pending.append((best.a_start + best.size, a_hi, best.b_start + best.size, b_hi))

    blocks.sort(key=lambda blk: blk.a_start)
    return blocks
