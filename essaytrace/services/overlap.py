from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from essaytrace.services.matcher import MatchBlock, find_matching_blocks
from essaytrace.services.spans import CharSpan, blocks_to_char_ranges, merge_ranges
from essaytrace.utils.tokenize import token_texts, tokenize

logger = logging.getLogger("essaytrace.services.overlap")

# join string for several AI messages, keeps matches from spanning two replies
AI_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class OverlapResult:
    human_ranges: List[CharSpan] = field(default_factory=list)
    ai_ranges: List[CharSpan] = field(default_factory=list)
    blocks: List[MatchBlock] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "human_ranges": [r.to_dict() for r in self.human_ranges],
            "ai_ranges": [r.to_dict() for r in self.ai_ranges],
            "blocks": [
                {"human_start": b.a_start, "ai_start": b.b_start, "size": b.size}
                for b in self.blocks
            ],
        }


def compute_overlap(
    human_text: str,
    ai_text: str,
    min_match_words: int = 3,
    max_tokens: Optional[int] = None,
) -> OverlapResult:
    """Find word runs shared by the human submission and the AI output.

    Returns merged, sorted character ranges for both texts. ``max_tokens``
    truncates each side to its first N tokens to bound matcher time.
    """
    if not isinstance(human_text, str):
        raise TypeError(f"human_text must be str, got {type(human_text).__name__}")
    if not isinstance(ai_text, str):
        raise TypeError(f"ai_text must be str, got {type(ai_text).__name__}")

    human_tokens = tokenize(human_text)
    ai_tokens = tokenize(ai_text)

    if max_tokens is not None and max_tokens > 0:
        if len(human_tokens) > max_tokens or len(ai_tokens) > max_tokens:
            logger.info(
                "Truncating overlap input to %d tokens (human=%d, ai=%d)",
                max_tokens, len(human_tokens), len(ai_tokens),
            )
        human_tokens = human_tokens[:max_tokens]
        ai_tokens = ai_tokens[:max_tokens]

    blocks = find_matching_blocks(
        token_texts(human_tokens),
        token_texts(ai_tokens),
        min_match_words,
    )
    logger.debug(
        "Overlap: %d blocks over %d human / %d ai tokens",
        len(blocks), len(human_tokens), len(ai_tokens),
    )

    return OverlapResult(
        human_ranges=merge_ranges(blocks_to_char_ranges(blocks, human_tokens, "human")),
        ai_ranges=merge_ranges(blocks_to_char_ranges(blocks, ai_tokens, "ai")),
        blocks=blocks,
    )
