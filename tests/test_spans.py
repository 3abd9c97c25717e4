from essaytrace.services.matcher import MatchBlock
from essaytrace.services.spans import CharSpan, blocks_to_char_ranges, merge_ranges
from essaytrace.utils.tokenize import tokenize

import pytest


def test_merge_overlapping():
    assert merge_ranges([CharSpan(8, 15), CharSpan(0, 10)]) == [CharSpan(0, 15)]


def test_merge_keeps_gap_of_one():
    assert merge_ranges([CharSpan(0, 5), CharSpan(6, 10)]) == [CharSpan(0, 5), CharSpan(6, 10)]


def test_merge_touching_and_contained():
    spans = [CharSpan(5, 8), CharSpan(0, 5), CharSpan(1, 3), CharSpan(20, 30)]
    assert merge_ranges(spans) == [CharSpan(0, 8), CharSpan(20, 30)]


def test_merge_empty_and_input_untouched():
    assert merge_ranges([]) == []
    spans = [CharSpan(3, 4), CharSpan(0, 1)]
    merge_ranges(spans)
    assert spans == [CharSpan(3, 4), CharSpan(0, 1)]


def test_blocks_to_char_ranges_per_side():
    human = "Hello, big brown dog!"
    ai = "a big brown dog runs"
    blocks = [MatchBlock(a_start=1, b_start=1, size=3)]
    h = blocks_to_char_ranges(blocks, tokenize(human), "human")
    a = blocks_to_char_ranges(blocks, tokenize(ai), "ai")
    assert h == [CharSpan(7, 20)]
    assert a == [CharSpan(2, 15)]
    assert human[7:20] == "big brown dog"
    assert ai[2:15] == "big brown dog"


def test_side_aliases():
    toks = tokenize("a b c")
    blocks = [MatchBlock(0, 0, 3)]
    assert blocks_to_char_ranges(blocks, toks, "a") == blocks_to_char_ranges(blocks, toks, "human")
    assert blocks_to_char_ranges(blocks, toks, "b") == blocks_to_char_ranges(blocks, toks, "ai")


def test_out_of_range_block_skipped():
    toks = tokenize("a b c")
    blocks = [MatchBlock(0, 5, 3), MatchBlock(0, 0, 3)]
    assert blocks_to_char_ranges(blocks, toks, "ai") == [CharSpan(0, 5)]


def test_unknown_side():
    with pytest.raises(ValueError):
        blocks_to_char_ranges([], [], "left")
