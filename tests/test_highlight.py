from essaytrace.services.spans import CharSpan
from essaytrace.utils.highlight import Segment, SegmentKind, render_html, render_segments


def test_no_ranges_is_single_plain_segment():
    assert render_segments("hello world", []) == [Segment(SegmentKind.PLAIN, "hello world")]
    assert render_segments("", []) == []


def test_segments_order():
    text = "aa bb cc dd"
    segs = render_segments(text, [CharSpan(0, 2), CharSpan(6, 8)])
    assert segs == [
        Segment(SegmentKind.HIGHLIGHT, "aa"),
        Segment(SegmentKind.PLAIN, " bb "),
        Segment(SegmentKind.HIGHLIGHT, "cc"),
        Segment(SegmentKind.PLAIN, " dd"),
    ]


def test_round_trip_reconstructs_text():
    text = "The quick brown fox, jumps over\nthe lazy dog."
    for ranges in ([], [CharSpan(0, 3)], [CharSpan(4, 9), CharSpan(20, 25)], [CharSpan(0, len(text))]):
        assert "".join(s.text for s in render_segments(text, ranges)) == text


def test_render_html_escapes_and_marks():
    out = render_html("<b>x</b> & y", [CharSpan(0, 8)])
    assert out == "<mark>&lt;b&gt;x&lt;/b&gt;</mark> &amp; y"
