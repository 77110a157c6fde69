from prompt_chunker.segment.code_blocks import (
    segment_text,
    split_code_region,
    split_code_regions,
)
from prompt_chunker.segment.stitch import CONTEXT_HEADER

FENCE = "```"


def _block(lines):
    return FENCE + "python\n" + "\n".join(lines) + "\n" + FENCE


def test_regions_alternate_and_are_lossless():
    code = _block(["x = 1"])
    text = "intro\n\n" + code + "\n\noutro"
    parts = split_code_regions(text)
    assert [is_code for is_code, _ in parts] == [False, True, False]
    assert "".join(span for _, span in parts) == text
    assert parts[1][1] == code


def test_adjacent_fences_stay_separate():
    a, b = _block(["a = 1"]), _block(["b = 2"])
    parts = split_code_regions(a + b)
    assert parts == [(True, a), (True, b)]


def test_unterminated_fence_is_prose():
    text = "before\n\n```python\nprint('never closed')"
    assert split_code_regions(text) == [(False, text)]
    assert segment_text(text, 1000) == [text]


def test_small_block_is_one_segment():
    code = _block(["def f():", "    return 1"])
    assert len(code) < 1000
    text = "Some prose before.\n\n" + code + "\n\nSome prose after."
    segs = segment_text(text, 1000)
    assert segs == ["Some prose before.", code, "Some prose after."]


def test_block_fitting_budget_is_kept_verbatim_even_with_odd_spacing():
    code = FENCE + "\n\n\n   weird   spacing\n\n" + FENCE
    segs = segment_text("x" * 50 + "\n\n" + code, 60)
    assert code in segs


def test_large_block_splits_by_line_only():
    lines = ["line_%03d = %03d" % (i, i) for i in range(150)]
    code = _block(lines)
    assert len(code) > 2000
    segs = split_code_region(code, 500)
    assert len(segs) > 1
    assert all(len(s) <= 500 for s in segs)
    out_lines = "\n".join(segs).split("\n")
    assert out_lines == code.split("\n")


def test_overlong_line_stands_alone():
    long_line = "y" * 800
    code = _block(["a = 1", long_line, "b = 2"])
    segs = split_code_region(code, 500)
    assert long_line in segs
    assert all(len(s) <= 500 for s in segs if s != long_line)


def test_whitespace_between_fences_is_dropped():
    a, b = _block(["a = 1"]), _block(["b = 2"])
    segs = segment_text(a + "\n\n   \n\n" + b, 100)
    assert segs == [a, b]


def test_preserve_code_off_treats_fences_as_prose():
    code = _block(["x = 1"] * 3)
    text = "p" * 40 + "\n\n" + code
    segs = segment_text(text, 45, preserve_code=False, smart=False)
    assert all(len(s) <= 45 for s in segs)
    assert segs[0] == "p" * 40


def test_each_prose_span_starts_without_context():
    prose = "\n\n".join(ch * 300 for ch in "abc")
    code = _block(["z = 0"])
    segs = segment_text(prose + "\n\n" + code + "\n\n" + prose, 700, smart=True)
    assert not segs[0].startswith(CONTEXT_HEADER)
    after_code = segs.index(code) + 1
    assert not segs[after_code].startswith(CONTEXT_HEADER)
    assert any(s.startswith(CONTEXT_HEADER) for s in segs)


def test_no_empty_segments():
    text = "\n\n".join(["", "  ", _block([""] * 5), "", "tail"])
    segs = segment_text(text, 10)
    assert all(s.strip() for s in segs)
