import re

import pytest

from prompt_chunker.segment.packer import (
    chunk_text,
    pack_paragraphs,
    peel_oversized,
    split_paragraphs,
)


def _squash(s: str) -> str:
    return re.sub(r"\s+", "", s)


def test_split_paragraphs_drops_blank_runs():
    text = "\n\nA\n\n\n  \nB\nstill B\n\n"
    assert split_paragraphs(text) == ["A", "B\nstill B"]


def test_three_400_char_paragraphs_budget_500():
    paras = ["a" * 400, "b" * 400, "c" * 400]
    assert pack_paragraphs(paras, 500) == paras


def test_small_paragraphs_share_a_segment(prose):
    chunks = chunk_text(prose, 1000)
    assert len(chunks) == 1
    assert chunks[0] == "\n\n".join(split_paragraphs(prose))


def test_packing_counts_the_separator():
    # 10 + 2 + 10 = 22 > 21
    assert pack_paragraphs(["a" * 10, "b" * 10], 21) == ["a" * 10, "b" * 10]
    assert pack_paragraphs(["a" * 10, "b" * 10], 22) == ["a" * 10 + "\n\n" + "b" * 10]


def test_oversized_paragraph_is_peeled():
    long_para = "x" * 1234
    chunks = pack_paragraphs([long_para], 500)
    assert [len(c) for c in chunks] == [500, 500, 234]
    assert "".join(chunks) == long_para


def test_peel_prefers_sentence_ends():
    sentence = "This sentence is exactly forty chars ok."
    assert len(sentence) == 40
    text = " ".join([sentence] * 10)
    chunks = peel_oversized(text, 100)
    assert all(len(c) <= 100 for c in chunks)
    assert all(c.endswith(".") for c in chunks)


def test_peel_first_limit_only_narrows_first_piece():
    pieces = peel_oversized("y" * 250, 100, first_limit=50)
    assert [len(p) for p in pieces] == [50, 100, 100]


def test_pieces_are_never_empty():
    text = "a." + " " * 300 + "b" * 300
    chunks = peel_oversized(text, 100)
    assert all(c.strip() for c in chunks)


def test_content_is_preserved_in_order(prose):
    text = "\n\n".join([prose] * 20)
    chunks = chunk_text(text, 180)
    assert all(len(c) <= 180 for c in chunks)
    assert _squash("".join(chunks)) == _squash(text)


def test_rejects_non_positive_budget():
    with pytest.raises(ValueError):
        pack_paragraphs(["a"], 0)
