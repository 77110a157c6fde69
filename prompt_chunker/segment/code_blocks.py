# code_blocks.py
from __future__ import annotations

import logging
import re
from typing import List, Tuple

from .packer import check_budget, chunk_text
from .stitch import smart_chunk_text

logger = logging.getLogger(__name__)

CODE_FENCE = "```"
# non-greedy so adjacent fenced blocks stay separate; an unterminated fence never matches
_CODE_REGION_RE = re.compile(r"(```[\s\S]*?```)")


def split_code_regions(text: str) -> List[Tuple[bool, str]]:
    """Return ``(is_code, span)`` pairs in original order; joining the spans gives ``text`` back."""
    parts = _CODE_REGION_RE.split(text)
    # re.split with one capture group alternates prose, code, prose, ...
    return [(i % 2 == 1, part) for i, part in enumerate(parts) if part]


def split_code_region(region: str, budget: int) -> List[str]:
    check_budget(budget)
    if len(region) <= budget:
        return [region]

    out: List[str] = []
    buf: List[str] = []
    size = 0
    for line in region.split("\n"):
        added = len(line) + (1 if buf else 0)
        if buf and size + added > budget:
            out.append("\n".join(buf))
            buf = [line]
            size = len(line)
        else:
            buf.append(line)
            size += added
    if buf:
        out.append("\n".join(buf))
    return [piece for piece in out if piece.strip()]


def _prose_chunks(text: str, budget: int, smart: bool) -> List[str]:
    return smart_chunk_text(text, budget) if smart else chunk_text(text, budget)


def segment_text(
    text: str, budget: int, preserve_code: bool = True, smart: bool = True
) -> List[str]:
    check_budget(budget)
    if not preserve_code or CODE_FENCE not in text:
        return _prose_chunks(text, budget, smart)

    segments: List[str] = []
    regions = 0
    for is_code, span in split_code_regions(text):
        if is_code:
            regions += 1
            segments.extend(split_code_region(span, budget))
        elif span.strip():
            segments.extend(_prose_chunks(span, budget, smart))
    logger.debug(
        "Segmented %d chars (%d code regions) into %d segments", len(text), regions, len(segments)
    )
    return segments
