# stitch.py
"""
Paragraph packing that carries a short tail of each closed chunk into the next.

When a chunk is closed because the next paragraph does not fit, the last
``min(200, len(chunk) // 4)`` characters of that chunk are prepended to the
following chunk, wrapped in literal markers so the consumer can tell carried
context apart from new content:

    --- CONTEXT FROM PREVIOUS CHUNK ---
    <excerpt>

    --- CONTINUATION ---

    <new paragraphs>

The excerpt is used once. A chunk closed at end of input carries nothing.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .packer import PARAGRAPH_SEP, check_budget, peel_oversized, split_paragraphs

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "--- CONTEXT FROM PREVIOUS CHUNK ---\n"
CONTINUATION_HEADER = "\n\n--- CONTINUATION ---\n\n"
MAX_EXCERPT_CHARS = 200


def excerpt_of(chunk: str) -> str:
    size = min(MAX_EXCERPT_CHARS, len(chunk) // 4)
    return chunk[len(chunk) - size:] if size > 0 else ""


def context_prefix(excerpt: str) -> str:
    return CONTEXT_HEADER + excerpt + CONTINUATION_HEADER


def strip_context(segment: str) -> str:
    """Drop a leading context wrapper (header, excerpt, continuation marker)."""
    if not segment.startswith(CONTEXT_HEADER):
        return segment
    end = segment.find(CONTINUATION_HEADER, len(CONTEXT_HEADER))
    if end == -1:
        return segment
    return segment[end + len(CONTINUATION_HEADER):]


def _carry(body: str, budget: int) -> str:
    excerpt = excerpt_of(body)
    if not excerpt:
        return ""
    prefix = context_prefix(excerpt)
    if len(prefix) >= budget:
        logger.debug(
            "Context wrapper of %d chars leaves no room in budget %d; not carried", len(prefix), budget
        )
        return ""
    return prefix


def stitch_paragraphs(paragraphs: Sequence[str], budget: int) -> List[str]:
    check_budget(budget)
    packs: List[Tuple[str, str]] = []
    prefix = ""
    body = ""
    for para in paragraphs:
        if body and len(prefix) + len(body) + len(PARAGRAPH_SEP) + len(para) > budget:
            packs.append((prefix, body))
            prefix = _carry(body, budget)
            body = para
        elif body:
            body = body + PARAGRAPH_SEP + para
        else:
            body = para
    if body:
        packs.append((prefix, body))

    out: List[str] = []
    for prefix, body in packs:
        if len(prefix) + len(body) <= budget:
            out.append(prefix + body)
            continue
        # the wrapper is never cut; only the body is peeled
        pieces = peel_oversized(body, budget, first_limit=budget - len(prefix))
        pieces[0] = prefix + pieces[0]
        out.extend(pieces)
    return out


def smart_chunk_text(text: str, budget: int) -> List[str]:
    chunks = stitch_paragraphs(split_paragraphs(text), budget)
    logger.debug(
        "Smart chunked text of %d chars into %d chunks with context preservation",
        len(text),
        len(chunks),
    )
    return chunks
