# packer.py
from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from .boundary import find_break

logger = logging.getLogger(__name__)

PARAGRAPH_SEP = "\n\n"
_PARA_SPLIT_RE = re.compile(r"\n\s*\n")


def check_budget(budget: int) -> None:
    if budget < 1:
        raise ValueError(f"budget must be a positive integer, got {budget}")


def split_paragraphs(text: str) -> List[str]:
    paras = _PARA_SPLIT_RE.split(text)
    return [p.strip() for p in paras if p.strip()]


def peel_oversized(text: str, budget: int, first_limit: Optional[int] = None) -> List[str]:
    """
    Cut ``text`` into pieces of at most ``budget`` chars using ``find_break``.

    ``first_limit`` (when given) caps only the first piece. The remainder is
    stripped after every cut, so each iteration strictly shrinks it.
    """
    check_budget(budget)
    limit = first_limit if first_limit is not None else budget
    pieces: List[str] = []
    remaining = text
    while len(remaining) > limit:
        cut = find_break(remaining, limit)
        pieces.append(remaining[:cut])
        remaining = remaining[cut:].strip()
        limit = budget
    if remaining:
        pieces.append(remaining)
    return pieces


def pack_paragraphs(paragraphs: Sequence[str], budget: int) -> List[str]:
    check_budget(budget)
    packs: List[str] = []
    buf = ""
    for para in paragraphs:
        if buf and len(buf) + len(PARAGRAPH_SEP) + len(para) > budget:
            packs.append(buf)
            buf = para
        elif buf:
            buf = buf + PARAGRAPH_SEP + para
        else:
            buf = para
    if buf:
        packs.append(buf)

    # a single paragraph can still be larger than the budget
    out: List[str] = []
    for pack in packs:
        if len(pack) <= budget:
            out.append(pack)
        else:
            out.extend(peel_oversized(pack, budget))
    return out


def chunk_text(text: str, budget: int) -> List[str]:
    chunks = pack_paragraphs(split_paragraphs(text), budget)
    logger.debug("Split text of %d chars into %d chunks", len(text), len(chunks))
    return chunks
