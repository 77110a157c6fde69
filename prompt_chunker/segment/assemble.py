# assemble.py
from __future__ import annotations

from typing import List, Sequence

CHUNK_BOUNDARY = "\n\n--- CHUNK BOUNDARY ---\n\n"


def assemble(segments: Sequence[str]) -> str:
    return CHUNK_BOUNDARY.join(segments)


def disassemble(text: str) -> List[str]:
    if not text:
        return []
    return text.split(CHUNK_BOUNDARY)
