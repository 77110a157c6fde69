# boundary.py
from __future__ import annotations


def _usable(pos: int, limit: int) -> bool:
    return pos != -1 and pos >= limit / 2


def find_break(text: str, limit: int) -> int:
    """
    Pick the offset at which to cut ``text`` so the head is at most ``limit`` chars.

    Preference order: just after the last period, just after the last line
    break, then a hard cut at ``limit``. A boundary earlier than half the limit
    is ignored so we never emit a tiny head followed by a full-size tail.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    if len(text) <= limit:
        return len(text)

    # cut = pos + 1 must stay <= limit
    pos = text.rfind(".", 0, limit)
    if _usable(pos, limit):
        return pos + 1

    pos = text.rfind("\n", 0, limit)
    if _usable(pos, limit):
        return pos + 1

    return limit
